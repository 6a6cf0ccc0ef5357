from __future__ import annotations

from mobichat.application.ports.catalog_store import CatalogStorePort
from mobichat.application.utils.intent_resolver import classify
from mobichat.domain.entities.intent import ServiceIntent


class ClassifyIntentUseCase:
    def __init__(self, catalog: CatalogStorePort) -> None:
        self._catalog = catalog

    def execute(self, text: str) -> ServiceIntent:
        return classify(text, self._catalog.get_active_intent_catalog())
