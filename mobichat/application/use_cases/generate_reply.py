from __future__ import annotations

import logging

from mobichat.application.exceptions import IntentNotFoundError
from mobichat.application.ports.catalog_store import CatalogStorePort
from mobichat.application.utils.intent_resolver import resolve_reply
from mobichat.domain.entities.intent import ServiceIntent
from mobichat.domain.entities.language import Language


class GenerateReplyUseCase:
    def __init__(self, catalog: CatalogStorePort) -> None:
        self._catalog = catalog
        self._logger = logging.getLogger(__name__)

    def execute(self, intent: ServiceIntent, language: Language) -> str | None:
        """Reply text for the intent, or None when its catalog entry has gone away."""
        try:
            return resolve_reply(intent, language, self._catalog.get_active_intent_catalog())
        except IntentNotFoundError:
            self._logger.warning(
                "No catalog entry for classified intent; no bot reply",
                extra={"intent": intent.intent, "confidence": intent.confidence, "language": language.value},
            )
            return None
