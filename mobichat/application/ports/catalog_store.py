from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence

from mobichat.domain.entities.catalog_entry import IntentCatalogEntry
from mobichat.domain.entities.category import Category
from mobichat.domain.entities.language import Language


class CatalogStorePort(ABC):
    @abstractmethod
    def get_active_intent_catalog(self) -> tuple[IntentCatalogEntry, ...]:
        """Snapshot of active entries in insertion order."""
        raise NotImplementedError

    @abstractmethod
    def list_responses(self) -> list[IntentCatalogEntry]:
        raise NotImplementedError

    @abstractmethod
    def get_response(self, response_id: str) -> IntentCatalogEntry | None:
        raise NotImplementedError

    @abstractmethod
    def get_response_by_intent(self, intent: str) -> IntentCatalogEntry | None:
        raise NotImplementedError

    @abstractmethod
    def create_response(
        self,
        intent: str,
        keywords: Sequence[str],
        category: Category,
        responses: Mapping[Language, str],
        active: bool = True,
    ) -> IntentCatalogEntry:
        raise NotImplementedError

    @abstractmethod
    def update_response(self, response_id: str, **changes: Any) -> IntentCatalogEntry | None:
        raise NotImplementedError

    @abstractmethod
    def delete_response(self, response_id: str) -> bool:
        raise NotImplementedError
