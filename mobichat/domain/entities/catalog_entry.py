from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Mapping

from mobichat.domain.entities.category import Category
from mobichat.domain.entities.language import Language


@dataclass(frozen=True)
class IntentCatalogEntry:
    id: str
    intent: str
    keywords: tuple[str, ...]
    category: Category
    responses: Mapping[Language, str]
    active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def response_for(self, language: Language) -> str | None:
        text = self.responses.get(language)
        return text or None
