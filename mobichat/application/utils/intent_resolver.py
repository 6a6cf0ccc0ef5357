from __future__ import annotations

import logging
from typing import Iterable, Sequence

from mobichat.application.exceptions import CatalogConfigurationError, IntentNotFoundError
from mobichat.domain.entities.catalog_entry import IntentCatalogEntry
from mobichat.domain.entities.intent import ServiceIntent
from mobichat.domain.entities.language import Language

logger = logging.getLogger(__name__)

CONFIDENCE_THRESHOLD = 0.1

UNKNOWN_REPLIES: dict[Language, str] = {
    Language.ar: "عذراً، لم أفهم استفساركم. يمكنكم التواصل مع خدمة العملاء على 600",
    Language.fr: "Désolé, je n'ai pas compris votre demande. Vous pouvez contacter le service client au 600",
}


def normalize_message(text: str) -> str:
    return text.lower().strip()


def classify(message: str, catalog: Iterable[IntentCatalogEntry]) -> ServiceIntent:
    """
    Pick the catalog intent whose keyword best covers the message.

    Confidence is len(keyword) / len(message), measured against the raw
    message (before trimming). Only a strictly higher score replaces the
    current best, so on ties the entry seen first in catalog order wins.
    """
    best = ServiceIntent.unknown()
    normalized = normalize_message(message)
    if not normalized:
        return best

    for entry in catalog:
        if not entry.active:
            continue
        for keyword in entry.keywords:
            needle = keyword.lower()
            if not needle or needle not in normalized:
                continue
            confidence = len(keyword) / len(message)
            if confidence > best.confidence:
                best = ServiceIntent(intent=entry.intent, confidence=confidence, category=entry.category)

    return best


def unknown_reply(language: Language) -> str:
    return UNKNOWN_REPLIES[Language(language)]


def resolve_reply(intent: ServiceIntent, language: Language, catalog: Iterable[IntentCatalogEntry]) -> str:
    """
    Map a classified intent to reply text in the requested language.

    Below CONFIDENCE_THRESHOLD the fixed unknown reply is returned whatever
    the intent id. Raises IntentNotFoundError when no active entry carries the
    intent, and CatalogConfigurationError when the entry lacks the language.
    """
    language = Language(language)
    if intent.confidence < CONFIDENCE_THRESHOLD:
        return unknown_reply(language)

    for entry in catalog:
        if entry.active and entry.intent == intent.intent:
            text = entry.response_for(language)
            if text is None:
                raise CatalogConfigurationError(
                    f"Catalog entry '{entry.intent}' has no '{language.value}' reply"
                )
            return text

    raise IntentNotFoundError(intent.intent)


def validate_entry(entry: IntentCatalogEntry) -> IntentCatalogEntry:
    missing = [language.value for language in Language if not entry.response_for(language)]
    if missing:
        raise CatalogConfigurationError(
            f"Catalog entry '{entry.intent}' is missing replies for: {', '.join(missing)}"
        )
    if not any(keyword.strip() for keyword in entry.keywords):
        logger.warning("Catalog entry has no keywords and can never match", extra={"intent": entry.intent})
    return entry


def validate_catalog(entries: Sequence[IntentCatalogEntry]) -> Sequence[IntentCatalogEntry]:
    """Check a whole catalog at load time; returns it unchanged."""
    seen: set[str] = set()
    for entry in entries:
        validate_entry(entry)
        if not entry.active:
            continue
        if entry.intent in seen:
            raise CatalogConfigurationError(f"Duplicate active intent '{entry.intent}'")
        seen.add(entry.intent)
    return entries
