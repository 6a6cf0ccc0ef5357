from __future__ import annotations

import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Sequence

from mobichat.application.ports.catalog_store import CatalogStorePort
from mobichat.application.ports.conversation_store import ConversationStorePort
from mobichat.application.ports.facebook_settings_store import FacebookSettingsStorePort
from mobichat.application.ports.stats_store import StatsStorePort
from mobichat.application.utils.intent_resolver import validate_entry
from mobichat.application.exceptions import CatalogConfigurationError
from mobichat.domain.entities.catalog_entry import IntentCatalogEntry
from mobichat.domain.entities.category import Category
from mobichat.domain.entities.chat_stats import ChatStats
from mobichat.domain.entities.conversation import Conversation, Platform
from mobichat.domain.entities.facebook_settings import FacebookSettings
from mobichat.domain.entities.language import Language
from mobichat.domain.entities.message import Message

_CONVERSATION_FIELDS = {"user_id", "platform", "messages", "is_active"}
_RESPONSE_FIELDS = {"intent", "keywords", "category", "responses", "active"}
_STATS_FIELDS = {"total_conversations", "resolved_queries", "balance_inquiries", "bot_replies", "average_responses"}


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStorage(ConversationStorePort, CatalogStorePort, FacebookSettingsStorePort, StatsStorePort):
    """
    Process-local storage for conversations, the intent catalog, page settings
    and daily stats. Every public method takes the same lock, and everything
    handed out is an immutable snapshot.
    """

    def __init__(self, processed_limit: int = 10_000) -> None:
        self._lock = threading.Lock()
        self._conversations: dict[str, Conversation] = {}
        self._responses: dict[str, IntentCatalogEntry] = {}
        self._facebook_settings: FacebookSettings | None = None
        self._stats: dict[str, ChatStats] = {}
        self._processed: dict[str, None] = {}
        self._processed_limit = processed_limit

    # Conversations

    def get_conversation(self, conversation_id: str) -> Conversation | None:
        with self._lock:
            return self._conversations.get(conversation_id)

    def get_conversation_by_user_id(self, user_id: str) -> Conversation | None:
        with self._lock:
            for conversation in self._conversations.values():
                if conversation.user_id == user_id and conversation.is_active:
                    return conversation
            return None

    def create_conversation(
        self,
        user_id: str,
        platform: Platform,
        messages: Sequence[Message] = (),
        is_active: bool = True,
    ) -> Conversation:
        now = _utcnow()
        conversation = Conversation(
            id=_new_id(),
            user_id=user_id,
            platform=Platform(platform),
            messages=tuple(messages),
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._conversations[conversation.id] = conversation
        return conversation

    def update_conversation(self, conversation_id: str, **changes: Any) -> Conversation | None:
        unknown = set(changes) - _CONVERSATION_FIELDS
        if unknown:
            raise ValueError(f"Unknown conversation fields: {', '.join(sorted(unknown))}")
        if "messages" in changes:
            changes["messages"] = tuple(changes["messages"])
        with self._lock:
            conversation = self._conversations.get(conversation_id)
            if conversation is None:
                return None
            updated = replace(conversation, **changes, updated_at=_utcnow())
            self._conversations[conversation_id] = updated
            return updated

    def append_message(self, conversation_id: str, message: Message) -> bool:
        with self._lock:
            conversation = self._conversations.get(conversation_id)
            if conversation is None:
                return False
            self._conversations[conversation_id] = replace(
                conversation,
                messages=conversation.messages + (message,),
                updated_at=_utcnow(),
            )
            return True

    def has_processed(self, message_id: str) -> bool:
        with self._lock:
            return message_id in self._processed

    def mark_processed(self, message_id: str) -> bool:
        with self._lock:
            if message_id in self._processed:
                return False
            self._processed[message_id] = None
            while len(self._processed) > self._processed_limit:
                self._processed.pop(next(iter(self._processed)))
            return True

    def release_processed(self, message_id: str) -> None:
        with self._lock:
            self._processed.pop(message_id, None)

    # Intent catalog

    def get_active_intent_catalog(self) -> tuple[IntentCatalogEntry, ...]:
        with self._lock:
            return tuple(entry for entry in self._responses.values() if entry.active)

    def list_responses(self) -> list[IntentCatalogEntry]:
        return list(self.get_active_intent_catalog())

    def get_response(self, response_id: str) -> IntentCatalogEntry | None:
        with self._lock:
            return self._responses.get(response_id)

    def get_response_by_intent(self, intent: str) -> IntentCatalogEntry | None:
        with self._lock:
            for entry in self._responses.values():
                if entry.intent == intent and entry.active:
                    return entry
            return None

    def create_response(
        self,
        intent: str,
        keywords: Sequence[str],
        category: Category,
        responses: Mapping[Language, str],
        active: bool = True,
    ) -> IntentCatalogEntry:
        entry = validate_entry(
            IntentCatalogEntry(
                id=_new_id(),
                intent=intent,
                keywords=tuple(keywords),
                category=Category(category),
                responses={Language(lang): text for lang, text in responses.items()},
                active=active,
            )
        )
        with self._lock:
            self._ensure_unique_intent(entry)
            self._responses[entry.id] = entry
        return entry

    def update_response(self, response_id: str, **changes: Any) -> IntentCatalogEntry | None:
        unknown = set(changes) - _RESPONSE_FIELDS
        if unknown:
            raise ValueError(f"Unknown bot response fields: {', '.join(sorted(unknown))}")
        if "keywords" in changes:
            changes["keywords"] = tuple(changes["keywords"])
        if "category" in changes:
            changes["category"] = Category(changes["category"])
        with self._lock:
            entry = self._responses.get(response_id)
            if entry is None:
                return None
            if "responses" in changes:
                # partial language updates keep the other language
                merged = dict(entry.responses)
                merged.update({Language(lang): text for lang, text in changes["responses"].items()})
                changes["responses"] = merged
            updated = validate_entry(replace(entry, **changes))
            self._ensure_unique_intent(updated)
            self._responses[response_id] = updated
            return updated

    def delete_response(self, response_id: str) -> bool:
        with self._lock:
            return self._responses.pop(response_id, None) is not None

    def seed_catalog(self, entries: Iterable[IntentCatalogEntry]) -> None:
        with self._lock:
            for entry in entries:
                self._ensure_unique_intent(entry)
                self._responses[entry.id] = entry

    def _ensure_unique_intent(self, entry: IntentCatalogEntry) -> None:
        if not entry.active:
            return
        for other in self._responses.values():
            if other.id != entry.id and other.active and other.intent == entry.intent:
                raise CatalogConfigurationError(f"Duplicate active intent '{entry.intent}'")

    # Facebook settings

    def get_settings(self) -> FacebookSettings | None:
        with self._lock:
            return self._facebook_settings

    def update_settings(
        self,
        page_access_token: str | None = None,
        verify_token: str | None = None,
        webhook_url: str | None = None,
        is_active: bool = False,
    ) -> FacebookSettings:
        with self._lock:
            settings_id = self._facebook_settings.id if self._facebook_settings else _new_id()
            self._facebook_settings = FacebookSettings(
                id=settings_id,
                page_access_token=page_access_token,
                verify_token=verify_token,
                webhook_url=webhook_url,
                is_active=is_active,
                updated_at=_utcnow(),
            )
            return self._facebook_settings

    # Chat stats

    def get_stats(self, date: str) -> ChatStats | None:
        with self._lock:
            return self._stats.get(date)

    def update_stats(self, date: str, **changes: Any) -> ChatStats:
        unknown = set(changes) - _STATS_FIELDS
        if unknown:
            raise ValueError(f"Unknown stats fields: {', '.join(sorted(unknown))}")
        with self._lock:
            existing = self._stats.get(date) or ChatStats(id=_new_id(), date=date)
            stats = replace(existing, **changes)
            self._stats[date] = stats
            return stats

    def increment_stats(self, date: str, **deltas: int) -> ChatStats:
        unknown = set(deltas) - (_STATS_FIELDS - {"average_responses"})
        if unknown:
            raise ValueError(f"Unknown stats counters: {', '.join(sorted(unknown))}")
        with self._lock:
            existing = self._stats.get(date) or ChatStats(id=_new_id(), date=date)
            counters = {name: getattr(existing, name) + delta for name, delta in deltas.items()}
            stats = replace(existing, **counters)
            average = stats.bot_replies / stats.total_conversations if stats.total_conversations else 0.0
            stats = replace(stats, average_responses=round(average, 2))
            self._stats[date] = stats
            return stats
