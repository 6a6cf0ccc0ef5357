from __future__ import annotations

import time
import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from mobichat.domain.entities.catalog_entry import IntentCatalogEntry
from mobichat.domain.entities.category import Category
from mobichat.domain.entities.chat_stats import ChatStats
from mobichat.domain.entities.conversation import Conversation, Platform
from mobichat.domain.entities.facebook_settings import FacebookSettings
from mobichat.domain.entities.intent import ServiceIntent
from mobichat.domain.entities.language import Language
from mobichat.domain.entities.message import Message, Sender


class MessageSchema(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    text: str
    sender: Sender
    timestamp: int = Field(default_factory=lambda: int(time.time() * 1000))
    language: Language | None = None

    @staticmethod
    def from_entity(message: Message) -> "MessageSchema":
        return MessageSchema(
            id=message.id,
            text=message.text,
            sender=message.sender,
            timestamp=message.timestamp,
            language=message.language,
        )

    def to_entity(self) -> Message:
        return Message(
            id=self.id,
            text=self.text,
            sender=self.sender,
            timestamp=self.timestamp,
            language=self.language,
        )


class ConversationCreateSchema(BaseModel):
    user_id: str = Field(min_length=1)
    platform: Platform
    messages: list[MessageSchema] = Field(default_factory=list)
    is_active: bool = True


class ConversationSchema(BaseModel):
    id: str
    user_id: str
    platform: Platform
    messages: list[MessageSchema]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def from_entity(conversation: Conversation) -> "ConversationSchema":
        return ConversationSchema(
            id=conversation.id,
            user_id=conversation.user_id,
            platform=conversation.platform,
            messages=[MessageSchema.from_entity(m) for m in conversation.messages],
            is_active=conversation.is_active,
            created_at=conversation.created_at,
            updated_at=conversation.updated_at,
        )


class MessageCreateSchema(BaseModel):
    text: str
    sender: Sender
    language: Language | None = None


class PostMessageResponseSchema(BaseModel):
    message: MessageSchema
    bot_response: MessageSchema | None = None


class BotResponseCreateSchema(BaseModel):
    intent: str = Field(min_length=1)
    keywords: list[str] = Field(default_factory=list)
    response_ar: str
    response_fr: str
    category: Category
    is_active: bool = True


class BotResponseUpdateSchema(BaseModel):
    intent: str | None = Field(default=None, min_length=1)
    keywords: list[str] | None = None
    response_ar: str | None = None
    response_fr: str | None = None
    category: Category | None = None
    is_active: bool | None = None

    def to_changes(self) -> dict[str, object]:
        data = self.model_dump(exclude_unset=True)
        changes: dict[str, object] = {}
        for name in ("intent", "keywords", "category"):
            if data.get(name) is not None:
                changes[name] = data[name]
        if data.get("is_active") is not None:
            changes["active"] = data["is_active"]
        responses = {}
        if data.get("response_ar") is not None:
            responses[Language.ar] = data["response_ar"]
        if data.get("response_fr") is not None:
            responses[Language.fr] = data["response_fr"]
        if responses:
            changes["responses"] = responses
        return changes


class BotResponseSchema(BaseModel):
    id: str
    intent: str
    keywords: list[str]
    response_ar: str
    response_fr: str
    category: Category
    is_active: bool
    created_at: datetime

    @staticmethod
    def from_entity(entry: IntentCatalogEntry) -> "BotResponseSchema":
        return BotResponseSchema(
            id=entry.id,
            intent=entry.intent,
            keywords=list(entry.keywords),
            response_ar=entry.responses.get(Language.ar, ""),
            response_fr=entry.responses.get(Language.fr, ""),
            category=entry.category,
            is_active=entry.active,
            created_at=entry.created_at,
        )


class FacebookSettingsUpdateSchema(BaseModel):
    page_access_token: str | None = None
    verify_token: str | None = None
    webhook_url: str | None = None
    is_active: bool = False


class FacebookSettingsSchema(BaseModel):
    id: str
    page_access_token: str | None
    verify_token: str | None
    webhook_url: str | None
    is_active: bool
    updated_at: datetime

    @staticmethod
    def from_entity(settings: FacebookSettings) -> "FacebookSettingsSchema":
        return FacebookSettingsSchema(
            id=settings.id,
            page_access_token=settings.page_access_token,
            verify_token=settings.verify_token,
            webhook_url=settings.webhook_url,
            is_active=settings.is_active,
            updated_at=settings.updated_at,
        )


class ChatStatsSchema(BaseModel):
    id: str
    date: str
    total_conversations: int
    resolved_queries: int
    balance_inquiries: int
    bot_replies: int
    average_responses: float

    @staticmethod
    def from_entity(stats: ChatStats) -> "ChatStatsSchema":
        return ChatStatsSchema(
            id=stats.id,
            date=stats.date,
            total_conversations=stats.total_conversations,
            resolved_queries=stats.resolved_queries,
            balance_inquiries=stats.balance_inquiries,
            bot_replies=stats.bot_replies,
            average_responses=stats.average_responses,
        )


class AnalyzeIntentRequestSchema(BaseModel):
    text: str


class ServiceIntentSchema(BaseModel):
    intent: str
    confidence: float
    category: Category

    @staticmethod
    def from_entity(intent: ServiceIntent) -> "ServiceIntentSchema":
        return ServiceIntentSchema(intent=intent.intent, confidence=intent.confidence, category=intent.category)
