from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass

from mobichat.application.exceptions import ConversationNotFoundError
from mobichat.application.ports.conversation_store import ConversationStorePort
from mobichat.application.use_cases.classify_intent import ClassifyIntentUseCase
from mobichat.application.use_cases.generate_reply import GenerateReplyUseCase
from mobichat.application.use_cases.record_stats import RecordStatsUseCase
from mobichat.domain.entities.intent import ServiceIntent
from mobichat.domain.entities.language import Language
from mobichat.domain.entities.message import Message, Sender


def now_ms() -> int:
    return int(time.time() * 1000)


def new_message_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class PostMessageResult:
    message: Message
    bot_response: Message | None
    intent: ServiceIntent | None = None


class PostMessageUseCase:
    """Store a chat message and, for user messages, answer it from the catalog."""

    def __init__(
        self,
        store: ConversationStorePort,
        classify_intent: ClassifyIntentUseCase,
        generate_reply: GenerateReplyUseCase,
        record_stats: RecordStatsUseCase,
        default_language: Language = Language.ar,
    ) -> None:
        self._store = store
        self._classify_intent = classify_intent
        self._generate_reply = generate_reply
        self._record_stats = record_stats
        self._default_language = default_language
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        conversation_id: str,
        text: str,
        sender: Sender,
        language: Language | None = None,
    ) -> PostMessageResult:
        message = Message(
            id=new_message_id(),
            text=text,
            sender=Sender(sender),
            timestamp=now_ms(),
            language=language,
        )
        if not self._store.append_message(conversation_id, message):
            raise ConversationNotFoundError(f"Conversation '{conversation_id}' not found")

        if message.sender != Sender.user:
            return PostMessageResult(message=message, bot_response=None)

        reply_language = language or self._default_language
        intent = self._classify_intent.execute(text)
        reply_text = self._generate_reply.execute(intent, reply_language)
        self._logger.info(
            "Intent classified",
            extra={
                "conversation_id": conversation_id,
                "intent": intent.intent,
                "confidence": round(intent.confidence, 3),
                "language": reply_language.value,
            },
        )
        if reply_text is None:
            return PostMessageResult(message=message, bot_response=None, intent=intent)

        # bot message echoes the language of the user message, unset when the user sent none
        bot_message = Message(
            id=new_message_id(),
            text=reply_text,
            sender=Sender.bot,
            timestamp=now_ms(),
            language=language,
        )
        self._store.append_message(conversation_id, bot_message)
        self._record_stats.bot_replied(intent)
        return PostMessageResult(message=message, bot_response=bot_message, intent=intent)
