from __future__ import annotations

import logging

from mobichat.application.dto.webhook_event import InboundMessage
from mobichat.application.ports.conversation_store import ConversationStorePort
from mobichat.application.use_cases.classify_intent import ClassifyIntentUseCase
from mobichat.application.use_cases.create_conversation import CreateConversationUseCase
from mobichat.application.use_cases.generate_reply import GenerateReplyUseCase
from mobichat.application.use_cases.post_message import new_message_id, now_ms
from mobichat.application.use_cases.record_stats import RecordStatsUseCase
from mobichat.application.use_cases.send_reply import SendReplyUseCase
from mobichat.application.utils.intent_resolver import CONFIDENCE_THRESHOLD
from mobichat.application.utils.language import resolve_language
from mobichat.application.utils.quick_replies import build_service_quick_replies
from mobichat.domain.entities.category import Category
from mobichat.domain.entities.conversation import Platform
from mobichat.domain.entities.intent import ServiceIntent
from mobichat.domain.entities.message import Message, Sender


class HandleIncomingMessageUseCase:
    def __init__(
        self,
        store: ConversationStorePort,
        create_conversation: CreateConversationUseCase,
        classify_intent: ClassifyIntentUseCase,
        generate_reply: GenerateReplyUseCase,
        send_reply: SendReplyUseCase,
        record_stats: RecordStatsUseCase,
        language: str = "ar",
        quick_replies_enabled: bool = True,
    ) -> None:
        self._store = store
        self._create_conversation = create_conversation
        self._classify_intent = classify_intent
        self._generate_reply = generate_reply
        self._send_reply = send_reply
        self._record_stats = record_stats
        self._language = language
        self._quick_replies_enabled = quick_replies_enabled
        self._logger = logging.getLogger(__name__)

    def handle(self, message: InboundMessage) -> None:
        if not self._store.mark_processed(message.id):
            self._logger.info("Duplicate message ignored", extra={"message_id": message.id})
            return

        replied = False
        try:
            conversation = self._create_conversation.get_or_create(message.sender_id, Platform.messenger)
            language = resolve_language(self._language, message.text)

            self._store.append_message(
                conversation.id,
                Message(
                    id=new_message_id(),
                    text=message.text,
                    sender=Sender.user,
                    timestamp=message.timestamp,
                    language=language,
                ),
            )

            intent = self._classify_intent.execute(message.text)
            reply_text = self._generate_reply.execute(intent, language)
            self._logger.info(
                "Messenger message classified",
                extra={
                    "conversation_id": conversation.id,
                    "intent": intent.intent,
                    "confidence": round(intent.confidence, 3),
                    "language": language.value,
                },
            )
            if reply_text is None:
                return

            self._store.append_message(
                conversation.id,
                Message(
                    id=new_message_id(),
                    text=reply_text,
                    sender=Sender.bot,
                    timestamp=now_ms(),
                    language=language,
                ),
            )
            replied = True
            self._record_stats.bot_replied(intent)

            quick_replies = build_service_quick_replies(language) if self._offer_menu(intent) else None
            self._send_reply.execute(message.sender_id, reply_text, quick_replies=quick_replies)
        except Exception as e:
            # a redelivery may retry as long as no bot reply was stored
            if not replied:
                self._store.release_processed(message.id)
            self._logger.exception(
                "Failed to handle Messenger message",
                extra={"message_id": message.id, "reason": str(e)},
            )

    def _offer_menu(self, intent: ServiceIntent) -> bool:
        if not self._quick_replies_enabled:
            return False
        return intent.confidence < CONFIDENCE_THRESHOLD or intent.category == Category.general
