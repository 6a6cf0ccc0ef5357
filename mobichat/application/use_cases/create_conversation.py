from __future__ import annotations

import logging
from typing import Sequence

from mobichat.application.ports.conversation_store import ConversationStorePort
from mobichat.application.use_cases.record_stats import RecordStatsUseCase
from mobichat.domain.entities.conversation import Conversation, Platform
from mobichat.domain.entities.message import Message


class CreateConversationUseCase:
    def __init__(self, store: ConversationStorePort, record_stats: RecordStatsUseCase) -> None:
        self._store = store
        self._record_stats = record_stats
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        user_id: str,
        platform: Platform,
        messages: Sequence[Message] = (),
        is_active: bool = True,
    ) -> Conversation:
        conversation = self._store.create_conversation(
            user_id=user_id, platform=platform, messages=messages, is_active=is_active
        )
        self._record_stats.conversation_started()
        self._logger.info(
            "Conversation created",
            extra={"conversation_id": conversation.id, "platform": conversation.platform.value},
        )
        return conversation

    def get_or_create(self, user_id: str, platform: Platform) -> Conversation:
        existing = self._store.get_conversation_by_user_id(user_id)
        if existing is not None:
            return existing
        return self.execute(user_id=user_id, platform=platform)
