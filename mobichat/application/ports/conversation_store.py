from abc import ABC, abstractmethod
from typing import Any, Sequence

from mobichat.domain.entities.conversation import Conversation, Platform
from mobichat.domain.entities.message import Message


class ConversationStorePort(ABC):
    @abstractmethod
    def get_conversation(self, conversation_id: str) -> Conversation | None:
        raise NotImplementedError

    @abstractmethod
    def get_conversation_by_user_id(self, user_id: str) -> Conversation | None:
        """Return the user's active conversation, if any."""
        raise NotImplementedError

    @abstractmethod
    def create_conversation(
        self,
        user_id: str,
        platform: Platform,
        messages: Sequence[Message] = (),
        is_active: bool = True,
    ) -> Conversation:
        raise NotImplementedError

    @abstractmethod
    def update_conversation(self, conversation_id: str, **changes: Any) -> Conversation | None:
        raise NotImplementedError

    @abstractmethod
    def append_message(self, conversation_id: str, message: Message) -> bool:
        """Append to the conversation. Returns False if the conversation does not exist."""
        raise NotImplementedError

    @abstractmethod
    def has_processed(self, message_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def mark_processed(self, message_id: str) -> bool:
        """Record the id atomically. Returns False if it was already recorded."""
        raise NotImplementedError

    @abstractmethod
    def release_processed(self, message_id: str) -> None:
        """Forget the id so a redelivery is handled again."""
        raise NotImplementedError
