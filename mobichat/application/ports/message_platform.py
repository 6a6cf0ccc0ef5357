from abc import ABC, abstractmethod
from typing import Sequence

from mobichat.domain.entities.quick_reply import QuickReply


class MessagePlatformPort(ABC):
    @abstractmethod
    def send_text(self, recipient_id: str, text: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def send_quick_replies(self, recipient_id: str, text: str, quick_replies: Sequence[QuickReply]) -> None:
        raise NotImplementedError
