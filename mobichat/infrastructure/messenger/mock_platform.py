from __future__ import annotations

import logging
from typing import Sequence

from mobichat.application.ports.message_platform import MessagePlatformPort
from mobichat.domain.entities.quick_reply import QuickReply


class MockMessengerPlatform(MessagePlatformPort):
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.sent: list[dict[str, object]] = []

    def send_text(self, recipient_id: str, text: str) -> None:
        self.sent.append({"recipient_id": recipient_id, "text": text})
        self._logger.info("Mock send to Messenger", extra={"recipient_id": recipient_id, "reply_text": text})

    def send_quick_replies(self, recipient_id: str, text: str, quick_replies: Sequence[QuickReply]) -> None:
        self.sent.append({"recipient_id": recipient_id, "text": text, "quick_replies": list(quick_replies)})
        self._logger.info(
            "Mock send to Messenger with quick replies",
            extra={"recipient_id": recipient_id, "reply_text": text, "quick_replies": len(quick_replies)},
        )
