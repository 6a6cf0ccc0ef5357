from __future__ import annotations

import logging
from typing import Sequence

import httpx

from mobichat.application.exceptions import MessengerNotConfiguredError
from mobichat.application.ports.message_platform import MessagePlatformPort
from mobichat.domain.entities.quick_reply import QuickReply


class SendReplyUseCase:
    def __init__(self, platform: MessagePlatformPort, auto_reply_enabled: bool = True) -> None:
        self._platform = platform
        self._auto_reply_enabled = auto_reply_enabled
        self._logger = logging.getLogger(__name__)

    def execute(self, recipient_id: str, text: str, quick_replies: Sequence[QuickReply] | None = None) -> bool:
        """Send a reply. Returns True if actually sent, False if skipped or failed."""
        if not self._auto_reply_enabled:
            self._logger.info("WOULD_SEND_REPLY", extra={"recipient_id": recipient_id, "reply_text": text})
            self._logger.info("AUTO_REPLY_ENABLED=false -> skipping send")
            return False
        try:
            if quick_replies:
                self._platform.send_quick_replies(recipient_id=recipient_id, text=text, quick_replies=quick_replies)
            else:
                self._platform.send_text(recipient_id=recipient_id, text=text)
        except MessengerNotConfiguredError:
            self._logger.error("Facebook settings not configured", extra={"recipient_id": recipient_id})
            return False
        except httpx.HTTPError as e:
            self._logger.error("Error sending Messenger reply", extra={"recipient_id": recipient_id, "reason": str(e)})
            return False
        return True
