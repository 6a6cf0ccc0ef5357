from __future__ import annotations

from typing import Sequence

from mobichat.application.exceptions import MessengerNotConfiguredError
from mobichat.application.ports.facebook_settings_store import FacebookSettingsStorePort
from mobichat.application.ports.message_platform import MessagePlatformPort
from mobichat.domain.entities.quick_reply import QuickReply
from mobichat.infrastructure.messenger.messenger_client import MessengerClient


class MessengerPlatform(MessagePlatformPort):
    """
    Sends through the page token stored in the Facebook settings record, or
    the configured fallback token when no record carries one.
    """

    def __init__(
        self,
        client: MessengerClient,
        settings_store: FacebookSettingsStorePort,
        fallback_access_token: str | None = None,
    ) -> None:
        self._client = client
        self._settings_store = settings_store
        self._fallback_access_token = fallback_access_token

    def send_text(self, recipient_id: str, text: str) -> None:
        self._client.send_text(self._access_token(), recipient_id=recipient_id, text=text)

    def send_quick_replies(self, recipient_id: str, text: str, quick_replies: Sequence[QuickReply]) -> None:
        self._client.send_quick_replies(
            self._access_token(), recipient_id=recipient_id, text=text, quick_replies=quick_replies
        )

    def _access_token(self) -> str:
        stored = self._settings_store.get_settings()
        token = (stored.page_access_token if stored else None) or self._fallback_access_token
        if not token:
            raise MessengerNotConfiguredError("Facebook page access token is not configured")
        return token
