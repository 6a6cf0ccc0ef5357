from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx

from mobichat.domain.entities.quick_reply import QuickReply


class MessengerClient:
    """Facebook Messenger Send API over httpx."""

    def __init__(self, send_endpoint: str, timeout: float = 10.0, transport: httpx.BaseTransport | None = None) -> None:
        self._send_endpoint = send_endpoint
        self._client = httpx.Client(timeout=timeout, transport=transport)
        self._logger = logging.getLogger(__name__)

    def send_text(self, access_token: str, recipient_id: str, text: str) -> None:
        self._post(access_token, recipient_id, {"text": text})

    def send_quick_replies(
        self,
        access_token: str,
        recipient_id: str,
        text: str,
        quick_replies: Sequence[QuickReply],
    ) -> None:
        message = {
            "text": text,
            "quick_replies": [
                {"content_type": "text", "title": reply.title, "payload": reply.payload}
                for reply in quick_replies
            ],
        }
        self._post(access_token, recipient_id, message)

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def close(self) -> None:
        self._client.close()

    def _post(self, access_token: str, recipient_id: str, message: dict[str, Any]) -> None:
        payload = {
            "recipient": {"id": recipient_id},
            "message": message,
        }
        params = {"access_token": access_token}
        resp = self._client.post(self._send_endpoint, params=params, json=payload)
        if resp.status_code >= 400:
            try:
                error = resp.json().get("error", {})
                error_code = error.get("code")
                error_message = error.get("message")
                error_subcode = error.get("error_subcode")
            except ValueError:
                error_code = None
                error_message = resp.text
                error_subcode = None

            self._logger.error(
                "Messenger send failed",
                extra={
                    "status": resp.status_code,
                    "error_code": error_code,
                    "error_message": error_message,
                    "error_subcode": error_subcode,
                    "recipient_id": recipient_id,
                    "text_length": len(message.get("text") or ""),
                },
            )
            resp.raise_for_status()
