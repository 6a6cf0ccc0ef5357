from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class InboundMessage:
    id: str
    sender_id: str
    text: str
    timestamp: int
    is_postback: bool = False


class WebhookEventDTO(BaseModel):
    object: str | None = None
    entry: list[dict[str, Any]] = Field(default_factory=list)

    def is_page_event(self) -> bool:
        return self.object == "page"

    def extract_messages(self) -> list[InboundMessage]:
        """Text messages and postbacks sent to the page; echoes of our own replies are dropped."""
        messages: list[InboundMessage] = []
        if not self.is_page_event():
            return messages

        for entry in self.entry or []:
            for event in entry.get("messaging", []) or []:
                sender = (event.get("sender") or {}).get("id")
                timestamp = event.get("timestamp")
                if not (sender and timestamp):
                    continue

                message = event.get("message")
                postback = event.get("postback")
                if message:
                    if message.get("is_echo"):
                        continue
                    text = message.get("text")
                    mid = message.get("mid")
                    if not (text and mid):
                        continue
                    messages.append(
                        InboundMessage(id=str(mid), sender_id=str(sender), text=str(text), timestamp=int(timestamp))
                    )
                elif postback:
                    payload = postback.get("payload") or postback.get("title")
                    if not payload:
                        continue
                    mid = postback.get("mid") or f"postback_{sender}_{timestamp}"
                    messages.append(
                        InboundMessage(
                            id=str(mid),
                            sender_id=str(sender),
                            text=str(payload),
                            timestamp=int(timestamp),
                            is_postback=True,
                        )
                    )

        return messages
