from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from mobichat.domain.entities.language import Language


class Sender(str, Enum):
    user = "user"
    bot = "bot"


@dataclass(frozen=True)
class Message:
    id: str
    text: str
    sender: Sender
    timestamp: int  # epoch milliseconds
    language: Language | None = None
