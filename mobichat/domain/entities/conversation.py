from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from mobichat.domain.entities.message import Message


class Platform(str, Enum):
    web = "web"
    messenger = "messenger"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Conversation:
    id: str
    user_id: str
    platform: Platform
    messages: tuple[Message, ...] = ()
    is_active: bool = True
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
