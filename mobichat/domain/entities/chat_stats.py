from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ChatStats:
    id: str
    date: str  # YYYY-MM-DD
    total_conversations: int = 0
    resolved_queries: int = 0
    balance_inquiries: int = 0
    bot_replies: int = 0
    average_responses: float = 0.0
