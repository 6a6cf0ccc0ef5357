from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from mobichat.application.ports.stats_store import StatsStorePort
from mobichat.application.utils.intent_resolver import CONFIDENCE_THRESHOLD
from mobichat.domain.entities.category import Category
from mobichat.domain.entities.chat_stats import ChatStats
from mobichat.domain.entities.intent import ServiceIntent


def today_utc() -> str:
    return datetime.now(timezone.utc).date().isoformat()


class RecordStatsUseCase:
    def __init__(self, stats: StatsStorePort, today: Callable[[], str] = today_utc) -> None:
        self._stats = stats
        self._today = today
        self._logger = logging.getLogger(__name__)

    def conversation_started(self) -> ChatStats:
        return self._stats.increment_stats(self._today(), total_conversations=1)

    def bot_replied(self, intent: ServiceIntent) -> ChatStats:
        deltas = {"bot_replies": 1}
        if intent.confidence >= CONFIDENCE_THRESHOLD:
            deltas["resolved_queries"] = 1
            if intent.category == Category.balance:
                deltas["balance_inquiries"] = 1
        stats = self._stats.increment_stats(self._today(), **deltas)
        self._logger.debug("Stats updated", extra={"intent": intent.intent, "date": stats.date})
        return stats
