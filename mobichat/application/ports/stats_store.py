from abc import ABC, abstractmethod
from typing import Any

from mobichat.domain.entities.chat_stats import ChatStats


class StatsStorePort(ABC):
    @abstractmethod
    def get_stats(self, date: str) -> ChatStats | None:
        raise NotImplementedError

    @abstractmethod
    def update_stats(self, date: str, **changes: Any) -> ChatStats:
        """Create or update the record for `date`; unspecified fields are kept."""
        raise NotImplementedError

    @abstractmethod
    def increment_stats(self, date: str, **deltas: int) -> ChatStats:
        """Atomically add to counters and recompute average_responses."""
        raise NotImplementedError
