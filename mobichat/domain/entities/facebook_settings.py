from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class FacebookSettings:
    id: str
    page_access_token: str | None = None
    verify_token: str | None = None
    webhook_url: str | None = None
    is_active: bool = False
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
