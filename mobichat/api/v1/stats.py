from fastapi import APIRouter, Depends

from mobichat.api.v1.schemas import ChatStatsSchema
from mobichat.application.use_cases.record_stats import today_utc
from mobichat.infrastructure.store.memory_store import MemoryStorage
from mobichat.wiring.dependencies import get_storage

router = APIRouter()


# registered before /stats/{date} so "today" is not taken for a date
@router.get("/stats/today", response_model=ChatStatsSchema | None)
def get_today_stats(storage: MemoryStorage = Depends(get_storage)):
    stats = storage.get_stats(today_utc())
    return ChatStatsSchema.from_entity(stats) if stats else None


@router.get("/stats/{date}", response_model=ChatStatsSchema | None)
def get_stats(date: str, storage: MemoryStorage = Depends(get_storage)):
    stats = storage.get_stats(date)
    return ChatStatsSchema.from_entity(stats) if stats else None
