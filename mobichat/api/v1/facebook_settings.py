from fastapi import APIRouter, Depends

from mobichat.api.v1.schemas import FacebookSettingsSchema, FacebookSettingsUpdateSchema
from mobichat.infrastructure.store.memory_store import MemoryStorage
from mobichat.wiring.dependencies import get_storage

router = APIRouter()


@router.get("/facebook-settings", response_model=FacebookSettingsSchema | None)
def get_facebook_settings(storage: MemoryStorage = Depends(get_storage)):
    stored = storage.get_settings()
    return FacebookSettingsSchema.from_entity(stored) if stored else None


@router.post("/facebook-settings", response_model=FacebookSettingsSchema)
def update_facebook_settings(req: FacebookSettingsUpdateSchema, storage: MemoryStorage = Depends(get_storage)):
    stored = storage.update_settings(
        page_access_token=req.page_access_token,
        verify_token=req.verify_token,
        webhook_url=req.webhook_url,
        is_active=req.is_active,
    )
    return FacebookSettingsSchema.from_entity(stored)
