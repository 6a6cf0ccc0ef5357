from fastapi import APIRouter, Depends, HTTPException, Response

from mobichat.api.v1.schemas import BotResponseCreateSchema, BotResponseSchema, BotResponseUpdateSchema
from mobichat.application.exceptions import CatalogConfigurationError
from mobichat.domain.entities.language import Language
from mobichat.infrastructure.store.memory_store import MemoryStorage
from mobichat.wiring.dependencies import get_storage

router = APIRouter()


@router.get("/bot-responses", response_model=list[BotResponseSchema])
def list_bot_responses(storage: MemoryStorage = Depends(get_storage)):
    return [BotResponseSchema.from_entity(entry) for entry in storage.list_responses()]


@router.post("/bot-responses", response_model=BotResponseSchema, status_code=201)
def create_bot_response(req: BotResponseCreateSchema, storage: MemoryStorage = Depends(get_storage)):
    try:
        entry = storage.create_response(
            intent=req.intent,
            keywords=req.keywords,
            category=req.category,
            responses={Language.ar: req.response_ar, Language.fr: req.response_fr},
            active=req.is_active,
        )
    except CatalogConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return BotResponseSchema.from_entity(entry)


@router.put("/bot-responses/{response_id}", response_model=BotResponseSchema)
def update_bot_response(
    response_id: str,
    req: BotResponseUpdateSchema,
    storage: MemoryStorage = Depends(get_storage),
):
    try:
        entry = storage.update_response(response_id, **req.to_changes())
    except CatalogConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if entry is None:
        raise HTTPException(status_code=404, detail="Bot response not found")
    return BotResponseSchema.from_entity(entry)


@router.delete("/bot-responses/{response_id}", status_code=204)
def delete_bot_response(response_id: str, storage: MemoryStorage = Depends(get_storage)) -> Response:
    if not storage.delete_response(response_id):
        raise HTTPException(status_code=404, detail="Bot response not found")
    return Response(status_code=204)
