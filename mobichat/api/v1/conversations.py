from fastapi import APIRouter, Depends, HTTPException

from mobichat.api.v1.schemas import (
    ConversationCreateSchema, ConversationSchema,
    MessageCreateSchema, MessageSchema, PostMessageResponseSchema,
)
from mobichat.application.exceptions import ConversationNotFoundError
from mobichat.application.use_cases.create_conversation import CreateConversationUseCase
from mobichat.application.use_cases.post_message import PostMessageUseCase
from mobichat.infrastructure.store.memory_store import MemoryStorage
from mobichat.wiring.dependencies import (
    get_create_conversation_use_case,
    get_post_message_use_case,
    get_storage,
)

router = APIRouter()


@router.get("/conversations/{user_id}", response_model=ConversationSchema | None)
def get_conversation_by_user(user_id: str, storage: MemoryStorage = Depends(get_storage)):
    conversation = storage.get_conversation_by_user_id(user_id)
    return ConversationSchema.from_entity(conversation) if conversation else None


@router.post("/conversations", response_model=ConversationSchema, status_code=201)
def create_conversation(
    req: ConversationCreateSchema,
    uc: CreateConversationUseCase = Depends(get_create_conversation_use_case),
):
    conversation = uc.execute(
        user_id=req.user_id,
        platform=req.platform,
        messages=[m.to_entity() for m in req.messages],
        is_active=req.is_active,
    )
    return ConversationSchema.from_entity(conversation)


@router.post("/conversations/{conversation_id}/messages", response_model=PostMessageResponseSchema)
def post_message(
    conversation_id: str,
    req: MessageCreateSchema,
    uc: PostMessageUseCase = Depends(get_post_message_use_case),
):
    try:
        result = uc.execute(
            conversation_id=conversation_id,
            text=req.text,
            sender=req.sender,
            language=req.language,
        )
    except ConversationNotFoundError:
        raise HTTPException(status_code=404, detail="Conversation not found")

    return PostMessageResponseSchema(
        message=MessageSchema.from_entity(result.message),
        bot_response=MessageSchema.from_entity(result.bot_response) if result.bot_response else None,
    )
