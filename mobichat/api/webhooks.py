from __future__ import annotations

import json
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request, Response
from fastapi.responses import PlainTextResponse

from mobichat.application.dto.webhook_event import WebhookEventDTO
from mobichat.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from mobichat.core.config import settings
from mobichat.infrastructure.messenger.webhook_verify import check_signature, check_subscription
from mobichat.infrastructure.store.memory_store import MemoryStorage
from mobichat.wiring.dependencies import get_handle_incoming_message_use_case, get_storage


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/webhook/messenger")
def verify_webhook(
    hub_mode: str | None = Query(None, alias="hub.mode"),
    hub_verify_token: str | None = Query(None, alias="hub.verify_token"),
    hub_challenge: str | None = Query(None, alias="hub.challenge"),
    storage: MemoryStorage = Depends(get_storage),
):
    if hub_mode != "subscribe":
        raise HTTPException(status_code=400, detail="Bad Request")

    stored = storage.get_settings()
    expected_token = (stored.verify_token if stored else None) or settings.META_VERIFY_TOKEN
    challenge = check_subscription(hub_mode, hub_verify_token, hub_challenge, expected_token)
    if challenge is None:
        logger.warning("Messenger webhook verification failed")
        raise HTTPException(status_code=403, detail="Forbidden")
    return PlainTextResponse(challenge)


@router.post("/webhook/messenger")
async def messenger_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    use_case: HandleIncomingMessageUseCase = Depends(get_handle_incoming_message_use_case),
) -> Response:
    body = await request.body()
    signature = request.headers.get("X-Hub-Signature-256")
    if not check_signature(body, signature, settings.META_APP_SECRET, settings.ENV):
        return Response(status_code=403)

    try:
        payload = json.loads(body.decode("utf-8")) if body else {}
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.exception("Failed to parse webhook body")
        return Response(status_code=400)

    try:
        event = WebhookEventDTO.model_validate(payload)
        messages = event.extract_messages()

        logger.info("Webhook received", extra={"object": event.object, "message_count": len(messages)})

        for message in messages:
            background_tasks.add_task(use_case.handle, message)

        return PlainTextResponse("EVENT_RECEIVED")
    except Exception as e:
        logger.exception("Error processing webhook event", extra={"reason": str(e)})
        return Response(status_code=500)
