from functools import lru_cache
import logging

from fastapi import Depends

from mobichat.core.config import settings
from mobichat.application.ports.message_platform import MessagePlatformPort
from mobichat.application.use_cases.classify_intent import ClassifyIntentUseCase
from mobichat.application.use_cases.create_conversation import CreateConversationUseCase
from mobichat.application.use_cases.generate_reply import GenerateReplyUseCase
from mobichat.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from mobichat.application.use_cases.post_message import PostMessageUseCase
from mobichat.application.use_cases.record_stats import RecordStatsUseCase
from mobichat.application.use_cases.send_reply import SendReplyUseCase
from mobichat.domain.entities.language import Language
from mobichat.infrastructure.knowledge.default_catalog import build_default_catalog
from mobichat.infrastructure.messenger.messenger_client import MessengerClient
from mobichat.infrastructure.messenger.messenger_platform import MessengerPlatform
from mobichat.infrastructure.messenger.mock_platform import MockMessengerPlatform
from mobichat.infrastructure.store.memory_store import MemoryStorage


def build_storage(seed_defaults: bool = True) -> MemoryStorage:
    """Create a store, optionally seeded with the default bilingual catalog."""
    storage = MemoryStorage()
    if seed_defaults:
        storage.seed_catalog(build_default_catalog())
        logging.getLogger(__name__).info("Default intent catalog seeded")
    return storage


@lru_cache
def get_storage() -> MemoryStorage:
    """The process-wide store, built and seeded on first use."""
    return build_storage(seed_defaults=settings.SEED_DEFAULT_CATALOG)


@lru_cache
def get_messenger_client() -> MessengerClient:
    return MessengerClient(
        send_endpoint=settings.messenger_send_endpoint,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )


def close_messenger_client() -> None:
    """Close the shared Send API client if one was created."""
    if get_messenger_client.cache_info().currsize:
        get_messenger_client().close()
        get_messenger_client.cache_clear()


def get_message_platform(storage: MemoryStorage = Depends(get_storage)) -> MessagePlatformPort:
    logger = logging.getLogger(__name__)

    stored = storage.get_settings()
    has_token = bool(settings.META_PAGE_ACCESS_TOKEN or (stored and stored.page_access_token))
    if not has_token and settings.ENV.lower() in {"dev", "local"}:
        logger.debug("Using MockMessengerPlatform (no page token, ENV=dev/local)")
        return MockMessengerPlatform()

    return MessengerPlatform(
        client=get_messenger_client(),
        settings_store=storage,
        fallback_access_token=settings.META_PAGE_ACCESS_TOKEN,
    )


def get_record_stats_use_case(storage: MemoryStorage = Depends(get_storage)) -> RecordStatsUseCase:
    return RecordStatsUseCase(stats=storage)


def get_classify_intent_use_case(storage: MemoryStorage = Depends(get_storage)) -> ClassifyIntentUseCase:
    return ClassifyIntentUseCase(catalog=storage)


def get_create_conversation_use_case(
    storage: MemoryStorage = Depends(get_storage),
    record_stats: RecordStatsUseCase = Depends(get_record_stats_use_case),
) -> CreateConversationUseCase:
    return CreateConversationUseCase(store=storage, record_stats=record_stats)


def get_post_message_use_case(
    storage: MemoryStorage = Depends(get_storage),
    record_stats: RecordStatsUseCase = Depends(get_record_stats_use_case),
) -> PostMessageUseCase:
    return PostMessageUseCase(
        store=storage,
        classify_intent=ClassifyIntentUseCase(catalog=storage),
        generate_reply=GenerateReplyUseCase(catalog=storage),
        record_stats=record_stats,
        default_language=Language(settings.DEFAULT_LANGUAGE.lower()),
    )


def get_handle_incoming_message_use_case(
    storage: MemoryStorage = Depends(get_storage),
    platform: MessagePlatformPort = Depends(get_message_platform),
    create_conversation: CreateConversationUseCase = Depends(get_create_conversation_use_case),
    record_stats: RecordStatsUseCase = Depends(get_record_stats_use_case),
) -> HandleIncomingMessageUseCase:
    return HandleIncomingMessageUseCase(
        store=storage,
        create_conversation=create_conversation,
        classify_intent=ClassifyIntentUseCase(catalog=storage),
        generate_reply=GenerateReplyUseCase(catalog=storage),
        send_reply=SendReplyUseCase(platform=platform, auto_reply_enabled=settings.AUTO_REPLY_ENABLED),
        record_stats=record_stats,
        language=settings.MESSENGER_LANGUAGE,
        quick_replies_enabled=settings.MESSENGER_QUICK_REPLIES,
    )
