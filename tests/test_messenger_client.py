"""
Tests for the Messenger Send API client and the page-token platform.
"""

from __future__ import annotations

import json

import httpx
import pytest

from mobichat.application.exceptions import MessengerNotConfiguredError
from mobichat.application.utils.quick_replies import build_service_quick_replies
from mobichat.core.config import settings
from mobichat.domain.entities.language import Language
from mobichat.infrastructure.messenger.messenger_client import MessengerClient
from mobichat.infrastructure.messenger.messenger_platform import MessengerPlatform
from mobichat.infrastructure.messenger.mock_platform import MockMessengerPlatform
from mobichat.infrastructure.store.memory_store import MemoryStorage
from mobichat.wiring.dependencies import close_messenger_client, get_message_platform, get_messenger_client

ENDPOINT = "https://graph.facebook.com/v20.0/me/messages"


def _client(requests: list[httpx.Request], status_code: int = 200, body: dict | None = None) -> MessengerClient:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, json=body or {"recipient_id": "psid-1", "message_id": "mid.out"})

    return MessengerClient(send_endpoint=ENDPOINT, transport=httpx.MockTransport(handler))


def test_send_text_posts_recipient_and_token():
    requests: list[httpx.Request] = []
    _client(requests).send_text("page-token", recipient_id="psid-1", text="مرحبا")

    request = requests[0]
    assert request.method == "POST"
    assert request.url.params["access_token"] == "page-token"
    assert str(request.url).startswith(ENDPOINT)
    assert json.loads(request.content) == {"recipient": {"id": "psid-1"}, "message": {"text": "مرحبا"}}


def test_send_quick_replies_payload():
    requests: list[httpx.Request] = []
    quick_replies = build_service_quick_replies(Language.fr)

    _client(requests).send_quick_replies("page-token", "psid-1", "Choisissez", quick_replies)

    message = json.loads(requests[0].content)["message"]
    assert message["text"] == "Choisissez"
    assert message["quick_replies"][0] == {"content_type": "text", "title": "Solde", "payload": "balance"}
    assert len(message["quick_replies"]) == 4


def test_graph_error_raises():
    requests: list[httpx.Request] = []
    client = _client(
        requests,
        status_code=400,
        body={"error": {"message": "Invalid OAuth access token", "code": 190}},
    )
    with pytest.raises(httpx.HTTPStatusError):
        client.send_text("bad-token", recipient_id="psid-1", text="hi")


def test_platform_prefers_stored_page_token():
    requests: list[httpx.Request] = []
    store = MemoryStorage()
    store.update_settings(page_access_token="stored-token")

    MessengerPlatform(_client(requests), store, fallback_access_token="env-token").send_text("psid-1", "hi")

    assert requests[0].url.params["access_token"] == "stored-token"


def test_platform_falls_back_to_configured_token():
    requests: list[httpx.Request] = []
    store = MemoryStorage()
    store.update_settings(verify_token="verify-only")

    MessengerPlatform(_client(requests), store, fallback_access_token="env-token").send_text("psid-1", "hi")

    assert requests[0].url.params["access_token"] == "env-token"


def test_platform_without_any_token_is_not_configured():
    requests: list[httpx.Request] = []
    platform = MessengerPlatform(_client(requests), MemoryStorage(), fallback_access_token=None)

    with pytest.raises(MessengerNotConfiguredError):
        platform.send_quick_replies("psid-1", "hi", build_service_quick_replies(Language.ar))
    assert requests == []


@pytest.fixture
def dev_without_env_token(monkeypatch):
    monkeypatch.setattr(settings, "ENV", "dev")
    monkeypatch.setattr(settings, "META_PAGE_ACCESS_TOKEN", None)
    yield
    close_messenger_client()


def test_dev_without_any_page_token_uses_mock(dev_without_env_token):
    assert isinstance(get_message_platform(MemoryStorage()), MockMessengerPlatform)


def test_stored_page_token_selects_real_platform_in_dev(dev_without_env_token):
    """A token saved through the settings API is used even when the environment has none."""
    store = MemoryStorage()
    store.update_settings(page_access_token="PAGE_TOKEN", is_active=True)

    platform = get_message_platform(store)

    assert isinstance(platform, MessengerPlatform)
    assert platform._access_token() == "PAGE_TOKEN"


def test_close_messenger_client_closes_shared_client():
    client = get_messenger_client()
    assert not client.is_closed

    close_messenger_client()

    assert client.is_closed
    assert get_messenger_client() is not client
    close_messenger_client()
