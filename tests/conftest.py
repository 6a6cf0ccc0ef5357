from __future__ import annotations

import uuid

import pytest
from fastapi.testclient import TestClient

from mobichat.domain.entities.catalog_entry import IntentCatalogEntry
from mobichat.domain.entities.category import Category
from mobichat.domain.entities.language import Language
from mobichat.infrastructure.messenger.mock_platform import MockMessengerPlatform
from mobichat.main import app
from mobichat.wiring.dependencies import build_storage, get_message_platform, get_storage


def make_entry(
    intent: str,
    keywords: list[str],
    category: Category = Category.general,
    fr: str | None = "réponse",
    ar: str | None = "رد",
    active: bool = True,
) -> IntentCatalogEntry:
    responses = {}
    if ar is not None:
        responses[Language.ar] = ar
    if fr is not None:
        responses[Language.fr] = fr
    return IntentCatalogEntry(
        id=uuid.uuid4().hex,
        intent=intent,
        keywords=tuple(keywords),
        category=category,
        responses=responses,
        active=active,
    )


@pytest.fixture
def storage():
    return build_storage(seed_defaults=True)


@pytest.fixture
def platform():
    return MockMessengerPlatform()


@pytest.fixture
def client(storage, platform):
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_message_platform] = lambda: platform
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
