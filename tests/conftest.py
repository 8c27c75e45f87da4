"""
Pytest Fixtures

Shared mocks and fixtures for testing.
"""

from datetime import datetime, timedelta, timezone
from typing import List
from unittest.mock import AsyncMock, MagicMock

import pytest

from post_feed.config import get_settings
from post_feed.models.identity import Identity
from post_feed.models.post import AuthorSummary, FeedItem, PostDraft

BASE_TIME = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_item(n: int, minutes_ago: int = None, **overrides) -> FeedItem:
    """Build a post; higher ``n`` means older unless ``minutes_ago`` is given."""
    if minutes_ago is None:
        minutes_ago = n
    data = {
        "id": f"post_{n}",
        "content": f"Post number {n}",
        "odds": 1.5,
        "confidence": 0.7,
        "created_at": BASE_TIME - timedelta(minutes=minutes_ago),
        "user": AuthorSummary(username="tipster", avatar_url="https://img/a.png"),
    }
    data.update(overrides)
    return FeedItem(**data)


def make_page(start: int, count: int) -> List[FeedItem]:
    return [make_item(n) for n in range(start, start + count)]


def make_draft(content: str = "x", **overrides) -> PostDraft:
    """Draft with the metrics every post must carry."""
    data = {"content": content, "odds": 1.9, "confidence": 0.6}
    data.update(overrides)
    return PostDraft(**data)


def make_row(n: int, **overrides) -> dict:
    """Raw PostgREST row as returned with the embedded profile."""
    row = {
        "id": f"post_{n}",
        "content": f"Post number {n}",
        "image_url": None,
        "odds": 2.1,
        "confidence": 0.8,
        "created_at": (BASE_TIME - timedelta(minutes=n)).isoformat(),
        "likes": 0,
        "comments": 0,
        "shares": 0,
        "user_id": "user_abc",
        "user": {"username": "tipster", "avatar_url": None},
    }
    row.update(overrides)
    return row


@pytest.fixture
def identity() -> Identity:
    return Identity(id="user_abc", email="tipster@example.com")


@pytest.fixture
def mock_store():
    """RemoteFeedStore with async fetch/insert."""
    mock = MagicMock()
    mock.fetch_page = AsyncMock(return_value=[])
    mock.insert_item = AsyncMock()
    return mock


@pytest.fixture
def mock_identity_provider(identity):
    """IdentityProvider with a signed-in user."""
    mock = MagicMock()
    mock.current_user = AsyncMock(return_value=identity)
    return mock


@pytest.fixture
def supabase_env(monkeypatch):
    """Point settings at a fake Supabase project."""
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "anon-key")
    monkeypatch.setenv("POSTS_PER_PAGE", "10")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def mock_async_client(mock_client_class, **methods):
    """Wire a patched httpx.AsyncClient to return canned responses."""
    mock_client = AsyncMock()
    for name, value in methods.items():
        attr = getattr(mock_client, name)
        if isinstance(value, BaseException):
            attr.side_effect = value
        else:
            attr.return_value = value
    mock_client.__aenter__.return_value = mock_client
    mock_client.__aexit__.return_value = None
    mock_client_class.return_value = mock_client
    return mock_client
