"""
Feed View Scope

Binds one PaginatedFeedCache to the lifetime of a displayed feed.
Code running inside the view reaches it through use_feed().
"""

from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import AsyncIterator, Optional

from .core.exceptions import FeedContextError
from .core.logging import get_logger
from .services.feed_cache import PaginatedFeedCache
from .services.protocols import IdentityProvider, RemoteFeedStore

logger = get_logger(__name__)

_current_feed: ContextVar[Optional[PaginatedFeedCache]] = ContextVar(
    "current_feed", default=None
)


@asynccontextmanager
async def feed_view(
    store: RemoteFeedStore,
    identity_provider: IdentityProvider,
    page_size: Optional[int] = None,
    load_on_mount: bool = True,
) -> AsyncIterator[PaginatedFeedCache]:
    """
    Create a fresh cache for one feed view.

    The first page is requested on mount unless ``load_on_mount`` is off.
    On exit the cache is unbound and its listeners dropped; nothing is
    persisted.
    """
    cache = PaginatedFeedCache(store, identity_provider, page_size=page_size)
    token = _current_feed.set(cache)
    logger.debug("feed_view_mounted", page_size=cache.page_size)

    try:
        if load_on_mount:
            await cache.load_next_page()
        yield cache
    finally:
        _current_feed.reset(token)
        cache.close()
        logger.debug("feed_view_unmounted", items=len(cache.items))


def use_feed() -> PaginatedFeedCache:
    """Return the cache of the enclosing feed view."""
    cache = _current_feed.get()
    if cache is None:
        raise FeedContextError()
    return cache
