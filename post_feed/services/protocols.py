"""Protocols for the collaborators the feed cache consumes."""
from typing import List, Optional, Protocol

from ..models.identity import Identity
from ..models.post import FeedItem, PostDraft


class RemoteFeedStore(Protocol):
    """Paged source of truth for posts. Ordering and dedup are the cache's job."""

    async def fetch_page(self, offset: int, limit: int) -> List[FeedItem]:
        """
        Return up to ``limit`` posts starting at ``offset``, newest first.
        Raises TransportError or QueryError.
        """
        ...

    async def insert_item(self, draft: PostDraft, author_id: str) -> FeedItem:
        """
        Create a post and return it fully materialized.
        Raises TransportError, QueryError or ValidationError.
        """
        ...


class IdentityProvider(Protocol):
    """Resolves the currently authenticated user."""

    async def current_user(self) -> Optional[Identity]:
        ...
