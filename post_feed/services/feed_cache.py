"""
Paginated Feed Cache

Owns the locally ordered collection of posts for one feed view: loads
remote pages behind an in-flight guard, tracks exhaustion, and places
newly created posts at the front once the store confirms them.
"""

from typing import Callable, List, Optional, Tuple

from ..config import get_settings
from ..core.exceptions import AuthError, FeedCacheError
from ..core.logging import get_logger
from ..models.post import FeedItem, PostDraft
from ..models.state import FeedSnapshot, LoadOutcome
from .protocols import IdentityProvider, RemoteFeedStore

logger = get_logger(__name__)

Listener = Callable[[FeedSnapshot], None]


class PaginatedFeedCache:
    """
    Single-writer cache of a reverse-chronological post feed.

    State:
    - items: newest first, unique by id. Appended posts sit ahead of
      everything loaded before them regardless of timestamp.
    - cursor: index of the next page to request, +1 per successful load
    - exhausted: set once a page comes back short, never cleared
    - in_flight: at most one page fetch at a time

    Consumers read through properties or snapshot() and subscribe to
    change notifications; nothing outside this class mutates the state.
    """

    def __init__(
        self,
        store: RemoteFeedStore,
        identity_provider: IdentityProvider,
        page_size: Optional[int] = None,
    ):
        if page_size is None:
            page_size = get_settings().posts_per_page
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")

        self.store = store
        self.identity_provider = identity_provider
        self.page_size = page_size

        self._items: List[FeedItem] = []
        self._ids: set = set()
        self._cursor = 0
        self._exhausted = False
        self._in_flight = False
        self._last_error: Optional[str] = None
        self._listeners: List[Listener] = []

    # =========================================================================
    # READ-ONLY PROJECTION
    # =========================================================================

    @property
    def items(self) -> Tuple[FeedItem, ...]:
        return tuple(self._items)

    @property
    def loading(self) -> bool:
        return self._in_flight

    @property
    def has_more(self) -> bool:
        return not self._exhausted

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def error(self) -> Optional[str]:
        """Message of the last failed page load, None after a success."""
        return self._last_error

    def snapshot(self) -> FeedSnapshot:
        return FeedSnapshot(
            items=tuple(self._items),
            loading=self._in_flight,
            has_more=not self._exhausted,
            cursor=self._cursor,
            error=self._last_error,
        )

    # =========================================================================
    # CHANGE NOTIFICATIONS
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with a fresh snapshot after every change.

        Returns:
            Callable that removes the listener (safe to call twice)
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self):
        """Drop all listeners (feed view torn down)."""
        self._listeners.clear()

    def _notify(self):
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error("feed_listener_failed", error=str(e))

    # =========================================================================
    # COMMANDS
    # =========================================================================

    async def load_next_page(self) -> LoadOutcome:
        """
        Fetch page ``cursor`` and append it behind the loaded items.

        No-op while a fetch is in flight or once the feed is exhausted;
        callers re-invoke after the current fetch settles. Store failures
        are logged and reported as FAILED with state left untouched so
        the next call retries the same page.
        """
        if self._in_flight or self._exhausted:
            logger.debug(
                "feed_page_load_skipped",
                in_flight=self._in_flight,
                exhausted=self._exhausted,
            )
            return LoadOutcome.SKIPPED

        page = self._cursor
        self._in_flight = True
        self._notify()

        try:
            page_items = await self.store.fetch_page(
                offset=page * self.page_size,
                limit=self.page_size,
            )
        except FeedCacheError as e:
            self._last_error = e.message
            logger.warning(
                "feed_page_load_failed",
                page=page,
                error_type=type(e).__name__,
                error=e.message,
            )
            return LoadOutcome.FAILED
        else:
            added = self._merge_page(page_items)
            self._exhausted = len(page_items) < self.page_size
            self._cursor = page + 1
            self._last_error = None

            logger.info(
                "feed_page_loaded",
                page=page,
                count=len(page_items),
                added=added,
                has_more=not self._exhausted,
            )
            return LoadOutcome.LOADED
        finally:
            self._in_flight = False
            self._notify()

    async def append(self, draft: PostDraft) -> FeedItem:
        """
        Create a post remotely and place it at the front of the feed.

        The post only lands locally after the store confirms it. Every
        failure, including a missing identity, is logged and re-raised so
        the caller can retry the same draft.
        """
        try:
            identity = await self.identity_provider.current_user()
            if identity is None:
                raise AuthError()

            item = await self.store.insert_item(draft, author_id=identity.id)
        except Exception as e:
            logger.error(
                "post_append_failed",
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

        if item.id in self._ids:
            self._items = [i for i in self._items if i.id != item.id]
        self._items.insert(0, item)
        self._ids.add(item.id)

        logger.info("post_appended", post_id=item.id, author_id=identity.id)
        self._notify()
        return item

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _merge_page(self, page_items: List[FeedItem]) -> int:
        """Append in received order, dropping ids already present."""
        added = 0
        for item in page_items:
            if item.id in self._ids:
                logger.debug("feed_duplicate_dropped", post_id=item.id)
                continue
            self._items.append(item)
            self._ids.add(item.id)
            added += 1
        return added
