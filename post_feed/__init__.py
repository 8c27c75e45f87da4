"""Client-side cache for a paginated, reverse-chronological post feed."""

from .context import feed_view, use_feed
from .services.feed_cache import PaginatedFeedCache

__all__ = [
    "feed_view",
    "use_feed",
    "PaginatedFeedCache",
]
