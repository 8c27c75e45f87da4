"""Services for loading and caching the post feed."""

from .protocols import RemoteFeedStore, IdentityProvider
from .feed_cache import PaginatedFeedCache
from .supabase_store import SupabaseFeedStore
from .supabase_auth import SupabaseIdentityProvider

__all__ = [
    "RemoteFeedStore",
    "IdentityProvider",
    "PaginatedFeedCache",
    "SupabaseFeedStore",
    "SupabaseIdentityProvider",
]
