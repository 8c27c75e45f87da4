"""
Feed Cache Exceptions

Error taxonomy shared by the cache and its remote collaborators.
"""

from typing import Optional


class FeedCacheError(Exception):
    """Base exception for feed cache errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TransportError(FeedCacheError):
    """Remote store unreachable, timed out, or failing server-side."""

    def __init__(self, message: str = "Remote store unavailable"):
        super().__init__(message)


class QueryError(FeedCacheError):
    """Remote store rejected the request shape or returned garbage."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ValidationError(FeedCacheError):
    """Insert payload rejected by the remote store."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.code = code
        super().__init__(message)


class AuthError(FeedCacheError):
    """No authenticated identity for an operation that needs one."""

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)


class FeedContextError(FeedCacheError):
    """Feed accessor used outside of a feed view."""

    def __init__(self, message: str = "use_feed must be used within a feed_view"):
        super().__init__(message)
