"""Core infrastructure modules."""

from .exceptions import (
    FeedCacheError,
    TransportError,
    QueryError,
    ValidationError,
    AuthError,
    FeedContextError,
)
from .logging import setup_logging, get_logger

__all__ = [
    "FeedCacheError",
    "TransportError",
    "QueryError",
    "ValidationError",
    "AuthError",
    "FeedContextError",
    "setup_logging",
    "get_logger",
]
