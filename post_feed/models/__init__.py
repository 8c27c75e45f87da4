"""Pydantic models for the post feed cache."""

from .post import AuthorSummary, FeedItem, PostDraft
from .identity import Identity
from .state import FeedSnapshot, LoadOutcome

__all__ = [
    "AuthorSummary",
    "FeedItem",
    "PostDraft",
    "Identity",
    "FeedSnapshot",
    "LoadOutcome",
]
