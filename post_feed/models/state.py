"""
Cache State Models

Read-only projections of the feed cache handed to the UI layer.
"""

from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, Field, ConfigDict

from .post import FeedItem


class LoadOutcome(str, Enum):
    """Result of a load_next_page call."""
    LOADED = "loaded"
    SKIPPED = "skipped"  # In flight or exhausted, store not contacted
    FAILED = "failed"


class FeedSnapshot(BaseModel):
    """Immutable view of the cache at one point in time."""
    items: Tuple[FeedItem, ...] = Field(default_factory=tuple)
    loading: bool = False
    has_more: bool = True
    cursor: int = 0
    error: Optional[str] = Field(None, description="Last page load failure")

    model_config = ConfigDict(frozen=True)
