"""
Browse Feed Script

Pages through a live Supabase feed the way the UI does on scroll.
Reads SUPABASE_URL / SUPABASE_KEY from the environment or .env and an
optional SUPABASE_ACCESS_TOKEN to post as a signed-in user.

Usage:
    python scripts/browse_feed.py [max_pages] ["text to post" odds confidence]
"""

import asyncio
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from post_feed import feed_view
from post_feed.core.exceptions import FeedCacheError
from post_feed.core.logging import setup_logging
from post_feed.models.post import PostDraft
from post_feed.models.state import LoadOutcome
from post_feed.services import SupabaseFeedStore, SupabaseIdentityProvider


async def browse(
    max_pages: int,
    post_text: str = None,
    odds: float = 2.0,
    confidence: float = 0.5,
):
    token = os.environ.get("SUPABASE_ACCESS_TOKEN")
    store = SupabaseFeedStore(access_token=token)
    identity = SupabaseIdentityProvider(access_token=token)

    async with feed_view(store, identity) as cache:
        if cache.error:
            print(f"Initial load failed: {cache.error}")
            return
        print(f"Page 1: {len(cache.items)} posts (has_more={cache.has_more})")

        pages = 1
        while cache.has_more and pages < max_pages:
            outcome = await cache.load_next_page()
            if outcome == LoadOutcome.FAILED:
                print(f"Load failed: {cache.error}")
                break
            pages += 1
            print(f"Page {pages}: {len(cache.items)} posts (has_more={cache.has_more})")

        if post_text:
            try:
                item = await cache.append(PostDraft(content=post_text, odds=odds, confidence=confidence))
                print(f"Posted {item.id} as {item.user.username}")
            except FeedCacheError as e:
                print(f"Post failed: {e.message}")

        print("=" * 60)
        for item in cache.items:
            print(f"{item.created_at:%Y-%m-%d %H:%M}  @{item.user.username}: {item.content[:60]}")


if __name__ == "__main__":
    setup_logging()
    max_pages = int(sys.argv[1]) if len(sys.argv) > 1 else 3
    post_text = sys.argv[2] if len(sys.argv) > 2 else None
    odds = float(sys.argv[3]) if len(sys.argv) > 3 else 2.0
    confidence = float(sys.argv[4]) if len(sys.argv) > 4 else 0.5
    asyncio.run(browse(max_pages, post_text, odds, confidence))
