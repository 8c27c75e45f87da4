"""
Supabase Feed Store

Reads and writes posts through the Supabase REST (PostgREST) API.
Each post is returned with its author profile embedded as ``user``.
"""

from typing import Any, List, Optional
import httpx
from pydantic import ValidationError as PydanticValidationError

from ..config import get_settings
from ..core.exceptions import AuthError, QueryError, TransportError, ValidationError
from ..core.logging import get_logger
from ..models.post import FeedItem, PostDraft

logger = get_logger(__name__)

# PostgREST error classes rejected as bad payloads: 22 data exception, 23 integrity
VALIDATION_CODE_PREFIXES = ("22", "23")


class SupabaseFeedStore:
    """
    RemoteFeedStore backed by a Supabase posts table.

    Requests carry the anon key as ``apikey`` and, when a user session is
    known, the user's access token as bearer so row-level security applies.
    """

    def __init__(self, access_token: Optional[str] = None):
        settings = get_settings()
        self.url = settings.supabase_url.rstrip("/")
        self.key = settings.supabase_key
        self.table = settings.posts_table
        self.timeout = settings.request_timeout
        self.select = f"*,user:{settings.profiles_relation}(username,avatar_url)"
        self.access_token = access_token

    def _is_configured(self) -> bool:
        """Check if Supabase credentials are configured."""
        return bool(self.url and self.key)

    def _get_headers(self) -> dict:
        """Get authorization headers."""
        return {
            "apikey": self.key,
            "Authorization": f"Bearer {self.access_token or self.key}",
            "Content-Type": "application/json",
        }

    @property
    def _endpoint(self) -> str:
        return f"{self.url}/rest/v1/{self.table}"

    async def fetch_page(self, offset: int, limit: int) -> List[FeedItem]:
        """
        Fetch one page of posts, newest first.

        Args:
            offset: Row offset of the first post
            limit: Maximum number of posts

        Returns:
            Parsed posts in store order
        """
        if not self._is_configured():
            logger.error("supabase_not_configured", action="fetch_page")
            raise QueryError("Supabase not configured")

        params = {
            "select": self.select,
            "order": "created_at.desc",
            "offset": str(offset),
            "limit": str(limit),
        }

        response = await self._send("GET", params=params)
        self._raise_for_status(response, action="fetch_page")

        rows = self._json(response)
        if not isinstance(rows, list):
            raise QueryError("Expected a list of posts", status_code=response.status_code)

        logger.debug("supabase_page_fetched", offset=offset, limit=limit, rows=len(rows))
        return [self._parse(row) for row in rows]

    async def insert_item(self, draft: PostDraft, author_id: str) -> FeedItem:
        """
        Insert a post and return the stored row with its author embedded.

        Args:
            draft: User-supplied post fields
            author_id: ID of the authenticated author
        """
        if not self._is_configured():
            logger.error("supabase_not_configured", action="insert_item")
            raise QueryError("Supabase not configured")

        response = await self._send(
            "POST",
            params={"select": self.select},
            json=draft.to_record(author_id),
            headers={
                "Prefer": "return=representation",
                "Accept": "application/vnd.pgrst.object+json",
            },
        )
        self._raise_for_status(response, action="insert_item", is_insert=True)

        row = self._json(response)
        if isinstance(row, list):
            if not row:
                raise QueryError("Insert returned no row", status_code=response.status_code)
            row = row[0]

        item = self._parse(row)
        logger.info("supabase_post_inserted", post_id=item.id, author_id=author_id)
        return item

    # =========================================================================
    # HTTP HELPERS
    # =========================================================================

    async def _send(
        self,
        method: str,
        params: dict,
        json: Any = None,
        headers: Optional[dict] = None,
    ) -> httpx.Response:
        try:
            async with httpx.AsyncClient() as client:
                return await client.request(
                    method,
                    self._endpoint,
                    params=params,
                    json=json,
                    headers={**self._get_headers(), **(headers or {})},
                    timeout=self.timeout,
                )
        except httpx.TimeoutException as e:
            logger.error("supabase_timeout", method=method, error=str(e))
            raise TransportError(f"Supabase request timed out: {e}") from e
        except httpx.HTTPError as e:
            logger.error("supabase_transport_error", method=method, error=str(e))
            raise TransportError(f"Supabase request failed: {e}") from e

    def _raise_for_status(
        self,
        response: httpx.Response,
        action: str,
        is_insert: bool = False,
    ):
        """Map a non-2xx PostgREST response onto the error taxonomy."""
        status = response.status_code
        if 200 <= status < 300:
            return

        code, message = self._error_details(response)
        logger.error(
            "supabase_request_failed",
            action=action,
            status=status,
            code=code,
            body=response.text[:200],
        )

        if status >= 500:
            raise TransportError(f"Supabase unavailable ({status}): {message}")
        if status in (401, 403):
            raise AuthError(f"Not allowed to {action}: {message}")
        if (
            is_insert
            and status in (400, 409, 422)
            and code
            and code.startswith(VALIDATION_CODE_PREFIXES)
        ):
            raise ValidationError(message, code=code)
        raise QueryError(f"Supabase rejected {action} ({status}): {message}", status_code=status)

    @staticmethod
    def _error_details(response: httpx.Response) -> tuple[Optional[str], str]:
        try:
            body = response.json()
        except ValueError:
            return None, response.text[:200]
        if not isinstance(body, dict):
            return None, response.text[:200]
        return body.get("code"), body.get("message") or response.text[:200]

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise QueryError("Malformed JSON from Supabase", status_code=response.status_code) from e

    @staticmethod
    def _parse(row: Any) -> FeedItem:
        try:
            return FeedItem.model_validate(row)
        except PydanticValidationError as e:
            logger.error("supabase_row_invalid", error=str(e))
            raise QueryError(f"Malformed post row: {e.error_count()} error(s)") from e
