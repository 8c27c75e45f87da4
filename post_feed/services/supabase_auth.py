"""
Supabase Identity Provider

Resolves the signed-in user from a Supabase Auth access token.
"""

from typing import Optional
import httpx
from pydantic import ValidationError as PydanticValidationError

from ..config import get_settings
from ..core.exceptions import QueryError, TransportError
from ..core.logging import get_logger
from ..models.identity import Identity

logger = get_logger(__name__)


class SupabaseIdentityProvider:
    """
    IdentityProvider backed by the Supabase Auth ``/user`` endpoint.

    Returns None when there is no session or the token is rejected, so
    an expired session reads the same as a signed-out user.
    """

    def __init__(self, access_token: Optional[str] = None):
        settings = get_settings()
        self.url = settings.supabase_url.rstrip("/")
        self.key = settings.supabase_key
        self.timeout = settings.request_timeout
        self.access_token = access_token

    async def current_user(self) -> Optional[Identity]:
        if not self.access_token:
            return None

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    f"{self.url}/auth/v1/user",
                    headers={
                        "apikey": self.key,
                        "Authorization": f"Bearer {self.access_token}",
                    },
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logger.error("supabase_auth_unreachable", error=str(e))
            raise TransportError(f"Supabase Auth request failed: {e}") from e

        if response.status_code == 200:
            return self._parse_user(response)

        if response.status_code in (401, 403):
            logger.info("supabase_session_rejected", status=response.status_code)
            return None

        logger.error(
            "supabase_auth_failed",
            status=response.status_code,
            body=response.text[:200],
        )
        if response.status_code >= 500:
            raise TransportError(f"Supabase Auth unavailable ({response.status_code})")
        raise QueryError(
            f"Supabase Auth rejected request ({response.status_code})",
            status_code=response.status_code,
        )

    @staticmethod
    def _parse_user(response: httpx.Response) -> Identity:
        try:
            return Identity.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            logger.error("supabase_auth_user_invalid", body=response.text[:200])
            raise QueryError(
                "Malformed user from Supabase Auth",
                status_code=response.status_code,
            ) from e
