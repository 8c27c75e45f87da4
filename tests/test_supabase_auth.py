"""
Supabase Identity Provider Tests
"""

import httpx
import pytest
from unittest.mock import patch

from conftest import mock_async_client
from post_feed.core.exceptions import QueryError, TransportError
from post_feed.services.supabase_auth import SupabaseIdentityProvider


@pytest.mark.asyncio
@patch("post_feed.services.supabase_auth.httpx.AsyncClient")
async def test_no_token_is_absent(mock_client_class, supabase_env):
    provider = SupabaseIdentityProvider()

    assert await provider.current_user() is None
    mock_client_class.assert_not_called()


@pytest.mark.asyncio
@patch("post_feed.services.supabase_auth.httpx.AsyncClient")
async def test_valid_session(mock_client_class, supabase_env):
    body = {"id": "user_abc", "email": "tipster@example.com", "role": "authenticated"}
    client = mock_async_client(mock_client_class, get=httpx.Response(200, json=body))

    identity = await SupabaseIdentityProvider(access_token="jwt").current_user()

    assert identity.id == "user_abc"
    assert identity.email == "tipster@example.com"
    url = client.get.await_args.args[0]
    assert url == "https://project.supabase.co/auth/v1/user"
    assert client.get.await_args.kwargs["headers"]["Authorization"] == "Bearer jwt"


@pytest.mark.asyncio
@patch("post_feed.services.supabase_auth.httpx.AsyncClient")
async def test_expired_session_is_absent(mock_client_class, supabase_env):
    mock_async_client(mock_client_class, get=httpx.Response(401, json={"msg": "expired"}))

    assert await SupabaseIdentityProvider(access_token="old").current_user() is None


@pytest.mark.asyncio
@patch("post_feed.services.supabase_auth.httpx.AsyncClient")
async def test_unreachable_auth_is_transport_error(mock_client_class, supabase_env):
    mock_async_client(mock_client_class, get=httpx.ConnectError("refused"))

    with pytest.raises(TransportError):
        await SupabaseIdentityProvider(access_token="jwt").current_user()


@pytest.mark.asyncio
@patch("post_feed.services.supabase_auth.httpx.AsyncClient")
async def test_unexpected_status_is_query_error(mock_client_class, supabase_env):
    mock_async_client(mock_client_class, get=httpx.Response(400, json={"msg": "bad"}))

    with pytest.raises(QueryError):
        await SupabaseIdentityProvider(access_token="jwt").current_user()


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    httpx.Response(200, json={"email": "tipster@example.com"}),
    httpx.Response(200, text="<html>gateway page</html>"),
    httpx.Response(200, json=["not", "a", "user"]),
])
@patch("post_feed.services.supabase_auth.httpx.AsyncClient")
async def test_malformed_user_is_query_error(mock_client_class, response, supabase_env):
    mock_async_client(mock_client_class, get=response)

    with pytest.raises(QueryError) as exc_info:
        await SupabaseIdentityProvider(access_token="jwt").current_user()
    assert exc_info.value.status_code == 200
