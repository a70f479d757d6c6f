"""
Unit tests for the session context and token stores.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from shared.errors import SessionStoreError
from storefront_client.app.session import (
    SessionContext,
    MemoryTokenStore,
    NullTokenStore,
    RedisTokenStore,
    NullNavigator,
    RecordingNavigator,
    CallbackNavigator,
    TOKEN_KEY,
    LOGIN_PATH,
)


class TestSessionContext:
    """Test cases for SessionContext."""

    @pytest.mark.asyncio
    async def test_token_lifecycle(self):
        """Test set, read and clear of the credential."""
        session = SessionContext(store=MemoryTokenStore())

        assert await session.get_token() is None
        await session.set_token("t-1")
        assert await session.get_token() == "t-1"
        await session.clear_token()
        assert await session.get_token() is None

    @pytest.mark.asyncio
    async def test_fixed_key_and_login_path(self, store):
        """Test defaults match the storage key and login route."""
        session = SessionContext(store=store)

        assert session.token_key == TOKEN_KEY == "authToken"
        assert session.login_path == LOGIN_PATH == "/login"
        assert await store.get("authToken") == "token-abc"

    @pytest.mark.asyncio
    async def test_teardown_is_idempotent(self, session, navigator):
        """Test repeated teardown is harmless."""
        await session.teardown()
        await session.teardown()

        assert await session.get_token() is None
        assert navigator.history == ["/login", "/login"]
        assert navigator.current == "/login"

    @pytest.mark.asyncio
    async def test_custom_login_path(self):
        """Test teardown navigates to the configured path."""
        navigator = RecordingNavigator()
        session = SessionContext(navigator=navigator, login_path="/account/sign-in")

        await session.teardown()

        assert navigator.history == ["/account/sign-in"]

    @pytest.mark.asyncio
    async def test_headless_session(self):
        """Test headless sessions never persist or navigate."""
        session = SessionContext.headless()

        await session.set_token("ignored")
        assert await session.get_token() is None
        await session.teardown()
        assert session.interactive is False

    def test_default_session_is_interactive(self):
        """Test the default session records navigation."""
        session = SessionContext()
        assert session.interactive is True
        assert isinstance(session.navigator, RecordingNavigator)


class TestNavigators:
    """Test cases for navigators."""

    @pytest.mark.asyncio
    async def test_sync_callback(self):
        """Test sync callbacks receive the path."""
        visited = []
        await CallbackNavigator(visited.append).navigate("/login")
        assert visited == ["/login"]

    @pytest.mark.asyncio
    async def test_async_callback(self):
        """Test async callbacks are awaited."""
        callback = AsyncMock()
        await CallbackNavigator(callback).navigate("/login")
        callback.assert_awaited_once_with("/login")

    @pytest.mark.asyncio
    async def test_null_navigator(self):
        """Test null navigator does nothing."""
        assert await NullNavigator().navigate("/login") is None

    def test_recording_navigator_starts_empty(self):
        """Test recording navigator has no current path initially."""
        assert RecordingNavigator().current is None


class TestMemoryTokenStore:
    """Test cases for MemoryTokenStore."""

    @pytest.mark.asyncio
    async def test_delete_missing_key(self):
        """Test deleting an absent key is harmless."""
        store = MemoryTokenStore()
        await store.delete("authToken")
        assert await store.get("authToken") is None

    @pytest.mark.asyncio
    async def test_initial_data_is_copied(self):
        """Test the store does not alias its initial mapping."""
        initial = {"authToken": "t"}
        store = MemoryTokenStore(initial)
        await store.delete("authToken")
        assert initial == {"authToken": "t"}

    @pytest.mark.asyncio
    async def test_null_store(self):
        """Test null store ignores writes."""
        store = NullTokenStore()
        await store.set("authToken", "t")
        assert await store.get("authToken") is None


class TestRedisTokenStore:
    """Test cases for RedisTokenStore."""

    @pytest.fixture
    def redis_client(self):
        """Mock Redis client."""
        client = MagicMock()
        client.get = AsyncMock(return_value="token-xyz")
        client.set = AsyncMock(return_value=True)
        client.delete = AsyncMock(return_value=1)
        client.aclose = AsyncMock()
        return client

    @pytest.fixture
    def redis_store(self, redis_client):
        """Create RedisTokenStore instance."""
        return RedisTokenStore("redis://localhost:6379/0", "sess-1", client=redis_client)

    @pytest.mark.asyncio
    async def test_get_uses_namespaced_key(self, redis_store, redis_client):
        """Test keys are namespaced per session."""
        assert await redis_store.get("authToken") == "token-xyz"
        redis_client.get.assert_awaited_once_with("storefront:session:sess-1:authToken")

    @pytest.mark.asyncio
    async def test_get_decodes_bytes(self, redis_store, redis_client):
        """Test byte values are decoded."""
        redis_client.get.return_value = b"token-bytes"
        assert await redis_store.get("authToken") == "token-bytes"

    @pytest.mark.asyncio
    async def test_set_and_delete(self, redis_store, redis_client):
        """Test writes and deletes hit the namespaced key."""
        await redis_store.set("authToken", "t-2")
        await redis_store.delete("authToken")

        redis_client.set.assert_awaited_once_with("storefront:session:sess-1:authToken", "t-2")
        redis_client.delete.assert_awaited_once_with("storefront:session:sess-1:authToken")

    @pytest.mark.asyncio
    async def test_redis_errors_are_wrapped(self, redis_store, redis_client):
        """Test Redis failures surface as SessionStoreError."""
        redis_client.get.side_effect = RedisConnectionError("connection refused")

        with pytest.raises(SessionStoreError) as exc_info:
            await redis_store.get("authToken")

        assert exc_info.value.code == "SESSION_STORE_ERROR"
        assert exc_info.value.details["key"] == "authToken"

    @pytest.mark.asyncio
    async def test_session_over_redis(self, redis_store, redis_client):
        """Test a session backed by Redis tears down through the store."""
        session = SessionContext(store=redis_store, navigator=NullNavigator())

        assert await session.get_token() == "token-xyz"
        await session.teardown()

        redis_client.delete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close(self, redis_store, redis_client):
        """Test close releases the connection."""
        await redis_store.close()

        redis_client.aclose.assert_awaited_once()
        assert redis_store._redis is None
