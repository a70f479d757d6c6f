"""
Integration tests for the storefront client against the mock storefront API.
"""

import httpx
import pytest
import pytest_asyncio

from mocks.storefront.server import MockStorefrontServer
from shared.config import ClientConfig
from storefront_client.app.main import StorefrontApi
from storefront_client.app.session import SessionContext, MemoryTokenStore, RecordingNavigator


class TestStorefrontFlow:
    """Integration tests for a complete shopping session."""

    @pytest.fixture
    def server(self):
        """Mock storefront server."""
        return MockStorefrontServer()

    @pytest.fixture
    def navigator(self):
        return RecordingNavigator()

    @pytest.fixture
    def session(self, navigator):
        """Signed-out interactive session."""
        return SessionContext(store=MemoryTokenStore(), navigator=navigator)

    @pytest_asyncio.fixture
    async def api(self, server, session):
        """Client wired to the mock server over ASGI."""
        transport = httpx.ASGITransport(app=server.app)
        client = StorefrontApi.create(
            session=session,
            config=ClientConfig(api_base_url="http://storefront.test"),
            transport=transport,
        )
        yield client
        await client.aclose()

    async def _login(self, api, session) -> str:
        result = await api.auth.login({"email": "ada@example.com", "password": "lovelace"})
        assert result.success is True
        await session.set_token(result.data["token"])
        return result.data["token"]

    @pytest.mark.asyncio
    async def test_browse_without_login(self, api):
        """Test public catalogue endpoints work unauthenticated."""
        listing = await api.products.get_all({"page": 1})
        search = await api.products.search("lamp")
        missing = await api.products.get_by_id("nope")

        assert listing.success is True
        assert listing.data["total"] == 3
        assert [p["id"] for p in search.data["items"]] == ["p1", "p3"]
        assert missing.success is False
        assert missing.message == "Product nope not found"
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_bad_credentials(self, api, session, navigator):
        """Test failed login is a 401 envelope and tears down the session."""
        result = await api.auth.login({"email": "ada@example.com", "password": "wrong"})

        assert result.success is False
        assert result.message == "Invalid email or password"
        assert result.status_code == 401
        assert navigator.history == ["/login"]

    @pytest.mark.asyncio
    async def test_shopping_session(self, api, session, navigator):
        """Test login, cart, checkout and cancellation."""
        await self._login(api, session)

        profile = await api.auth.get_profile()
        assert profile.data == {"id": "u1", "email": "ada@example.com", "name": "Ada"}

        added = await api.cart.add("p1", 2)
        assert added.success is True
        assert added.data == {"id": "item-p1", "productId": "p1", "quantity": 2}

        out_of_stock = await api.cart.add("p3")
        assert out_of_stock.success is False
        assert out_of_stock.message == "Only 0 left in stock"
        assert out_of_stock.status_code == 409

        updated = await api.cart.update("item-p1", 3)
        assert updated.data["quantity"] == 3

        cart = await api.cart.get()
        assert cart.data["total"] == 117.0

        order = await api.orders.create({"shipping": "standard"})
        assert order.success is True
        order_id = order.data["id"]

        assert (await api.cart.get()).data["items"] == []
        assert (await api.orders.get_all({"status": "placed"})).data["items"][0]["id"] == order_id

        cancelled = await api.orders.cancel(order_id)
        assert cancelled.data["status"] == "cancelled"

        again = await api.orders.cancel(order_id)
        assert again.success is False
        assert again.message == "Order already cancelled"

        assert navigator.history == []

    @pytest.mark.asyncio
    async def test_addresses(self, api, session):
        """Test nested address endpoints."""
        await self._login(api, session)

        added = await api.users.add_address("u1", {"city": "Oslo"})
        listed = await api.users.get_addresses("u1")
        removed = await api.users.delete_address("u1", added.data["id"])
        removed_again = await api.users.delete_address("u1", added.data["id"])

        assert listed.data["items"] == [{"id": "a1", "city": "Oslo"}]
        assert removed.success is True
        assert removed_again.status_code == 404

    @pytest.mark.asyncio
    async def test_expired_token_tears_down(self, api, server, session, navigator):
        """Test an expired token clears the session and redirects once."""
        token = await self._login(api, session)
        await api.cart.add("p1")
        server.expire_token(token)

        result = await api.cart.add("p2", 1)

        assert result.to_dict() == {
            "success": False,
            "data": None,
            "message": "Token expired",
            "error": {"message": "Token expired"},
            "statusCode": 401,
        }
        assert await session.get_token() is None
        assert navigator.history == ["/login"]

        follow_up = await api.cart.get()
        assert follow_up.message == "Authentication required"
        assert navigator.history == ["/login", "/login"]

    @pytest.mark.asyncio
    async def test_logout(self, api, session):
        """Test logout invalidates the token server-side."""
        await self._login(api, session)

        logged_out = await api.auth.logout()
        profile = await api.auth.get_profile()

        assert logged_out.data == {"loggedOut": True}
        assert profile.status_code == 401
        assert profile.message == "Invalid token"
