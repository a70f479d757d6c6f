"""
Mock storefront API used by the integration tests.

Serves products, cart, orders, auth and users from memory. Errors use the
storefront's ``{"message": ...}`` body. Bearer tokens are opaque strings
issued by ``/auth/login`` and can be expired with ``expire_token``.
"""

import secrets
from typing import Dict, Any, Optional, List

from fastapi import FastAPI, Header, Request
from fastapi.responses import JSONResponse

from shared.logging import get_logger


class StorefrontHTTPError(Exception):
    """Error rendered as a storefront error body."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class MockStorefrontServer:
    """Mock storefront API implementation."""

    def __init__(self):
        self.logger = get_logger("mock.storefront")
        self.app = FastAPI(title="Mock Storefront", version="1.0.0")

        self.users: Dict[str, Dict[str, Any]] = {
            "u1": {"id": "u1", "email": "ada@example.com", "password": "lovelace", "name": "Ada"},
        }
        self.addresses: Dict[str, List[Dict[str, Any]]] = {"u1": []}
        self.products: Dict[str, Dict[str, Any]] = {
            "p1": {"id": "p1", "name": "Desk Lamp", "price": 39.0, "stock": 5},
            "p2": {"id": "p2", "name": "Standing Desk", "price": 499.0, "stock": 1},
            "p3": {"id": "p3", "name": "Lamp Shade", "price": 12.5, "stock": 0},
        }
        self.carts: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.orders: Dict[str, Dict[str, Any]] = {}

        self.tokens: Dict[str, str] = {}
        self.expired: set = set()

        self._setup_routes()

    def issue_token(self, user_id: str) -> str:
        token = secrets.token_hex(16)
        self.tokens[token] = user_id
        return token

    def expire_token(self, token: str):
        """Make a previously issued token answer 401."""
        self.expired.add(token)

    def _user_for(self, authorization: Optional[str]) -> str:
        if not authorization or not authorization.startswith("Bearer "):
            raise StorefrontHTTPError(401, "Authentication required")
        token = authorization[len("Bearer "):]
        if token in self.expired:
            raise StorefrontHTTPError(401, "Token expired")
        if token not in self.tokens:
            raise StorefrontHTTPError(401, "Invalid token")
        return self.tokens[token]

    def _product(self, product_id: str) -> Dict[str, Any]:
        if product_id not in self.products:
            raise StorefrontHTTPError(404, f"Product {product_id} not found")
        return self.products[product_id]

    def _cart_body(self, user_id: str) -> Dict[str, Any]:
        items = list(self.carts.get(user_id, {}).values())
        total = sum(self.products[item["productId"]]["price"] * item["quantity"] for item in items)
        return {"items": items, "total": round(total, 2)}

    def _setup_routes(self):
        """Set up mock routes."""

        @self.app.exception_handler(StorefrontHTTPError)
        async def storefront_error(request: Request, exc: StorefrontHTTPError):
            return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

        @self.app.post("/auth/login")
        async def login(payload: Dict[str, Any]):
            for user in self.users.values():
                if user["email"] == payload.get("email") and user["password"] == payload.get("password"):
                    return {"token": self.issue_token(user["id"]), "userId": user["id"]}
            raise StorefrontHTTPError(401, "Invalid email or password")

        @self.app.post("/auth/logout")
        async def logout(authorization: Optional[str] = Header(default=None)):
            self._user_for(authorization)
            self.tokens.pop(authorization[len("Bearer "):], None)
            return {"loggedOut": True}

        @self.app.get("/auth/profile")
        async def profile(authorization: Optional[str] = Header(default=None)):
            user = self.users[self._user_for(authorization)]
            return {key: value for key, value in user.items() if key != "password"}

        @self.app.get("/products")
        async def list_products(page: int = 1, page_size: int = 20):
            items = list(self.products.values())
            start = (page - 1) * page_size
            return {"items": items[start:start + page_size], "page": page, "total": len(items)}

        @self.app.get("/products/search")
        async def search_products(q: str = ""):
            needle = q.lower()
            return {"items": [p for p in self.products.values() if needle in p["name"].lower()]}

        @self.app.get("/products/{product_id}")
        async def get_product(product_id: str):
            return self._product(product_id)

        @self.app.get("/cart")
        async def get_cart(authorization: Optional[str] = Header(default=None)):
            return self._cart_body(self._user_for(authorization))

        @self.app.post("/cart/items", status_code=201)
        async def add_item(payload: Dict[str, Any], authorization: Optional[str] = Header(default=None)):
            user_id = self._user_for(authorization)
            product = self._product(payload.get("productId", ""))
            quantity = int(payload.get("quantity", 1))
            if quantity > product["stock"]:
                raise StorefrontHTTPError(409, f"Only {product['stock']} left in stock")
            cart = self.carts.setdefault(user_id, {})
            item_id = f"item-{product['id']}"
            cart[item_id] = {"id": item_id, "productId": product["id"], "quantity": quantity}
            return cart[item_id]

        @self.app.patch("/cart/items/{item_id}")
        async def update_item(item_id: str, payload: Dict[str, Any],
                              authorization: Optional[str] = Header(default=None)):
            cart = self.carts.get(self._user_for(authorization), {})
            if item_id not in cart:
                raise StorefrontHTTPError(404, "Cart item not found")
            cart[item_id]["quantity"] = int(payload["quantity"])
            return cart[item_id]

        @self.app.delete("/cart/items/{item_id}")
        async def remove_item(item_id: str, authorization: Optional[str] = Header(default=None)):
            cart = self.carts.get(self._user_for(authorization), {})
            if cart.pop(item_id, None) is None:
                raise StorefrontHTTPError(404, "Cart item not found")
            return {"removed": item_id}

        @self.app.delete("/cart")
        async def clear_cart(authorization: Optional[str] = Header(default=None)):
            self.carts[self._user_for(authorization)] = {}
            return {"items": [], "total": 0}

        @self.app.post("/orders", status_code=201)
        async def create_order(payload: Dict[str, Any], authorization: Optional[str] = Header(default=None)):
            user_id = self._user_for(authorization)
            cart = self._cart_body(user_id)
            if not cart["items"]:
                raise StorefrontHTTPError(400, "Cart is empty")
            order_id = f"o{len(self.orders) + 1}"
            self.orders[order_id] = {
                "id": order_id,
                "userId": user_id,
                "status": "placed",
                "shipping": payload.get("shipping"),
                **cart,
            }
            self.carts[user_id] = {}
            return self.orders[order_id]

        @self.app.get("/orders")
        async def list_orders(status: Optional[str] = None, authorization: Optional[str] = Header(default=None)):
            user_id = self._user_for(authorization)
            orders = [o for o in self.orders.values() if o["userId"] == user_id]
            if status:
                orders = [o for o in orders if o["status"] == status]
            return {"items": orders}

        @self.app.get("/orders/{order_id}")
        async def get_order(order_id: str, authorization: Optional[str] = Header(default=None)):
            self._user_for(authorization)
            if order_id not in self.orders:
                raise StorefrontHTTPError(404, "Order not found")
            return self.orders[order_id]

        @self.app.patch("/orders/{order_id}/cancel")
        async def cancel_order(order_id: str, authorization: Optional[str] = Header(default=None)):
            self._user_for(authorization)
            order = self.orders.get(order_id)
            if order is None:
                raise StorefrontHTTPError(404, "Order not found")
            if order["status"] == "cancelled":
                raise StorefrontHTTPError(409, "Order already cancelled")
            order["status"] = "cancelled"
            return order

        @self.app.get("/users/{user_id}/addresses")
        async def list_addresses(user_id: str, authorization: Optional[str] = Header(default=None)):
            self._user_for(authorization)
            return {"items": self.addresses.get(user_id, [])}

        @self.app.post("/users/{user_id}/addresses", status_code=201)
        async def add_address(user_id: str, payload: Dict[str, Any],
                              authorization: Optional[str] = Header(default=None)):
            self._user_for(authorization)
            address = {"id": f"a{len(self.addresses.get(user_id, [])) + 1}", **payload}
            self.addresses.setdefault(user_id, []).append(address)
            return address

        @self.app.delete("/users/{user_id}/addresses/{address_id}")
        async def delete_address(user_id: str, address_id: str,
                                 authorization: Optional[str] = Header(default=None)):
            self._user_for(authorization)
            before = self.addresses.get(user_id, [])
            self.addresses[user_id] = [a for a in before if a["id"] != address_id]
            if len(self.addresses[user_id]) == len(before):
                raise StorefrontHTTPError(404, "Address not found")
            return {"removed": address_id}


def create_app() -> FastAPI:
    """Create the mock storefront app."""
    return MockStorefrontServer().app
