"""
Route tables for the storefront resources.

Each resource is a tuple of ``Route`` entries. A route names its call
arguments and says where each one goes: the path template, the whole JSON
body, named body fields, the query-params dict, or named query keys.
"""

from dataclasses import dataclass, field
from string import Formatter
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import quote

from shared.errors import RouteError


@dataclass(frozen=True)
class Route:
    """One endpoint: verb, path template and argument mapping."""
    name: str
    method: str
    path: str
    args: Tuple[str, ...] = ()
    body: Optional[str] = None
    fields: Tuple[Tuple[str, str], ...] = ()
    params: Optional[str] = None
    query: Tuple[Tuple[str, str], ...] = ()
    defaults: Mapping[str, Any] = field(default_factory=dict)
    description: str = ""

    @property
    def path_args(self) -> Tuple[str, ...]:
        return tuple(name for _, name, _, _ in Formatter().parse(self.path) if name)

    def render_path(self, values: Mapping[str, Any]) -> str:
        """Fill the path template, quoting each segment."""
        missing = [name for name in self.path_args if values.get(name) in (None, "")]
        if missing:
            raise RouteError(
                f"Missing path parameters for {self.name}: {', '.join(missing)}",
                details={"route": self.name, "missing": missing}
            )
        return self.path.format(**{name: quote(str(values[name]), safe="") for name in self.path_args})

    def build(self, values: Mapping[str, Any]) -> Tuple[str, Any, Dict[str, Any]]:
        """Return (path, body, request options) for the given argument values."""
        path = self.render_path(values)

        body = None
        if self.body is not None:
            body = values.get(self.body)
        elif self.fields:
            body = {key: values.get(arg) for arg, key in self.fields}

        options: Dict[str, Any] = {}
        query: Dict[str, Any] = {}
        if self.params is not None and values.get(self.params):
            query.update(values[self.params])
        for arg, key in self.query:
            if values.get(arg) is not None:
                query[key] = values[arg]
        if query:
            options["params"] = query

        return path, body, options


PRODUCT_ROUTES = (
    Route("get_all", "GET", "/products", args=("params",), params="params",
          defaults={"params": None}, description="List products."),
    Route("get_by_id", "GET", "/products/{id}", args=("id",), description="Fetch one product."),
    Route("create", "POST", "/products", args=("data",), body="data", description="Create a product."),
    Route("update", "PUT", "/products/{id}", args=("id", "data"), body="data", description="Replace a product."),
    Route("delete", "DELETE", "/products/{id}", args=("id",), description="Delete a product."),
    Route("search", "GET", "/products/search", args=("query",), query=(("query", "q"),),
          description="Full-text product search."),
)

CART_ROUTES = (
    Route("get", "GET", "/cart", description="Fetch the current cart."),
    Route("add", "POST", "/cart/items", args=("product_id", "quantity"),
          fields=(("product_id", "productId"), ("quantity", "quantity")),
          defaults={"quantity": 1}, description="Add a product to the cart."),
    Route("update", "PATCH", "/cart/items/{item_id}", args=("item_id", "quantity"),
          fields=(("quantity", "quantity"),), description="Change a cart item's quantity."),
    Route("remove", "DELETE", "/cart/items/{item_id}", args=("item_id",), description="Remove a cart item."),
    Route("clear", "DELETE", "/cart", description="Empty the cart."),
)

ORDER_ROUTES = (
    Route("get_all", "GET", "/orders", args=("params",), params="params",
          defaults={"params": None}, description="List orders."),
    Route("get_by_id", "GET", "/orders/{id}", args=("id",), description="Fetch one order."),
    Route("create", "POST", "/orders", args=("data",), body="data", description="Place an order."),
    Route("cancel", "PATCH", "/orders/{id}/cancel", args=("id",), description="Cancel an order."),
)

AUTH_ROUTES = (
    Route("login", "POST", "/auth/login", args=("credentials",), body="credentials", description="Log in."),
    Route("register", "POST", "/auth/register", args=("user_data",), body="user_data",
          description="Create an account."),
    Route("logout", "POST", "/auth/logout", description="Log out."),
    Route("get_profile", "GET", "/auth/profile", description="Fetch the signed-in profile."),
    Route("update_profile", "PUT", "/auth/profile", args=("data",), body="data",
          description="Replace the signed-in profile."),
)

USER_ROUTES = (
    Route("get_by_id", "GET", "/users/{id}", args=("id",), description="Fetch a user."),
    Route("update", "PUT", "/users/{id}", args=("id", "data"), body="data", description="Replace a user."),
    Route("get_addresses", "GET", "/users/{user_id}/addresses", args=("user_id",),
          description="List a user's addresses."),
    Route("add_address", "POST", "/users/{user_id}/addresses", args=("user_id", "address"), body="address",
          description="Add an address."),
    Route("update_address", "PUT", "/users/{user_id}/addresses/{address_id}",
          args=("user_id", "address_id", "data"), body="data", description="Replace an address."),
    Route("delete_address", "DELETE", "/users/{user_id}/addresses/{address_id}",
          args=("user_id", "address_id"), description="Delete an address."),
)

ROUTE_TABLES: Dict[str, Tuple[Route, ...]] = {
    "products": PRODUCT_ROUTES,
    "cart": CART_ROUTES,
    "orders": ORDER_ROUTES,
    "auth": AUTH_ROUTES,
    "users": USER_ROUTES,
}


def find_route(resource: str, name: str) -> Route:
    """Look up a route by resource and name."""
    for route in ROUTE_TABLES.get(resource, ()):
        if route.name == name:
            return route
    raise RouteError(
        f"Unknown route: {resource}.{name}",
        details={"resource": resource, "route": name}
    )
