"""
Resource APIs generated from route tables.
"""

import inspect
from typing import Any, Awaitable, Callable, Dict, Iterable

from shared.errors import RouteError
from ..gateway import RequestGateway, ApiResult
from .routes import Route


class ResourceApi:
    """Async methods for one resource, one per route, bound to a gateway.

    ``ResourceApi(gateway, "cart", CART_ROUTES).add("p1", quantity=2)``
    sends ``POST /cart/items`` with ``{"productId": "p1", "quantity": 2}``.
    """

    def __init__(self, gateway: RequestGateway, resource: str, routes: Iterable[Route]):
        self.gateway = gateway
        self.resource = resource
        self.routes: Dict[str, Route] = {}
        for route in routes:
            self.routes[route.name] = route
            setattr(self, route.name, self._bind(route))

    def __repr__(self) -> str:
        return f"<ResourceApi {self.resource}: {', '.join(self.routes)}>"

    def _bind(self, route: Route) -> Callable[..., Awaitable[ApiResult]]:
        signature = inspect.Signature([
            inspect.Parameter(
                name,
                inspect.Parameter.POSITIONAL_OR_KEYWORD,
                default=route.defaults.get(name, inspect.Parameter.empty),
            )
            for name in route.args
        ])
        gateway = self.gateway

        async def call(*args: Any, **kwargs: Any) -> ApiResult:
            bound = signature.bind(*args, **kwargs)
            bound.apply_defaults()
            path, body, options = route.build(bound.arguments)
            return await gateway.request(route.method, path, body, options or None)

        call.__name__ = route.name
        call.__qualname__ = f"{self.resource}.{route.name}"
        call.__doc__ = route.description or f"{route.method} {route.path}"
        call.__signature__ = signature  # type: ignore[attr-defined]
        return call

    async def call(self, name: str, *args: Any, **kwargs: Any) -> ApiResult:
        """Invoke a route by name."""
        if name not in self.routes:
            raise RouteError(
                f"Unknown route: {self.resource}.{name}",
                details={"resource": self.resource, "route": name}
            )
        return await getattr(self, name)(*args, **kwargs)
