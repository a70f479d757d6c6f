"""
Resource endpoints for the storefront API.

Routes are declared as data in ``routes`` and turned into async methods by
``ResourceApi``. They add no behavior beyond the gateway's.
"""

from .routes import (
    Route,
    ROUTE_TABLES,
    PRODUCT_ROUTES,
    CART_ROUTES,
    ORDER_ROUTES,
    AUTH_ROUTES,
    USER_ROUTES,
    find_route,
)
from .api import ResourceApi

__all__ = [
    "Route",
    "ROUTE_TABLES",
    "PRODUCT_ROUTES",
    "CART_ROUTES",
    "ORDER_ROUTES",
    "AUTH_ROUTES",
    "USER_ROUTES",
    "find_route",
    "ResourceApi",
]
