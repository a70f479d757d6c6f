"""
Application package for the Storefront Access Client.
"""

from .gateway import RequestGateway, ApiResult
from .session import SessionContext
from .main import StorefrontApi

__all__ = [
    "RequestGateway",
    "ApiResult",
    "SessionContext",
    "StorefrontApi",
]
