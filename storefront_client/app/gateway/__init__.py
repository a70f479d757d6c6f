"""
Gateway package for the Storefront Access Client.

- client: ``RequestGateway`` with the five verb operations.
- envelope: ``ApiResult``, the uniform success/failure wrapper.
- interceptors: httpx event hooks for credentials and 401 teardown.
"""

from .client import RequestGateway
from .envelope import ApiResult, DEFAULT_SUCCESS_MESSAGE, DEFAULT_ERROR_MESSAGE

__all__ = [
    "RequestGateway",
    "ApiResult",
    "DEFAULT_SUCCESS_MESSAGE",
    "DEFAULT_ERROR_MESSAGE",
]
