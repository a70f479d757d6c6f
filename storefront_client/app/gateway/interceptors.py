"""
Request/response event hooks for the gateway's httpx client.
"""

from typing import Awaitable, Callable, Optional

import httpx

from shared.logging import get_logger
from shared.metrics import GatewayMetrics
from ..session import SessionContext

UNAUTHORIZED = 401

RequestHook = Callable[[httpx.Request], Awaitable[None]]
ResponseHook = Callable[[httpx.Response], Awaitable[None]]


def make_credential_hook(session: SessionContext) -> RequestHook:
    """Build the request hook that attaches the bearer credential.

    A missing credential is normal. A store failure is logged and the request
    goes out unauthenticated; the hook never raises.
    """
    logger = get_logger("storefront.gateway.auth")

    async def attach_credential(request: httpx.Request) -> None:
        try:
            token = await session.get_token()
        except Exception as e:
            logger.warning(
                "Credential lookup failed, sending request unauthenticated",
                method=request.method,
                path=request.url.path,
                error=str(e)
            )
            return

        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    return attach_credential


def make_auth_failure_hook(session: SessionContext, metrics: Optional[GatewayMetrics] = None) -> ResponseHook:
    """Build the response hook that rejects non-2xx responses.

    Redirects with a location are left for httpx to follow. The body is
    buffered so callers can read the server error. On 401 the session is
    torn down before the original ``HTTPStatusError`` is raised.
    """
    logger = get_logger("storefront.gateway.auth")

    async def check_response(response: httpx.Response) -> None:
        if response.is_success or response.has_redirect_location:
            return

        await response.aread()

        if response.status_code == UNAUTHORIZED:
            logger.info(
                "Unauthorized response, tearing down session",
                method=response.request.method,
                path=response.request.url.path
            )
            try:
                await session.teardown()
            except Exception as e:
                logger.error("Session teardown failed", error=str(e))
            else:
                if metrics is not None:
                    metrics.record_teardown()

        response.raise_for_status()

    return check_response
