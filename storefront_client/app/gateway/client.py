"""
Request gateway for the storefront API.
"""

import time
from typing import Any, Dict, Optional

import httpx

from shared.config import ClientConfig, get_config, REQUEST_TIMEOUT_SECONDS, DEFAULT_HEADERS
from shared.logging import get_logger
from shared.metrics import GatewayMetrics
from ..session import SessionContext
from .envelope import ApiResult, decode_body
from .interceptors import make_credential_hook, make_auth_failure_hook

# Per-call options forwarded to httpx
REQUEST_OPTIONS = frozenset({"params", "headers", "cookies", "timeout", "extensions"})


class RequestGateway:
    """Shared HTTP client that authenticates calls and wraps every result.

    Every verb returns an ``ApiResult``; transport failures (timeouts,
    connection errors, non-2xx responses) never raise.
    """

    def __init__(
        self,
        session: Optional[SessionContext] = None,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        metrics: Optional[GatewayMetrics] = None,
    ):
        self.config = config or get_config()
        self.session = session or SessionContext.headless()
        self.metrics = metrics or GatewayMetrics()
        self.logger = get_logger("storefront.gateway")

        self._client = httpx.AsyncClient(
            base_url=self.config.api_base_url,
            timeout=REQUEST_TIMEOUT_SECONDS,
            headers=DEFAULT_HEADERS,
            follow_redirects=True,
            transport=transport,
            event_hooks={
                "request": [make_credential_hook(self.session)],
                "response": [make_auth_failure_hook(self.session, self.metrics)],
            },
        )

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    @property
    def client(self) -> httpx.AsyncClient:
        """Underlying httpx client, for calls outside the envelope contract."""
        return self._client

    async def get(self, endpoint: str, config: Optional[Dict[str, Any]] = None) -> ApiResult:
        """GET request."""
        return await self._request("GET", endpoint, config=config)

    async def post(self, endpoint: str, data: Any = None, config: Optional[Dict[str, Any]] = None) -> ApiResult:
        """POST request."""
        return await self._request("POST", endpoint, data if data is not None else {}, config)

    async def put(self, endpoint: str, data: Any = None, config: Optional[Dict[str, Any]] = None) -> ApiResult:
        """PUT request."""
        return await self._request("PUT", endpoint, data if data is not None else {}, config)

    async def patch(self, endpoint: str, data: Any = None, config: Optional[Dict[str, Any]] = None) -> ApiResult:
        """PATCH request."""
        return await self._request("PATCH", endpoint, data if data is not None else {}, config)

    async def delete(self, endpoint: str, config: Optional[Dict[str, Any]] = None) -> ApiResult:
        """DELETE request."""
        return await self._request("DELETE", endpoint, config=config)

    async def request(self, method: str, endpoint: str, data: Any = None,
                      config: Optional[Dict[str, Any]] = None) -> ApiResult:
        """Dispatch by verb name."""
        method = method.upper()
        if method in ("GET", "DELETE"):
            return await self._request(method, endpoint, config=config)
        return await self._request(method, endpoint, data if data is not None else {}, config)

    async def _request(self, method: str, endpoint: str, data: Any = None,
                       config: Optional[Dict[str, Any]] = None) -> ApiResult:
        """Send one request and convert the outcome into an envelope."""
        options = self._merge_options(config)
        if data is not None:
            options["json"] = data

        status_code: Optional[int] = None
        start_time = time.perf_counter()
        try:
            response = await self._client.request(method, endpoint, **options)
        except Exception as e:
            result = ApiResult.failure(e)
            status_code = result.status_code
            self.logger.warning(
                "Request failed",
                method=method,
                endpoint=endpoint,
                status_code=status_code,
                error_type=type(e).__name__,
                message=result.message
            )
        else:
            result = ApiResult.ok(decode_body(response))
            status_code = response.status_code
            self.logger.debug(
                "Request succeeded",
                method=method,
                endpoint=endpoint,
                status_code=status_code
            )

        self.metrics.record_request(
            method,
            result.success,
            status_code,
            time.perf_counter() - start_time
        )
        return result

    def _merge_options(self, config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Keep the per-call options httpx understands."""
        if not config:
            return {}
        unknown = set(config) - REQUEST_OPTIONS
        if unknown:
            self.logger.warning("Ignoring unsupported request options", options=sorted(unknown))
        return {key: value for key, value in config.items() if key in REQUEST_OPTIONS}

    async def aclose(self):
        """Close the pooled connections."""
        await self._client.aclose()

    async def __aenter__(self) -> "RequestGateway":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
