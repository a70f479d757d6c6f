"""
Storefront API entrypoint: the client facade and the ``storefront-api`` CLI.
"""

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Optional, Sequence

import httpx

from shared.config import ClientConfig, get_config
from shared.errors import StorefrontClientException
from shared.logging import configure_logging, get_logger, set_request_id
from shared.metrics import GatewayMetrics
from .gateway import RequestGateway, ApiResult
from .resources import ResourceApi, ROUTE_TABLES
from .session import SessionContext, MemoryTokenStore, NullNavigator, TOKEN_KEY


class StorefrontApi:
    """One gateway plus a ``ResourceApi`` per route table."""

    def __init__(self, gateway: RequestGateway):
        self.gateway = gateway
        self.resources: Dict[str, ResourceApi] = {
            name: ResourceApi(gateway, name, routes) for name, routes in ROUTE_TABLES.items()
        }

    @classmethod
    def create(
        cls,
        session: Optional[SessionContext] = None,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        metrics: Optional[GatewayMetrics] = None,
    ) -> "StorefrontApi":
        return cls(RequestGateway(session=session, config=config, transport=transport, metrics=metrics))

    @property
    def session(self) -> SessionContext:
        return self.gateway.session

    @property
    def products(self) -> ResourceApi:
        return self.resources["products"]

    @property
    def cart(self) -> ResourceApi:
        return self.resources["cart"]

    @property
    def orders(self) -> ResourceApi:
        return self.resources["orders"]

    @property
    def auth(self) -> ResourceApi:
        return self.resources["auth"]

    @property
    def users(self) -> ResourceApi:
        return self.resources["users"]

    async def aclose(self):
        await self.gateway.aclose()

    async def __aenter__(self) -> "StorefrontApi":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()


def _parse_value(raw: str) -> Any:
    """Decode a CLI value as JSON, keeping plain strings as-is."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _parse_pairs(pairs: Sequence[str]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"expected key=value, got {pair!r}")
        result[key] = _parse_value(value)
    return result


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="storefront-api", description="Call the storefront API and print the result envelope.")
    parser.add_argument("--base-url", default=None, help="API base URL (defaults to STOREFRONT_API_BASE_URL)")
    parser.add_argument("--token", default=None, help="Bearer token to send with the request")
    parser.add_argument("--log-level", default=None, help="Log level (defaults to STOREFRONT_LOG_LEVEL)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    request = subparsers.add_parser("request", help="Send a raw request")
    request.add_argument("method", type=str.upper, choices=["GET", "POST", "PUT", "PATCH", "DELETE"])
    request.add_argument("path", help="Endpoint path, e.g. /products")
    request.add_argument("--data", default=None, help="JSON request body")
    request.add_argument("--param", action="append", default=[], help="Query parameter key=value (repeatable)")

    call = subparsers.add_parser("call", help="Call a named resource route")
    call.add_argument("resource", choices=sorted(ROUTE_TABLES))
    call.add_argument("route", help="Route name, e.g. get_by_id")
    call.add_argument("args", nargs="*", help="Positional route arguments (JSON or plain strings)")
    call.add_argument("--kw", action="append", default=[], help="Keyword route argument key=value (repeatable)")

    subparsers.add_parser("routes", help="List the known resource routes")
    return parser


def _list_routes() -> List[str]:
    lines = []
    for resource, routes in ROUTE_TABLES.items():
        for route in routes:
            args = " ".join(route.args)
            lines.append(f"{resource}.{route.name:<16} {route.method:<6} {route.path} {args}".rstrip())
    return lines


async def run(args: argparse.Namespace, config: ClientConfig,
              transport: Optional[httpx.AsyncBaseTransport] = None) -> ApiResult:
    """Execute a parsed ``request`` or ``call`` command."""
    initial = {TOKEN_KEY: args.token} if args.token else None
    session = SessionContext(store=MemoryTokenStore(initial), navigator=NullNavigator())

    async with StorefrontApi.create(session=session, config=config, transport=transport) as api:
        if args.command == "request":
            data = _parse_value(args.data) if args.data is not None else None
            params = _parse_pairs(args.param)
            return await api.gateway.request(args.method, args.path, data, {"params": params} if params else None)

        kwargs = _parse_pairs(args.kw)
        positional = [_parse_value(value) for value in args.args]
        return await api.resources[args.resource].call(args.route, *positional, **kwargs)


def main(argv: Optional[Sequence[str]] = None, transport: Optional[httpx.AsyncBaseTransport] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "routes":
        print("\n".join(_list_routes()))
        return 0

    overrides: Dict[str, Any] = {}
    if args.base_url:
        overrides["api_base_url"] = args.base_url
    try:
        config = get_config(**overrides)
    except StorefrontClientException as exc:
        print(f"[storefront-api] {exc.message}", file=sys.stderr)
        return 2
    configure_logging("storefront", args.log_level or config.log_level)
    set_request_id()
    logger = get_logger("storefront.cli")

    try:
        result = asyncio.run(run(args, config, transport=transport))
    except KeyboardInterrupt:
        return 130
    except (StorefrontClientException, TypeError, argparse.ArgumentTypeError) as exc:
        logger.error("Invalid invocation", command=args.command, error=str(exc))
        print(f"[storefront-api] {exc}", file=sys.stderr)
        return 2

    print(json.dumps(result.to_dict(), indent=2, default=str))
    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
