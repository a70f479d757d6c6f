"""
Shared utilities for the Storefront Access Client.

This package aggregates common building blocks:

- config: Client configuration via pydantic-settings
- logging: Structured logging with request correlation
- metrics: Prometheus metrics for gateway calls
- errors: Canonical error types

Do not import from storefront_client into shared/.
"""
