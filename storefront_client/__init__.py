"""
Storefront Access Client package.

Async client for the storefront e-commerce API:

- app.gateway: Request gateway, result envelope and auth interceptors.
- app.session: Credential storage and login-redirect boundaries.
- app.resources: Route tables for products, cart, orders, auth and users.
- app.main: ``StorefrontApi`` facade and the ``storefront-api`` CLI.

Importing the package performs no network calls. All IO happens inside
gateway operations.
"""
