"""
Session context: the credential storage and navigation boundaries.

The gateway never touches global state. It is handed a ``SessionContext``
at construction, reads the bearer token through it, and asks it to tear the
session down when the API answers 401.
"""

import asyncio
from typing import Callable, List, Optional

from shared.logging import get_logger
from .stores import TokenStore, NullTokenStore, MemoryTokenStore

TOKEN_KEY = "authToken"
LOGIN_PATH = "/login"


class Navigator:
    """Client-side navigation target."""

    async def navigate(self, path: str) -> None:
        raise NotImplementedError


class NullNavigator(Navigator):
    """Navigation for headless contexts; does nothing."""

    async def navigate(self, path: str) -> None:
        return None


class RecordingNavigator(Navigator):
    """Keeps every requested path, newest last."""

    def __init__(self):
        self.history: List[str] = []

    @property
    def current(self) -> Optional[str]:
        return self.history[-1] if self.history else None

    async def navigate(self, path: str) -> None:
        self.history.append(path)


class CallbackNavigator(Navigator):
    """Hands the path to a caller-supplied function (sync or async)."""

    def __init__(self, callback: Callable[[str], object]):
        self.callback = callback

    async def navigate(self, path: str) -> None:
        result = self.callback(path)
        if asyncio.iscoroutine(result):
            await result


class SessionContext:
    """Holds the credential store and navigator for one user session."""

    def __init__(
        self,
        store: Optional[TokenStore] = None,
        navigator: Optional[Navigator] = None,
        token_key: str = TOKEN_KEY,
        login_path: str = LOGIN_PATH,
    ):
        self.store = store if store is not None else MemoryTokenStore()
        self.navigator = navigator if navigator is not None else RecordingNavigator()
        self.token_key = token_key
        self.login_path = login_path
        self.logger = get_logger("storefront.session")

    @classmethod
    def headless(cls) -> "SessionContext":
        """Session with no persistence and no navigation."""
        return cls(store=NullTokenStore(), navigator=NullNavigator())

    @property
    def interactive(self) -> bool:
        return not isinstance(self.navigator, NullNavigator)

    async def get_token(self) -> Optional[str]:
        """Return the stored credential, or None when absent."""
        token = await self.store.get(self.token_key)
        return token or None

    async def set_token(self, token: str) -> None:
        await self.store.set(self.token_key, token)
        self.logger.debug("Credential stored", token_key=self.token_key)

    async def clear_token(self) -> None:
        await self.store.delete(self.token_key)

    async def redirect_to_login(self) -> None:
        await self.navigator.navigate(self.login_path)

    async def teardown(self) -> None:
        """Clear the credential and send the user to the login page.

        Safe to call repeatedly and concurrently.
        """
        await self.clear_token()
        await self.redirect_to_login()
        self.logger.info("Session torn down", login_path=self.login_path, interactive=self.interactive)
