"""
Session package for the Storefront Access Client.

Owns the bearer credential and the login redirect. Stores are async so a
shared backend (Redis) can sit behind the same contract as the in-process
store.
"""

from .context import (
    SessionContext,
    Navigator,
    NullNavigator,
    RecordingNavigator,
    CallbackNavigator,
    TOKEN_KEY,
    LOGIN_PATH,
)
from .stores import TokenStore, NullTokenStore, MemoryTokenStore, RedisTokenStore

__all__ = [
    "SessionContext",
    "Navigator",
    "NullNavigator",
    "RecordingNavigator",
    "CallbackNavigator",
    "TOKEN_KEY",
    "LOGIN_PATH",
    "TokenStore",
    "NullTokenStore",
    "MemoryTokenStore",
    "RedisTokenStore",
]
