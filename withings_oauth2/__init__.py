"""Async client for the Withings OAuth2 API."""

from __future__ import annotations

from .api import WithingsApiClient
from .auth import (
    AbstractTokenAuth,
    ClientCredential,
    SignedTokenAuth,
    UnsignedTokenAuth,
)
from .exceptions import (
    WithingsApiError,
    WithingsConnectionError,
    WithingsError,
    WithingsNonceError,
)
from .utils import format_scope, generate_signature

__all__ = [
    "AbstractTokenAuth",
    "ClientCredential",
    "SignedTokenAuth",
    "UnsignedTokenAuth",
    "WithingsApiClient",
    "WithingsApiError",
    "WithingsConnectionError",
    "WithingsError",
    "WithingsNonceError",
    "format_scope",
    "generate_signature",
]
