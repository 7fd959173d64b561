
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .const import ACTION_REQUEST_TOKEN
from .utils import generate_signature

if TYPE_CHECKING:
    from .api import WithingsApiClient


@dataclass
class ClientCredential:
    """Application credentials registered with Withings.

    Nothing is validated here; a bad value only shows up when Withings
    rejects the request.
    """

    client_id: str
    client_secret: str
    callback_url: str


class AbstractTokenAuth(ABC):
    """How a ``requesttoken`` call proves it comes from the application."""

    @abstractmethod
    async def async_authenticate(self, client: WithingsApiClient, payload: dict[str, Any]) -> dict[str, Any]:
        """Return the payload with any authentication fields added."""


class SignedTokenAuth(AbstractTokenAuth):
    """Fetch a nonce and sign ``requesttoken,client_id,nonce``."""

    async def async_authenticate(self, client: WithingsApiClient, payload: dict[str, Any]) -> dict[str, Any]:
        nonce = await client.async_get_nonce()
        credential = client.credential
        return {
            **payload,
            "nonce": nonce,
            "signature": generate_signature(
                ACTION_REQUEST_TOKEN,
                credential.client_id,
                credential.client_secret,
                nonce,
            ),
        }


class UnsignedTokenAuth(AbstractTokenAuth):
    """Rely on ``client_secret`` in the body alone."""

    async def async_authenticate(self, client: WithingsApiClient, payload: dict[str, Any]) -> dict[str, Any]:
        return dict(payload)
