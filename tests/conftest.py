from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any

import pytest

from withings_oauth2 import UnsignedTokenAuth, WithingsApiClient
from withings_oauth2.const import API_HOST

CLIENT_ID = "client-id"
CLIENT_SECRET = "client-secret"
CALLBACK_URL = "https://example.com/callback"
ACCESS_TOKEN = "access-token"


class FakeResponse:
    def __init__(self, status: int = 200, payload: Any = None, text: str = "", raw: str | None = None) -> None:
        self.status = status
        self._payload = payload
        self._text = raw if raw is not None else text
        self._raw = raw

    async def text(self) -> str:
        return self._text

    async def json(self, content_type: str | None = "application/json") -> Any:
        if self._raw is not None:
            return json.loads(self._raw)
        return self._payload

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc_info) -> bool:
        return False


class FakeSession:
    """Stands in for ``aiohttp.ClientSession``; routes on the full URL."""

    def __init__(self) -> None:
        self.requests: list[SimpleNamespace] = []
        self._routes: dict[str, Any] = {}
        self.closed = False

    def add(self, path: str, response: Any) -> None:
        self._routes[f"{API_HOST}{path}"] = response

    def request(self, method: str, url: str, **kwargs):
        self.requests.append(
            SimpleNamespace(
                method=method,
                url=url,
                json=kwargs.get("json"),
                headers=kwargs.get("headers") or {},
                kwargs=kwargs,
            )
        )
        response = self._routes.get(url)
        if response is None:
            return FakeResponse(404, text="not found")
        if isinstance(response, BaseException):
            raise response
        return response

    def requests_to(self, path: str) -> list[SimpleNamespace]:
        return [r for r in self.requests if r.url == f"{API_HOST}{path}"]

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, *exc_info) -> bool:
        self.closed = True
        return False


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(session: FakeSession) -> WithingsApiClient:
    return WithingsApiClient(CLIENT_ID, CLIENT_SECRET, CALLBACK_URL, session=session)


@pytest.fixture
def unsigned_client(session: FakeSession) -> WithingsApiClient:
    return WithingsApiClient(
        CLIENT_ID,
        CLIENT_SECRET,
        CALLBACK_URL,
        session=session,
        token_auth=UnsignedTokenAuth(),
    )
