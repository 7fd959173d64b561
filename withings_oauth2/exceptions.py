
from __future__ import annotations


class WithingsError(Exception):
    pass


class WithingsApiError(WithingsError):
    """Withings answered with a non-2xx status."""

    def __init__(self, url: str, status: int, text: str) -> None:
        super().__init__(f"POST {url} -> {status}: {text}")
        self.url = url
        self.status = status
        self.text = text


class WithingsConnectionError(WithingsError):
    pass


class WithingsNonceError(WithingsError):
    pass
