
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Mapping, Optional

import aiohttp

from .auth import AbstractTokenAuth, ClientCredential, SignedTokenAuth
from .const import (
    ACTION_GET_ACTIVITY,
    ACTION_GET_DEVICE,
    ACTION_GET_GOALS,
    ACTION_GET_INTRADAY_ACTIVITY,
    ACTION_GET_MEAS,
    ACTION_GET_NONCE,
    ACTION_GET_WORKOUTS,
    ACTION_HEART_LIST,
    ACTION_REQUEST_TOKEN,
    ACTION_SLEEP_SUMMARY,
    API_HOST,
    GRANT_AUTHORIZATION_CODE,
    GRANT_REFRESH_TOKEN,
    OAUTH_AUTHORIZE_URL,
    PATH_HEART,
    PATH_MEASURE,
    PATH_OAUTH2,
    PATH_SIGNATURE,
    PATH_SLEEP,
    PATH_USER,
)
from .exceptions import WithingsApiError, WithingsConnectionError, WithingsError, WithingsNonceError
from .utils import (
    default_measure_options,
    default_ymd_range,
    format_scope,
    generate_signature,
    unix_timestamp,
)

_LOGGER = logging.getLogger(__name__)

Options = Optional[Mapping[str, Any]]


class WithingsApiClient:
    """Async client for the Withings OAuth2 API.

    Holds only the application credentials. Every coroutine makes its own
    request(s) and returns the decoded JSON body untouched. Non-2xx answers
    raise ``WithingsApiError``; transport failures raise
    ``WithingsConnectionError``. Nothing is retried.

    Pass ``session`` to reuse an ``aiohttp.ClientSession`` (it is never closed
    here); otherwise a session is opened for each request. ``timeout`` is
    handed to aiohttp as is.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        callback_url: str,
        *,
        token_auth: AbstractTokenAuth | None = None,
        session: aiohttp.ClientSession | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        api_host: str = API_HOST,
        authorize_url: str = OAUTH_AUTHORIZE_URL,
    ) -> None:
        self.credential = ClientCredential(client_id, client_secret, callback_url)
        self.token_auth = token_auth or SignedTokenAuth()
        self._session = session
        self._timeout = timeout
        self._api_host = api_host
        self._authorize_url = authorize_url

    @property
    def client_id(self) -> str:
        return self.credential.client_id

    @client_id.setter
    def client_id(self, client_id: str) -> None:
        self.credential.client_id = client_id

    @property
    def client_secret(self) -> str:
        return self.credential.client_secret

    @client_secret.setter
    def client_secret(self, client_secret: str) -> None:
        self.credential.client_secret = client_secret

    @property
    def callback_url(self) -> str:
        return self.credential.callback_url

    @callback_url.setter
    def callback_url(self, callback_url: str) -> None:
        self.credential.callback_url = callback_url

    async def _request(self, session: aiohttp.ClientSession, url: str, **kwargs) -> Any:
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout
        async with session.request("POST", url, **kwargs) as resp:
            if resp.status >= 400:
                text = await resp.text()
                raise WithingsApiError(url, resp.status, text)
            try:
                return await resp.json(content_type=None)
            except ValueError as err:
                raise WithingsApiError(url, resp.status, await resp.text()) from err

    async def _post(self, path: str, payload: Dict[str, Any], access_token: str | None = None) -> Any:
        url = f"{self._api_host}{path}"
        headers = {}
        if access_token is not None:
            headers["Authorization"] = f"Bearer {access_token}"
        _LOGGER.debug("POST %s action=%s", url, payload.get("action"))
        try:
            if self._session is not None:
                return await self._request(self._session, url, json=payload, headers=headers)
            session_kwargs = {"timeout": self._timeout} if self._timeout is not None else {}
            async with aiohttp.ClientSession(**session_kwargs) as session:
                return await self._request(session, url, json=payload, headers=headers)
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            raise WithingsConnectionError(f"POST {url} failed: {err!r}") from err

    def get_authorize_url(self, state: str, scope: str) -> str:
        """Build the URL the user is sent to in order to grant access.

        Values are joined as given, without percent-encoding.
        """
        return (
            f"{self._authorize_url}?response_type=code"
            f"&client_id={self.client_id}"
            f"&state={state or ''}"
            f"&scope={format_scope(scope)}"
            f"&redirect_uri={self.callback_url}"
        )

    async def async_get_nonce(self) -> str:
        timestamp = unix_timestamp()
        payload = {
            "action": ACTION_GET_NONCE,
            "client_id": self.client_id,
            "timestamp": timestamp,
            "signature": generate_signature(ACTION_GET_NONCE, self.client_id, self.client_secret, timestamp),
        }
        try:
            data = await self._post(PATH_SIGNATURE, payload)
            nonce = data["body"]["nonce"]
        except (WithingsError, KeyError, TypeError) as err:
            _LOGGER.debug("Could not get a nonce from Withings: %r", err)
            raise WithingsNonceError(f"Could not get a nonce: {err!r}") from err
        if not nonce:
            raise WithingsNonceError(f"Withings returned an empty nonce: {data!r}")
        return nonce

    async def _request_token(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        payload = {
            "action": ACTION_REQUEST_TOKEN,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            **fields,
        }
        payload = await self.token_auth.async_authenticate(self, payload)
        return await self._post(PATH_OAUTH2, payload)

    async def async_get_access_token(self, code: str) -> Dict[str, Any]:
        """Exchange an authorization code for user id, access and refresh tokens."""
        return await self._request_token(
            {
                "grant_type": GRANT_AUTHORIZATION_CODE,
                "code": code,
                "redirect_uri": self.callback_url,
            }
        )

    async def async_refresh_access_token(self, refresh_token: str) -> Dict[str, Any]:
        return await self._request_token(
            {
                "grant_type": GRANT_REFRESH_TOKEN,
                "refresh_token": refresh_token,
            }
        )

    async def _fetch(
        self,
        path: str,
        action: str,
        access_token: str,
        options: Options = None,
        defaults: Callable[[], Dict[str, Any]] | None = None,
    ) -> Dict[str, Any]:
        params = defaults() if defaults is not None else {}
        params.update(options or {})
        params["action"] = action
        return await self._post(path, params, access_token=access_token)

    async def async_get_user_devices(self, access_token: str, options: Options = None) -> Dict[str, Any]:
        return await self._fetch(PATH_USER, ACTION_GET_DEVICE, access_token, options)

    async def async_get_user_goals(self, access_token: str, options: Options = None) -> Dict[str, Any]:
        return await self._fetch(PATH_USER, ACTION_GET_GOALS, access_token, options)

    async def async_get_user_measures(self, access_token: str, options: Options = None) -> Dict[str, Any]:
        """Measures of the last 24 hours unless ``options`` says otherwise (timestamps in ms)."""
        return await self._fetch(PATH_MEASURE, ACTION_GET_MEAS, access_token, options, default_measure_options)

    async def async_get_user_activities(self, access_token: str, options: Options = None) -> Dict[str, Any]:
        return await self._fetch(PATH_MEASURE, ACTION_GET_ACTIVITY, access_token, options, default_ymd_range)

    async def async_get_user_intraday_activities(self, access_token: str, options: Options = None) -> Dict[str, Any]:
        # Withings picks the window when startdate/enddate are absent
        return await self._fetch(PATH_MEASURE, ACTION_GET_INTRADAY_ACTIVITY, access_token, options)

    async def async_get_user_workouts(self, access_token: str, options: Options = None) -> Dict[str, Any]:
        return await self._fetch(PATH_MEASURE, ACTION_GET_WORKOUTS, access_token, options, default_ymd_range)

    async def async_get_user_heart_list(self, access_token: str, options: Options = None) -> Dict[str, Any]:
        return await self._fetch(PATH_HEART, ACTION_HEART_LIST, access_token, options)

    async def async_get_user_sleep_summary(self, access_token: str, options: Options = None) -> Dict[str, Any]:
        return await self._fetch(PATH_SLEEP, ACTION_SLEEP_SUMMARY, access_token, options, default_ymd_range)
