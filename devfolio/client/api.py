"""HTTP client for the Devfolio API."""

import logging
from collections.abc import Callable
from typing import Any
from urllib.parse import urlencode, urlsplit, urlunsplit

import httpx

from devfolio.client.cache import ResponseCache
from devfolio.client.loading import LoadingState

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0

SESSION_EXPIRED = "Session expired. Please login again."
FORBIDDEN = "You don't have permission to perform this action."
SERVER_ERROR = "Server error. Please try again later."
TIMEOUT = "Request timeout. Please check your connection and try again."
OFFLINE = "No internet connection. Please check your network and try again."
NETWORK_ERROR = "Network error. Please try again."


class ApiError(Exception):
    """A failed API call, carrying the message to show the user."""

    def __init__(self, message: str, status_code: int | None = None, errors: list | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or []


def _server_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}: {response.reason_phrase}"
    if isinstance(body, dict):
        message = body.get("message") or body.get("error") or body.get("detail")
        if message:
            return str(message)
    return f"HTTP {response.status_code}: {response.reason_phrase}"


class ApiClient:
    """Async client with bearer auth, a response cache and loading tracking.

    The cache and loading state belong to this instance; pass your own to
    share them between clients.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        cache: ResponseCache | None = None,
        loading: LoadingState | None = None,
        on_unauthorized: Callable[[], None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._token = token
        self.cache = cache if cache is not None else ResponseCache()
        self.loading = loading if loading is not None else LoadingState()
        self.on_unauthorized = on_unauthorized
        self._http = httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def token(self) -> str | None:
        return self._token

    @token.setter
    def token(self, value: str | None) -> None:
        # Cached reads may belong to the previous identity
        if value != self._token:
            self.cache.clear()
        self._token = value

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        status_code = response.status_code

        if status_code == 401:
            self.token = None
            if self.on_unauthorized:
                self.on_unauthorized()
            raise ApiError(SESSION_EXPIRED, status_code)
        if status_code == 403:
            raise ApiError(FORBIDDEN, status_code)
        if status_code >= 500:
            raise ApiError(SERVER_ERROR, status_code)

        errors = []
        try:
            body = response.json()
            if isinstance(body, dict):
                errors = body.get("errors") or []
        except ValueError:
            pass
        raise ApiError(_server_message(response), status_code, errors)

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            ApiError: with a user-facing message for HTTP and transport failures
        """
        params = {k: v for k, v in (params or {}).items() if v is not None}
        with self.loading.track():
            try:
                response = await self._http.request(
                    method, path, params=params or None, json=json, headers=self._headers()
                )
            except httpx.TimeoutException as e:
                logger.warning(f"{method} {path} timed out: {e}")
                raise ApiError(TIMEOUT) from e
            except httpx.ConnectError as e:
                logger.warning(f"{method} {path} could not connect: {e}")
                raise ApiError(OFFLINE) from e
            except httpx.TransportError as e:
                logger.warning(f"{method} {path} failed: {e}")
                raise ApiError(NETWORK_ERROR) from e

        self._raise_for_status(response)
        if "application/json" in response.headers.get("content-type", ""):
            return response.json()
        return response.text

    @staticmethod
    def cache_key(path: str, params: dict[str, Any] | None = None) -> str:
        """Request signature used as the cache key."""
        query = urlencode(sorted((k, str(v)) for k, v in (params or {}).items() if v is not None))
        return f"GET {path}?{query}" if query else f"GET {path}"

    async def get(self, path: str, params: dict[str, Any] | None = None, use_cache: bool = False) -> Any:
        """GET a resource, serving from and filling the cache when `use_cache` is set."""
        if not use_cache:
            return await self.request("GET", path, params=params)
        key = self.cache_key(path, params)
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        data = await self.request("GET", path, params=params)
        self.cache.set(key, data)
        return data

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    def notifications_url(self) -> str:
        """WebSocket URL of the caller's notification stream."""
        parts = urlsplit(self.base_url)
        scheme = "wss" if parts.scheme == "https" else "ws"
        query = urlencode({"token": self._token or ""})
        return urlunsplit((scheme, parts.netloc, f"{parts.path}/ws/notifications", query, ""))
