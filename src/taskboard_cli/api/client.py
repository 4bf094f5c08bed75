"""HTTP client for the hosted store (PostgREST data API + GoTrue auth API)."""

from typing import Any, Optional

import httpx

from taskboard_cli.config import ConfigManager, get_config_manager
from taskboard_cli.exceptions import RemoteStoreError

# Keys the store uses for a human-readable error, in order of preference
_ERROR_KEYS = ("message", "msg", "error_description", "error")


def _error_message(response: httpx.Response) -> str:
    """Extract the error message from a failed store response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in _ERROR_KEYS:
            if body.get(key):
                return str(body[key])
    return f"HTTP {response.status_code}: {response.reason_phrase}"


def json_body(response: httpx.Response) -> Any:
    """Decoded JSON body of a successful response.

    Raises:
        RemoteStoreError: If the body is not JSON (e.g. a proxy error page)
    """
    try:
        return response.json()
    except ValueError as e:
        raise RemoteStoreError(
            f"Unexpected non-JSON response from {response.request.url}",
            status_code=response.status_code,
        ) from e


class APIClient:
    """HTTP client for the remote store.

    Every request carries the project ``apikey`` header. The bearer token is
    the session access token when one is set, else the project key itself.
    """

    def __init__(
        self,
        profile: str = "default",
        config_manager: Optional[ConfigManager] = None,
    ):
        self.config_manager = config_manager or get_config_manager(profile)
        self.config = self.config_manager.config
        self.base_url = self.config.api.endpoint.rstrip("/")
        self.api_key = self.config.api.key
        self.timeout = self.config.api.timeout
        self.access_token: Optional[str] = None
        self._client: Optional[httpx.AsyncClient] = None

    def set_access_token(self, token: Optional[str]) -> None:
        """Use ``token`` for subsequent requests (None reverts to the project key)."""
        self.access_token = token

    def _get_headers(self, skip_auth: bool = False) -> dict[str, str]:
        """Get HTTP headers with authentication."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "apikey": self.api_key,
        }

        bearer = self.api_key if skip_auth else (self.access_token or self.api_key)
        if bearer:
            headers["Authorization"] = f"Bearer {bearer}"

        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Any] = None,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        skip_auth: bool = False,
    ) -> httpx.Response:
        """Make one HTTP request to the store.

        Failures are not retried; they surface as RemoteStoreError.
        """
        client = await self._get_client()
        url = path if path.startswith("/") else f"/{path}"

        request_headers = self._get_headers(skip_auth=skip_auth)
        if headers:
            request_headers.update(headers)

        try:
            response = await client.request(
                method=method,
                url=url,
                json=json,
                params=params,
                headers=request_headers,
            )
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            raise RemoteStoreError(
                _error_message(e.response), status_code=e.response.status_code
            ) from e
        except httpx.RequestError as e:
            raise RemoteStoreError(f"Could not reach {self.base_url}: {e}") from e

    async def get(
        self, path: str, *, params: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        *,
        json: Optional[Any] = None,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        skip_auth: bool = False,
    ) -> httpx.Response:
        """Make a POST request."""
        return await self.request(
            "POST", path, json=json, params=params, headers=headers, skip_auth=skip_auth
        )

    async def patch(
        self,
        path: str,
        *,
        json: Optional[Any] = None,
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> httpx.Response:
        """Make a PATCH request."""
        return await self.request(
            "PATCH", path, json=json, params=params, headers=headers
        )

    async def delete(
        self, path: str, *, params: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path, params=params)


def get_client(profile: str = "default") -> APIClient:
    """Get an API client instance."""
    return APIClient(profile)
