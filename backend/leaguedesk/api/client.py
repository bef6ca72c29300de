"""
League API client

Thin wrapper around the league REST API shared by every consumer in this
package (workbench routes, scripts, tests).

Handles:
- Base URL configuration (LEAGUEDESK_API_BASE_URL)
- Bearer token attachment
- One refresh-and-retry on 401 Unauthorized
- JSON parsing and error messages taken from the response body
"""

import logging
import os
from typing import Any, Callable, Dict, Optional

import requests
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "http://localhost:8000/api"
DEFAULT_TIMEOUT_SECONDS = 20.0

RefreshCallback = Callable[[], Optional[str]]


class ApiError(Exception):
    """Raised for non-2xx responses and transport failures.

    status_code is None when the request never produced a response.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}


def get_api_base_url() -> str:
    """Configured API base URL, without a trailing slash."""
    return os.getenv("LEAGUEDESK_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/")


def get_api_timeout() -> float:
    raw = os.getenv("LEAGUEDESK_API_TIMEOUT", "")
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid LEAGUEDESK_API_TIMEOUT value: '{raw}'")
        return DEFAULT_TIMEOUT_SECONDS


def _error_message(response: requests.Response) -> tuple:
    """Extract (message, payload) from an error response.

    Bodies that are not JSON objects are treated as empty.
    """
    try:
        payload = response.json()
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}

    message = payload.get("detail") or payload.get("error") or f"API Error: {response.status_code}"
    return str(message), payload


class ApiClient:
    """
    Client for the league REST API.

    Args:
        base_url: API root (defaults to LEAGUEDESK_API_BASE_URL)
        token: Access token sent as "Authorization: Bearer <token>"
        refresh_callback: Called on 401; returns a new access token or None
        session: requests.Session to use (a new one by default)
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        refresh_callback: Optional[RefreshCallback] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or get_api_base_url()).rstrip("/")
        self.token = token
        self.refresh_callback = refresh_callback
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else get_api_timeout()

    def set_refresh_callback(self, callback: Optional[RefreshCallback]) -> None:
        self.refresh_callback = callback

    def _headers(self, token: Optional[str]) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(
        self,
        method: str,
        endpoint: str,
        data: Any = None,
        params: Optional[Dict[str, Any]] = None,
        skip_refresh: bool = False,
        token: Optional[str] = None,
    ) -> Any:
        """
        Send a request and return the parsed JSON body.

        On 401 (unless skip_refresh) the refresh callback is asked for a new
        token and the request is retried exactly once with it. If the refresh
        fails or yields no token, the original 401 is raised.

        Returns:
            Parsed JSON, or {} for 204 / empty responses

        Raises:
            ApiError on non-2xx responses and transport failures
        """
        active_token = token if token is not None else self.token
        url = f"{self.base_url}{endpoint}"

        try:
            response = self.session.request(
                method,
                url,
                json=data,
                params=params,
                headers=self._headers(active_token),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"League API {method} {endpoint} failed: {e}")
            raise ApiError(f"Network error: {e}") from e

        if response.status_code == 401 and not skip_refresh and self.refresh_callback:
            new_token = None
            try:
                new_token = self.refresh_callback()
            except Exception as e:
                logger.error(f"Token refresh failed during API request: {e}")

            if new_token:
                self.token = new_token
                return self.request(method, endpoint, data=data, params=params, skip_refresh=True, token=new_token)

        if not response.ok:
            message, payload = _error_message(response)
            logger.warning(f"League API {method} {endpoint} returned {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code, payload=payload)

        if response.status_code == 204 or response.headers.get("content-length") == "0":
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                f"Invalid JSON in response from {endpoint}", status_code=response.status_code
            ) from e

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None, skip_refresh: bool = False) -> Any:
        return self.request("GET", endpoint, params=params, skip_refresh=skip_refresh)

    def post(self, endpoint: str, data: Any = None, skip_refresh: bool = False) -> Any:
        return self.request("POST", endpoint, data=data, skip_refresh=skip_refresh)

    def put(self, endpoint: str, data: Any = None, skip_refresh: bool = False) -> Any:
        return self.request("PUT", endpoint, data=data, skip_refresh=skip_refresh)

    def patch(self, endpoint: str, data: Any = None, skip_refresh: bool = False) -> Any:
        return self.request("PATCH", endpoint, data=data, skip_refresh=skip_refresh)

    def delete(self, endpoint: str, skip_refresh: bool = False) -> Any:
        return self.request("DELETE", endpoint, skip_refresh=skip_refresh)
