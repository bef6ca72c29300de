"""
Token refresh

Login, registration and logout are handled by the league API's own
front-ends. This module only exchanges a refresh token for a new access
token so ApiClient can retry a request after a 401.
"""

import logging
from typing import Optional

from leaguedesk.api.client import ApiClient, ApiError

logger = logging.getLogger(__name__)


def refresh_access_token(client: ApiClient, refresh_token: str) -> str:
    """
    POST /auth/refresh/ and return the new access token.

    skip_refresh is set so an expired refresh token cannot trigger another
    refresh attempt.

    Raises:
        ApiError if the server rejects the refresh token
    """
    data = client.request("POST", "/auth/refresh/", data={"refresh": refresh_token}, skip_refresh=True, token="")
    access = data.get("access") if isinstance(data, dict) else None
    if not access:
        raise ApiError("Refresh response did not include an access token")
    return access


class TokenRefresher:
    """Callable handed to ApiClient.refresh_callback."""

    def __init__(self, client: ApiClient, refresh_token: Optional[str]):
        self.client = client
        self.refresh_token = refresh_token

    def __call__(self) -> Optional[str]:
        if not self.refresh_token:
            return None
        token = refresh_access_token(self.client, self.refresh_token)
        logger.info("Access token refreshed")
        return token
