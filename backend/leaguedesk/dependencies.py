"""
Request dependencies shared by the routers.

The caller's bearer token is forwarded to the league API; an optional
X-Refresh-Token header lets the client refresh it once on 401.
"""

import logging
from typing import Optional

from fastapi import Header, HTTPException

from leaguedesk.api import ApiClient, ApiError, LeagueApi, TokenRefresher

logger = logging.getLogger(__name__)


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_league_api(
    authorization: Optional[str] = Header(default=None),
    x_refresh_token: Optional[str] = Header(default=None),
) -> LeagueApi:
    client = ApiClient(token=_bearer_token(authorization))
    client.set_refresh_callback(TokenRefresher(client, x_refresh_token))
    return LeagueApi(client)


def api_error_to_http(error: ApiError) -> HTTPException:
    """Upstream errors keep their status; transport failures become 502."""
    status_code = error.status_code or 502
    logger.warning(f"League API error ({status_code}): {error.message}")
    return HTTPException(status_code=status_code, detail=error.message)
