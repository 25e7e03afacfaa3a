"""Raindrop.io API client for tag management."""

from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests.exceptions import RequestException

API_BASE = "https://api.raindrop.io/rest/v1"
TOKEN_URL = "https://raindrop.io/oauth/access_token"
REQUEST_TIMEOUT = 30


class RaindropAPIError(Exception):
    """Raised when a Raindrop.io API call fails."""


@dataclass(frozen=True)
class Tag:
    """A Raindrop tag and the number of bookmarks carrying it."""

    id: str
    count: int = 0


def _parse_response(response: requests.Response, action: str) -> dict[str, Any]:
    """Check status and decode a Raindrop JSON response.

    Raises:
        RaindropAPIError: On HTTP error, invalid JSON, or ``result: false``.
    """
    try:
        response.raise_for_status()
        data = response.json()
    except (RequestException, ValueError) as e:
        raise RaindropAPIError(f"Error {action}: {e}") from e

    if not isinstance(data, dict):
        raise RaindropAPIError(f"Error {action}: unexpected response {data!r}")
    if data.get("result") is False:
        message = data.get("errorMessage") or data.get("error") or "request rejected"
        raise RaindropAPIError(f"Error {action}: {message}")
    return data


def exchange_code(
    code: str, client_id: str, client_secret: str, redirect_uri: str
) -> str:
    """Exchange a one-time authorization code for an access token.

    Args:
        code: Authorization code captured from the OAuth redirect
        client_id: OAuth client ID
        client_secret: OAuth client secret
        redirect_uri: Redirect URI used in the authorization request

    Returns:
        The access token

    Raises:
        RaindropAPIError: If the exchange fails or returns no token.
    """
    payload = {
        "grant_type": "authorization_code",
        "code": code,
        "client_id": client_id,
        "client_secret": client_secret,
        "redirect_uri": redirect_uri,
    }
    try:
        response = requests.post(TOKEN_URL, json=payload, timeout=REQUEST_TIMEOUT)
    except RequestException as e:
        raise RaindropAPIError(f"Error exchanging authorization code: {e}") from e

    data = _parse_response(response, "exchanging authorization code")
    if data.get("error"):
        raise RaindropAPIError(
            f"Error exchanging authorization code: {data['error']}"
        )
    token = data.get("access_token")
    if not token:
        raise RaindropAPIError("Error exchanging authorization code: no access_token")
    return token


class RaindropClient:
    """Client for interacting with the Raindrop.io tag API."""

    def __init__(self, token: Optional[str] = None):
        """Initialize the Raindrop API client.

        Args:
            token: OAuth access token for the authorized user.

        Raises:
            ValueError: If no token is provided.
        """
        if not token:
            raise ValueError("An access token is required")

        self.token = token
        self.headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

    def get_tags(self) -> list[Tag]:
        """Get all tags for the authorized user, in the order the API returns them.

        Raises:
            RaindropAPIError: If the tags can't be fetched.
        """
        url = f"{API_BASE}/tags"
        try:
            response = requests.get(url, headers=self.headers, timeout=REQUEST_TIMEOUT)
        except RequestException as e:
            raise RaindropAPIError(f"Error fetching tags: {e}") from e

        data = _parse_response(response, "fetching tags")
        return [
            Tag(id=item["_id"], count=item.get("count", 0))
            for item in data.get("items", [])
        ]

    def delete_tags(self, tags: list[str]) -> None:
        """Remove tags from all bookmarks.

        Args:
            tags: Names of the tags to delete

        Raises:
            RaindropAPIError: If the deletion fails.
        """
        url = f"{API_BASE}/tags"
        try:
            response = requests.delete(
                url,
                headers=self.headers,
                json={"tags": tags},
                timeout=REQUEST_TIMEOUT,
            )
        except RequestException as e:
            raise RaindropAPIError(f"Error deleting tags {tags}: {e}") from e

        _parse_response(response, f"deleting tags {tags}")
