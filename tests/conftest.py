"""Pytest configuration and shared fixtures."""

from unittest.mock import Mock

import pytest
import requests

from raindrop_tag_cleanup.api.raindrop_client import Tag


@pytest.fixture
def mock_access_token():
    """Mock Raindrop OAuth access token."""
    return "test_access_token_123"


@pytest.fixture
def mock_client_secret():
    """Mock OAuth client secret."""
    return "test_client_secret_456"


@pytest.fixture
def mock_tag_items():
    """Mock tag payload items as returned by the API."""
    return [
        {"_id": "keep1", "count": 12},
        {"_id": "a", "count": 3},
        {"_id": "b", "count": 1},
    ]


@pytest.fixture
def mock_tags(mock_tag_items):
    """Mock tags parsed from the API payload."""
    return [Tag(id=item["_id"], count=item["count"]) for item in mock_tag_items]


@pytest.fixture
def allowlist_file(tmp_path):
    """Allowlist file with blank lines and padded entries."""
    path = tmp_path / "allowlist.txt"
    path.write_text("keep1\n\n   keep2  \n\t\nkeep1\n", encoding="utf-8")
    return str(path)


@pytest.fixture
def make_response():
    """Factory for mock requests responses."""

    def _make(json_data=None, status_code=200) -> Mock:
        response = Mock()
        response.status_code = status_code
        response.json.return_value = json_data if json_data is not None else {}
        if status_code >= 400:
            response.raise_for_status.side_effect = requests.exceptions.HTTPError(
                f"{status_code} Client Error"
            )
        return response

    return _make


