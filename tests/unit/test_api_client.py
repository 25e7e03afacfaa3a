"""Tests for the Raindrop API client."""

from unittest.mock import patch

import pytest
import requests

from raindrop_tag_cleanup.api.raindrop_client import (
    RaindropAPIError,
    RaindropClient,
    Tag,
    exchange_code,
)


class TestRaindropClient:
    """Test cases for RaindropClient."""

    def test_init_with_token(self, mock_access_token):
        """Test initialization with an access token."""
        client = RaindropClient(token=mock_access_token)
        assert client.token == mock_access_token
        assert client.headers["Authorization"] == f"Bearer {mock_access_token}"

    def test_init_no_token_raises_error(self):
        """Test that a missing token raises ValueError."""
        with pytest.raises(ValueError, match="access token is required"):
            RaindropClient()

    @patch("raindrop_tag_cleanup.api.raindrop_client.requests.get")
    def test_get_tags_success(
        self, mock_get, mock_access_token, mock_tag_items, make_response
    ):
        """Test successful tag retrieval keeps API order."""
        mock_get.return_value = make_response({"result": True, "items": mock_tag_items})

        client = RaindropClient(token=mock_access_token)
        tags = client.get_tags()

        assert tags == [Tag("keep1", 12), Tag("a", 3), Tag("b", 1)]
        mock_get.assert_called_once_with(
            "https://api.raindrop.io/rest/v1/tags",
            headers=client.headers,
            timeout=30,
        )

    @patch("raindrop_tag_cleanup.api.raindrop_client.requests.get")
    def test_get_tags_http_error(self, mock_get, mock_access_token, make_response):
        """Test that an HTTP error while listing tags raises."""
        mock_get.return_value = make_response(status_code=401)

        client = RaindropClient(token=mock_access_token)
        with pytest.raises(RaindropAPIError, match="fetching tags"):
            client.get_tags()

    @patch("raindrop_tag_cleanup.api.raindrop_client.requests.get")
    def test_get_tags_connection_error(self, mock_get, mock_access_token):
        """Test that a transport error while listing tags raises."""
        mock_get.side_effect = requests.exceptions.ConnectionError("no route")

        client = RaindropClient(token=mock_access_token)
        with pytest.raises(RaindropAPIError, match="no route"):
            client.get_tags()

    @patch("raindrop_tag_cleanup.api.raindrop_client.requests.get")
    def test_get_tags_result_false(self, mock_get, mock_access_token, make_response):
        """Test that a rejected request raises with the API's message."""
        mock_get.return_value = make_response(
            {"result": False, "errorMessage": "Unauthorized"}
        )

        client = RaindropClient(token=mock_access_token)
        with pytest.raises(RaindropAPIError, match="Unauthorized"):
            client.get_tags()

    @patch("raindrop_tag_cleanup.api.raindrop_client.requests.delete")
    def test_delete_tags_success(self, mock_delete, mock_access_token, make_response):
        """Test successful tag deletion."""
        mock_delete.return_value = make_response({"result": True})

        client = RaindropClient(token=mock_access_token)
        client.delete_tags(["old-tag"])

        mock_delete.assert_called_once_with(
            "https://api.raindrop.io/rest/v1/tags",
            headers=client.headers,
            json={"tags": ["old-tag"]},
            timeout=30,
        )

    @patch("raindrop_tag_cleanup.api.raindrop_client.requests.delete")
    def test_delete_tags_failure(self, mock_delete, mock_access_token, make_response):
        """Test tag deletion failure."""
        mock_delete.return_value = make_response(status_code=429)

        client = RaindropClient(token=mock_access_token)
        with pytest.raises(RaindropAPIError, match="429"):
            client.delete_tags(["old-tag"])


class TestExchangeCode:
    """Test cases for the OAuth token exchange."""

    @patch("raindrop_tag_cleanup.api.raindrop_client.requests.post")
    def test_exchange_code_success(self, mock_post, make_response):
        """Test a successful exchange returns the access token."""
        mock_post.return_value = make_response(
            {"access_token": "tok", "refresh_token": "ref", "token_type": "Bearer"}
        )

        token = exchange_code("the-code", "client", "secret", "http://localhost:1/oauth")

        assert token == "tok"
        mock_post.assert_called_once_with(
            "https://raindrop.io/oauth/access_token",
            json={
                "grant_type": "authorization_code",
                "code": "the-code",
                "client_id": "client",
                "client_secret": "secret",
                "redirect_uri": "http://localhost:1/oauth",
            },
            timeout=30,
        )

    @patch("raindrop_tag_cleanup.api.raindrop_client.requests.post")
    def test_exchange_code_error_field(self, mock_post, make_response):
        """Test that an error body raises even with a 200 status."""
        mock_post.return_value = make_response({"error": "invalid_grant"})

        with pytest.raises(RaindropAPIError, match="invalid_grant"):
            exchange_code("used-code", "client", "secret", "http://localhost:1/oauth")

    @patch("raindrop_tag_cleanup.api.raindrop_client.requests.post")
    def test_exchange_code_missing_token(self, mock_post, make_response):
        """Test that a body without access_token raises."""
        mock_post.return_value = make_response({"token_type": "Bearer"})

        with pytest.raises(RaindropAPIError, match="no access_token"):
            exchange_code("code", "client", "secret", "http://localhost:1/oauth")

    @patch("raindrop_tag_cleanup.api.raindrop_client.requests.post")
    def test_exchange_code_invalid_json(self, mock_post, make_response):
        """Test that a non-JSON body raises."""
        response = make_response()
        response.json.side_effect = ValueError("Expecting value")
        mock_post.return_value = response

        with pytest.raises(RaindropAPIError, match="Expecting value"):
            exchange_code("code", "client", "secret", "http://localhost:1/oauth")
