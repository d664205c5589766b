"""
Unit tests for the Instagram HTTP transport.
"""

import pytest
from unittest.mock import Mock, patch
import requests

from instagram_sdk.core.errors import RequestError
from instagram_sdk.client.instagram_http import InstagramHttpClient, build_url


def _response(status_code=200, content=b'{"status": "ok"}', json_data=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.content = content
    response.text = text
    if json_data is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = json_data
    return response


class TestBuildUrl:
    """Test URL joining."""

    def test_slashes(self):
        assert build_url("https://i.instagram.com/api/v1/", "/feed/timeline/") == (
            "https://i.instagram.com/api/v1/feed/timeline/"
        )
        assert build_url("https://i.instagram.com/api/v1", "feed/timeline/") == (
            "https://i.instagram.com/api/v1/feed/timeline/"
        )


class TestInstagramHttpClient:
    """Test requests made by the transport."""

    @patch("instagram_sdk.client.instagram_http.requests.request")
    def test_get_returns_raw_body(self, mock_request):
        """Test a successful GET."""
        mock_request.return_value = _response(content=b'{"status": "ok", "items": []}')

        client = InstagramHttpClient(base_url="https://i.instagram.com/api/v1/", timeout_seconds=10)
        body = client.get("feed/tag/sunset/", params={"max_id": None, "rank_token": "r"})

        assert body == b'{"status": "ok", "items": []}'
        kwargs = mock_request.call_args[1]
        assert kwargs["method"] == "GET"
        assert kwargs["url"] == "https://i.instagram.com/api/v1/feed/tag/sunset/"
        assert kwargs["params"] == {"rank_token": "r"}
        assert kwargs["data"] is None
        assert kwargs["timeout"] == 10
        assert kwargs["verify"] is True
        assert "Content-Type" not in kwargs["headers"]
        assert kwargs["headers"]["User-Agent"].startswith("Instagram")

    @patch("instagram_sdk.client.instagram_http.requests.request")
    def test_empty_params_are_dropped(self, mock_request):
        mock_request.return_value = _response()

        client = InstagramHttpClient(base_url="https://example.test/")
        client.get("direct_v2/inbox/", params={"cursor": None})

        assert mock_request.call_args[1]["params"] is None

    @patch("instagram_sdk.client.instagram_http.requests.request")
    def test_post_sends_body(self, mock_request):
        """Test POST body and content type."""
        mock_request.return_value = _response()

        client = InstagramHttpClient(base_url="https://example.test/")
        client.post("feed/timeline/", body="a=1", content_type="application/x-www-form-urlencoded")

        kwargs = mock_request.call_args[1]
        assert kwargs["method"] == "POST"
        assert kwargs["data"] == "a=1"
        assert kwargs["headers"]["Content-Type"] == "application/x-www-form-urlencoded"

    @patch("instagram_sdk.client.instagram_http.requests.request")
    def test_session_cookies(self, mock_request):
        mock_request.return_value = _response()

        client = InstagramHttpClient(
            base_url="https://example.test/",
            session_id="sess",
            csrf_token="csrf",
        )
        client.get("feed/timeline/")

        assert mock_request.call_args[1]["cookies"] == {"sessionid": "sess", "csrftoken": "csrf"}

    @patch("instagram_sdk.client.instagram_http.requests.request")
    def test_transport_failure(self, mock_request):
        """Test connection errors become RequestError."""
        mock_request.side_effect = requests.exceptions.Timeout("Request timed out")

        client = InstagramHttpClient(base_url="https://example.test/")
        with pytest.raises(RequestError) as exc_info:
            client.get("feed/timeline/")

        assert "timed out" in str(exc_info.value)

    @patch("instagram_sdk.client.instagram_http.requests.request")
    def test_http_error_with_json(self, mock_request):
        """Test the upstream message is surfaced."""
        mock_request.return_value = _response(
            status_code=400,
            json_data={"status": "fail", "message": "login_required"},
        )

        client = InstagramHttpClient(base_url="https://example.test/")
        with pytest.raises(RequestError) as exc_info:
            client.get("direct_v2/inbox/")

        assert exc_info.value.status_code == 400
        assert "login_required" in str(exc_info.value)

    @patch("instagram_sdk.client.instagram_http.requests.request")
    def test_http_error_without_json(self, mock_request):
        mock_request.return_value = _response(status_code=502, text="Bad Gateway")

        client = InstagramHttpClient(base_url="https://example.test/")
        with pytest.raises(RequestError) as exc_info:
            client.get("direct_v2/inbox/")

        assert exc_info.value.status_code == 502
        assert "Bad Gateway" in str(exc_info.value)
