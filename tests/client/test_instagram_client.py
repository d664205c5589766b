"""
Unit tests for the Instagram feature client.
"""

import json
import threading
import time
from unittest.mock import Mock, patch
from urllib.parse import parse_qs

import pytest

from instagram_sdk.api.feed import FeedType, TimelineOptions
from instagram_sdk.client.instagram_client import InstagramClient
from instagram_sdk.client.instagram_http import InstagramHttpClient
from instagram_sdk.core.config import InstagramConfig, SdkConfig
from instagram_sdk.core.errors import ApiError, ConfigError, ValidationError
from instagram_sdk.dto.feed import FeedMessage, Timeline
from instagram_sdk.dto.inbox import InboxMessage, ThreadMessage


def _client(signature_key=None):
    http = Mock()
    config = InstagramConfig(
        device_uuid="device-uuid",
        phone_id="phone-id",
        session_id="session",
        signature_key=signature_key,
    )
    return InstagramClient(http_client=http, config=config), http


def _body(data):
    return json.dumps(data).encode("utf-8")


class TestFeeds:
    """Test feed endpoints."""

    def test_feed_by_hashtag(self):
        client, http = _client()
        http.get.return_value = _body({"status": "ok", "items": [{"id": "1_1", "media_type": 1}]})

        message = client.feed_by_hashtag("sunset beach", max_id="abc")

        http.get.assert_called_once_with("feed/tag/sunset%20beach/", params={"max_id": "abc"})
        assert isinstance(message, FeedMessage)
        assert message.query == "sunset%20beach"
        assert message.feed_type == FeedType.HASHTAG
        assert message.items[0].id == "1_1"

    def test_feed_by_user(self):
        client, http = _client()
        http.get.return_value = _body({"status": "ok", "items": []})

        message = client.feed_by_user(12345)

        http.get.assert_called_once_with("feed/user/12345/", params={"max_id": None})
        assert message.feed_type == FeedType.USER
        assert message.items == []

    def test_invalid_feed_type(self):
        client, http = _client()
        with pytest.raises(ValidationError):
            client.feed(99, "x")
        http.get.assert_not_called()

    def test_fail_status_raises(self):
        """Test a non-ok envelope raises ApiError."""
        client, http = _client()
        http.get.return_value = _body({"status": "fail", "message": "challenge_required"})

        with pytest.raises(ApiError) as exc_info:
            client.feed_by_hashtag("x")
        assert "challenge_required" in str(exc_info.value)


class TestTimeline:
    """Test the timeline endpoint."""

    def test_unsigned_body(self):
        client, http = _client()
        http.post.return_value = _body({"status": "ok", "feed_items": []})

        timeline = client.timeline(TimelineOptions(max_id="m1", seen_posts=["a", "b"]))

        assert isinstance(timeline, Timeline)
        args, kwargs = http.post.call_args
        assert args[0] == "feed/timeline/"
        assert kwargs["content_type"].startswith("application/x-www-form-urlencoded")
        body = parse_qs(kwargs["body"])
        assert body["reason"] == ["cold_start_fetch"]
        assert body["_uuid"] == ["device-uuid"]
        assert body["phone_id"] == ["phone-id"]
        assert body["session_id"] == ["session"]
        assert body["max_id"] == ["m1"]
        assert body["seen_posts"] == ["a,b"]
        assert body["is_pull_to_refresh"] == ["0"]
        assert "_csrftoken" not in body
        assert "paging_token" not in body

    def test_paging_token_is_separate_param(self):
        client, http = _client()
        http.post.return_value = _body({"status": "ok"})

        client.timeline(TimelineOptions(max_id="m2", paging_token="tok", is_pull_to_refresh=True))

        body = parse_qs(http.post.call_args[1]["body"])
        assert body["max_id"] == ["m2"]
        assert body["paging_token"] == ["tok"]
        assert body["is_pull_to_refresh"] == ["1"]

    def test_signed_body(self):
        client, http = _client(signature_key="key")
        http.post.return_value = _body({"status": "ok"})

        client.timeline()

        body = parse_qs(http.post.call_args[1]["body"])
        assert "signed_body" in body
        assert body["ig_sig_key_version"] == ["4"]
        document = json.loads(body["signed_body"][0].split(".", 1)[1])
        assert document["reason"] == "cold_start_fetch"


class TestInbox:
    """Test direct inbox endpoints."""

    def test_inbox(self):
        client, http = _client()
        http.get.return_value = _body({"status": "ok", "inbox": {"threads": [{"thread_id": "t"}]}})

        message = client.inbox(cursor="c1")

        http.get.assert_called_once_with("direct_v2/inbox/", params={"cursor": "c1"})
        assert isinstance(message, InboxMessage)
        assert message.inbox.threads[0].thread_id == "t"

    def test_thread(self):
        client, http = _client()
        http.get.return_value = _body({"status": "ok", "thread": {"thread_id": "340282"}})

        message = client.thread("340282")

        http.get.assert_called_once_with("direct_v2/threads/340282/", params={"cursor": None})
        assert isinstance(message, ThreadMessage)
        assert message.thread.thread_id == "340282"


class TestDeferred:
    """Test the future-returning calling convention."""

    def test_defer_returns_future(self):
        client, http = _client()
        http.get.return_value = _body({"status": "ok", "items": [{"id": "9_9"}]})

        with client:
            future = client.defer(client.feed_by_hashtag, "tag")
            message = future.result(timeout=5)

        assert message.items[0].id == "9_9"

    def test_defer_propagates_errors(self):
        client, http = _client()
        http.get.return_value = _body({"status": "fail", "message": "nope"})

        future = client.defer(client.feed_by_hashtag, "tag")
        with pytest.raises(ApiError):
            future.result(timeout=5)
        client.close()

    def test_concurrent_defer_builds_one_pool(self):
        client, _ = _client()
        barrier = threading.Barrier(8)

        def slow_pool(**kwargs):
            time.sleep(0.01)
            return Mock()

        def call():
            barrier.wait()
            client.defer(len, "abc")

        with patch(
            "instagram_sdk.client.instagram_client.ThreadPoolExecutor",
            side_effect=slow_pool,
        ) as pool_cls:
            threads = [threading.Thread(target=call) for _ in range(8)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join(timeout=5)

        assert pool_cls.call_count == 1
        client.close()

    def test_close_is_repeatable(self):
        client, _ = _client()
        client.defer(len, "abc").result(timeout=5)

        client.close()
        client.close()

        assert client.defer(len, "ab").result(timeout=5) == 2
        client.close()


class TestFromConfig:
    """Test the config factory."""

    def test_missing_section(self):
        with pytest.raises(ConfigError):
            InstagramClient.from_config(SdkConfig(instagram=None))

    def test_builds_http_client(self):
        config = SdkConfig(
            instagram=InstagramConfig(
                base_url="https://example.test/api/v1/",
                timeout_seconds=5,
                verify_ssl=False,
                session_id="s",
                device_uuid="u",
            )
        )
        client = InstagramClient.from_config(config)

        assert isinstance(client._http, InstagramHttpClient)
        assert client._http.base_url == "https://example.test/api/v1/"
        assert client._http.timeout_seconds == 5
        assert client._http.verify_ssl is False
        assert client._http.session_id == "s"
        assert client.device_uuid == "u"

    def test_generated_device_uuid(self):
        client = InstagramClient.from_config(SdkConfig(instagram=InstagramConfig()))
        assert len(client.device_uuid) == 36
