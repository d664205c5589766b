"""
Instagram implementation of the ``FeedClient`` and ``InboxClient``
interfaces.
"""

from __future__ import annotations

import threading
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional, TypeVar
from urllib.parse import quote

from ..api.feed import FeedClient, FeedType, TimelineOptions
from ..api.inbox import InboxClient
from ..core.config import InstagramConfig, SdkConfig
from ..core.errors import ApiError, ConfigError, ValidationError
from ..core.logging import get_logger
from ..dto.envelope import Envelope
from ..dto.feed import FeedMessage, Timeline
from ..dto.inbox import InboxMessage, ThreadMessage
from ..serialization.body import BodySerializer, SignedBodySerializer, UrlEncodedBodySerializer
from .instagram_http import InstagramHttpClient


logger = get_logger("instagram_sdk.client")

T_Envelope = TypeVar("T_Envelope", bound=Envelope)
R = TypeVar("R")

URI_HASHTAG_FEED = "feed/tag/{}/"
URI_USER_FEED = "feed/user/{}/"
URI_TIMELINE_FEED = "feed/timeline/"
URI_INBOX = "direct_v2/inbox/"
URI_THREAD = "direct_v2/threads/{}/"

_FEED_URIS = {
    FeedType.HASHTAG: URI_HASHTAG_FEED,
    FeedType.USER: URI_USER_FEED,
}


class InstagramClient(FeedClient, InboxClient):
    """
    Feed and direct inbox client backed by the private API.

    Every method is synchronous. ``defer`` runs any of them on a worker
    thread and returns a ``Future`` instead.
    """

    def __init__(
        self,
        http_client: InstagramHttpClient,
        config: Optional[InstagramConfig] = None,
        max_workers: int = 4,
    ) -> None:
        self._http = http_client
        self._config = config or InstagramConfig(base_url=http_client.base_url)
        self._device_uuid = self._config.device_uuid or str(uuid.uuid4())
        self._phone_id = self._config.phone_id or str(uuid.uuid4())
        self._max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: SdkConfig) -> "InstagramClient":
        """
        Factory to construct a client from ``SdkConfig``.
        """

        if not config.instagram:
            raise ConfigError("Instagram configuration is not set in SdkConfig")

        ig = config.instagram
        http_client = InstagramHttpClient(
            base_url=ig.base_url,
            user_agent=ig.user_agent,
            app_id=ig.app_id,
            timeout_seconds=ig.timeout_seconds,
            verify_ssl=ig.verify_ssl,
            session_id=ig.session_id,
            csrf_token=ig.csrf_token,
        )
        return cls(http_client=http_client, config=ig)

    @property
    def device_uuid(self) -> str:
        return self._device_uuid

    def _serializer(self) -> BodySerializer:
        if self._config.signature_key:
            return SignedBodySerializer(
                signature_key=self._config.signature_key,
                signature_version=self._config.signature_version,
            )
        return UrlEncodedBodySerializer()

    def _check(self, message: T_Envelope) -> T_Envelope:
        if not message.is_ok():
            logger.warning(
                "Instagram returned a non-ok envelope",
                extra={"envelope": type(message).__name__, "status": message.status},
            )
            raise ApiError(message.message or f"Unexpected status {message.status!r}")
        return message

    def _get(
        self,
        path: str,
        message: T_Envelope,
        params: Optional[Dict[str, Any]] = None,
    ) -> T_Envelope:
        raw = self._http.get(path, params=params)
        return self._check(message.decode(raw))

    def _post(
        self,
        path: str,
        message: T_Envelope,
        body_params: Dict[str, Any],
    ) -> T_Envelope:
        serializer = self._serializer()
        raw = self._http.post(
            path,
            body=serializer.encode(body_params),
            content_type=serializer.content_type,
        )
        return self._check(message.decode(raw))

    # Feeds

    def feed_by_hashtag(self, tag: str, max_id: Optional[str] = None) -> FeedMessage:
        return self.feed(FeedType.HASHTAG, tag, max_id)

    def feed_by_user(self, user_id: str, max_id: Optional[str] = None) -> FeedMessage:
        return self.feed(FeedType.USER, str(user_id), max_id)

    def feed(self, feed_type: int, query: str, max_id: Optional[str] = None) -> FeedMessage:
        try:
            kind = FeedType(feed_type)
        except ValueError:
            raise ValidationError("Invalid type provided") from None

        encoded = quote(query, safe="")
        message = FeedMessage(query=encoded, feed_type=int(kind))
        return self._get(_FEED_URIS[kind].format(encoded), message, params={"max_id": max_id})

    def timeline(self, options: Optional[TimelineOptions] = None) -> Timeline:
        body: Dict[str, Any] = {
            "_csrftoken": self._config.csrf_token,
            "_uuid": self._device_uuid,
            "phone_id": self._phone_id,
            "session_id": self._config.session_id,
            "reason": "cold_start_fetch",
        }
        body.update((options or TimelineOptions()).to_params())
        return self._post(URI_TIMELINE_FEED, Timeline(), body)

    # Direct inbox

    def inbox(self, cursor: Optional[str] = None) -> InboxMessage:
        return self._get(URI_INBOX, InboxMessage(), params={"cursor": cursor})

    def thread(self, thread_id: str, cursor: Optional[str] = None) -> ThreadMessage:
        path = URI_THREAD.format(quote(str(thread_id), safe=""))
        return self._get(path, ThreadMessage(), params={"cursor": cursor})

    # Deferred calls

    def defer(self, method: Callable[..., R], *args: Any, **kwargs: Any) -> "Future[R]":
        """
        Run ``method`` on the client's worker pool and return its future.
        """

        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=self._max_workers)
            executor = self._executor
        return executor.submit(method, *args, **kwargs)

    def close(self) -> None:
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def __enter__(self) -> "InstagramClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
