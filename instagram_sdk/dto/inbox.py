"""
Direct messaging DTOs: inbox, threads and thread items.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from ..core.dto import BaseDTO
from ..serialization.descriptor import (
    Ancestor,
    BackReference,
    IndexLookup,
    Requirement,
    ScalarKind,
    decodable,
    listof,
    nested,
    scalar,
)
from .envelope import Envelope
from .general import ImageVersions, User, VideoVersion


class ItemType(str, Enum):
    TEXT = "text"
    MEDIA = "media"
    MEDIA_SHARE = "media_share"
    LIKE = "like"
    LINK = "link"
    REEL_SHARE = "reel_share"
    ACTION_LOG = "action_log"
    PLACEHOLDER = "placeholder"


@decodable(tag="thread_media_item")
@dataclass
class ThreadMediaItem(BaseDTO):
    media_type: Optional[int] = scalar(ScalarKind.INT)
    image_versions: Optional[ImageVersions] = nested(ImageVersions, source="image_versions2")
    video_versions: List[VideoVersion] = listof(VideoVersion)
    original_width: Optional[int] = scalar(ScalarKind.INT)
    original_height: Optional[int] = scalar(ScalarKind.INT)


@decodable(
    tag="thread_item",
    identifier="item_id",
    requirements=("user:user_id", Ancestor("thread", target="parent")),
)
@dataclass
class ThreadItem(BaseDTO):
    item_id: Optional[str] = scalar(ScalarKind.STRING)
    user_id: Optional[int] = scalar(ScalarKind.INT)
    timestamp: Optional[float] = scalar(ScalarKind.FLOAT)
    item_type: Optional[str] = scalar(ScalarKind.STRING)
    text: Optional[str] = scalar(ScalarKind.STRING)
    client_context: Optional[str] = scalar(ScalarKind.STRING)
    media: Optional[ThreadMediaItem] = nested(ThreadMediaItem)
    user: Optional[User] = field(default=None, repr=False, compare=False)
    sent_at: Optional[datetime] = field(default=None, compare=False)

    parent = BackReference()

    def is_item_type(self, item_type: str) -> bool:
        return item_type == self.item_type

    def on_requirement(self, requirement: Requirement, value: Any) -> None:
        if isinstance(requirement, IndexLookup):
            self.user = value
        else:
            self.parent = value

    def on_decode(self, raw: Dict[str, Any], requirements: Dict[str, Any]) -> None:
        # Item timestamps are microseconds since the epoch.
        if self.timestamp is not None:
            self.sent_at = datetime.fromtimestamp(self.timestamp / 1_000_000, tz=timezone.utc)


@decodable(tag="thread", identifier="thread_id")
@dataclass
class Thread(BaseDTO):
    thread_id: Optional[str] = scalar(ScalarKind.STRING)
    thread_v2_id: Optional[str] = scalar(ScalarKind.STRING)
    thread_title: Optional[str] = scalar(ScalarKind.STRING)
    thread_type: Optional[str] = scalar(ScalarKind.STRING)
    viewer_id: Optional[int] = scalar(ScalarKind.INT)
    # Users come before items so item user lookups can find them.
    users: List[User] = listof(User)
    inviter: Optional[User] = nested(User)
    items: List[ThreadItem] = listof(ThreadItem)
    last_activity_at: Optional[int] = scalar(ScalarKind.INT)
    muted: bool = scalar(ScalarKind.BOOL, default=False)
    is_group: bool = scalar(ScalarKind.BOOL, default=False)
    named: bool = scalar(ScalarKind.BOOL, default=False)
    pending: bool = scalar(ScalarKind.BOOL, default=False)
    has_older: bool = scalar(ScalarKind.BOOL, default=False)
    has_newer: bool = scalar(ScalarKind.BOOL, default=False)
    oldest_cursor: Optional[str] = scalar(ScalarKind.STRING)
    newest_cursor: Optional[str] = scalar(ScalarKind.STRING)

    def user_by_id(self, user_id: int) -> Optional[User]:
        for user in self.users:
            if user.pk == user_id:
                return user
        return None


@decodable(tag="inbox")
@dataclass
class Inbox(BaseDTO):
    threads: List[Thread] = listof(Thread)
    has_older: bool = scalar(ScalarKind.BOOL, default=False)
    oldest_cursor: Optional[str] = scalar(ScalarKind.STRING)
    unseen_count: Optional[int] = scalar(ScalarKind.INT)
    unseen_count_ts: Optional[int] = scalar(ScalarKind.INT)


@decodable(tag="inbox_message")
@dataclass
class InboxMessage(Envelope):
    viewer: Optional[User] = nested(User)
    inbox: Optional[Inbox] = nested(Inbox)
    seq_id: Optional[int] = scalar(ScalarKind.INT)
    snapshot_at_ms: Optional[int] = scalar(ScalarKind.INT)
    pending_requests_total: Optional[int] = scalar(ScalarKind.INT)


@decodable(tag="thread_message")
@dataclass
class ThreadMessage(Envelope):
    thread: Optional[Thread] = nested(Thread)
