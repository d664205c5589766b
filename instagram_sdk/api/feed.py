"""
Feed API: feed types, timeline options and the ``FeedClient`` interface.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional, Protocol

from ..core.dto import BaseDTO
from ..dto.feed import FeedMessage, Timeline


class FeedType(IntEnum):
    """
    Kind of media feed to query.
    """

    HASHTAG = 1
    USER = 2


@dataclass
class TimelineOptions(BaseDTO):
    """
    Optional parameters for a timeline request.
    """

    max_id: Optional[str] = None
    paging_token: Optional[str] = None
    seen_posts: List[str] = field(default_factory=list)
    unseen_posts: List[str] = field(default_factory=list)
    is_pull_to_refresh: bool = False
    is_prefetch: bool = False

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "is_pull_to_refresh": "1" if self.is_pull_to_refresh else "0",
            "is_prefetch": "1" if self.is_prefetch else "0",
        }
        if self.max_id:
            params["max_id"] = self.max_id
        if self.paging_token:
            params["paging_token"] = self.paging_token
        if self.seen_posts:
            params["seen_posts"] = ",".join(self.seen_posts)
        if self.unseen_posts:
            params["unseen_posts"] = ",".join(self.unseen_posts)
        return params


class FeedClient(Protocol):
    """
    Interface for feed operations.
    """

    def feed_by_hashtag(self, tag: str, max_id: Optional[str] = None) -> FeedMessage:
        ...

    def feed_by_user(self, user_id: str, max_id: Optional[str] = None) -> FeedMessage:
        ...

    def feed(self, feed_type: int, query: str, max_id: Optional[str] = None) -> FeedMessage:
        ...

    def timeline(self, options: Optional[TimelineOptions] = None) -> Timeline:
        ...
