"""
Feed DTOs: hashtag / user feeds and the home timeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..core.dto import BaseDTO
from ..serialization.descriptor import ScalarKind, decodable, listof, nested, scalar
from .envelope import Envelope
from .general import Media, select_media


@decodable(tag="feed_message")
@dataclass
class FeedMessage(Envelope):
    """
    Hashtag or user feed page.

    ``query`` and ``feed_type`` are set by the caller before decoding and
    record which feed was requested.
    """

    items: List[Media] = listof(select_media)
    ranked_items: List[Media] = listof(select_media)
    auto_load_more_enabled: bool = scalar(ScalarKind.BOOL, default=False)
    query: Optional[str] = None
    feed_type: Optional[int] = None


@decodable(tag="timeline_item")
@dataclass
class TimelineItem(BaseDTO):
    media: Optional[Media] = nested(select_media, source="media_or_ad")


@decodable(tag="timeline")
@dataclass
class Timeline(Envelope):
    """
    Home timeline page.
    """

    feed_items: List[TimelineItem] = listof(TimelineItem)
    is_direct_v2_enabled: bool = scalar(ScalarKind.BOOL, default=False)
    auto_load_more_enabled: bool = scalar(ScalarKind.BOOL, default=False)

    def media(self) -> List[Media]:
        return [item.media for item in self.feed_items if item.media is not None]
