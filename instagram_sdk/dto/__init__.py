"""
Response DTOs.

Each module declares decodable dataclasses; envelopes (`envelope.py`) are
the roots handed to the decoder.
"""

from .envelope import Envelope
from .feed import FeedMessage, Timeline, TimelineItem
from .general import CarouselMedia, Caption, ImageCandidate, ImageVersions, Media, User, VideoMedia
from .inbox import Inbox, InboxMessage, ItemType, Thread, ThreadItem, ThreadMediaItem, ThreadMessage

__all__ = [
    "Caption",
    "CarouselMedia",
    "Envelope",
    "FeedMessage",
    "ImageCandidate",
    "ImageVersions",
    "Inbox",
    "InboxMessage",
    "ItemType",
    "Media",
    "Thread",
    "ThreadItem",
    "ThreadMediaItem",
    "ThreadMessage",
    "Timeline",
    "TimelineItem",
    "User",
    "VideoMedia",
]
