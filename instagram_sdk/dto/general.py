"""
DTOs shared across endpoints: users, media, captions and image variants.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Dict, List, Optional

from ..core.dto import BaseDTO
from ..serialization.descriptor import (
    Ancestor,
    BackReference,
    ScalarKind,
    decodable,
    listof,
    nested,
    scalar,
)


class MediaType(IntEnum):
    IMAGE = 1
    VIDEO = 2
    CAROUSEL = 8


@decodable(tag="user", identifier="pk")
@dataclass
class User(BaseDTO):
    pk: Optional[int] = scalar(ScalarKind.INT)
    username: Optional[str] = scalar(ScalarKind.STRING)
    full_name: Optional[str] = scalar(ScalarKind.STRING)
    is_private: bool = scalar(ScalarKind.BOOL, default=False)
    is_verified: bool = scalar(ScalarKind.BOOL, default=False)
    profile_pic_url: Optional[str] = scalar(ScalarKind.STRING)
    profile_pic_id: Optional[str] = scalar(ScalarKind.STRING)
    has_anonymous_profile_picture: bool = scalar(ScalarKind.BOOL, default=False)
    follower_count: Optional[int] = scalar(ScalarKind.INT)
    following_count: Optional[int] = scalar(ScalarKind.INT)
    media_count: Optional[int] = scalar(ScalarKind.INT)
    biography: Optional[str] = scalar(ScalarKind.STRING)
    external_url: Optional[str] = scalar(ScalarKind.STRING)


@decodable(tag="image_candidate")
@dataclass
class ImageCandidate(BaseDTO):
    url: Optional[str] = scalar(ScalarKind.STRING)
    width: Optional[int] = scalar(ScalarKind.INT)
    height: Optional[int] = scalar(ScalarKind.INT)


@decodable(tag="image_versions")
@dataclass
class ImageVersions(BaseDTO):
    candidates: List[ImageCandidate] = listof(ImageCandidate)

    def best(self) -> Optional[ImageCandidate]:
        """
        Return the candidate with the largest pixel area.
        """

        if not self.candidates:
            return None
        return max(self.candidates, key=lambda c: (c.width or 0) * (c.height or 0))


@decodable(tag="video_version")
@dataclass
class VideoVersion(BaseDTO):
    id: Optional[str] = scalar(ScalarKind.STRING)
    type: Optional[int] = scalar(ScalarKind.INT)
    url: Optional[str] = scalar(ScalarKind.STRING)
    width: Optional[int] = scalar(ScalarKind.INT)
    height: Optional[int] = scalar(ScalarKind.INT)


@decodable(tag="caption", identifier="pk", requirements=(Ancestor("media", target="media"),))
@dataclass
class Caption(BaseDTO):
    pk: Optional[str] = scalar(ScalarKind.STRING)
    text: Optional[str] = scalar(ScalarKind.STRING)
    user_id: Optional[int] = scalar(ScalarKind.INT)
    created_at: Optional[int] = scalar(ScalarKind.INT)
    user: Optional[User] = nested(User)

    media = BackReference()


def select_media(raw: Dict[str, Any]) -> type:
    """
    Pick the media class from the ``media_type`` discriminator.
    """

    try:
        media_type = MediaType(int(raw.get("media_type") or MediaType.IMAGE))
    except (TypeError, ValueError):
        return Media
    if media_type is MediaType.VIDEO:
        return VideoMedia
    if media_type is MediaType.CAROUSEL:
        return CarouselMedia
    return Media


@decodable(tag="media", identifier="id")
@dataclass
class Media(BaseDTO):
    id: Optional[str] = scalar(ScalarKind.STRING)
    pk: Optional[int] = scalar(ScalarKind.INT)
    code: Optional[str] = scalar(ScalarKind.STRING)
    media_type: Optional[int] = scalar(ScalarKind.INT)
    taken_at: Optional[int] = scalar(ScalarKind.INT)
    like_count: Optional[int] = scalar(ScalarKind.INT)
    comment_count: Optional[int] = scalar(ScalarKind.INT)
    has_liked: bool = scalar(ScalarKind.BOOL, default=False)
    user: Optional[User] = nested(User)
    caption: Optional[Caption] = nested(Caption)
    image_versions: Optional[ImageVersions] = nested(ImageVersions, source="image_versions2")
    original_width: Optional[int] = scalar(ScalarKind.INT)
    original_height: Optional[int] = scalar(ScalarKind.INT)

    @property
    def taken_at_datetime(self) -> Optional[datetime]:
        if self.taken_at is None:
            return None
        return datetime.fromtimestamp(self.taken_at, tz=timezone.utc)

    def is_media_type(self, media_type: int) -> bool:
        return self.media_type == media_type


@decodable()
@dataclass
class VideoMedia(Media):
    video_versions: List[VideoVersion] = listof(VideoVersion)
    video_duration: Optional[float] = scalar(ScalarKind.FLOAT)
    view_count: Optional[int] = scalar(ScalarKind.INT)
    has_audio: bool = scalar(ScalarKind.BOOL, default=False)


@decodable()
@dataclass
class CarouselMedia(Media):
    carousel_media_count: Optional[int] = scalar(ScalarKind.INT)
    carousel_media: List[Media] = listof(select_media)
