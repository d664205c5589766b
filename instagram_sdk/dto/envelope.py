"""
Envelope: the root object of one response decode.

An envelope is constructed empty (optionally with request-side context such
as the feed query), filled by exactly one ``decode`` call and sealed
afterwards. Concrete envelopes add their payload fields next to the
reserved status and pagination keys declared here.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError, dataclass
from typing import Any, Optional, Type, TypeVar

from ..core.dto import BaseDTO
from ..core.errors import ValidationError
from ..serialization.decoder import Payload, decode
from ..serialization.descriptor import ScalarKind, decodable, scalar


T_Envelope = TypeVar("T_Envelope", bound="Envelope")

STATUS_OK = "ok"


@decodable(tag="envelope")
@dataclass
class Envelope(BaseDTO):
    status: Optional[str] = scalar(ScalarKind.STRING)
    message: Optional[str] = scalar(ScalarKind.STRING)
    next_max_id: Optional[str] = scalar(ScalarKind.STRING)
    more_available: bool = scalar(ScalarKind.BOOL, default=False)
    num_results: Optional[int] = scalar(ScalarKind.INT)

    def __setattr__(self, name: str, value: Any) -> None:
        if self.__dict__.get("_sealed", False):
            raise FrozenInstanceError(f"cannot assign to field {name!r}")
        super().__setattr__(name, value)

    @property
    def sealed(self) -> bool:
        return self.__dict__.get("_sealed", False)

    def decode(self: T_Envelope, payload: Payload) -> T_Envelope:
        """
        Populate this envelope from a raw response body.

        On failure (a ``DecodeError`` or an error raised by a DTO hook) the
        envelope is put back in its pre-decode state and the error
        propagates.
        """

        if self.sealed:
            raise ValidationError(f"{type(self).__name__} has already been decoded")

        snapshot = dict(self.__dict__)
        try:
            decode(payload, self)
        except Exception:
            self.__dict__.clear()
            self.__dict__.update(snapshot)
            raise

        object.__setattr__(self, "_sealed", True)
        return self

    @classmethod
    def parse(cls: Type[T_Envelope], payload: Payload) -> T_Envelope:
        return cls().decode(payload)

    def is_ok(self) -> bool:
        return self.status == STATUS_OK

    def has_more(self) -> bool:
        return bool(self.more_available and self.next_max_id)
