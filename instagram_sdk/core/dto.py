"""
Common DTO utilities for the Instagram SDK.

Every decoded response object is a Python dataclass. This module provides a
small mixin so all DTOs share a consistent API (e.g., ``to_dict``).

Design choices:
- Style: synchronous (no async in DTOs or interfaces).
- Construction from raw API payloads goes through the decoder only.
- Back-references to parent objects are kept outside the dataclass fields,
  so ``to_dict`` only follows owning edges and never loops.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass
class BaseDTO:
    """
    Base mixin for DTO dataclasses.
    """

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert this DTO into a plain dict (recursively).
        """

        return asdict(self)
