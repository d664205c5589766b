"""
Direct messaging API interface.
"""

from __future__ import annotations

from typing import Optional, Protocol

from ..dto.inbox import InboxMessage, ThreadMessage


class InboxClient(Protocol):
    """
    Interface for reading the direct inbox.
    """

    def inbox(self, cursor: Optional[str] = None) -> InboxMessage:
        ...

    def thread(self, thread_id: str, cursor: Optional[str] = None) -> ThreadMessage:
        ...
