"""
Per-decode mutable state: the object index and the ancestor chain.

A ``DecodeContext`` is created by each top-level decode call and dropped
when that call returns or raises. It is never shared between calls, which
keeps concurrent decodes independent.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .coercion import identifier_key


IndexKey = Tuple[str, str]


class DecodeContext:
    def __init__(self) -> None:
        self._index: Dict[IndexKey, Any] = {}
        self._ancestors: List[Tuple[str, Any]] = []

    def __len__(self) -> int:
        return len(self._index)

    def lookup(self, tag: str, identifier: Any) -> Optional[Any]:
        key = identifier_key(identifier)
        if key is None:
            return None
        return self._index.get((tag, key))

    def register(self, tag: str, identifier: Any, obj: Any) -> None:
        key = identifier_key(identifier)
        if key is None:
            return
        self._index.setdefault((tag, key), obj)

    @contextmanager
    def within(self, tag: str, obj: Any) -> Iterator[None]:
        """
        Make ``obj`` the innermost ancestor while its children are decoded.
        """

        self._ancestors.append((tag, obj))
        try:
            yield
        finally:
            self._ancestors.pop()

    def ancestors(self) -> Iterator[Tuple[str, Any]]:
        """
        Yield ``(tag, object)`` pairs from the innermost ancestor outward.
        """

        return reversed(self._ancestors)
