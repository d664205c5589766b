"""
Core error types for the Instagram SDK.

These exceptions share a common base so that callers (feature code, apps
embedding the SDK) can handle every failure raised by the library in a
consistent way.
"""

from __future__ import annotations

from typing import Optional


class InstagramError(Exception):
    """
    Base exception for all SDK-specific errors.
    """


class ConfigError(InstagramError):
    """
    Raised when configuration is missing, invalid, or inconsistent.
    """


class RequestError(InstagramError):
    """
    Raised when the HTTP transport fails or Instagram answers with a
    non-success status code.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ApiError(InstagramError):
    """
    Raised when a response decodes fine but its envelope reports a
    non-``ok`` status.
    """


class ValidationError(InstagramError):
    """
    Raised when DTO descriptors or client arguments fail validation.
    """


class DecodeError(InstagramError):
    """
    Raised when a JSON value cannot be coerced into the declared shape.

    ``path`` is the JSON path of the failing value (``$`` for the document
    root), ``expected_kind`` the declared shape and ``found_kind`` the JSON
    kind actually present.
    """

    def __init__(self, path: str, expected_kind: str, found_kind: str) -> None:
        self.path = path
        self.expected_kind = expected_kind
        self.found_kind = found_kind
        super().__init__(
            f"Cannot decode {path!r}: expected {expected_kind}, found {found_kind}"
        )
