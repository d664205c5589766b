"""
Request body serializers.

Each serializer turns a flat parameter dict into the request body string
and names the matching ``Content-Type``. ``None`` values are dropped and an
empty parameter set produces no body at all.
"""

from __future__ import annotations

import hashlib
import hmac
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol
from urllib.parse import urlencode


def _compact(params: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in params.items() if value is not None}


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


class BodySerializer(Protocol):
    """
    Interface for request body encoders.
    """

    content_type: str

    def encode(self, params: Dict[str, Any]) -> Optional[str]:
        ...


class JsonBodySerializer:
    content_type = "application/json; charset=UTF-8"

    def encode(self, params: Dict[str, Any]) -> Optional[str]:
        body = _compact(params)
        if not body:
            return None
        return json.dumps(body, separators=(",", ":"))


class UrlEncodedBodySerializer:
    content_type = "application/x-www-form-urlencoded; charset=UTF-8"

    def encode(self, params: Dict[str, Any]) -> Optional[str]:
        body = _compact(params)
        if not body:
            return None
        return urlencode({key: _form_value(value) for key, value in body.items()})


@dataclass
class SignedBodySerializer:
    """
    Form body carrying an HMAC-SHA256 signed JSON document.

    Produces ``signed_body=<hex digest>.<json>&ig_sig_key_version=<version>``.
    """

    signature_key: str
    signature_version: str = "4"

    content_type = "application/x-www-form-urlencoded; charset=UTF-8"

    def sign(self, data: str) -> str:
        return hmac.new(
            self.signature_key.encode("utf-8"),
            data.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()

    def encode(self, params: Dict[str, Any]) -> Optional[str]:
        body = _compact(params)
        if not body:
            return None
        document = json.dumps(body, separators=(",", ":"))
        return urlencode(
            {
                "signed_body": f"{self.sign(document)}.{document}",
                "ig_sig_key_version": self.signature_version,
            }
        )
