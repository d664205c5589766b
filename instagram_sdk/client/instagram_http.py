"""
Low-level HTTP client for Instagram's private API.

This module is responsible for:
- device headers and session cookies
- building URLs
- making HTTP requests
- basic error handling

It returns raw response bodies; decoding happens in the envelopes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from ..core.config import DEFAULT_APP_ID, DEFAULT_USER_AGENT
from ..core.errors import RequestError
from ..core.logging import get_logger


logger = get_logger("instagram_sdk.client.http")


@dataclass
class InstagramHttpClient:
    """
    Simple HTTP client for the private API.
    """

    base_url: str
    user_agent: str = DEFAULT_USER_AGENT
    app_id: str = DEFAULT_APP_ID
    timeout_seconds: int = 30
    verify_ssl: bool = True
    session_id: Optional[str] = None
    csrf_token: Optional[str] = None

    def _headers(self, content_type: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "User-Agent": self.user_agent,
            "X-IG-App-ID": self.app_id,
            "X-IG-Capabilities": "3brTvw==",
            "X-IG-Connection-Type": "WIFI",
            "Accept": "*/*",
            "Accept-Language": "en-US",
        }
        if content_type:
            headers["Content-Type"] = content_type
        return headers

    def _cookies(self) -> Dict[str, str]:
        cookies: Dict[str, str] = {}
        if self.session_id:
            cookies["sessionid"] = self.session_id
        if self.csrf_token:
            cookies["csrftoken"] = self.csrf_token
        return cookies

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> bytes:
        """
        Make an HTTP request and return the raw response body.
        """

        url = build_url(self.base_url, path)
        query = {k: v for k, v in (params or {}).items() if v is not None} or None
        logger.debug(
            "Instagram HTTP request",
            extra={"method": method, "url": url, "params": query},
        )

        try:
            response = requests.request(
                method=method.upper(),
                url=url,
                headers=self._headers(content_type if body is not None else None),
                params=query,
                data=body,
                cookies=self._cookies(),
                timeout=self.timeout_seconds,
                verify=self.verify_ssl,
            )
        except requests.RequestException as exc:
            raise RequestError(f"Instagram request failed: {exc}") from exc

        handle_instagram_error(response)
        return response.content

    def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> bytes:
        return self.request("GET", path, params=params)

    def post(
        self,
        path: str,
        body: Optional[str],
        content_type: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> bytes:
        return self.request("POST", path, params=params, body=body, content_type=content_type)


def build_url(base_url: str, path: str) -> str:
    """
    Join base URL and path safely.
    """

    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def handle_instagram_error(response: requests.Response) -> None:
    """
    Raise a RequestError for non-success responses.
    """

    if 200 <= response.status_code < 300:
        return

    try:
        payload = response.json()
    except ValueError:
        payload = {"raw": response.text}

    detail = payload.get("message") if isinstance(payload, dict) else None

    logger.error(
        "Instagram HTTP error",
        extra={
            "status_code": response.status_code,
            "payload": payload,
        },
    )
    raise RequestError(
        f"Instagram error {response.status_code}: {detail or payload}",
        status_code=response.status_code,
    )
