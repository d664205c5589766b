"""
Configuration models and loading logic for the Instagram SDK.

The goal of this module is to provide a single place where runtime
configuration (API URL, device identity, signing key, timeouts, logging
settings, etc.) is defined and loaded from the environment.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional

from .errors import ConfigError


DEFAULT_BASE_URL = "https://i.instagram.com/api/v1/"
DEFAULT_USER_AGENT = (
    "Instagram 27.0.0.7.97 Android (23/6.0.1; 640dpi; 1440x2392; "
    "LGE/lge; RS988; h1; h1; en_US)"
)
DEFAULT_APP_ID = "567067343352427"


@dataclass
class InstagramConfig:
    """
    Configuration for the Instagram private API transport.
    """

    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    app_id: str = DEFAULT_APP_ID
    signature_key: Optional[str] = None  # Request bodies are signed only when set
    signature_version: str = "4"
    timeout_seconds: int = 30
    verify_ssl: bool = True
    device_uuid: Optional[str] = None  # Generated per client when not provided
    phone_id: Optional[str] = None
    session_id: Optional[str] = None
    csrf_token: Optional[str] = None


@dataclass
class LoggingConfig:
    """
    Logging-related configuration.
    """

    log_dir: str = "logs"
    log_level: str = "INFO"
    # Level for the instagram_sdk.* loggers only; None follows log_level.
    package_log_level: Optional[str] = None


@dataclass
class SdkConfig:
    """
    Top-level configuration for the SDK.
    """

    instagram: Optional[InstagramConfig] = None
    logging: Optional[LoggingConfig] = None


def _int_env(name: str, default: int) -> int:
    """
    Read an integer environment variable or raise ConfigError if malformed.
    """

    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer") from exc


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_config() -> SdkConfig:
    """
    Load SDK configuration from environment variables.

    Environment variables:
        INSTAGRAM_SDK_BASE_URL: API base URL (default: the mobile API v1 root).
        INSTAGRAM_SDK_USER_AGENT: User agent sent with every request.
        INSTAGRAM_SDK_APP_ID: Value of the ``X-IG-App-ID`` header.
        INSTAGRAM_SDK_SIGNATURE_KEY: HMAC key used to sign request bodies.
        INSTAGRAM_SDK_SIGNATURE_VERSION: Signature key version (default: "4").
        INSTAGRAM_SDK_TIMEOUT_SECONDS: Request timeout (default: 30).
        INSTAGRAM_SDK_VERIFY_SSL: Verify TLS certificates (default: true).
        INSTAGRAM_SDK_DEVICE_UUID / _PHONE_ID / _SESSION_ID / _CSRF_TOKEN:
            Device and session identity, usually captured from a login.

        INSTAGRAM_SDK_LOG_DIR: Directory for log files (default: "logs").
        INSTAGRAM_SDK_LOG_LEVEL: Root log level (default: "INFO").
        INSTAGRAM_SDK_PACKAGE_LOG_LEVEL: Level for instagram_sdk.* loggers
            (default: unset, follows INSTAGRAM_SDK_LOG_LEVEL).
    """

    logging_cfg = LoggingConfig(
        log_dir=os.getenv("INSTAGRAM_SDK_LOG_DIR", "logs"),
        log_level=os.getenv("INSTAGRAM_SDK_LOG_LEVEL", "INFO"),
        package_log_level=os.getenv("INSTAGRAM_SDK_PACKAGE_LOG_LEVEL") or None,
    )

    signature_key = os.getenv("INSTAGRAM_SDK_SIGNATURE_KEY") or None
    signature_version = os.getenv("INSTAGRAM_SDK_SIGNATURE_VERSION")
    if signature_version and not signature_key:
        raise ConfigError(
            "INSTAGRAM_SDK_SIGNATURE_KEY must be set when "
            "INSTAGRAM_SDK_SIGNATURE_VERSION is provided"
        )

    instagram_cfg = InstagramConfig(
        base_url=os.getenv("INSTAGRAM_SDK_BASE_URL", DEFAULT_BASE_URL),
        user_agent=os.getenv("INSTAGRAM_SDK_USER_AGENT", DEFAULT_USER_AGENT),
        app_id=os.getenv("INSTAGRAM_SDK_APP_ID", DEFAULT_APP_ID),
        signature_key=signature_key,
        signature_version=signature_version or "4",
        timeout_seconds=_int_env("INSTAGRAM_SDK_TIMEOUT_SECONDS", 30),
        verify_ssl=_bool_env("INSTAGRAM_SDK_VERIFY_SSL", True),
        device_uuid=os.getenv("INSTAGRAM_SDK_DEVICE_UUID") or None,
        phone_id=os.getenv("INSTAGRAM_SDK_PHONE_ID") or None,
        session_id=os.getenv("INSTAGRAM_SDK_SESSION_ID") or None,
        csrf_token=os.getenv("INSTAGRAM_SDK_CSRF_TOKEN") or None,
    )

    return SdkConfig(
        instagram=instagram_cfg,
        logging=logging_cfg,
    )
