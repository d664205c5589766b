"""
Configuration storage and loading for the Instagram SDK.

Saves and loads ``SdkConfig`` as JSON so device identity and signing
settings can be captured once and reused across runs.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .config import InstagramConfig, LoggingConfig, SdkConfig
from .errors import ConfigError


CONFIG_FILE = os.getenv("INSTAGRAM_SDK_CONFIG_FILE", "instagram_sdk.json")


def _config_to_dict(config: SdkConfig) -> Dict[str, Any]:
    """Convert SdkConfig to a dictionary."""
    result: Dict[str, Any] = {
        "logging": {
            "log_dir": config.logging.log_dir if config.logging else "logs",
            "log_level": config.logging.log_level if config.logging else "INFO",
            "package_log_level": config.logging.package_log_level if config.logging else None,
        },
    }

    if config.instagram:
        ig = config.instagram
        result["instagram"] = {
            "base_url": ig.base_url,
            "user_agent": ig.user_agent,
            "app_id": ig.app_id,
            "signature_key": ig.signature_key,
            "signature_version": ig.signature_version,
            "timeout_seconds": ig.timeout_seconds,
            "verify_ssl": ig.verify_ssl,
            "device_uuid": ig.device_uuid,
            "phone_id": ig.phone_id,
            "session_id": ig.session_id,
            "csrf_token": ig.csrf_token,
        }

    return result


def _dict_to_config(data: Dict[str, Any]) -> SdkConfig:
    """Convert a dictionary to SdkConfig."""
    logging_data = data.get("logging", {})
    logging_cfg = LoggingConfig(
        log_dir=logging_data.get("log_dir", "logs"),
        log_level=logging_data.get("log_level", "INFO"),
        package_log_level=logging_data.get("package_log_level"),
    ) if logging_data else LoggingConfig()

    instagram_cfg: Optional[InstagramConfig] = None
    ig_data = data.get("instagram")
    if ig_data:
        defaults = InstagramConfig()
        try:
            timeout_seconds = int(ig_data.get("timeout_seconds", defaults.timeout_seconds))
        except (TypeError, ValueError) as exc:
            raise ConfigError("instagram.timeout_seconds must be an integer") from exc

        instagram_cfg = InstagramConfig(
            base_url=ig_data.get("base_url") or defaults.base_url,
            user_agent=ig_data.get("user_agent") or defaults.user_agent,
            app_id=ig_data.get("app_id") or defaults.app_id,
            signature_key=ig_data.get("signature_key"),
            signature_version=str(ig_data.get("signature_version") or defaults.signature_version),
            timeout_seconds=timeout_seconds,
            verify_ssl=bool(ig_data.get("verify_ssl", True)),
            device_uuid=ig_data.get("device_uuid"),
            phone_id=ig_data.get("phone_id"),
            session_id=ig_data.get("session_id"),
            csrf_token=ig_data.get("csrf_token"),
        )

    return SdkConfig(
        instagram=instagram_cfg,
        logging=logging_cfg,
    )


def load_config_from_file(file_path: str = CONFIG_FILE) -> SdkConfig:
    """
    Load configuration from a JSON file.

    A missing file is not an error: the default configuration is returned
    so the SDK can run against the public API root with a fresh identity.
    """

    path = Path(file_path)
    if not path.exists():
        return SdkConfig(instagram=InstagramConfig(), logging=LoggingConfig())

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {file_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read config file {file_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {file_path} must contain a JSON object")

    return _dict_to_config(data)


def save_config_to_file(config: SdkConfig, file_path: str = CONFIG_FILE) -> None:
    """
    Save configuration to a JSON file, creating parent directories as needed.
    """

    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(_config_to_dict(config), f, indent=2)
    except OSError as exc:
        raise ConfigError(f"Failed to write config file {file_path}: {exc}") from exc
