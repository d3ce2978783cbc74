"""
Request Context and Configuration State for Logging.

The request id lives in a ContextVar so each synthesis call (thread or
asyncio task) tags its own log lines. Logging configuration is process-wide
module state.

Environment Variables:
    - WEBTTS_SETTINGS: Settings file to read the logging section from
    - WEBTTS_LOG_LEVEL: Override log level (1-4 or name)
    - WEBTTS_LOG_DIR: Directory for JSONL log files
    - WEBTTS_JSONL_FILE: JSONL filename
    - WEBTTS_LOG_ROTATE_BYTES: Max log file size before rotation
    - WEBTTS_LOG_ROTATE_BACKUP: Number of rotated files to keep
"""
from __future__ import annotations

import os
from contextvars import ContextVar
from typing import Any, Dict

from .levels import LEVEL_NAMES, LogLevel

# "-" outside of a request
_request_id: ContextVar[str] = ContextVar("request_id", default="-")

_configured: bool = False
_log_config: Dict[str, Any] = {}
_current_level: LogLevel = LogLevel.NORMAL


def get_request_id() -> str:
    """Get current request ID from context, or "-" if not set."""
    return _request_id.get()


def set_request_id(rid: str) -> None:
    """
    Set request ID in context for log correlation.

    Args:
        rid: Request identifier string (typically a 12 char UUID prefix).
    """
    _request_id.set(rid)


def get_level() -> LogLevel:
    return _current_level


def set_level(level: LogLevel) -> None:
    global _current_level
    _current_level = level


def get_level_name() -> str:
    """Get current log level as human-readable name."""
    return LEVEL_NAMES.get(_current_level, "NORMAL")


def is_configured() -> bool:
    return _configured


def set_configured(value: bool) -> None:
    global _configured
    _configured = value


def get_log_config() -> Dict[str, Any]:
    return _log_config


def set_log_config(config: Dict[str, Any]) -> None:
    global _log_config
    _log_config = config


def _env_int(name: str) -> int | None:
    value = os.getenv(name)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def read_logging_config() -> Dict[str, Any]:
    """
    Read logging configuration from settings file and environment.

    Configuration priority (highest to lowest):
        1. Environment variables (WEBTTS_LOG_LEVEL, etc.)
        2. settings.yaml logging section
        3. Default values

    Returns:
        Dictionary with resolved logging configuration.
    """
    cfg: Dict[str, Any] = {}

    settings_path = os.getenv("WEBTTS_SETTINGS", "config/settings.yaml")
    if os.path.exists(settings_path):
        from webtts.core.config import load_settings
        cfg.update(load_settings(settings_path).raw.get("logging", {}) or {})

    if os.getenv("WEBTTS_LOG_LEVEL"):
        cfg["level"] = os.environ["WEBTTS_LOG_LEVEL"]
    if os.getenv("WEBTTS_LOG_DIR"):
        cfg["log_dir"] = os.environ["WEBTTS_LOG_DIR"]
    if os.getenv("WEBTTS_JSONL_FILE"):
        cfg["jsonl_file"] = os.environ["WEBTTS_JSONL_FILE"]

    rotate_bytes = _env_int("WEBTTS_LOG_ROTATE_BYTES")
    if rotate_bytes is not None:
        cfg["rotate_max_bytes"] = rotate_bytes
    rotate_backup = _env_int("WEBTTS_LOG_ROTATE_BACKUP")
    if rotate_backup is not None:
        cfg["rotate_backup_count"] = rotate_backup

    return cfg
