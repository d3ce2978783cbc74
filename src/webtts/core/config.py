"""
Configuration Management for webtts.

This module provides centralized configuration handling with:
    - Default values (Defaults class)
    - Dataclass-based configuration objects
    - YAML file loading with environment variable overrides
    - Validation with meaningful error messages

Configuration Hierarchy (highest priority first):
    1. Environment variables (WEBTTS_BASE_URL, WEBTTS_TIMEOUT_S, ...)
    2. YAML config file (config/settings.yaml)
    3. Defaults class values

The base URL is optional on purpose: a service without one starts fine and
rejects every synthesis request with ConfigurationError.

Example settings.yaml:
    cloud:
      base_url: http://tts.example.com/api/tts
      timeout_s: 30

    logging:
      level: 2  # NORMAL
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional
import os
import yaml


class ConfigValidationError(Exception):
    """
    Raised when configuration validation fails.

    This exception is thrown when a configuration value is outside
    acceptable bounds or of the wrong type.
    """
    pass


class Defaults:
    """
    Centralized default configuration values.

    Sections:
        - Cloud: Remote text-to-speech endpoint
        - Logging: Text preview length
        - Service: Identity reported to the host platform
    """

    # ─────────────────────────────────────────────────────────────────────────
    # Cloud Endpoint
    # ─────────────────────────────────────────────────────────────────────────
    CLOUD_BASE_URL: Optional[str] = None    # No endpoint until configured
    CLOUD_TIMEOUT_S = 30.0                  # Per-request HTTP timeout
    CLOUD_ERROR_BODY_BYTES = 256            # Bytes read from a text/plain error

    # ─────────────────────────────────────────────────────────────────────────
    # Logging
    # ─────────────────────────────────────────────────────────────────────────
    LOGGING_TEXT_PREVIEW_CHARS = 80     # Characters to show in text preview

    # ─────────────────────────────────────────────────────────────────────────
    # Service Identity
    # ─────────────────────────────────────────────────────────────────────────
    SERVICE_ID = "webtts"
    SERVICE_LABEL = "WebTTS Text-to-Speech Engine"


@dataclass
class CloudConfig:
    """
    Remote endpoint configuration.

    base_url is the full endpoint path; the query string (?lng=..&msg=..)
    is appended per request.
    """
    base_url: Optional[str] = Defaults.CLOUD_BASE_URL
    timeout_s: float = Defaults.CLOUD_TIMEOUT_S


@dataclass
class LoggingConfig:
    """
    Logging options used by the service.

    The log level itself is read by webtts.core.logging (logging.level or
    WEBTTS_LOG_LEVEL).
    """
    text_preview_chars: int = Defaults.LOGGING_TEXT_PREVIEW_CHARS


@dataclass
class WebTTSConfig:
    """
    Validated configuration for WebTTSService.

    Usage:
        settings = load_settings("config/settings.yaml")
        config = WebTTSConfig.from_settings(settings)
        print(config.cloud.timeout_s)
    """
    cloud: CloudConfig = field(default_factory=CloudConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "WebTTSConfig":
        """
        Create WebTTSConfig from Settings with validation.

        Args:
            settings: Raw Settings object loaded from YAML.

        Returns:
            Validated WebTTSConfig instance.

        Raises:
            ConfigValidationError: If any value fails validation.
        """
        raw = settings.raw

        # ─────────────────────────────────────────────────────────────────────
        # Cloud configuration
        # ─────────────────────────────────────────────────────────────────────
        cloud_raw = raw.get("cloud", {}) or {}
        try:
            timeout_s = float(cloud_raw.get("timeout_s", Defaults.CLOUD_TIMEOUT_S))
        except (TypeError, ValueError):
            raise ConfigValidationError(
                f"cloud.timeout_s must be a number, got {cloud_raw.get('timeout_s')!r}"
            )
        cloud = CloudConfig(base_url=settings.base_url, timeout_s=timeout_s)
        cls._validate_positive("cloud.timeout_s", cloud.timeout_s)

        # ─────────────────────────────────────────────────────────────────────
        # Logging configuration
        # ─────────────────────────────────────────────────────────────────────
        logging_raw = raw.get("logging", {}) or {}
        logging_cfg = LoggingConfig(
            text_preview_chars=int(logging_raw.get("text_preview_chars", Defaults.LOGGING_TEXT_PREVIEW_CHARS)),
        )
        cls._validate_non_negative("logging.text_preview_chars", logging_cfg.text_preview_chars)

        return cls(cloud=cloud, logging=logging_cfg)

    @staticmethod
    def _validate_positive(name: str, value: int | float) -> None:
        """Validate that a value is positive (> 0)."""
        if value <= 0:
            raise ConfigValidationError(f"{name} must be positive, got {value}")

    @staticmethod
    def _validate_non_negative(name: str, value: int | float) -> None:
        """Validate that a value is non-negative (>= 0)."""
        if value < 0:
            raise ConfigValidationError(f"{name} must be non-negative, got {value}")


@dataclass(frozen=True)
class Settings:
    """
    Immutable settings container loaded from YAML.

    This is the raw settings object before validation. Use
    get_service_config() to get validated WebTTSConfig.

    Attributes:
        raw: Dictionary of raw configuration values.
    """
    raw: Dict[str, Any]

    @property
    def base_url(self) -> Optional[str]:
        """Get the remote endpoint, or None if not configured."""
        value = (self.raw.get("cloud", {}) or {}).get("base_url")
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    def get_service_config(self) -> WebTTSConfig:
        """
        Get validated WebTTSConfig from these settings.

        Raises:
            ConfigValidationError: If validation fails.
        """
        return WebTTSConfig.from_settings(self)


def _apply_env_overrides(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Apply WEBTTS_* environment overrides in place."""
    base_url = os.getenv("WEBTTS_BASE_URL")
    if base_url:
        raw.setdefault("cloud", {})["base_url"] = base_url
    timeout = os.getenv("WEBTTS_TIMEOUT_S")
    if timeout:
        raw.setdefault("cloud", {})["timeout_s"] = timeout
    return raw


def load_settings(path: str = "config/settings.yaml") -> Settings:
    """
    Load settings from a YAML configuration file.

    Environment variable overrides:
        - WEBTTS_BASE_URL: Override cloud.base_url
        - WEBTTS_TIMEOUT_S: Override cloud.timeout_s

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Settings object with loaded configuration.

    Raises:
        FileNotFoundError: If the settings file doesn't exist.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"settings file not found: {p.resolve()}")

    with p.open("r", encoding="utf-8") as f:
        raw: Dict[str, Any] = yaml.safe_load(f) or {}

    return Settings(raw=_apply_env_overrides(raw))


def settings_from_env() -> Settings:
    """Build Settings from environment overrides alone (no settings file)."""
    return Settings(raw=_apply_env_overrides({}))


def load_settings_or_env(path: Optional[str] = None) -> Settings:
    """
    Load the settings file, or fall back to environment overrides alone.

    Args:
        path: Settings file. Defaults to WEBTTS_SETTINGS or
            config/settings.yaml.
    """
    path = path or os.getenv("WEBTTS_SETTINGS", "config/settings.yaml")
    try:
        return load_settings(path)
    except FileNotFoundError:
        return settings_from_env()
