"""
FastAPI Dependency Injection Providers.

Dependency hierarchy:
    1. get_settings() - Loads and caches application configuration
    2. get_tts_service() - Creates/returns the singleton WebTTSService

Usage in Route Handlers:
    from fastapi import Depends
    from webtts.api.dependencies import get_tts_service

    @router.get("/v1/voices")
    def voices(service: WebTTSService = Depends(get_tts_service)):
        return sorted(v.uid for v in service.voices())

Tests replace get_tts_service through app.dependency_overrides.
"""
from __future__ import annotations

from functools import lru_cache

from webtts.core.config import Settings, load_settings_or_env
from webtts.services.tts_service import WebTTSService, get_service


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load and cache application settings.

    Reads the file named by WEBTTS_SETTINGS (default config/settings.yaml).
    Without a settings file the environment overrides alone are used, so
    WEBTTS_BASE_URL is enough to run the service.
    """
    return load_settings_or_env()


def get_tts_service() -> WebTTSService:
    """Get the singleton WebTTSService instance."""
    return get_service(get_settings())
