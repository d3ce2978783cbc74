"""
WebTTSService - Synthesis Entry Point.

This module provides the WebTTSService class, the provider a host platform
talks to. It holds the configured base URL, answers capability queries from
the static tables and runs a synthesis request:

    synthesize(text, voice, format)
        → validate (base URL, text, voice, format)
        → cloud.get_text_to_speech(base_url, text, voice.locale, codec)
        → AudioStream

Every call is independent; there is no cache, no retry and no shared
mutable state apart from the base URL set through configure().

Example:
    >>> from webtts.core.config import Settings
    >>> from webtts.services import WebTTSService
    >>> from webtts.tts.formats import AudioFormat
    >>>
    >>> service = WebTTSService(Settings(raw={}))
    >>> service.configure({"baseUrl": "http://tts.local/api"})
    >>> voice = service.find_voice("webtts:WebTTS_deDE")
    >>> with service.synthesize("Guten Tag", voice, AudioFormat.MP3) as stream:
    ...     data = stream.read()
"""
from __future__ import annotations

import threading
import uuid
from typing import Any, FrozenSet, Mapping, Optional

from webtts.core.config import Defaults, Settings
from webtts.core.logging import debug, fail, get_logger, info, set_request_id, success
from webtts.core.errors import TTSError
from webtts.services.validators import check_request
from webtts.tts import capabilities
from webtts.tts.capabilities import Voice
from webtts.tts.cloud import CloudAPI, WebTTSCloud
from webtts.tts.formats import AudioFormat
from webtts.tts.stream import AudioStream
from webtts.utils.timeit import timeit

_LOG = get_logger("webtts.service")

CONFIG_BASE_URL = "baseUrl"


class WebTTSService:
    """
    Text-to-speech provider backed by the WebTTS endpoint.

    Attributes:
        id: Provider identifier ("webtts").
        base_url: Configured endpoint, None until configured.

    Args:
        settings: Application settings; cloud.base_url seeds base_url.
        cloud: CloudAPI implementation. Defaults to WebTTSCloud with the
            configured timeout.
    """

    id = Defaults.SERVICE_ID

    def __init__(self, settings: Settings, cloud: Optional[CloudAPI] = None):
        self._settings = settings
        self._config = settings.get_service_config()
        self._cloud = cloud or WebTTSCloud(timeout_s=self._config.cloud.timeout_s)
        self.base_url: Optional[str] = self._config.cloud.base_url

    @property
    def cloud(self) -> CloudAPI:
        return self._cloud

    @property
    def configured(self) -> bool:
        return bool(self.base_url)

    def label(self, locale: Optional[str] = None) -> str:
        return Defaults.SERVICE_LABEL

    def configure(self, config: Optional[Mapping[str, Any]]) -> None:
        """
        Apply host configuration.

        The base URL is read from "baseUrl" (or "base_url"). A mapping
        without either key clears it; None leaves the service untouched.
        """
        if config is None:
            return
        if CONFIG_BASE_URL in config:
            value = config[CONFIG_BASE_URL]
        else:
            value = config.get("base_url")
        self.base_url = None if value is None else str(value)
        info(_LOG, "configured", base_url=self.base_url or "-")

    # ─────────────────────────────────────────────────────────────────────────
    # Capability queries
    # ─────────────────────────────────────────────────────────────────────────

    def available_locales(self) -> FrozenSet[str]:
        return capabilities.available_locales()

    def available_voices(self, locale: Optional[str] = None) -> FrozenSet[str]:
        return capabilities.available_voices(locale)

    def voices(self) -> FrozenSet[Voice]:
        return capabilities.supported_voices()

    def supported_formats(self) -> FrozenSet[AudioFormat]:
        return capabilities.supported_formats()

    def find_voice(self, uid: str) -> Optional[Voice]:
        return capabilities.find_voice(uid)

    def voice_for_locale(self, locale: str) -> Optional[Voice]:
        """The voice of a locale tag (case-insensitive), None if unsupported."""
        tag = capabilities.normalize_locale(locale)
        if tag is None:
            return None
        return Voice.create(capabilities.VOICE_LABEL, tag)

    # ─────────────────────────────────────────────────────────────────────────
    # Synthesis
    # ─────────────────────────────────────────────────────────────────────────

    def _preview(self, text: Optional[str]) -> str:
        limit = self._config.logging.text_preview_chars
        text = text or ""
        return text if len(text) <= limit else text[:limit] + "..."

    def synthesize(
        self,
        text: Optional[str],
        voice: Optional[Voice],
        requested_format: Optional[AudioFormat],
        request_id: Optional[str] = None,
    ) -> AudioStream:
        """
        Synthesize text and return the audio as an open stream.

        Args:
            text: Text to speak; surrounding whitespace is dropped.
            voice: One of voices().
            requested_format: Must share its codec with a supported format.
            request_id: Log correlation id. Generated when omitted.

        Returns:
            AudioStream the caller must close.

        Raises:
            ConfigurationError: No base URL configured.
            ValidationError: Empty text, unsupported voice or format.
            TransportError: Non-200 status or connection failure.
            RemoteServiceError: The service answered with an error text.
        """
        set_request_id(request_id or uuid.uuid4().hex[:12])
        debug(
            _LOG,
            "synthesize",
            text=self._preview(text),
            voice=getattr(voice, "uid", voice),
            format=str(requested_format),
        )

        outcome = check_request(self.base_url, text, voice, requested_format)
        if not outcome.ok:
            fail(_LOG, "rejected", code=outcome.error.code, message=outcome.error.message)
            raise outcome.error

        request = outcome.request
        try:
            with timeit("synthesize") as t:
                stream = self._cloud.get_text_to_speech(
                    request.base_url,
                    request.text,
                    request.locale,
                    request.codec,
                    request.audio_format,
                )
        except TTSError as e:
            fail(_LOG, "Could not create AudioStream: " + e.message, code=e.code)
            raise

        success(
            _LOG,
            "audio",
            locale=request.locale,
            chars=len(request.text),
            content_type=stream.content_type,
            seconds=t.timing.seconds,
        )
        return stream


# =============================================================================
# Global Service Singleton
# =============================================================================

_service: Optional[WebTTSService] = None
_service_lock = threading.Lock()


def get_service(settings: Settings) -> WebTTSService:
    """
    Get or create the global WebTTSService instance.

    Thread-safe lazy singleton. The service is created on first call
    and reused for subsequent calls.
    """
    global _service
    if _service is None:
        with _service_lock:
            if _service is None:
                _service = WebTTSService(settings)
    return _service


def reset_service() -> None:
    """
    Reset the global service instance.

    Used primarily for testing to ensure clean state between tests.
    """
    global _service
    with _service_lock:
        _service = None
