"""
Tests for WebTTSService - the synthesis entry point.

Tests cover:
- Initialization from settings
- configure() semantics (baseUrl, base_url, absent key, None)
- Capability queries
- synthesize() validation happens before any network call
- synthesize() forwards locale tag and codec to the cloud client
- Cloud errors propagate unchanged
- get_service() / reset_service() singleton
"""
from unittest.mock import MagicMock

import httpx
import pytest

from webtts.core.config import ConfigValidationError, Settings
from webtts.core.errors import (
    ConfigurationError,
    ErrorCode,
    RemoteServiceError,
    TransportError,
    ValidationError,
)
from webtts.services.tts_service import WebTTSService, get_service, reset_service
from webtts.tts.capabilities import Voice
from webtts.tts.cloud import CloudAPI, WebTTSCloud
from webtts.tts.formats import AudioFormat
from webtts.tts.stream import AudioStream

BASE_URL = "http://tts.local/api"
EN_US = Voice.create("WebTTS", "en-US")


@pytest.fixture
def mock_cloud():
    """CloudAPI double returning a sentinel stream."""
    cloud = MagicMock(spec=CloudAPI)
    cloud.get_text_to_speech.return_value = MagicMock(spec=AudioStream, content_type="audio/mpeg")
    return cloud


@pytest.fixture
def service(mock_cloud):
    return WebTTSService(Settings(raw={"cloud": {"base_url": BASE_URL}}), cloud=mock_cloud)


class TestInit:
    """Tests for construction."""

    def test_base_url_from_settings(self, service):
        assert service.base_url == BASE_URL
        assert service.configured is True

    def test_unconfigured(self, mock_cloud):
        service = WebTTSService(Settings(raw={}), cloud=mock_cloud)
        assert service.base_url is None
        assert service.configured is False

    def test_identity(self, service):
        assert service.id == "webtts"
        assert service.label() == "WebTTS Text-to-Speech Engine"
        assert service.label("de-DE") == "WebTTS Text-to-Speech Engine"

    def test_default_cloud_uses_timeout(self):
        service = WebTTSService(Settings(raw={"cloud": {"timeout_s": 4}}))
        assert isinstance(service.cloud, WebTTSCloud)
        assert service.cloud.timeout_s == 4.0

    def test_invalid_settings_rejected(self):
        with pytest.raises(ConfigValidationError):
            WebTTSService(Settings(raw={"cloud": {"timeout_s": -1}}))


class TestConfigure:
    """Tests for configure()."""

    def test_base_url_key(self, service):
        service.configure({"baseUrl": "http://other/tts"})
        assert service.base_url == "http://other/tts"

    def test_snake_case_key(self, service):
        service.configure({"base_url": "http://snake/tts"})
        assert service.base_url == "http://snake/tts"

    def test_absent_key_clears(self, service):
        service.configure({"unrelated": 1})
        assert service.base_url is None
        assert service.configured is False

    def test_none_config_ignored(self, service):
        service.configure(None)
        assert service.base_url == BASE_URL

    def test_value_converted_to_string(self, service):
        class Url:
            def __str__(self):
                return "http://obj/tts"

        service.configure({"baseUrl": Url()})
        assert service.base_url == "http://obj/tts"


class TestCapabilities:
    """Tests for capability queries."""

    def test_locales(self, service):
        assert "it-IT" in service.available_locales()

    def test_voices_per_locale(self, service):
        assert service.available_voices("en-us") == frozenset({"WebTTS"})
        assert service.available_voices("zh-CN") == frozenset()
        assert service.available_voices() == frozenset({"WebTTS"})

    def test_voices(self, service):
        assert EN_US in service.voices()

    def test_formats(self, service):
        assert service.supported_formats() == frozenset({AudioFormat.MP3})

    def test_find_voice(self, service):
        assert service.find_voice(EN_US.uid) == EN_US
        assert service.find_voice("nope") is None

    def test_voice_for_locale(self, service):
        assert service.voice_for_locale("en-us") == EN_US
        assert service.voice_for_locale("xx") is None

    def test_queries_do_not_touch_cloud(self, service, mock_cloud):
        service.available_locales()
        service.voices()
        service.supported_formats()
        mock_cloud.get_text_to_speech.assert_not_called()


class TestSynthesize:
    """Tests for synthesize()."""

    def test_happy_path(self, service, mock_cloud):
        stream = service.synthesize("  Hello world  ", EN_US, AudioFormat.MP3)

        assert stream is mock_cloud.get_text_to_speech.return_value
        mock_cloud.get_text_to_speech.assert_called_once_with(
            BASE_URL, "Hello world", "en-US", "MP3", AudioFormat.MP3,
        )

    def test_requested_codec_forwarded(self, service, mock_cloud):
        fmt = AudioFormat(codec="mp3", frequency=22050)
        service.synthesize("Hi", EN_US, fmt)
        args = mock_cloud.get_text_to_speech.call_args.args
        assert args[3] == "mp3"
        assert args[4] is fmt

    def test_missing_base_url(self, mock_cloud):
        service = WebTTSService(Settings(raw={}), cloud=mock_cloud)
        with pytest.raises(ConfigurationError) as exc_info:
            service.synthesize("Hello", EN_US, AudioFormat.MP3)
        assert exc_info.value.code == ErrorCode.CONFIGURATION_MISSING
        mock_cloud.get_text_to_speech.assert_not_called()

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_empty_text(self, service, mock_cloud, text):
        with pytest.raises(ValidationError) as exc_info:
            service.synthesize(text, EN_US, AudioFormat.MP3)
        assert exc_info.value.code == ErrorCode.TEXT_REQUIRED
        mock_cloud.get_text_to_speech.assert_not_called()

    def test_unsupported_voice(self, service, mock_cloud):
        with pytest.raises(ValidationError) as exc_info:
            service.synthesize("Hello", Voice.create("WebTTS", "nl-NL"), AudioFormat.MP3)
        assert exc_info.value.code == ErrorCode.VOICE_UNSUPPORTED
        mock_cloud.get_text_to_speech.assert_not_called()

    def test_unsupported_format(self, service, mock_cloud):
        with pytest.raises(ValidationError) as exc_info:
            service.synthesize("Hello", EN_US, AudioFormat(codec="PCM_SIGNED", container="WAVE"))
        assert exc_info.value.code == ErrorCode.FORMAT_UNSUPPORTED
        mock_cloud.get_text_to_speech.assert_not_called()

    @pytest.mark.parametrize("error", [
        TransportError("Could not read from service: HTTP code503", status_code=503),
        RemoteServiceError("invalid key"),
    ])
    def test_cloud_errors_propagate(self, service, mock_cloud, error):
        mock_cloud.get_text_to_speech.side_effect = error
        with pytest.raises(type(error)) as exc_info:
            service.synthesize("Hello", EN_US, AudioFormat.MP3)
        assert exc_info.value is error

    def test_end_to_end_with_http(self):
        """Real WebTTSCloud against a mock transport."""
        seen = []

        def handler(request):
            seen.append(request.url)
            return httpx.Response(200, headers={"Content-Type": "audio/mpeg"}, content=b"mp3-data")

        client = httpx.Client(transport=httpx.MockTransport(handler))
        service = WebTTSService(
            Settings(raw={"cloud": {"base_url": BASE_URL}}),
            cloud=WebTTSCloud(client=client),
        )

        with service.synthesize("Guten Tag", Voice.create("WebTTS", "de-DE"), AudioFormat.MP3) as stream:
            assert stream.read() == b"mp3-data"

        assert len(seen) == 1
        assert seen[0].params["lng"] == "de-DE"
        assert seen[0].params["msg"] == "Guten Tag"


class TestSingleton:
    """Tests for get_service() / reset_service()."""

    def test_same_instance(self):
        reset_service()
        try:
            settings = Settings(raw={})
            assert get_service(settings) is get_service(settings)
        finally:
            reset_service()

    def test_reset_creates_new_instance(self):
        reset_service()
        try:
            first = get_service(Settings(raw={}))
            reset_service()
            assert get_service(Settings(raw={})) is not first
        finally:
            reset_service()
