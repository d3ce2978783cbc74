"""
Input Validation for Synthesis Requests.

Validation happens before any network call. The checks run in a fixed
order and the first failure wins:

    1. Base URL configured        -> ConfigurationError (CONFIGURATION_MISSING)
    2. Text non-empty after trim  -> ValidationError (TEXT_REQUIRED)
    3. Voice supported            -> ValidationError (VOICE_UNSUPPORTED)
    4. Audio format compatible    -> ValidationError (FORMAT_UNSUPPORTED)

Individual validators raise. check_request() runs all of them and returns
an explicit Validation outcome instead, carrying either the accepted
SynthesisRequest or the error; callers decide whether to raise it.

Usage:
    from webtts.services.validators import check_request

    outcome = check_request(base_url, text, voice, requested_format)
    if not outcome.ok:
        raise outcome.error
    request = outcome.request
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from webtts.core.errors import ConfigurationError, ErrorCode, TTSError, ValidationError
from webtts.core.logging import get_logger, verbose
from webtts.tts import capabilities
from webtts.tts.capabilities import Voice
from webtts.tts.formats import AudioFormat

_LOG = get_logger("webtts.validators")


@dataclass(frozen=True)
class SynthesisRequest:
    """
    A request that passed validation.

    Attributes:
        text: Trimmed, non-empty text.
        locale: Canonical language tag of the voice ("en-US").
        codec: Codec of the requested format ("MP3").
        base_url: Endpoint the request goes to.
        audio_format: The requested format as passed in.
    """
    text: str
    locale: str
    codec: str
    base_url: str
    audio_format: AudioFormat


@dataclass(frozen=True)
class Validation:
    """Outcome of check_request(): exactly one of request/error is set."""
    request: Optional[SynthesisRequest] = None
    error: Optional[TTSError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def validate_base_url(base_url: Optional[str]) -> str:
    if not base_url:
        raise ConfigurationError("Missing base URL, configure it first before using")
    return base_url


def validate_text(text: Optional[str]) -> str:
    """
    Validate text input.

    Returns:
        The trimmed text.

    Raises:
        ValidationError: If text is None or blank.
    """
    text = text.strip() if text else ""
    if not text:
        raise ValidationError("The passed text is null or empty", ErrorCode.TEXT_REQUIRED)
    return text


def validate_voice(voice: Optional[Voice]) -> Voice:
    if voice is None or voice not in capabilities.supported_voices():
        raise ValidationError("The passed voice is unsupported", ErrorCode.VOICE_UNSUPPORTED)
    return voice


def validate_audio_format(requested_format: Optional[AudioFormat]) -> AudioFormat:
    if not capabilities.is_supported_format(requested_format):
        raise ValidationError("The passed AudioFormat is unsupported", ErrorCode.FORMAT_UNSUPPORTED)
    return requested_format


def check_request(
    base_url: Optional[str],
    text: Optional[str],
    voice: Optional[Voice],
    requested_format: Optional[AudioFormat],
) -> Validation:
    """
    Run all checks in order and return the outcome.

    Never raises for invalid input; the failure is returned in
    Validation.error.
    """
    try:
        url = validate_base_url(base_url)
        clean_text = validate_text(text)
        checked_voice = validate_voice(voice)
        fmt = validate_audio_format(requested_format)
    except (ConfigurationError, ValidationError) as e:
        verbose(_LOG, "rejected", code=e.code)
        return Validation(error=e)

    return Validation(request=SynthesisRequest(
        text=clean_text,
        locale=checked_voice.locale,
        codec=fmt.codec,
        base_url=url,
        audio_format=fmt,
    ))
