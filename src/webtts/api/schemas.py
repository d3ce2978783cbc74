"""
API Request/Response Schemas.

Pydantic models for the webtts HTTP endpoints.

Models:
    TTSRequest: Input schema for POST /v1/tts
    VoiceInfo: One entry of GET /v1/voices
    FormatInfo: One entry of GET /v1/formats
    HealthInfo: Body of GET /health

Example Request:
    {
        "text": "Hello world",
        "voice": "webtts:WebTTS_enUS",
        "codec": "MP3"
    }
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class TTSRequest(BaseModel):
    """
    Synthesis request.

    Attributes:
        text: The text to synthesize. Blank text is rejected by the service
            with TEXT_REQUIRED, not by the schema, so the error body is the
            same as for every other validation failure.
        voice: Voice uid from GET /v1/voices, or a bare locale tag ("en-us").
        codec: Requested codec; only MP3 is supported.
    """
    text: str = Field(..., description="Text to synthesize")
    voice: str = Field(
        default="webtts:WebTTS_enUS",
        description="Voice uid or locale tag",
    )
    codec: str = Field(default="MP3", description="Audio codec")


class VoiceInfo(BaseModel):
    uid: str
    label: str
    locale: str


class FormatInfo(BaseModel):
    container: Optional[str] = None
    codec: Optional[str] = None
    big_endian: Optional[bool] = None
    bit_depth: Optional[int] = None
    bit_rate: Optional[int] = None
    frequency: Optional[int] = None


class HealthInfo(BaseModel):
    ok: bool
    service: str
    label: str
    configured: bool
