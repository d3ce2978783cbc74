"""
webtts API Routes.

Endpoints:
    POST /v1/tts      - Synthesize text, streams the upstream MP3 body
    GET  /v1/voices   - Supported voices ({uid, label, locale})
    GET  /v1/locales  - Supported locale tags
    GET  /v1/formats  - Supported audio formats
    GET  /health      - Service identity and configuration state

Error Handling:
    All errors are returned as JSON with standardized format:
    {
        "ok": false,
        "error": "<ERROR_CODE>",
        "message": "<human readable message>"
    }

    HTTP status codes are mapped from TTSError codes:
        - TEXT_REQUIRED, VOICE_UNSUPPORTED, FORMAT_UNSUPPORTED -> 400
        - CONFIGURATION_MISSING -> 503
        - TRANSPORT_ERROR, REMOTE_SERVICE_ERROR -> 502
        - anything else -> 500

Example Usage:
    >>> import httpx
    >>> r = httpx.post(
    ...     "http://localhost:8000/v1/tts",
    ...     json={"text": "Hello", "voice": "webtts:WebTTS_enUS"},
    ... )
    >>> open("hello.mp3", "wb").write(r.content)
"""
from __future__ import annotations

import uuid
from typing import Iterator, List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.background import BackgroundTask

from webtts.api.dependencies import get_tts_service
from webtts.api.schemas import FormatInfo, HealthInfo, TTSRequest, VoiceInfo
from webtts.core.errors import ErrorCode, TTSError
from webtts.core.logging import error, get_logger, set_request_id
from webtts.services.tts_service import WebTTSService
from webtts.tts.formats import AudioFormat
from webtts.tts.stream import AudioStream

router = APIRouter()

_LOG = get_logger("webtts.api")

_STATUS_MAP = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.TEXT_REQUIRED: 400,
    ErrorCode.VOICE_UNSUPPORTED: 400,
    ErrorCode.FORMAT_UNSUPPORTED: 400,
    ErrorCode.CONFIGURATION_MISSING: 503,
    ErrorCode.TRANSPORT_ERROR: 502,
    ErrorCode.REMOTE_SERVICE_ERROR: 502,
}


def _error_response(err: TTSError, rid: str) -> JSONResponse:
    """Create a standardized JSON error response from a TTSError."""
    return JSONResponse(
        status_code=_STATUS_MAP.get(err.code, 500),
        content=err.to_dict(),
        headers={"X-Request-Id": rid},
    )


def _body(stream: AudioStream) -> Iterator[bytes]:
    try:
        yield from stream.iter_chunks()
    finally:
        stream.close()


@router.post("/v1/tts")
def tts_v1(
    req: TTSRequest,
    service: WebTTSService = Depends(get_tts_service),
):
    """
    Synthesize text and stream the audio back.

    The voice may be given as uid ("webtts:WebTTS_deDE") or as locale tag
    ("de-de"). The upstream response is closed once the body has been sent.

    Example:
        curl -X POST http://localhost:8000/v1/tts \\
            -H "Content-Type: application/json" \\
            -d '{"text": "Hallo Welt", "voice": "de-de"}' \\
            --output speech.mp3
    """
    rid = str(uuid.uuid4())[:12]
    set_request_id(rid)

    voice = service.find_voice(req.voice) or service.voice_for_locale(req.voice)

    try:
        stream = service.synthesize(
            req.text,
            voice,
            AudioFormat.from_codec(req.codec),
            request_id=rid,
        )
    except TTSError as e:
        return _error_response(e, rid)
    except Exception:
        # Log internally, don't expose details
        error(_LOG, "internal_error", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "ok": False,
                "error": ErrorCode.INTERNAL_ERROR,
                "message": "Internal server error",
                "request_id": rid,
            },
            headers={"X-Request-Id": rid},
        )

    return StreamingResponse(
        _body(stream),
        media_type="audio/mpeg",
        headers={"X-Request-Id": rid},
        background=BackgroundTask(stream.close),
    )


@router.get("/v1/voices", response_model=List[VoiceInfo])
def voices(service: WebTTSService = Depends(get_tts_service)):
    return [v.to_dict() for v in sorted(service.voices(), key=lambda v: v.uid)]


@router.get("/v1/locales", response_model=List[str])
def locales(service: WebTTSService = Depends(get_tts_service)):
    return sorted(service.available_locales())


@router.get("/v1/formats", response_model=List[FormatInfo])
def formats(service: WebTTSService = Depends(get_tts_service)):
    return [f.to_dict() for f in service.supported_formats()]


@router.get("/health", response_model=HealthInfo)
def health(service: WebTTSService = Depends(get_tts_service)):
    """
    Health check for load balancers and probes.

    "configured" is False until a base URL is set; synthesis requests
    fail with 503 in that state.
    """
    return {
        "ok": True,
        "service": service.id,
        "label": service.label(),
        "configured": service.configured,
    }
