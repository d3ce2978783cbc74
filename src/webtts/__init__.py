"""
webtts: Web Text-to-Speech Client Adapter.

Forwards text to a third-party HTTP text-to-speech endpoint and hands the
answer back as an audio stream. The endpoint is queried with

    GET {base_url}?lng={locale}&msg={url-encoded text}

and reports errors in-band: HTTP 200 with a text/plain body.

Surfaces:
    - Python API: webtts.services.WebTTSService
    - HTTP API: webtts.main:app (FastAPI)
    - Command line: webtts "Hello world" --locale en-US --out hello.mp3

Example Usage:
    >>> from webtts.core.config import Settings
    >>> from webtts.services import WebTTSService
    >>> from webtts.tts.formats import AudioFormat
    >>>
    >>> service = WebTTSService(Settings(raw={"cloud": {"base_url": "http://tts.local/api"}}))
    >>> voice = service.find_voice("webtts:WebTTS_enUS")
    >>> with service.synthesize("Hello", voice, AudioFormat.MP3) as stream:
    ...     audio = stream.read()
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
