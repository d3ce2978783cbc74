"""
WebTTS Cloud Client.

Turns a (text, locale, codec) request into a GET against the configured
endpoint and classifies what comes back:

    GET {base_url}?lng={locale}&msg={form-encoded text}

    status != 200                  -> TransportError(status_code=status)
    200 + Content-Type text/plain  -> RemoteServiceError(first 256 body bytes)
    200 + anything else            -> AudioStream (open, owned by the caller)

The service answers 200 even for errors and puts the error text in a
text/plain body, which is why the content type decides the outcome.

The codec argument is accepted but not sent; the endpoint has no codec
parameter and always answers MP3.

Example:
    >>> cloud = WebTTSCloud(timeout_s=10)
    >>> cloud.build_request_url("http://x/tts", "hi", "en-us", "mp3")
    'http://x/tts?lng=en-us&msg=hi'
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import FrozenSet, Optional
from urllib.parse import quote_plus

import httpx

from webtts.core.config import Defaults
from webtts.core.errors import RemoteServiceError, TransportError
from webtts.core.logging import debug, error, get_logger, trace, verbose
from webtts.tts import capabilities
from webtts.tts.formats import AudioFormat
from webtts.tts.stream import AudioStream
from webtts.utils.timeit import timeit

_LOG = get_logger("webtts.cloud")


def encode_text(text: str) -> str:
    """
    Form-encode text for the msg query parameter.

    Space becomes "+", alphanumerics and "*-._" stay as they are,
    everything else is %XX of its UTF-8 bytes. Text that cannot be
    encoded as UTF-8 (lone surrogates) is logged and returned unchanged.
    """
    try:
        return quote_plus(text, safe="*", encoding="utf-8", errors="strict").replace("~", "%7E")
    except UnicodeEncodeError as e:
        error(_LOG, "encoding_fallback", reason=str(e))
        return text


class CloudAPI(ABC):
    """Contract of a text-to-speech cloud endpoint."""

    @abstractmethod
    def available_locales(self) -> FrozenSet[str]:
        ...

    @abstractmethod
    def available_voices(self, locale: Optional[str] = None) -> FrozenSet[str]:
        ...

    @abstractmethod
    def build_request_url(self, base_url: str, text: str, locale: str, codec: Optional[str]) -> str:
        ...

    @abstractmethod
    def get_text_to_speech(
        self,
        base_url: str,
        text: str,
        locale: str,
        codec: Optional[str],
        audio_format: AudioFormat = AudioFormat.MP3,
    ) -> AudioStream:
        """
        Synthesize text and return the audio as an open stream.

        Raises:
            TransportError: Non-200 status or no response at all.
            RemoteServiceError: The service reported an error in-band.
        """


class WebTTSCloud(CloudAPI):
    """
    httpx implementation of CloudAPI.

    Args:
        timeout_s: Per-request timeout in seconds.
        client: Shared httpx.Client. When None, a client is created per call
            and closed together with the returned AudioStream.
        error_body_bytes: Bytes of a text/plain body read as error message.
    """

    def __init__(
        self,
        timeout_s: float = Defaults.CLOUD_TIMEOUT_S,
        client: Optional[httpx.Client] = None,
        error_body_bytes: int = Defaults.CLOUD_ERROR_BODY_BYTES,
    ):
        self.timeout_s = timeout_s
        self._client = client
        self.error_body_bytes = error_body_bytes

    def available_locales(self) -> FrozenSet[str]:
        return capabilities.available_locales()

    def available_voices(self, locale: Optional[str] = None) -> FrozenSet[str]:
        return capabilities.available_voices(locale)

    def build_request_url(self, base_url: str, text: str, locale: str, codec: Optional[str] = None) -> str:
        # codec is not part of the query string
        return base_url + "?lng=" + locale + "&msg=" + encode_text(text)

    def get_text_to_speech(
        self,
        base_url: str,
        text: str,
        locale: str,
        codec: Optional[str] = None,
        audio_format: AudioFormat = AudioFormat.MP3,
    ) -> AudioStream:
        url = self.build_request_url(base_url, text, locale, codec)
        return self.fetch_audio(url, audio_format)

    def fetch_audio(self, url: str, audio_format: AudioFormat = AudioFormat.MP3) -> AudioStream:
        """
        GET url and classify the response.

        On success the response body is left unread and handed to the
        returned AudioStream. On every failure the response (and a client
        created for this call) is closed before the error is raised.
        """
        owned = self._client is None
        client = httpx.Client(timeout=self.timeout_s) if owned else self._client
        debug(_LOG, "call", url=url)

        try:
            with timeit("fetch") as t:
                request = client.build_request("GET", url, timeout=self.timeout_s)
                response = client.send(request, stream=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            if owned:
                client.close()
            error(_LOG, "call_failed", url=url, reason=str(e))
            raise TransportError(f"Could not read from service: {e}") from e

        handed_off = False
        try:
            status = response.status_code
            verbose(_LOG, "response", status=status, seconds=t.timing.seconds)
            if status != httpx.codes.OK:
                error(_LOG, "call_failed", url=url, status=status)
                raise TransportError(
                    f"Could not read from service: HTTP code{status}",
                    status_code=status,
                )

            for name, value in response.headers.items():
                trace(_LOG, "response_header", header=name, value=value)

            content_type = response.headers.get("Content-Type", "")
            if "text/plain" in content_type:
                message = self._read_error_body(response)
                error(_LOG, "Could not read audio content, service return an error: " + message)
                raise RemoteServiceError(message, details={"content_type": content_type})

            stream = AudioStream(response, audio_format, client=client if owned else None)
            handed_off = True
            return stream
        finally:
            if not handed_off:
                response.close()
                if owned:
                    client.close()

    def _read_error_body(self, response: httpx.Response) -> str:
        # One read only; the service may hold the connection open after a short error text.
        try:
            head = next(response.iter_bytes(), b"")
        except httpx.HTTPError as e:
            raise TransportError(f"Could not read audio content: {e}", status_code=response.status_code) from e
        return head[:self.error_body_bytes].decode("utf-8", errors="replace")
