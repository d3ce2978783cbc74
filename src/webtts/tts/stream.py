"""
Audio Stream over an Open HTTP Response.

AudioStream hands the body of a successful synthesis call to the caller
without buffering it. The caller owns the stream and must close it, either
explicitly or through the context manager:

    with service.synthesize("Hello", voice, AudioFormat.MP3) as stream:
        for chunk in stream.iter_chunks():
            out.write(chunk)

Closing releases the response and, when the cloud client created a
dedicated httpx.Client for the call, that client as well.
"""
from __future__ import annotations

from typing import Iterator, Optional

import httpx

from webtts.core.errors import TransportError
from webtts.tts.formats import AudioFormat


class AudioStream:
    """
    Readable audio body of one synthesis response.

    Attributes:
        audio_format: Format the caller requested.
        content_type: Content-Type reported by the remote service.
    """

    def __init__(
        self,
        response: httpx.Response,
        audio_format: AudioFormat,
        client: Optional[httpx.Client] = None,
    ):
        self._response = response
        self._client = client
        self._chunks: Optional[Iterator[bytes]] = None
        self._buffer = bytearray()
        self._closed = False
        self.audio_format = audio_format

    @property
    def content_type(self) -> str:
        return self._response.headers.get("Content-Type", "")

    @property
    def length(self) -> Optional[int]:
        """Content-Length if the service sent one."""
        value = self._response.headers.get("Content-Length")
        if value is None or not value.isdigit():
            return None
        return int(value)

    @property
    def closed(self) -> bool:
        return self._closed

    def _next_chunk(self) -> bytes:
        if self._chunks is None:
            self._chunks = self._response.iter_bytes()
        try:
            return next(self._chunks, b"")
        except httpx.HTTPError as e:
            raise TransportError(f"Could not read audio content: {e}") from e

    def read(self, size: int = -1) -> bytes:
        """
        Read up to size bytes, or everything left when size is negative.

        Returns b"" at end of stream.

        Raises:
            ValueError: If the stream is closed.
            TransportError: If the connection fails mid-body.
        """
        if self._closed:
            raise ValueError("I/O operation on closed audio stream")

        if size < 0:
            while True:
                chunk = self._next_chunk()
                if not chunk:
                    break
                self._buffer.extend(chunk)
            data = bytes(self._buffer)
            self._buffer.clear()
            return data

        while len(self._buffer) < size:
            chunk = self._next_chunk()
            if not chunk:
                break
            self._buffer.extend(chunk)
        data = bytes(self._buffer[:size])
        del self._buffer[:size]
        return data

    def iter_chunks(self) -> Iterator[bytes]:
        """Yield the remaining body as it arrives (TransportError if the connection drops)."""
        if self._buffer:
            data = bytes(self._buffer)
            self._buffer.clear()
            yield data
        while not self._closed:
            chunk = self._next_chunk()
            if not chunk:
                break
            yield chunk

    def __iter__(self) -> Iterator[bytes]:
        return self.iter_chunks()

    def close(self) -> None:
        """Release the response (and owned client). Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        try:
            self._response.close()
        finally:
            if self._client is not None:
                self._client.close()

    def __enter__(self) -> "AudioStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<AudioStream {self.content_type or '?'} {state}>"
