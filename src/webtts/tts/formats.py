"""
Audio Format Descriptors.

An AudioFormat describes what a consumer asks for or what the remote
service delivers. Compatibility is decided on the codec family alone;
sample rate, bit depth and bit rate are informational.

Example:
    >>> AudioFormat.MP3.is_compatible(AudioFormat(codec="mp3", frequency=22050))
    True
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional

CONTAINER_NONE = "NONE"
CODEC_MP3 = "MP3"


@dataclass(frozen=True)
class AudioFormat:
    """
    Immutable audio format description.

    Attributes:
        container: Container name ("NONE" for a raw codec stream).
        codec: Codec name ("MP3", ...). Compared case-insensitively.
        big_endian: Byte order, None when not applicable.
        bit_depth: Bits per sample.
        bit_rate: Bits per second, None when not fixed.
        frequency: Sample rate in Hz.
    """
    container: Optional[str] = None
    codec: Optional[str] = None
    big_endian: Optional[bool] = None
    bit_depth: Optional[int] = None
    bit_rate: Optional[int] = None
    frequency: Optional[int] = None

    MP3: ClassVar["AudioFormat"]

    def is_compatible(self, other: Optional["AudioFormat"]) -> bool:
        """True if other carries the same codec as this format."""
        if other is None or self.codec is None or other.codec is None:
            return False
        return self.codec.upper() == other.codec.upper()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "container": self.container,
            "codec": self.codec,
            "big_endian": self.big_endian,
            "bit_depth": self.bit_depth,
            "bit_rate": self.bit_rate,
            "frequency": self.frequency,
        }

    @classmethod
    def from_codec(cls, codec: str) -> "AudioFormat":
        """Build a minimal format from a codec name (CLI and API input)."""
        return cls(codec=codec.strip().upper())

    def __str__(self) -> str:
        return (
            f"AudioFormat[codec={self.codec}, container={self.container}, "
            f"bitDepth={self.bit_depth}, bitRate={self.bit_rate}, frequency={self.frequency}]"
        )


AudioFormat.MP3 = AudioFormat(
    container=CONTAINER_NONE,
    codec=CODEC_MP3,
    big_endian=None,
    bit_depth=16,
    bit_rate=None,
    frequency=44000,
)
