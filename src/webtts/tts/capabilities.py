"""
Static Capability Tables.

The remote service is never asked what it supports; these tables are the
adapter's fixed claim:

    Locales:  en-US, en-GB, de-DE, es-ES, fr-FR, it-IT
    Voices:   one synthetic voice labelled "WebTTS" per locale
    Formats:  MP3, 16 bit, 44000 Hz, no container, no fixed bit rate

Locale tags are stored in canonical form ("en-US") and looked up
case-insensitively, so "en-us" and "EN-us" resolve to the same entry.
All lookups are pure and return immutable sets.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet, Optional

from webtts.tts.formats import AudioFormat

VOICE_LABEL = "WebTTS"
UID_PREFIX = "webtts"

SUPPORTED_LOCALES: FrozenSet[str] = frozenset({
    "en-US",
    "en-GB",
    "de-DE",
    "es-ES",
    "fr-FR",
    "it-IT",
})

SUPPORTED_FORMATS: FrozenSet[AudioFormat] = frozenset({AudioFormat.MP3})

_LOCALE_INDEX = {tag.lower(): tag for tag in SUPPORTED_LOCALES}
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


@dataclass(frozen=True)
class Voice:
    """
    A selectable voice.

    Attributes:
        uid: Stable identifier, e.g. "webtts:WebTTS_enUS".
        label: Display label ("WebTTS").
        locale: Canonical language tag ("en-US").
    """
    uid: str
    label: str
    locale: str

    @classmethod
    def create(cls, label: str, locale: str) -> "Voice":
        uid = f"{UID_PREFIX}:{_NON_ALNUM.sub('', label)}_{_NON_ALNUM.sub('', locale)}"
        return cls(uid=uid, label=label, locale=locale)

    def to_dict(self) -> dict:
        return {"uid": self.uid, "label": self.label, "locale": self.locale}


def normalize_locale(locale: Optional[str]) -> Optional[str]:
    """
    Map a language tag to its canonical supported form.

    Accepts "_" as separator ("en_us"). Returns None if unsupported.
    """
    if not locale:
        return None
    key = locale.strip().replace("_", "-").lower()
    return _LOCALE_INDEX.get(key)


SUPPORTED_VOICES: FrozenSet[Voice] = frozenset(
    Voice.create(VOICE_LABEL, tag) for tag in SUPPORTED_LOCALES
)


def available_locales() -> FrozenSet[str]:
    return SUPPORTED_LOCALES


def available_voices(locale: Optional[str] = None) -> FrozenSet[str]:
    """
    Voice labels, optionally for a single locale.

    Args:
        locale: Language tag. None returns the labels of every voice.

    Returns:
        {"WebTTS"} for a supported locale, empty set otherwise.
    """
    if locale is None:
        return frozenset(v.label for v in SUPPORTED_VOICES)
    if normalize_locale(locale) is None:
        return frozenset()
    return frozenset({VOICE_LABEL})


def supported_voices() -> FrozenSet[Voice]:
    return SUPPORTED_VOICES


def supported_formats() -> FrozenSet[AudioFormat]:
    return SUPPORTED_FORMATS


def find_voice(uid: str) -> Optional[Voice]:
    """Look up a voice by uid (exact match)."""
    for voice in SUPPORTED_VOICES:
        if voice.uid == uid:
            return voice
    return None


def is_supported_format(requested: Optional[AudioFormat]) -> bool:
    """True if any supported format is compatible with the requested one."""
    return any(fmt.is_compatible(requested) for fmt in SUPPORTED_FORMATS)
