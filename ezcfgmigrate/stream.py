"""Stream entries: what is sent to a server mountpoint and how."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .values import ConfigError, NamedList, parse_bool, require_value


class StreamFormat(Enum):
    INVALID = 0
    OGG = 1
    MP3 = 2
    WEBM = 3
    MATROSKA = 4


_FORMAT_NAMES = {
    StreamFormat.OGG: "Ogg",
    StreamFormat.MP3: "MP3",
    StreamFormat.WEBM: "WebM",
    StreamFormat.MATROSKA: "Matroska",
}

_FORMATS_BY_NAME = {text.lower(): fmt for fmt, text in _FORMAT_NAMES.items()}


def format_from_str(text: str) -> StreamFormat:
    """Return the stream format named by ``text`` (ignoring case)."""
    try:
        return _FORMATS_BY_NAME[text.lower()]
    except (KeyError, AttributeError):
        raise ConfigError("unsupported stream format") from None


def format_to_str(fmt: StreamFormat) -> Optional[str]:
    """Return the canonical name of ``fmt``, or None if it has none."""
    return _FORMAT_NAMES.get(fmt)


def parse_format(value: Optional[str]) -> StreamFormat:
    """Parse a configured format value, rejecting empty input."""
    return format_from_str(require_value(value))


class Stream:
    """One stream definition."""

    KEYS = (
        "name",
        "mountpoint",
        "intake",
        "server",
        "public",
        "format",
        "encoder",
        "stream_name",
        "stream_url",
        "stream_genre",
        "stream_description",
        "stream_quality",
        "stream_bitrate",
        "stream_samplerate",
        "stream_channels",
    )

    _TEXT_KEYS = frozenset(
        {
            "mountpoint",
            "intake",
            "server",
            "stream_name",
            "stream_url",
            "stream_genre",
            "stream_description",
            "stream_quality",
            "stream_bitrate",
            "stream_samplerate",
            "stream_channels",
        }
    )

    def __init__(self, name: str) -> None:
        self.name = require_value(name)
        self.owner: Optional[NamedList] = None
        self.mountpoint: Optional[str] = None
        self.intake: Optional[str] = None
        self.server: Optional[str] = None
        self.public = False
        self.format = StreamFormat.INVALID
        self.encoder: Optional[str] = None
        self.stream_name: Optional[str] = None
        self.stream_url: Optional[str] = None
        self.stream_genre: Optional[str] = None
        self.stream_description: Optional[str] = None
        self.stream_quality: Optional[str] = None
        self.stream_bitrate: Optional[str] = None
        self.stream_samplerate: Optional[str] = None
        self.stream_channels: Optional[str] = None

    def __repr__(self) -> str:
        return f"Stream(name={self.name!r})"

    @property
    def format_str(self) -> Optional[str]:
        return format_to_str(self.format)

    def apply(self, key: str, value: Optional[str]) -> None:
        """Set the setting called ``key`` from its text form."""
        if key == "name":
            if self.owner is not None:
                self.owner.rename(self, value)
            else:
                self.name = require_value(value)
        elif key in self._TEXT_KEYS:
            setattr(self, key, require_value(value))
        elif key == "public":
            self.public = parse_bool(value)
        elif key == "format":
            self.format = parse_format(value)
        elif key == "encoder":
            self.encoder = None if value is None else require_value(value)
        else:
            raise KeyError(key)

    def validate(self) -> None:
        """Raise ConfigError if the stream cannot be used."""
        if self.format is StreamFormat.INVALID:
            raise ConfigError("format missing or unsupported")


class StreamList(NamedList[Stream]):
    """The configured streams, in definition order."""

    def __init__(self) -> None:
        super().__init__(Stream)