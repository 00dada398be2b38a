"""Encoder entries: programs that turn raw input into a stream format."""

from __future__ import annotations

from typing import Optional

from .decoder import (
    PLACEHOLDER_ARTIST,
    PLACEHOLDER_METADATA,
    PLACEHOLDER_STRING,
    PLACEHOLDER_TITLE,
    PLACEHOLDER_TRACK,
)
from .stream import StreamFormat, format_to_str, parse_format
from .values import (
    ConfigError,
    NamedList,
    check_duplicate,
    check_prohibited,
    require_value,
)


class Encoder:
    """One encoder: a program producing a given stream format."""

    KEYS = ("name", "format", "program")

    def __init__(self, name: str) -> None:
        self.name = require_value(name)
        self.owner: Optional[NamedList] = None
        self.format = StreamFormat.INVALID
        self.program: Optional[str] = None

    def __repr__(self) -> str:
        return f"Encoder(name={self.name!r})"

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
        elif key == "format":
            self.format = parse_format(value)
        elif key == "program":
            self.program = require_value(value)
        else:
            raise KeyError(key)

    def validate(self) -> None:
        """Raise ConfigError if the encoder cannot be used."""
        if self.format is StreamFormat.INVALID:
            raise ConfigError("format not set")
        if not self.program:
            raise ConfigError("program not set")
        check_prohibited(self.program, PLACEHOLDER_TRACK)
        check_prohibited(self.program, PLACEHOLDER_STRING)
        check_duplicate(self.program, PLACEHOLDER_METADATA)
        check_duplicate(self.program, PLACEHOLDER_ARTIST)
        check_duplicate(self.program, PLACEHOLDER_TITLE)


class EncoderList(NamedList[Encoder]):
    """The configured encoders, in definition order."""

    def __init__(self) -> None:
        super().__init__(Encoder)