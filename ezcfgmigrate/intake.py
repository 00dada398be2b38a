"""Intake entries: where the audio to be streamed comes from."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .values import ConfigError, NamedList, parse_bool, require_value

_PATH_SIZE = 4096


class IntakeType(Enum):
    AUTODETECT = "autodetect"
    FILE = "file"
    PLAYLIST = "playlist"
    PROGRAM = "program"
    STDIN = "stdin"


class Intake:
    """One intake definition."""

    KEYS = ("name", "type", "filename", "shuffle", "stream_once")

    def __init__(self, name: str) -> None:
        self.name = require_value(name)
        self.owner: Optional[NamedList] = None
        self.type = IntakeType.AUTODETECT
        self.filename: Optional[str] = None
        self.shuffle = False
        self.stream_once = False

    def __repr__(self) -> str:
        return f"Intake(name={self.name!r})"

    @property
    def type_str(self) -> str:
        return self.type.value

    def apply(self, key: str, value: Optional[str]) -> None:
        """Set the setting called ``key`` from its text form."""
        if key == "name":
            if self.owner is not None:
                self.owner.rename(self, value)
            else:
                self.name = require_value(value)
        elif key == "type":
            text = require_value(value).lower()
            try:
                self.type = IntakeType(text)
            except ValueError:
                raise ConfigError("unsupported") from None
        elif key == "filename":
            text = require_value(value)
            if len(text.encode()) >= _PATH_SIZE:
                raise ConfigError("too long")
            self.filename = text
        elif key == "shuffle":
            self.shuffle = parse_bool(value)
        elif key == "stream_once":
            self.stream_once = parse_bool(value)
        else:
            raise KeyError(key)

    def validate(self) -> None:
        """Raise ConfigError if the intake cannot be used."""
        if not self.filename and self.type is not IntakeType.STDIN:
            raise ConfigError("intake filename missing")


class IntakeList(NamedList[Intake]):
    """The configured intakes, in definition order."""

    def __init__(self) -> None:
        super().__init__(Intake)