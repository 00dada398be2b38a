"""The complete configuration: program settings, metadata and entity lists."""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Optional

from .decoder import (
    PLACEHOLDER_ARTIST,
    PLACEHOLDER_METADATA,
    PLACEHOLDER_STRING,
    PLACEHOLDER_TITLE,
    PLACEHOLDER_TRACK,
    DecoderList,
)
from .encoder import EncoderList
from .intake import IntakeList
from .server import ServerList
from .stream import StreamList
from .values import (
    ConfigError,
    check_duplicate,
    check_prohibited,
    parse_bool,
    require_value,
    strtonum,
)

PLACEHOLDER_ALBUM = "@b@"
DEFAULT_NAME = "default"

_PATH_SIZE = 4096
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

log = logging.getLogger(__name__)


class ConfigType(Enum):
    XMLFILE = 0


def check_file(path: str) -> None:
    """Check that a configuration file exists and is not world writeable."""
    try:
        mode = os.stat(path).st_mode
    except OSError as exc:
        log.error("%s: %s", path, exc.strerror)
        raise ConfigError(f"{path}: {exc.strerror}") from exc
    if mode & stat.S_IROTH:
        log.warning("%s: world readable", path)
    elif mode & stat.S_IRGRP:
        log.info("%s: group readable", path)
    if mode & stat.S_IWOTH:
        log.error("%s: world writeable", path)
        raise ConfigError(f"{path}: world writeable")


@dataclass
class ProgramSettings:
    """Settings that come from the command line rather than a file."""

    name: Optional[str] = None
    config_type: ConfigType = ConfigType.XMLFILE
    config_file: Optional[str] = None
    pid_file: Optional[str] = None
    quiet_stderr: bool = False
    rtstatus_output: bool = False
    verbosity: int = 0


@dataclass
class Metadata:
    """How track metadata is obtained and presented."""

    KEYS = (
        "program",
        "format_str",
        "refresh_interval",
        "normalize_strings",
        "no_updates",
    )

    program: Optional[str] = None
    format_str: Optional[str] = None
    refresh_interval: int = -1
    normalize_strings: bool = False
    no_updates: bool = False

    def apply(self, key: str, value: Optional[str]) -> None:
        """Set the setting called ``key`` from its text form."""
        if key == "program":
            text = require_value(value)
            if len(text.encode()) >= _PATH_SIZE:
                raise ConfigError("too long")
            self.program = text
        elif key == "format_str":
            text = require_value(value)
            check_prohibited(text, PLACEHOLDER_METADATA)
            check_duplicate(text, PLACEHOLDER_TRACK)
            check_duplicate(text, PLACEHOLDER_STRING)
            check_duplicate(text, PLACEHOLDER_ARTIST)
            check_duplicate(text, PLACEHOLDER_TITLE)
            self.format_str = text
        elif key == "refresh_interval":
            self.refresh_interval = strtonum(require_value(value), _INT_MIN, _INT_MAX)
        elif key == "normalize_strings":
            self.normalize_strings = parse_bool(value)
        elif key == "no_updates":
            self.no_updates = parse_bool(value)
        else:
            raise KeyError(key)


@dataclass
class Config:
    """Everything that a configuration file describes."""

    program: ProgramSettings = field(default_factory=ProgramSettings)
    metadata: Metadata = field(default_factory=Metadata)
    servers: ServerList = field(default_factory=ServerList)
    streams: StreamList = field(default_factory=StreamList)
    intakes: IntakeList = field(default_factory=IntakeList)
    encoders: EncoderList = field(default_factory=EncoderList)
    decoders: DecoderList = field(default_factory=DecoderList)

    _FILE_PARTS = ("metadata", "servers", "streams", "intakes", "encoders", "decoders")

    def reset(self) -> None:
        """Drop everything loaded from a file; program settings are kept."""
        defaults = {f.name: f.default_factory for f in fields(self)}
        for part in self._FILE_PARTS:
            setattr(self, part, defaults[part]())

    def swap(self, other: "Config") -> None:
        """Exchange the file-derived parts of this and ``other``."""
        for part in self._FILE_PARTS:
            mine = getattr(self, part)
            setattr(self, part, getattr(other, part))
            setattr(other, part, mine)