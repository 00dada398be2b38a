"""Decoder entries: programs that turn input files into raw streams."""

from __future__ import annotations

import logging
from typing import Optional

from .values import (
    ConfigError,
    NamedList,
    check_duplicate,
    check_prohibited,
    check_required,
    require_value,
)

PLACEHOLDER_METADATA = "@M@"
PLACEHOLDER_ARTIST = "@a@"
PLACEHOLDER_TITLE = "@t@"
PLACEHOLDER_TRACK = "@T@"
PLACEHOLDER_STRING = "@s@"

log = logging.getLogger(__name__)


class Decoder:
    """One decoder: a program and the file extensions it handles."""

    def __init__(self, name: str) -> None:
        self.name = require_value(name)
        self.owner: Optional[NamedList] = None
        self.program: Optional[str] = None
        self.extensions: list[str] = []

    def __repr__(self) -> str:
        return f"Decoder(name={self.name!r})"

    def set_program(self, program: Optional[str]) -> None:
        self.program = require_value(program)

    def supports(self, ext: str) -> bool:
        wanted = ext.lower()
        return any(known.lower() == wanted for known in self.extensions)

    def validate(self) -> None:
        """Raise ConfigError if the decoder cannot be used."""
        if not self.program:
            raise ConfigError("program not set")
        if not self.extensions:
            raise ConfigError("no file extensions registered")
        check_prohibited(self.program, PLACEHOLDER_STRING)
        check_duplicate(self.program, PLACEHOLDER_TRACK)
        check_duplicate(self.program, PLACEHOLDER_METADATA)
        check_duplicate(self.program, PLACEHOLDER_ARTIST)
        check_duplicate(self.program, PLACEHOLDER_TITLE)
        check_required(self.program, PLACEHOLDER_TRACK)


class DecoderList(NamedList[Decoder]):
    """The configured decoders; each file extension belongs to at most one."""

    def __init__(self) -> None:
        super().__init__(Decoder)

    def find_ext(self, ext: str) -> Optional[Decoder]:
        """Return the first decoder that handles ``ext``, or None."""
        return next((dec for dec in self if dec.supports(ext)), None)

    def add_match(self, decoder: Decoder, ext: Optional[str]) -> None:
        """Register ``ext`` with ``decoder``, taking it from any other holder."""
        require_value(ext)
        entry = ext
        holder = self.find_ext(ext)
        if holder is not None:
            wanted = ext.lower()
            position = next(
                pos
                for pos, known in enumerate(holder.extensions)
                if known.lower() == wanted
            )
            log.info(
                "%s: relocating match from %s to %s", ext, holder.name, decoder.name
            )
            entry = holder.extensions.pop(position)
        decoder.extensions.append(entry)