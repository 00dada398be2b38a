"""Reading of old-style (version 0.x) flat XML configuration files."""

from __future__ import annotations

import logging
import os
from typing import Iterator, Optional, Union

from lxml import etree

from .legacy_checks import check_decoder_line, check_encoder_line, check_format_line
from .legacy_model import MAX_FORMAT_ENCDEC, EncDec, LegacyConfig
from .values import ConfigError, strtonum

log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

_PATH_MAX = 4096
_INT_MAX = 2**31 - 1
_UINT_MAX = 2**32 - 1

_STRING_FIELDS = {
    "url": "url",
    "sourceuser": "username",
    "sourcepassword": "password",
    "svrinfoname": "server_name",
    "svrinfourl": "server_url",
    "svrinfogenre": "server_genre",
    "svrinfodescription": "server_description",
    "svrinfobitrate": "server_bitrate",
    "svrinfochannels": "server_channels",
    "svrinfosamplerate": "server_samplerate",
    "svrinfoquality": "server_quality",
}

_PATH_FIELDS = {
    "filename": "filename",
    "metadata_progname": "metadata_program",
}

_SWITCH_FIELDS = {
    "playlist_program": "filename_is_program",
    "shuffle": "shuffle",
    "stream_once": "stream_once",
    "svrinfopublic": "server_public",
}

_NUMBER_FIELDS = {
    "metadata_refreshinterval": ("metadata_refresh_interval", -1, _INT_MAX),
    "reconnect_tries": ("reconnect_attempts", 0, _UINT_MAX),
}

_ENCDEC_FIELDS = {
    "format": "format",
    "match": "match",
    "decode": "decoder",
    "encode": "encoder",
}


def _elements(parent) -> Iterator:
    return (child for child in parent if isinstance(child.tag, str))


def _tag(element) -> str:
    return etree.QName(element).localname


def _has_content(element) -> bool:
    return element.text is not None or len(element) > 0


def _content(element) -> str:
    """Text directly inside ``element``, concatenated."""
    parts = [element.text] if element.text else []
    parts.extend(child.tail for child in element if child.tail)
    return "".join(parts)


class _Parser:
    def __init__(self, source: str) -> None:
        self.source = source
        self.errors: list[str] = []
        self.config = LegacyConfig()
        self.numbers_seen: set[str] = set()

    def error(self, element, message: str) -> None:
        text = f"{self.source}[{element.sourceline}]: Error: {message}"
        log.error("%s", text)
        self.errors.append(text)

    def multiple(self, element, tag: str) -> None:
        self.error(element, f"Cannot have multiple <{tag}> elements")

    def parse_root(self, root) -> None:
        for node in _elements(root):
            tag = _tag(node)
            if tag in _STRING_FIELDS:
                self._string(node, tag, _STRING_FIELDS[tag])
            elif tag in _PATH_FIELDS:
                self._path(node, tag, _PATH_FIELDS[tag])
            elif tag == "format":
                self._format(node)
            elif tag == "metadata_format":
                self._metadata_format(node)
            elif tag in _SWITCH_FIELDS:
                self._switch(node, tag, _SWITCH_FIELDS[tag])
            elif tag in _NUMBER_FIELDS:
                self._number(node, tag, *_NUMBER_FIELDS[tag])
            elif tag == "reencode":
                self._reencode(node)

    def _string(self, node, tag: str, attr: str) -> None:
        if getattr(self.config, attr) is not None:
            self.multiple(node, tag)
            return
        if _has_content(node):
            setattr(self.config, attr, _content(node))

    def _path(self, node, tag: str, attr: str) -> None:
        if getattr(self.config, attr) is not None:
            self.multiple(node, tag)
            return
        if not _has_content(node):
            return
        text = _content(node)
        if len(text.encode()) > _PATH_MAX - 1:
            self.error(node, f"Path or filename in <{tag}> is too long")
            return
        setattr(self.config, attr, text)

    def _format(self, node) -> None:
        if self.config.format is not None:
            self.multiple(node, "format")
            return
        if _has_content(node):
            self.config.format = _content(node).upper()

    def _metadata_format(self, node) -> None:
        if self.config.metadata_format is not None:
            self.multiple(node, "metadata_format")
            return
        if not _has_content(node):
            return
        text = _content(node)
        self.config.metadata_format = text
        for problem in check_format_line(text):
            self.error(node, problem)

    def _switch(self, node, tag: str, attr: str) -> None:
        if attr in self.numbers_seen:
            self.multiple(node, tag)
            return
        if not _has_content(node):
            return
        try:
            value = strtonum(_content(node), 0, 1)
        except ConfigError:
            self.error(node, f"<{tag}> may only contain 1 or 0")
            return
        setattr(self.config, attr, bool(value))
        self.numbers_seen.add(attr)

    def _number(self, node, tag: str, attr: str, low: int, high: int) -> None:
        if attr in self.numbers_seen:
            self.multiple(node, tag)
            return
        if not _has_content(node):
            return
        text = _content(node)
        try:
            value = strtonum(text, low, high)
        except ConfigError as exc:
            self.error(node, f"In <{tag}>: '{text}' is {exc}")
            return
        setattr(self.config, attr, value)
        self.numbers_seen.add(attr)

    def _reencode(self, node) -> None:
        enable_set = False
        for child in _elements(node):
            tag = _tag(child)
            if tag == "enable":
                if enable_set:
                    self.multiple(node, "enable")
                    continue
                if not _has_content(child):
                    continue
                try:
                    value = strtonum(_content(child), 0, 1)
                except ConfigError:
                    self.error(node, "<enable> may only contain 1 or 0")
                    continue
                self.config.reencode = bool(value)
                enable_set = True
            elif tag == "encdec":
                entry = self._encdec(child)
                if len(self.config.encoder_decoders) >= MAX_FORMAT_ENCDEC:
                    self.error(child, "Too many <encdec> elements")
                    continue
                self.config.encoder_decoders.append(entry)

    def _encdec(self, node) -> EncDec:
        entry = EncDec()
        for child in _elements(node):
            tag = _tag(child)
            attr = _ENCDEC_FIELDS.get(tag)
            if attr is None:
                continue
            if getattr(entry, attr) is not None:
                self.multiple(child, tag)
                continue
            if not _has_content(child):
                continue
            text = _content(child)
            if tag == "format":
                text = text.upper()
            elif tag == "match":
                text = text.lower()
            setattr(entry, attr, text)
            if tag == "decode":
                problems = check_decoder_line(text)
            elif tag == "encode":
                problems = check_encoder_line(text)
            else:
                problems = []
            for problem in problems:
                self.error(child, problem)
        return entry


def parse_legacy_file(path: PathLike) -> LegacyConfig:
    """Read an old-style configuration file.

    Raises ConfigError listing every problem found.
    """
    source = os.fspath(path)
    try:
        tree = etree.parse(source, etree.XMLParser(no_network=True))
    except etree.XMLSyntaxError:
        message = f"{source}: Parse error (not well-formed XML.)"
        log.error("%s", message)
        raise ConfigError(message) from None
    except OSError as exc:
        message = f"{source}: {exc}"
        log.error("%s", message)
        raise ConfigError(message) from None

    root = tree.getroot()
    if root is None:
        message = f"{source}: Parse error (empty XML document.)"
        log.error("%s", message)
        raise ConfigError(message)

    parser = _Parser(source)
    parser.parse_root(root)
    if parser.errors:
        summary = f"{len(parser.errors)} configuration error(s) in {source}"
        log.error("%s", summary)
        raise ConfigError("\n".join(parser.errors + [summary]))
    return parser.config