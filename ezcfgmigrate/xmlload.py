"""Loading of the XML configuration file into a :class:`Config`."""

from __future__ import annotations

import logging
import os
from typing import Callable, Iterator, Optional, Union

from lxml import etree

from .config import DEFAULT_NAME, Config, Metadata, check_file
from .decoder import Decoder, DecoderList
from .encoder import Encoder
from .intake import Intake
from .server import Server
from .stream import Stream
from .values import ConfigError, NamedList

ROOT_NAME = "ezstream"
DECODER_KEYS = ("name", "program", "file_ext")

log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]
Setter = Callable[[NamedList, object, str, Optional[str]], None]


def _local_name(element) -> str:
    return etree.QName(element).localname.lower()


def _child_elements(parent) -> Iterator:
    return (child for child in parent if isinstance(child.tag, str))


def _text_of(element) -> Optional[str]:
    """Concatenated text directly inside ``element``, or None if there is none."""
    parts = [element.text] if element.text else []
    parts.extend(child.tail for child in element if child.tail)
    return "".join(parts) or None


def _apply_setting(items: NamedList, item, key: str, value: Optional[str]) -> None:
    item.apply(key, value)


def _apply_decoder_setting(
    decoders: DecoderList, decoder: Decoder, key: str, value: Optional[str]
) -> None:
    if key == "name":
        decoders.rename(decoder, value)
    elif key == "program":
        decoder.set_program(value)
    else:
        decoders.add_match(decoder, value)


def _parse_entity(
    source: str,
    node,
    label: str,
    items: NamedList,
    keys: tuple,
    setter: Setter,
) -> None:
    item = items.get(DEFAULT_NAME)
    for child in _child_elements(node):
        key = _local_name(child)
        if key not in keys:
            continue
        try:
            setter(items, item, key, _text_of(child))
        except ConfigError as exc:
            raise ConfigError(
                f"{source}[{child.sourceline}]: {label} ({item.name}): {key}: {exc}"
            ) from None
    try:
        item.validate()
    except ConfigError as exc:
        raise ConfigError(
            f"{source}[{node.sourceline}]: {label} ({item.name}): {exc}"
        ) from None


def _parse_section(
    source: str,
    section,
    label: str,
    items: NamedList,
    keys: tuple,
    setter: Setter,
    errors: list,
) -> None:
    """Parse every entity of one section; stop at the first bad one."""
    for child in _child_elements(section):
        if _local_name(child) != label:
            continue
        try:
            _parse_entity(source, child, label, items, keys, setter)
        except ConfigError as exc:
            log.error("%s", exc)
            errors.append(str(exc))
            return


def _parse_metadata(source: str, section, metadata: Metadata, errors: list) -> None:
    for child in _child_elements(section):
        key = _local_name(child)
        if key not in Metadata.KEYS:
            continue
        try:
            metadata.apply(key, _text_of(child))
        except ConfigError as exc:
            message = f"{source}[{child.sourceline}]: metadata: {key}: {exc}"
            log.error("%s", message)
            errors.append(message)


def _fail(message: str) -> ConfigError:
    log.error("%s", message)
    return ConfigError(message)


def load(config: Config, path: PathLike) -> None:
    """Read the XML configuration at ``path`` into ``config``.

    Raises ConfigError describing every problem found.
    """
    source = os.fspath(path)
    check_file(source)
    try:
        tree = etree.parse(source, etree.XMLParser(no_network=True))
    except etree.XMLSyntaxError:
        raise _fail(f"{source}: not well-formed XML") from None
    except OSError as exc:
        raise _fail(f"{source}: {exc}") from None

    root = tree.getroot()
    if root is None:
        raise _fail(f"{source}: empty document")
    if _local_name(root) != ROOT_NAME:
        raise _fail(f"{source}: {ROOT_NAME} configuration not recognized")

    sections = {
        "servers": ("server", config.servers, Server.KEYS, _apply_setting),
        "streams": ("stream", config.streams, Stream.KEYS, _apply_setting),
        "intakes": ("intake", config.intakes, Intake.KEYS, _apply_setting),
        "decoders": (
            "decoder",
            config.decoders,
            DECODER_KEYS,
            _apply_decoder_setting,
        ),
        "encoders": ("encoder", config.encoders, Encoder.KEYS, _apply_setting),
    }

    errors: list[str] = []
    for child in _child_elements(root):
        name = _local_name(child)
        if name == "metadata":
            _parse_metadata(source, child, config.metadata, errors)
        elif name in sections:
            label, items, keys, setter = sections[name]
            _parse_section(source, child, label, items, keys, setter, errors)

    if errors:
        raise ConfigError("\n".join(errors))


def reload(config: Config, path: PathLike) -> None:
    """Replace the file-derived parts of ``config`` with the file at ``path``.

    If loading fails, the previous configuration is restored and the error
    is raised.
    """
    previous = Config()
    previous.swap(config)
    try:
        load(config, path)
    except Exception:
        config.swap(previous)
        raise