"""Rendering of a :class:`Config` as an XML configuration document."""

from __future__ import annotations

from typing import Iterator, TextIO

from .config import DEFAULT_NAME, Config
from .decoder import Decoder
from .encoder import Encoder
from .intake import Intake, IntakeType
from .server import DEFAULT_PORT, DEFAULT_USER, Server, TlsMode
from .stream import Stream, format_to_str

ROOT_NAME = "ezstream"


def _is_default(name: str) -> bool:
    return name.lower() == DEFAULT_NAME.lower()


def _element(indent: int, tag: str, value: object) -> str:
    return f"{' ' * indent}<{tag}>{value}</{tag}>\n"


def _server_lines(server: Server) -> Iterator[str]:
    yield "    <server>\n"
    if not _is_default(server.name):
        yield _element(6, "name", server.name)
    yield _element(6, "protocol", server.protocol_str)
    if server.hostname:
        yield _element(6, "hostname", server.hostname)
    if server.port != DEFAULT_PORT:
        yield _element(6, "port", server.port)
    if server.user.lower() != DEFAULT_USER.lower():
        yield _element(6, "user", server.user)
    if server.password:
        yield _element(6, "password", server.password)
    if server.tls is not TlsMode.MAY:
        yield _element(6, "tls", server.tls_str)
    optional = (
        ("tls_cipher_suite", server.tls_cipher_suite),
        ("ca_dir", server.ca_dir),
        ("ca_file", server.ca_file),
        ("client_cert", server.client_cert),
    )
    for tag, value in optional:
        if value:
            yield _element(6, tag, value)
    if server.reconnect_attempts:
        yield _element(6, "reconnect_attempts", server.reconnect_attempts)
    yield "    </server>\n"


def _stream_lines(stream: Stream) -> Iterator[str]:
    yield "    <stream>\n"
    if not _is_default(stream.name):
        yield _element(6, "name", stream.name)
    for tag in ("mountpoint", "intake", "server"):
        value = getattr(stream, tag)
        if value:
            yield _element(6, tag, value)
    if stream.public:
        yield _element(6, "public", "yes")
    yield _element(6, "format", stream.format_str or "")
    for tag in (
        "encoder",
        "stream_name",
        "stream_url",
        "stream_genre",
        "stream_description",
        "stream_quality",
        "stream_bitrate",
        "stream_samplerate",
        "stream_channels",
    ):
        value = getattr(stream, tag)
        if value:
            yield _element(6, tag, value)
    yield "    </stream>\n"


def _intake_lines(intake: Intake) -> Iterator[str]:
    yield "    <intake>\n"
    if not _is_default(intake.name):
        yield _element(6, "name", intake.name)
    if intake.type is not IntakeType.AUTODETECT:
        yield _element(6, "type", intake.type_str)
    if intake.filename:
        yield _element(6, "filename", intake.filename)
    if intake.shuffle:
        yield _element(6, "shuffle", "yes")
    if intake.stream_once:
        yield _element(6, "stream_once", "yes")
    yield "    </intake>\n"


def _decoder_lines(decoder: Decoder) -> Iterator[str]:
    yield "    <decoder>\n"
    if not _is_default(decoder.name):
        yield _element(6, "name", decoder.name)
    if decoder.program:
        yield _element(6, "program", decoder.program)
    for ext in decoder.extensions:
        yield _element(6, "file_ext", ext)
    yield "    </decoder>\n"


def _encoder_lines(encoder: Encoder) -> Iterator[str]:
    yield "    <encoder>\n"
    if not _is_default(encoder.name):
        yield _element(6, "name", encoder.name)
    yield _element(6, "format", format_to_str(encoder.format) or "")
    if encoder.program:
        yield _element(6, "program", encoder.program)
    yield "    </encoder>\n"


def _section(tag: str, items, render_item) -> Iterator[str]:
    yield "\n"
    yield f"  <{tag}>\n"
    for item in items:
        yield from render_item(item)
    yield f"  </{tag}>\n"


def _document_lines(config: Config) -> Iterator[str]:
    yield f"<{ROOT_NAME}>\n"
    yield from _section("servers", config.servers, _server_lines)
    yield from _section("streams", config.streams, _stream_lines)
    yield from _section("intakes", config.intakes, _intake_lines)
    if len(config.decoders):
        yield from _section("decoders", config.decoders, _decoder_lines)
    if len(config.encoders):
        yield from _section("encoders", config.encoders, _encoder_lines)

    meta = config.metadata
    if (
        meta.program
        or meta.format_str
        or meta.refresh_interval >= 0
        or meta.normalize_strings
        or meta.no_updates
    ):
        yield "\n"
        yield "  <metadata>\n"
        if meta.program:
            yield _element(4, "program", meta.program)
        if meta.format_str:
            yield _element(4, "format_str", meta.format_str)
        if meta.refresh_interval >= 0:
            yield _element(4, "refresh_interval", meta.refresh_interval)
        if meta.normalize_strings:
            yield _element(4, "normalize_strings", "yes")
        if meta.no_updates:
            yield _element(4, "no_updates", "yes")
        yield "  </metadata>\n"
    yield f"</{ROOT_NAME}>\n"


def render(config: Config) -> str:
    """Return ``config`` as the text of an XML configuration document."""
    return "".join(_document_lines(config))


def write(config: Config, fp: TextIO) -> None:
    """Write ``config`` as an XML configuration document to ``fp``."""
    fp.write(render(config))