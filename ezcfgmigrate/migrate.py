"""Conversion of old-style (version 0.x) configurations to the XML format."""

from __future__ import annotations

import functools
import getopt
import logging
import os
import sys
from typing import Callable, Optional

from .config import DEFAULT_NAME, Config
from .legacy_model import LegacyConfig
from .legacy_parser import parse_legacy_file
from .values import ConfigError
from .xmlrender import write

log = logging.getLogger(__name__)

_OPTSTRING = "0:hv"
_OGG_ALIASES = ("vorbis", "theora")
_DEFAULT_PROGNAME = "ezstream-cfgmigrate"


def parse_url(url: str) -> tuple[str, str, str]:
    """Split an ``http://host:port/mount`` address into its three parts."""
    prefix = "http://"
    if url[: len(prefix)].lower() != prefix:
        raise ConfigError("Invalid <url>: Not an HTTP address")
    rest = url[len(prefix):]
    host, colon, after = rest.partition(":")
    if not colon:
        raise ConfigError("Invalid <url>: Missing port")
    slash = after.find("/")
    if slash < 0:
        raise ConfigError("Invalid <url>: Missing mountpoint or too long port number")
    return host, after[:slash], after[slash:]


def _format_name(fmt: str) -> str:
    return "Ogg" if fmt.lower() in _OGG_ALIASES else fmt


class _Converter:
    def __init__(self, source: str) -> None:
        self.source = source
        self.warnings = 0

    def set(self, context: str, action: Callable[[str], None], value) -> None:
        try:
            action(value)
        except ConfigError as exc:
            log.warning("%s: %s: %s: %s", self.source, context, exc, value)
            self.warnings += 1

    def rejected(self, context: str, exc: ConfigError) -> None:
        log.warning("%s: %s: %s", self.source, context, exc)
        self.warnings += 1


def convert(legacy: LegacyConfig, config: Config, source_name: str) -> int:
    """Fill ``config`` from ``legacy``; return the number of warnings.

    Raises ConfigError if the result is not a usable configuration.
    """
    conv = _Converter(source_name)
    server = config.servers.get(DEFAULT_NAME)
    stream = config.streams.get(DEFAULT_NAME)
    intake = config.intakes.get(DEFAULT_NAME)
    encoders = config.encoders
    decoders = config.decoders

    def on(item, key):
        return functools.partial(item.apply, key)

    if not legacy.url:
        message = (
            f"{source_name}: Missing <url> -- not an ezstream version 0.x "
            "configuration?"
        )
        log.error("%s", message)
        raise ConfigError(message)
    try:
        hostname, port, mountpoint = parse_url(legacy.url)
    except ConfigError as exc:
        log.error("%s: %s", source_name, exc)
        raise ConfigError(f"{source_name}: {exc}") from None

    conv.set("<url>", on(server, "protocol"), "HTTP")
    conv.set("<url>", on(server, "hostname"), hostname)
    conv.set("<url>", on(server, "port"), port)
    conv.set("<url>", on(stream, "mountpoint"), mountpoint)

    if legacy.username is not None:
        conv.set("<sourceuser>", on(server, "user"), legacy.username)
    if legacy.password is not None:
        conv.set("<sourcepassword>", on(server, "password"), legacy.password)
    if legacy.format is not None:
        conv.set("<format>", on(stream, "format"), _format_name(legacy.format))
    if legacy.filename is not None:
        if legacy.filename.lower() == "stdin":
            conv.set("<filename>", on(intake, "type"), "stdin")
        else:
            conv.set("<filename>", on(intake, "filename"), legacy.filename)
    if legacy.metadata_program is not None:
        conv.set(
            "<metadata_progname>",
            on(config.metadata, "program"),
            legacy.metadata_program,
        )
    if legacy.metadata_format is not None:
        conv.set(
            "<metadata_format>",
            on(config.metadata, "format_str"),
            legacy.metadata_format,
        )
    if legacy.metadata_refresh_interval:
        conv.set(
            "<metadata_refreshinterval>",
            on(config.metadata, "refresh_interval"),
            str(legacy.metadata_refresh_interval),
        )
    if legacy.filename_is_program:
        conv.set("playlist_program", on(intake, "type"), "program")
    conv.set("<shuffle>", on(intake, "shuffle"), str(int(legacy.shuffle)))
    conv.set("<stream_once>", on(intake, "stream_once"), str(int(legacy.stream_once)))
    conv.set(
        "<reconnect_tries>",
        on(server, "reconnect_attempts"),
        str(legacy.reconnect_attempts),
    )

    server_info = (
        ("<svrinfoname>", "stream_name", legacy.server_name),
        ("<svrinfourl>", "stream_url", legacy.server_url),
        ("<svrinfogenre>", "stream_genre", legacy.server_genre),
        ("<svrinfodescription>", "stream_description", legacy.server_description),
        ("<svrinfobitrate>", "stream_bitrate", legacy.server_bitrate),
        ("<svrinfochannels>", "stream_channels", legacy.server_channels),
        ("<svrinfosamplerate>", "stream_samplerate", legacy.server_samplerate),
        ("<svrinfoquality>", "stream_quality", legacy.server_quality),
    )
    for context, key, value in server_info:
        if value is not None:
            conv.set(context, on(stream, key), value)
    conv.set(
        "<svrinfopublic>", on(stream, "public"), "yes" if legacy.server_public else "no"
    )
    if legacy.reencode and legacy.format is not None:
        conv.set("<reencode>", on(stream, "encoder"), _format_name(legacy.format))

    for entry in legacy.encoder_decoders:
        if entry.encoder is not None:
            encoder = encoders.get(DEFAULT_NAME)
            conv.set("<encode>", on(encoder, "program"), entry.encoder)
            if entry.format is not None:
                name = _format_name(entry.format)
                conv.set("<format> (encoder)", on(encoder, "name"), name)
                conv.set("<format> (encoder)", on(encoder, "format"), name)
            try:
                encoder.validate()
            except ConfigError as exc:
                conv.rejected("<encdec> (encoder)", exc)
                encoders.remove(encoder)
        if entry.decoder is not None:
            decoder = None
            if entry.format is not None:
                decoder = decoders.find(_format_name(entry.format))
            if decoder is None:
                decoder = decoders.get(DEFAULT_NAME)
            conv.set("<decode>", decoder.set_program, entry.decoder)
            if entry.format is not None:
                conv.set(
                    "<format> (decoder)",
                    functools.partial(decoders.rename, decoder),
                    _format_name(entry.format),
                )
            if entry.match is not None:
                conv.set(
                    "<match>",
                    functools.partial(decoders.add_match, decoder),
                    entry.match,
                )
            try:
                decoder.validate()
            except ConfigError as exc:
                conv.rejected("<encdec> (decoder)", exc)
                decoders.remove(decoder)

    if conv.warnings:
        log.warning("%s: %u warnings", source_name, conv.warnings)

    if stream.encoder and encoders.find(stream.encoder) is None:
        log.warning(
            "%s: %s encoder not found; disabling reencoding",
            source_name,
            stream.encoder,
        )
        stream.apply("encoder", None)

    try:
        server.validate()
        stream.validate()
        intake.validate()
    except ConfigError as exc:
        message = f"{source_name}: configuration invalid: {exc}"
        log.error("%s", message)
        raise ConfigError(message) from None

    return conv.warnings


def _program_name() -> str:
    if sys.argv and sys.argv[0]:
        return os.path.basename(sys.argv[0])
    return _DEFAULT_PROGNAME


def _usage(prog: str) -> None:
    print(f"usage: {prog} [-hv] -0 v0-cfgfile", file=sys.stderr)


def _usage_help() -> None:
    lines = (
        "",
        "    -0 v0-cfgfile  migrate from v0-cfgfile (ezstream version 0.x)",
        "    -h             print this help and exit",
        "    -v             increase logging verbosity",
    )
    print("\n".join(lines), file=sys.stderr)


def _header(prog: str, source: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n\n'
        "<!--\n"
        "  This ezstream version 1.x configuration file was generated by\n"
        f"  {prog}.\n\n"
        "  Source (ezstream version 0.x):\n"
        f"    {os.path.basename(source)}\n"
        "  -->\n\n"
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Convert the legacy file named by ``-0`` and print the result."""
    args = sys.argv[1:] if argv is None else list(argv)
    prog = _program_name()

    try:
        opts, _rest = getopt.getopt(args, _OPTSTRING)
    except getopt.GetoptError as exc:
        print(f"{prog}: {exc.msg}", file=sys.stderr)
        _usage(prog)
        return 2

    source: Optional[str] = None
    verbosity = 0
    for opt, value in opts:
        if opt == "-0":
            source = value
        elif opt == "-h":
            _usage(prog)
            _usage_help()
            return 0
        elif opt == "-v":
            verbosity += 1

    if source is None:
        print("-0 must be provided", file=sys.stderr)
        _usage(prog)
        return 2

    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    package_log = logging.getLogger(__name__.rpartition(".")[0])
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(f"{prog}: %(message)s"))
    previous_level = package_log.level
    package_log.addHandler(handler)
    package_log.setLevel(level)
    try:
        config = Config()
        config.program.name = prog
        try:
            legacy = parse_legacy_file(source)
            convert(legacy, config, source)
        except ConfigError:
            return 1
        sys.stdout.write(_header(prog, source))
        write(config, sys.stdout)
        return 0
    finally:
        package_log.removeHandler(handler)
        package_log.setLevel(previous_level)