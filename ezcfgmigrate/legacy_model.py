"""Data model of the old (version 0.x) flat configuration format."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

MP3_FORMAT = "MP3"
VORBIS_FORMAT = "VORBIS"
THEORA_FORMAT = "THEORA"

MAX_FORMAT_ENCDEC = 15

TRACK_PLACEHOLDER = "@T@"
METADATA_PLACEHOLDER = "@M@"
ARTIST_PLACEHOLDER = "@a@"
TITLE_PLACEHOLDER = "@t@"
STRING_PLACEHOLDER = "@s@"


@dataclass
class EncDec:
    """One <encdec> block: format, file match and the programs to use."""

    format: Optional[str] = None
    match: Optional[str] = None
    encoder: Optional[str] = None
    decoder: Optional[str] = None


@dataclass
class LegacyConfig:
    """All settings of an old-style configuration file."""

    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    format: Optional[str] = None
    filename: Optional[str] = None
    metadata_program: Optional[str] = None
    metadata_format: Optional[str] = None
    server_name: Optional[str] = None
    server_url: Optional[str] = None
    server_genre: Optional[str] = None
    server_description: Optional[str] = None
    server_bitrate: Optional[str] = None
    server_channels: Optional[str] = None
    server_samplerate: Optional[str] = None
    server_quality: Optional[str] = None
    server_public: bool = False
    reencode: bool = False
    encoder_decoders: list[EncDec] = field(default_factory=list)
    shuffle: bool = False
    filename_is_program: bool = False
    stream_once: bool = False
    reconnect_attempts: int = 0
    metadata_refresh_interval: int = -1

    def format_encoder(self, fmt: str) -> str:
        """Encoder command of the first block for ``fmt``, or an empty string."""
        for entry in self.encoder_decoders:
            if entry.format is not None and entry.format == fmt:
                return entry.encoder or ""
        return ""

    def format_decoder(self, match: str) -> str:
        """Decoder command of the first block matching ``match``, or ''."""
        for entry in self.encoder_decoders:
            if entry.match is not None and entry.match == match:
                return entry.decoder or ""
        return ""