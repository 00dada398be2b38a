import pytest

from ezcfgmigrate.stream import (
    Stream,
    StreamFormat,
    StreamList,
    format_from_str,
    format_to_str,
)
from ezcfgmigrate.values import ConfigError


@pytest.mark.parametrize(
    "text, fmt",
    [
        ("Ogg", StreamFormat.OGG),
        ("ogg", StreamFormat.OGG),
        ("MP3", StreamFormat.MP3),
        ("mp3", StreamFormat.MP3),
        ("WEBM", StreamFormat.WEBM),
        ("matroska", StreamFormat.MATROSKA),
    ],
)
def test_format_from_str(text, fmt):
    assert format_from_str(text) is fmt


@pytest.mark.parametrize("fmt", [f for f in StreamFormat if f is not StreamFormat.INVALID])
def test_format_round_trip(fmt):
    assert format_from_str(format_to_str(fmt)) is fmt


def test_format_to_str_canonical_names():
    assert format_to_str(StreamFormat.OGG) == "Ogg"
    assert format_to_str(StreamFormat.WEBM) == "WebM"
    assert format_to_str(StreamFormat.INVALID) is None


def test_format_from_str_unsupported():
    with pytest.raises(ConfigError, match="unsupported stream format"):
        format_from_str("flac")


def test_new_stream_defaults():
    stream = Stream("default")
    assert stream.format is StreamFormat.INVALID
    assert stream.public is False
    assert stream.encoder is None
    assert stream.format_str is None


def test_apply_text_settings():
    stream = Stream("default")
    stream.apply("mountpoint", "/live")
    stream.apply("stream_genre", "Jazz")
    stream.apply("stream_bitrate", "128")
    assert stream.mountpoint == "/live"
    assert stream.stream_genre == "Jazz"
    assert stream.stream_bitrate == "128"


def test_apply_empty_value_rejected():
    stream = Stream("default")
    with pytest.raises(ConfigError, match="empty"):
        stream.apply("mountpoint", "")


def test_apply_format_and_errors():
    stream = Stream("default")
    stream.apply("format", "mp3")
    assert stream.format is StreamFormat.MP3
    assert stream.format_str == "MP3"
    with pytest.raises(ConfigError, match="empty"):
        stream.apply("format", None)
    with pytest.raises(ConfigError, match="unsupported stream format"):
        stream.apply("format", "wav")
    assert stream.format is StreamFormat.MP3


def test_apply_public_boolean():
    stream = Stream("default")
    stream.apply("public", "yes")
    assert stream.public is True
    stream.apply("public", "0")
    assert stream.public is False
    with pytest.raises(ConfigError):
        stream.apply("public", "maybe")


def test_encoder_can_be_cleared():
    stream = Stream("default")
    stream.apply("encoder", "Ogg")
    assert stream.encoder == "Ogg"
    stream.apply("encoder", None)
    assert stream.encoder is None
    with pytest.raises(ConfigError, match="empty"):
        stream.apply("encoder", "")


def test_unknown_key():
    with pytest.raises(KeyError):
        Stream("default").apply("volume", "11")


def test_validate():
    stream = Stream("default")
    with pytest.raises(ConfigError, match="format missing or unsupported"):
        stream.validate()
    stream.apply("format", "Ogg")
    stream.validate()
    assert stream.format is StreamFormat.OGG


def test_rename_within_list():
    streams = StreamList()
    first = streams.get("default")
    second = streams.get("other")
    first.apply("name", "main")
    assert streams.find("MAIN") is first
    with pytest.raises(ConfigError, match="already exists"):
        second.apply("name", "Main")
    assert second.name == "other"
    assert [s.name for s in streams] == ["main", "other"]


def test_list_get_reuses_existing():
    streams = StreamList()
    created = streams.get("default")
    assert streams.get("DEFAULT") is created
    assert len(streams) == 1