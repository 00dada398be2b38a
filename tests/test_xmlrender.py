import io

from ezcfgmigrate.config import Config
from ezcfgmigrate.stream import StreamFormat
from ezcfgmigrate.xmlload import load
from ezcfgmigrate.xmlrender import render, write


def _full_config():
    config = Config()
    server = config.servers.get("default")
    server.apply("name", "main")
    server.apply("hostname", "localhost")
    server.apply("port", "8080")
    server.apply("user", "admin")
    password = "password"
    server.apply("password", password)
    server.apply("tls", "none")
    server.apply("reconnect_attempts", "3")

    stream = config.streams.get("default")
    stream.apply("mountpoint", "/live")
    stream.apply("format", "mp3")
    stream.apply("public", "yes")
    stream.apply("stream_name", "Radio")

    intake = config.intakes.get("default")
    intake.apply("type", "playlist")
    intake.apply("filename", "list.m3u")
    intake.apply("shuffle", "yes")

    decoder = config.decoders.get("default")
    decoder.apply_name = None
    config.decoders.rename(decoder, "mp3dec")
    decoder.set_program("dec @T@")
    config.decoders.add_match(decoder, ".mp3")

    encoder = config.encoders.get("default")
    encoder.apply("name", "MP3")
    encoder.apply("format", "MP3")
    encoder.apply("program", "enc @M@")

    config.metadata.apply("refresh_interval", "5")
    config.metadata.apply("no_updates", "yes")
    return config


def test_empty_config_has_fixed_skeleton():
    text = render(Config())
    assert text == (
        "<ezstream>\n"
        "\n  <servers>\n  </servers>\n"
        "\n  <streams>\n  </streams>\n"
        "\n  <intakes>\n  </intakes>\n"
        "</ezstream>\n"
    )


def test_defaults_are_omitted():
    config = Config()
    server = config.servers.get("default")
    server.apply("hostname", "localhost")
    text = render(config)
    assert "<name>" not in text
    assert "<port>" not in text
    assert "<user>" not in text
    assert "<tls>" not in text
    assert "      <protocol>http</protocol>\n" in text


def test_non_default_values_are_written():
    text = render(_full_config())
    assert "      <name>main</name>\n" in text
    assert "      <port>8080</port>\n" in text
    assert "      <tls>none</tls>\n" in text
    assert "      <public>yes</public>\n" in text
    assert "      <format>MP3</format>\n" in text
    assert "      <file_ext>.mp3</file_ext>\n" in text
    assert "    <refresh_interval>5</refresh_interval>\n" in text
    assert "    <no_updates>yes</no_updates>\n" in text


def test_https_forces_required_tls():
    config = Config()
    server = config.servers.get("default")
    server.apply("protocol", "https")
    assert "<tls>required</tls>" in render(config)


def test_metadata_section_absent_by_default():
    config = Config()
    assert "<metadata>" not in render(config)
    config.metadata.apply("refresh_interval", "0")
    assert "<refresh_interval>0</refresh_interval>" in render(config)


def test_write_matches_render():
    config = _full_config()
    buffer = io.StringIO()
    write(config, buffer)
    assert buffer.getvalue() == render(config)


def test_round_trip_through_loader(tmp_path):
    original = _full_config()
    path = tmp_path / "out.xml"
    path.write_text(render(original))
    path.chmod(0o600)

    loaded = Config()
    load(loaded, path)

    server = loaded.servers.find("main")
    assert server.hostname == "localhost"
    assert server.port == 8080
    assert server.user == "admin"
    assert server.reconnect_attempts == 3
    stream = loaded.streams.find("default")
    assert stream.mountpoint == "/live"
    assert stream.format is StreamFormat.MP3
    assert stream.public is True
    intake = loaded.intakes.find("default")
    assert intake.filename == "list.m3u"
    assert intake.shuffle is True
    decoder = loaded.decoders.find("mp3dec")
    assert decoder.extensions == [".mp3"]
    encoder = loaded.encoders.find("MP3")
    assert encoder.program == "enc @M@"
    assert loaded.metadata.refresh_interval == 5
    assert render(loaded) == render(original)