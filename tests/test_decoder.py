import pytest

from ezcfgmigrate.decoder import Decoder, DecoderList
from ezcfgmigrate.values import ConfigError


def test_set_program():
    dec = Decoder("mp3")
    with pytest.raises(ConfigError, match="empty"):
        dec.set_program("")
    dec.set_program("madplay -o raw:- @T@")
    assert dec.program == "madplay -o raw:- @T@"


def test_validate_order():
    dec = Decoder("mp3")
    with pytest.raises(ConfigError, match="program not set"):
        dec.validate()
    dec.set_program("madplay @T@")
    with pytest.raises(ConfigError, match="no file extensions registered"):
        dec.validate()


@pytest.mark.parametrize(
    "program,fragment",
    [("dec @T@ @s@", "@s@"), ("dec @T@ @T@", "@T@"),
     ("dec @T@ @M@ @M@", "@M@"), ("dec @T@ @a@ @a@", "@a@"),
     ("dec @T@ @t@ @t@", "@t@"), ("dec -", "@T@")],
)
def test_validate_placeholders(program, fragment):
    decoders = DecoderList()
    dec = decoders.get("x")
    dec.set_program(program)
    decoders.add_match(dec, ".x")
    with pytest.raises(ConfigError, match=fragment):
        dec.validate()


def test_valid_decoder():
    decoders = DecoderList()
    dec = decoders.get("ogg")
    dec.set_program("oggdec -R -o - @T@")
    decoders.add_match(dec, ".ogg")
    dec.validate()
    assert dec.supports(".OGG")
    assert not dec.supports(".mp3")


def test_add_match_empty():
    decoders = DecoderList()
    dec = decoders.get("a")
    with pytest.raises(ConfigError, match="empty"):
        decoders.add_match(dec, "")
    assert dec.extensions == []


def test_find_ext():
    decoders = DecoderList()
    a = decoders.get("a")
    b = decoders.get("b")
    decoders.add_match(a, ".ogg")
    decoders.add_match(b, ".mp3")
    assert decoders.find_ext(".MP3") is b
    assert decoders.find_ext(".ogg") is a
    assert decoders.find_ext(".flac") is None


def test_add_match_relocates():
    decoders = DecoderList()
    a = decoders.get("a")
    b = decoders.get("b")
    decoders.add_match(a, ".Ogg")
    decoders.add_match(a, ".oga")
    decoders.add_match(b, ".ogg")
    assert a.extensions == [".oga"]
    assert b.extensions == [".Ogg"]
    assert decoders.find_ext(".ogg") is b


def test_add_match_same_decoder_moves_to_end():
    decoders = DecoderList()
    a = decoders.get("a")
    decoders.add_match(a, ".ogg")
    decoders.add_match(a, ".oga")
    decoders.add_match(a, ".OGG")
    assert a.extensions == [".oga", ".ogg"]


def test_remove_and_rename():
    decoders = DecoderList()
    a = decoders.get("default")
    decoders.rename(a, "Ogg")
    assert decoders.find("ogg") is a
    decoders.remove(a)
    assert len(decoders) == 0
    assert decoders.find("Ogg") is None