"""Placeholder checks for commands and formats in old-style configurations."""

from __future__ import annotations

from .legacy_model import (
    ARTIST_PLACEHOLDER,
    METADATA_PLACEHOLDER,
    STRING_PLACEHOLDER,
    TITLE_PLACEHOLDER,
    TRACK_PLACEHOLDER,
)


def _not_allowed(placeholder: str, where: str) -> str:
    return f"`{placeholder}' placeholder not allowed in {where}"


def _multiple(placeholder: str, where: str) -> str:
    return f"Multiple `{placeholder}' placeholders in {where}"


def _duplicates(text: str, placeholders: tuple, where: str) -> list[str]:
    return [_multiple(ph, where) for ph in placeholders if text.count(ph) > 1]


def check_decoder_line(text: str) -> list[str]:
    """Return the problems found in a decoder command; empty if it is fine."""
    where = "decoder command"
    errors = []
    if STRING_PLACEHOLDER in text:
        errors.append(_not_allowed(STRING_PLACEHOLDER, where))
    track_count = text.count(TRACK_PLACEHOLDER)
    if track_count > 1:
        errors.append(_multiple(TRACK_PLACEHOLDER, where))
    errors.extend(
        _duplicates(
            text, (METADATA_PLACEHOLDER, ARTIST_PLACEHOLDER, TITLE_PLACEHOLDER), where
        )
    )
    if track_count != 1:
        errors.append(
            f"The decoder command requires the '{TRACK_PLACEHOLDER}' "
            "track placeholder"
        )
    return errors


def check_encoder_line(text: str) -> list[str]:
    """Return the problems found in an encoder command; empty if it is fine."""
    where = "encoder command"
    errors = [
        _not_allowed(ph, where)
        for ph in (TRACK_PLACEHOLDER, STRING_PLACEHOLDER)
        if ph in text
    ]
    errors.extend(
        _duplicates(
            text, (METADATA_PLACEHOLDER, ARTIST_PLACEHOLDER, TITLE_PLACEHOLDER), where
        )
    )
    return errors


def check_format_line(text: str) -> list[str]:
    """Return the problems found in a metadata format; empty if it is fine."""
    where = "<metadata_format>"
    errors = []
    if METADATA_PLACEHOLDER in text:
        errors.append(_not_allowed(METADATA_PLACEHOLDER, where))
    errors.extend(
        _duplicates(
            text,
            (
                TRACK_PLACEHOLDER,
                STRING_PLACEHOLDER,
                ARTIST_PLACEHOLDER,
                TITLE_PLACEHOLDER,
            ),
            where,
        )
    )
    return errors