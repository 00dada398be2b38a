"""Value parsing, placeholder checks and name-keyed collections."""

from __future__ import annotations

import re
from typing import Callable, Generic, Iterator, Optional, TypeVar

LLONG_MIN = -(2**63)
LLONG_MAX = 2**63 - 1

_NUMBER = re.compile(r"[ \t\n\r\f\v]*([+-]?[0-9]+)")

_TRUE_WORDS = frozenset({"1", "yes", "true", "on"})
_FALSE_WORDS = frozenset({"0", "no", "false", "off"})


class ConfigError(ValueError):
    """A configuration value was rejected; the message says why."""


def require_value(value: Optional[str]) -> str:
    """Return ``value`` unless it is missing or empty."""
    if not value:
        raise ConfigError("empty")
    return value


def strtonum(text: Optional[str], minval: int, maxval: int) -> int:
    """Parse a decimal integer that must lie within ``[minval, maxval]``."""
    if minval > maxval:
        raise ConfigError("invalid")
    match = _NUMBER.fullmatch(text or "")
    if match is None:
        raise ConfigError("invalid")
    value = int(match.group(1))
    if value < minval:
        raise ConfigError("too small")
    if value > maxval:
        raise ConfigError("too large")
    return value


def parse_bool(text: Optional[str]) -> bool:
    """Interpret a yes/no style switch."""
    if not text:
        raise ConfigError("empty")
    word = text.lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ConfigError("invalid")


def check_prohibited(text: str, placeholder: str) -> None:
    """Reject ``text`` if it contains ``placeholder`` at all."""
    if placeholder in text:
        raise ConfigError(f"prohibited placeholder {placeholder}")


def check_duplicate(text: str, placeholder: str) -> None:
    """Reject ``text`` if it contains ``placeholder`` more than once."""
    if text.count(placeholder) > 1:
        raise ConfigError(f"duplicate placeholder {placeholder}")


def check_required(text: str, placeholder: str) -> None:
    """Reject ``text`` if it lacks ``placeholder``."""
    if placeholder not in text:
        raise ConfigError(f"missing placeholder {placeholder}")


T = TypeVar("T")


class NamedList(Generic[T]):
    """Ordered collection of items with case-insensitively unique names.

    Items are expected to carry ``name`` and ``owner`` attributes; the list
    sets ``owner`` on items it creates.
    """

    def __init__(self, factory: Callable[[str], T]) -> None:
        self._factory = factory
        self._items: list[T] = []

    def find(self, name: Optional[str]) -> Optional[T]:
        """Return the item called ``name`` (ignoring case), or None."""
        if name is None:
            return None
        wanted = name.lower()
        return next(
            (item for item in self._items if item.name.lower() == wanted),
            None,
        )

    def get(self, name: str) -> T:
        """Return the item called ``name``, creating it at the end if needed."""
        item = self.find(name)
        if item is None:
            require_value(name)
            item = self._factory(name)
            item.owner = self
            self._items.append(item)
        return item

    def remove(self, item: T) -> None:
        """Take ``item`` out of the list."""
        remaining = [entry for entry in self._items if entry is not item]
        if len(remaining) == len(self._items):
            raise ValueError("item is not in this list")
        self._items = remaining
        item.owner = None

    def rename(self, item: T, name: Optional[str]) -> None:
        """Give ``item`` a new name that no other item in the list uses."""
        require_value(name)
        other = self.find(name)
        if other is not None and other is not item:
            raise ConfigError("already exists")
        item.name = name

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)