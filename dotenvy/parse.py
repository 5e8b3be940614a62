"""Parsing of single env-file lines and values, with variable substitution."""

from __future__ import annotations

import enum
import os
import string
from collections.abc import MutableMapping

from .errors import LineParseError

SubstitutionData = MutableMapping[str, "str | None"]

_KEY_START = frozenset(string.ascii_letters + "_")
_KEY_CHARS = frozenset(string.ascii_letters + string.digits + "_.")
_ESCAPABLE = frozenset("\\'\"$ ")


def parse_line(
    line: str, substitution_data: SubstitutionData
) -> tuple[str, str] | None:
    """Parse one logical line.

    Returns ``(key, value)``, or None for a blank line or a comment.
    The parsed value is recorded in ``substitution_data`` for later lines.
    """
    return _LineParser(line, substitution_data).parse()


class _LineParser:
    def __init__(self, line: str, substitution_data: SubstitutionData) -> None:
        self._original = line
        self._data = substitution_data
        self._rest = line.rstrip()
        self._pos = 0

    def _error(self) -> LineParseError:
        return LineParseError(self._original, self._pos)

    def parse(self) -> tuple[str, str] | None:
        self._skip_whitespace()
        if not self._rest or self._rest.startswith("#"):
            return None

        key = self._parse_key()
        self._skip_whitespace()

        # "export" is either an optional prefix or a key of its own.
        if key == "export":
            if not self._try_equal():
                key = self._parse_key()
                self._skip_whitespace()
                self._expect_equal()
        else:
            self._expect_equal()
        self._skip_whitespace()

        if not self._rest or self._rest.startswith("#"):
            self._data[key] = None
            return key, ""

        value = parse_value(self._rest, self._data)
        self._data[key] = value
        return key, value

    def _parse_key(self) -> str:
        if not self._rest or self._rest[0] not in _KEY_START:
            raise self._error()
        end = next(
            (i for i, c in enumerate(self._rest) if c not in _KEY_CHARS),
            len(self._rest),
        )
        key = self._rest[:end]
        self._rest = self._rest[end:]
        self._pos += end
        return key

    def _try_equal(self) -> bool:
        if not self._rest.startswith("="):
            return False
        self._rest = self._rest[1:]
        self._pos += 1
        return True

    def _expect_equal(self) -> None:
        if not self._try_equal():
            raise self._error()

    def _skip_whitespace(self) -> None:
        stripped = self._rest.lstrip()
        self._pos += len(self._rest) - len(stripped)
        self._rest = stripped


class _Mode(enum.Enum):
    NONE = enum.auto()
    BLOCK = enum.auto()
    ESCAPED_BLOCK = enum.auto()


def parse_value(text: str, substitution_data: SubstitutionData) -> str:
    """Parse the value part of a line: quotes, escapes and ``$VAR`` substitution."""
    strong_quote = False
    weak_quote = False
    escaped = False
    expecting_end = False
    output: list[str] = []
    mode = _Mode.NONE
    name: list[str] = []

    def flush_substitution() -> None:
        output.append(_substitute(substitution_data, "".join(name)))
        name.clear()

    for index, c in enumerate(text):
        # Whitespace after an unquoted value may only be followed by a comment.
        if expecting_end:
            if c in " \t":
                continue
            if c == "#":
                break
            raise LineParseError(text, index)
        if escaped:
            if c in _ESCAPABLE:
                output.append(c)
            elif c == "n":
                output.append("\n")
            else:
                raise LineParseError(text, index)
            escaped = False
        elif strong_quote:
            if c == "'":
                strong_quote = False
            else:
                output.append(c)
        elif mode is not _Mode.NONE:
            if c.isalnum():
                name.append(c)
            elif mode is _Mode.BLOCK:
                if c == "{" and not name:
                    mode = _Mode.ESCAPED_BLOCK
                else:
                    flush_substitution()
                    if c != "$":
                        mode = _Mode.NONE
                        output.append(c)
            elif c == "}":
                mode = _Mode.NONE
                flush_substitution()
            else:
                name.append(c)
        elif c == "$":
            mode = _Mode.BLOCK
        elif weak_quote:
            if c == '"':
                weak_quote = False
            elif c == "\\":
                escaped = True
            else:
                output.append(c)
        elif c == "'":
            strong_quote = True
        elif c == '"':
            weak_quote = True
        elif c == "\\":
            escaped = True
        elif c in " \t":
            expecting_end = True
        else:
            output.append(c)

    if mode is _Mode.ESCAPED_BLOCK or strong_quote or weak_quote:
        raise LineParseError(text, max(len(text) - 1, 0))

    flush_substitution()
    return "".join(output)


def _substitute(substitution_data: SubstitutionData, name: str) -> str:
    value = os.environ.get(name)
    if value is not None:
        return value
    return substitution_data.get(name) or ""