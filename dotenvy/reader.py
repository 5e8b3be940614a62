"""Reading env files: joining quoted multi-line values and iterating pairs."""

from __future__ import annotations

import codecs
import enum
import errno
import os
from collections.abc import Iterable, Iterator
from typing import Any

from .errors import IoError, LineParseError
from .parse import parse_line

_TEXT_BOM = "\ufeff"


class _State(enum.Enum):
    COMPLETE = enum.auto()
    ESCAPE = enum.auto()
    STRONG_OPEN = enum.auto()
    STRONG_OPEN_ESCAPE = enum.auto()
    WEAK_OPEN = enum.auto()
    WEAK_OPEN_ESCAPE = enum.auto()
    COMMENT = enum.auto()
    WHITESPACE = enum.auto()


_OPENERS = {
    "\\": _State.ESCAPE,
    '"': _State.WEAK_OPEN,
    "'": _State.STRONG_OPEN,
}


def _end_state(state: _State, piece: str) -> tuple[int, _State]:
    """Run the quoting state machine over ``piece``.

    Returns the position of the last character looked at and the state
    reached. A comment that follows whitespace stops the scan early.
    """
    pos = 0
    for pos, c in enumerate(piece):
        if state is _State.WHITESPACE:
            if c == "#":
                return pos, _State.COMMENT
            state = _OPENERS.get(c, _State.COMPLETE)
        elif state is _State.ESCAPE:
            state = _State.COMPLETE
        elif state is _State.COMPLETE:
            if c.isspace() and c not in "\n\r":
                state = _State.WHITESPACE
            else:
                state = _OPENERS.get(c, _State.COMPLETE)
        elif state is _State.WEAK_OPEN:
            if c == "\\":
                state = _State.WEAK_OPEN_ESCAPE
            elif c == '"':
                state = _State.COMPLETE
        elif state is _State.WEAK_OPEN_ESCAPE:
            state = _State.WEAK_OPEN
        elif state is _State.STRONG_OPEN:
            if c == "\\":
                state = _State.STRONG_OPEN_ESCAPE
            elif c == "'":
                state = _State.COMPLETE
        elif state is _State.STRONG_OPEN_ESCAPE:
            state = _State.STRONG_OPEN
    return pos, state


def quoted_lines(stream: Iterable[str]) -> Iterator[str]:
    """Join raw lines into logical lines.

    ``stream`` yields raw text lines with their line endings. A quoted value
    may span several raw lines; trailing comments are cut off and line endings
    removed. Raises LineParseError if the input ends inside an open quote.
    """
    pieces = iter(stream)
    while True:
        buf = ""
        state = _State.COMPLETE
        while True:
            piece = next(pieces, None)
            if piece is None:
                if state is _State.COMPLETE:
                    return
                raise LineParseError(buf, len(buf))
            start = len(buf)
            buf += piece
            if buf.lstrip().startswith("#"):
                yield ""
                break
            pos, state = _end_state(state, piece)
            if state is _State.COMPLETE:
                if buf.endswith("\n"):
                    buf = buf[:-1]
                    if buf.endswith("\r"):
                        buf = buf[:-1]
                yield buf
                break
            if state is _State.COMMENT:
                yield buf[: start + pos]
                break


def _raw_lines(reader: Any, strip_bom: bool) -> Iterator[str]:
    """Yield text lines from a binary or text reader, optionally without a BOM."""
    first = True
    while True:
        try:
            raw = reader.readline()
        except OSError as exc:
            raise IoError(exc) from exc
        if not raw:
            return
        if isinstance(raw, bytes):
            if first and strip_bom and raw.startswith(codecs.BOM_UTF8):
                raw = raw[len(codecs.BOM_UTF8):]
            try:
                text = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise IoError(
                    OSError(errno.EINVAL, "stream did not contain valid UTF-8")
                ) from exc
        else:
            text = raw
            if first and strip_bom and text.startswith(_TEXT_BOM):
                text = text[len(_TEXT_BOM):]
        first = False
        if text:
            yield text


class EnvIter:
    """Iterator of ``(key, value)`` pairs read from an env-file stream.

    The reader may be binary (decoded as UTF-8) or text; it must provide
    ``readline``. A line that fails to parse raises LineParseError, after
    which iteration may continue with the next line.
    """

    def __init__(self, reader: Any) -> None:
        self._reader = reader
        self._lines: Iterator[str] | None = None
        self._substitution_data: dict[str, str | None] = {}

    def _start(self, strip_bom: bool) -> Iterator[str]:
        if self._lines is None:
            self._lines = quoted_lines(_raw_lines(self._reader, strip_bom))
        return self._lines

    def __iter__(self) -> EnvIter:
        return self

    def __next__(self) -> tuple[str, str]:
        lines = self._start(strip_bom=False)
        while True:
            result = parse_line(next(lines), self._substitution_data)
            if result is not None:
                return result

    def load(self) -> None:
        """Set every variable in the environment unless it is already set.

        Of repeated keys, the first occurrence wins.
        """
        self._start(strip_bom=True)
        for key, value in self:
            if key not in os.environ:
                os.environ[key] = value

    def load_override(self) -> None:
        """Set every variable in the environment, replacing existing values.

        Of repeated keys, the last occurrence wins.
        """
        self._start(strip_bom=True)
        for key, value in self:
            os.environ[key] = value