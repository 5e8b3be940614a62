"""Loading env files into the process environment."""

from __future__ import annotations

import io
import os
import threading
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from .errors import EnvVarError, Error, IoError
from .find import Finder
from .reader import EnvIter

_start_lock = threading.Lock()
_started = False


def _load_once() -> None:
    """Load the default env file the first time it is asked for, ignoring errors."""
    global _started
    with _start_lock:
        if _started:
            return
        _started = True
        try:
            dotenv()
        except Error:
            pass


def _open_path(path: str | os.PathLike[str]) -> EnvIter:
    try:
        content = Path(path).read_bytes()
    except OSError as exc:
        raise IoError(exc) from exc
    return EnvIter(io.BytesIO(content))


def var(key: str) -> str:
    """Return the value of an environment variable.

    The default env file is loaded on the first call to this function or
    to :func:`vars`. Raises EnvVarError if the variable is not set.
    """
    _load_once()
    value = os.environ.get(key)
    if value is None:
        raise EnvVarError(key)
    return value


def vars() -> Iterator[tuple[str, str]]:
    """Return a snapshot of all environment variables as ``(key, value)`` pairs.

    The default env file is loaded on the first call to this function or
    to :func:`var`.
    """
    _load_once()
    return iter(list(os.environ.items()))


def from_path(path: str | os.PathLike[str]) -> None:
    """Load variables from ``path``, keeping values already in the environment."""
    _open_path(path).load()


def from_path_override(path: str | os.PathLike[str]) -> None:
    """Load variables from ``path``, replacing values already in the environment."""
    _open_path(path).load_override()


def from_path_iter(path: str | os.PathLike[str]) -> EnvIter:
    """Return an iterator over the variables in ``path``."""
    return _open_path(path)


def from_filename(filename: str | os.PathLike[str]) -> Path:
    """Find ``filename`` in the current directory or a parent and load it.

    Existing environment variables are kept. Returns the path loaded.
    """
    path, env_iter = Finder(filename).find()
    env_iter.load()
    return path


def from_filename_override(filename: str | os.PathLike[str]) -> Path:
    """Find ``filename`` in the current directory or a parent and load it.

    Existing environment variables are replaced. Returns the path loaded.
    """
    path, env_iter = Finder(filename).find()
    env_iter.load_override()
    return path


def from_filename_iter(filename: str | os.PathLike[str]) -> EnvIter:
    """Find ``filename`` in the current directory or a parent; iterate its variables."""
    _, env_iter = Finder(filename).find()
    return env_iter


def from_read(reader: Any) -> None:
    """Load variables from a readable stream, keeping existing values."""
    EnvIter(reader).load()


def from_read_override(reader: Any) -> None:
    """Load variables from a readable stream, replacing existing values."""
    EnvIter(reader).load_override()


def from_read_iter(reader: Any) -> EnvIter:
    """Return an iterator over the variables in a readable stream."""
    return EnvIter(reader)


def dotenv() -> Path:
    """Load the ``.env`` file from the current directory or a parent.

    Existing environment variables are kept. Returns the path loaded.
    """
    path, env_iter = Finder().find()
    env_iter.load()
    return path


def dotenv_override() -> Path:
    """Load the ``.env`` file from the current directory or a parent.

    Existing environment variables are replaced. Returns the path loaded.
    """
    path, env_iter = Finder().find()
    env_iter.load_override()
    return path


def dotenv_iter() -> EnvIter:
    """Return an iterator over the variables of the nearest ``.env`` file."""
    _, env_iter = Finder().find()
    return env_iter