"""Locating an env file in a directory or any of its parents."""

from __future__ import annotations

import errno
import io
import os
import stat
from pathlib import Path

from .errors import IoError
from .reader import EnvIter


def find(directory: str | os.PathLike[str], filename: str | os.PathLike[str]) -> Path:
    """Search for ``filename`` in ``directory`` and then in each parent.

    Returns the first path that names a regular file. Raises IoError if
    none is found or if a candidate cannot be inspected.
    """
    directory = Path(directory)
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / filename
        try:
            info = candidate.stat()
        except FileNotFoundError:
            continue
        except OSError as exc:
            raise IoError(exc) from exc
        if stat.S_ISREG(info.st_mode):
            return candidate
    raise IoError(FileNotFoundError(errno.ENOENT, "path not found"))


class Finder:
    """Finds an env file starting from the current working directory."""

    def __init__(self, filename: str | os.PathLike[str] = ".env") -> None:
        self.filename = Path(filename)

    def find(self) -> tuple[Path, EnvIter]:
        """Return the path found and an iterator over its variables."""
        try:
            cwd = Path.cwd()
        except OSError as exc:
            raise IoError(exc) from exc
        path = find(cwd, self.filename)
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise IoError(exc) from exc
        return path, EnvIter(io.BytesIO(content))