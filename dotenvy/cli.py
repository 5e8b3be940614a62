"""Command that runs a program with the environment from an env file."""

from __future__ import annotations

import os
import subprocess
import sys

from .api import dotenv, from_filename
from .errors import Error

_USAGE = "Usage: dotenvy <COMMAND> [ARGS]..."
_HELP = f"""Run a command using the environment in a .env file

{_USAGE}

Options:
  -f, --file <FILE>  Use a specific .env file (defaults to .env)
  -h, --help         Print help"""


class _UsageError(Exception):
    pass


def _parse_args(args: list[str]) -> tuple[str | None, list[str], bool]:
    """Split arguments into the env file name, the command, and a help flag."""
    filename: str | None = None
    items = iter(args)
    for arg in items:
        if arg == "--":
            return filename, list(items), False
        if arg in ("-h", "--help"):
            return filename, [], True
        if arg in ("-f", "--file"):
            filename = next(items, None)
            if filename is None:
                raise _UsageError("a value is required for '--file <FILE>'")
            continue
        if arg.startswith("--file="):
            filename = arg[len("--file="):]
            continue
        if arg.startswith("-f"):
            filename = arg[2:]
            continue
        if arg.startswith("-") and arg != "-":
            raise _UsageError(f"unexpected argument '{arg}' found")
        return filename, [arg, *items], False
    return filename, [], False


def _die(message: str) -> int:
    print(message, file=sys.stderr)
    return 1


def _run(command: list[str]) -> int:
    if os.name == "nt":
        try:
            completed = subprocess.run(command)
        except OSError as exc:
            return _die(f"fatal: {exc}")
        return completed.returncode
    try:
        os.execvp(command[0], command)
    except OSError as exc:
        return _die(f"fatal: {exc}")
    return 1


def main(argv: list[str] | None = None) -> int:
    """Load the env file, then run the given command in that environment."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(_HELP, file=sys.stderr)
        return 2
    try:
        filename, command, show_help = _parse_args(args)
    except _UsageError as exc:
        print(f"error: {exc}\n\n{_USAGE}", file=sys.stderr)
        return 2
    if show_help:
        print(_HELP)
        return 0

    try:
        if filename is None:
            dotenv()
        else:
            from_filename(filename)
    except Error as exc:
        return _die(f"error: failed to load environment: {exc}")

    if not command:
        return _die("error: missing required argument <COMMAND>")
    return _run(command)


if __name__ == "__main__":
    sys.exit(main())