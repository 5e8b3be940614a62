# dotenvy

Load environment variables from a `.env` file into the process environment.

A `.env` file holds `KEY=value` lines. Keys start with a letter or `_` and may
contain letters, digits, `_` and `.`. Values may be single-quoted (taken
literally), double-quoted (escapes and substitution allowed) or bare. A quoted
value may span several lines. `$NAME` and `${NAME}` are replaced with the value
from the environment, or failing that, with a value defined earlier in the same
file; an unknown name becomes the empty string. Lines may start with `export`,
and `#` starts a comment.

```sh
# .env
DATABASE_HOST=localhost
DATABASE_URL="postgres://${DATABASE_HOST}/app"
export DEBUG=1   # comments are allowed here
```

Inside bare or double-quoted values the escapes `\\`, `\'`, `\"`, `\$`, `\ `
(space) and `\n` are understood; any other escape is an error.

## Installing

```sh
pip install dotenvy
```

## Loading a file

```python
from dotenvy.api import dotenv, var

path = dotenv()          # finds .env in the current directory or a parent
print(f"loaded {path}")
print(var("DATABASE_URL"))
```

`dotenv()` keeps variables that already exist in the environment, and the
first occurrence of a key in the file wins. `dotenv_override()` replaces
existing variables, and the last occurrence wins.

Other functions in `dotenvy.api`:

- `from_filename(name)` / `from_filename_override(name)`: search for a file of
  that name upward from the current directory, load it, and return the path
  found.
- `from_path(path)` / `from_path_override(path)`: load an exact path.
- `from_read(reader)` / `from_read_override(reader)`: load from an open stream
  that has `readline`; binary streams are decoded as UTF-8, text streams are
  used as they are.
- `dotenv_iter()`, `from_filename_iter(name)`, `from_path_iter(path)`,
  `from_read_iter(reader)`: return an `EnvIter` (from `dotenvy.reader`) yielding
  `(key, value)` pairs without touching the environment; call `.load()` or
  `.load_override()` on it to apply them instead. Loading skips a leading UTF-8
  byte-order mark.
- `var(key)` and `vars()`: read the environment. The first call to either one
  tries to load `.env` once, ignoring any error. `vars()` returns an iterator
  over a snapshot of `(key, value)` pairs.

```python
from dotenvy.api import dotenv_iter

for key, value in dotenv_iter():
    print(f"{key}={value}")
```

Lower-level pieces are available too: `dotenvy.find.find(directory, filename)`
and `dotenvy.find.Finder`, `dotenvy.parse.parse_line` and
`dotenvy.parse.parse_value`, and `dotenvy.reader.quoted_lines`.

## Errors

All failures raise `dotenvy.errors.Error` or one of its subclasses:

- `LineParseError`: a line could not be parsed; it carries the `line` and the
  `index` where parsing failed. While iterating an `EnvIter`, iteration may
  continue past such an error with the next line.
- `IoError`: the file could not be read or found; the underlying `OSError` is
  in `.error`. `not_found()` is true when the file does not exist.
- `EnvVarError`: `var()` was asked for a variable that is not set; the name is
  in `.key`.

## Command line

Run a command with the variables of a `.env` file added to its environment:

```sh
dotenvy ./manage.py runserver
dotenvy -f config/dev.env printenv DATABASE_URL
dotenvy --file=config/dev.env -- python -V
```

`-f`/`--file` names the file to search for instead of `.env`; `--` ends the
options. On POSIX systems the command replaces the `dotenvy` process; on
Windows it runs as a child and its exit status is returned. If the file cannot
be loaded, an error is printed and the exit status is 1. With no arguments the
help text is printed.