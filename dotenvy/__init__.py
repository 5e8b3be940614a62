"""Load environment variables from .env files, with a command to run programs in that environment."""

__version__ = "0.15.7"