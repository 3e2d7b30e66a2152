"""Exception hierarchy shared by the library and the CLI."""

from __future__ import annotations


class SprinkleError(Exception):
    """Base class for every error raised by :mod:`sprinkle`."""


class InputError(SprinkleError):
    """The source image is missing, unreadable, or not a supported format."""


class ConfigError(SprinkleError, ValueError):
    """A configuration option is outside its valid domain."""


class OutputError(SprinkleError):
    """The rendered image could not be written."""
