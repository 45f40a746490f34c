#!/usr/bin/env python3
"""
Exception types raised by localekit.

Handlers and services raise these instead of bare library errors so callers
can tell a missing path from a broken file or an unsupported format.
"""


class LocaleError(Exception):
    """Base class for all localekit errors."""


class PathNotFoundError(LocaleError, FileNotFoundError):
    """Input file or directory does not exist."""


class MalformedContentError(LocaleError, ValueError):
    """File content could not be parsed by its format handler."""


class UnsupportedFormatError(LocaleError):
    """No handler matches, or the handler cannot perform the operation."""


class ProviderError(LocaleError):
    """Translation provider is misconfigured or returned an unusable response."""
