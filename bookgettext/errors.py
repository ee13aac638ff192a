"""Error definitions for the bookgettext preprocessor."""

from __future__ import annotations


class BookGettextError(Exception):
    """Base exception for all custom errors."""


class CatalogConfigurationError(BookGettextError):
    """Raised when the preprocessor configuration does not name a usable catalog."""


class CatalogLoadError(BookGettextError):
    """Raised when the translation catalog cannot be read or parsed."""


class BookFormatError(BookGettextError):
    """Raised when the host passes a book or context we cannot decode."""
