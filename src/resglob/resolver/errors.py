"""Exceptions raised while resolving resource expressions."""

from __future__ import annotations


class ResourceError(Exception):
    """Base class for all resolution failures."""


class InvalidExpressionError(ResourceError, ValueError):
    """The expression text is empty or cannot be used as a location."""


class ResourceNotFoundError(ResourceError, LookupError):
    """A classpath root (or resource) could not be located on the search path."""


class ResourceIOError(ResourceError, OSError):
    """An archive, directory tree, or resource could not be opened or read."""
