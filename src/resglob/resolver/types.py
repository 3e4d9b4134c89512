"""Value types shared by the resolver modules."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResourceRef:
    """
    Opaque handle to one matched resource. Two refs are equal exactly when
    their locator strings are equal.
    """

    locator: str

    @property
    def origin(self) -> str | None:
        """Scheme-like prefix of the locator (`classpath`, `file`, `http`...)."""
        origin, sep, _ = self.locator.partition(":")
        return origin if sep and "/" not in origin else None

    def __str__(self) -> str:
        return self.locator


@dataclass
class ResolverConfig:
    """
    Settings for resolving expressions.

    `search_path=None` means use `sys.path` for `classpath:` lookups.
    `max_workers` bounds how many archives are scanned concurrently; 1 scans
    them sequentially.
    """

    search_path: list[str] | None = None
    max_workers: int = 4
