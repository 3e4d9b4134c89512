"""
Lookup of `classpath:` roots on a search path.

The search path plays the role of a classpath: an ordered list of directories
and zip archives, `sys.path` by default. A root is found in a directory when
the joined path exists, and in an archive when some member lives at or below it.
"""

from __future__ import annotations

import logging
import sys
import zipfile
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from resglob.resolver.errors import ResourceIOError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreeLocation:
    """A root found on the real file system (a directory, or a single file)."""

    path: Path


@dataclass(frozen=True)
class ArchiveLocation:
    """A root found inside a zip archive. `entry` has no leading or trailing `/`."""

    archive: Path
    entry: str


Location = TreeLocation | ArchiveLocation


class LocationResolver(Protocol):
    """Maps a classpath-style root to the physical locations that provide it."""

    def resolve(self, root_path: str) -> list[Location]: ...


class SearchPathResolver:
    """
    Resolves roots against an ordered search path of directories and archives.

    Entries that are neither directories nor zip files (missing paths, eggs
    in other formats, and so on) are skipped, as the import system does.
    """

    def __init__(self, search_path: Sequence[str | Path] | None = None) -> None:
        self._search_path = search_path

    @property
    def search_path(self) -> list[Path]:
        """The effective search path. Reads `sys.path` at call time when not set."""
        entries = sys.path if self._search_path is None else self._search_path
        return [Path(entry) for entry in entries]

    def resolve(self, root_path: str) -> list[Location]:
        root = root_path.strip("/")
        locations: list[Location] = []
        for entry in self.search_path:
            if entry.is_dir():
                candidate = entry / root if root else entry
                if candidate.exists():
                    locations.append(TreeLocation(candidate))
            elif zipfile.is_zipfile(entry):
                if _archive_contains(entry, root):
                    locations.append(ArchiveLocation(entry, root))
        logger.debug("Resolved classpath root %r to %d location(s)", root, len(locations))
        return locations


def _archive_contains(archive: Path, entry: str) -> bool:
    """Check if an archive has a member named `entry` or members under it."""
    if not entry:
        return True
    prefix = entry + "/"
    try:
        with zipfile.ZipFile(archive) as zf:
            return any(name == entry or name.startswith(prefix) for name in zf.namelist())
    except (OSError, zipfile.BadZipFile) as e:
        raise ResourceIOError(f"Cannot read archive: {archive}") from e
