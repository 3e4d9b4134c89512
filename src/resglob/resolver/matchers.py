"""
Origin matchers: list the resources one expression designates.

There are exactly three kinds of origin, each with its own matcher:
- `ArchiveMatcher` for `classpath:` roots that live inside zip archives
- `TreeMatcher` for `classpath:` roots in plain directories and for `file:`
- `RemoteMatcher` for everything else, taken as a literal location

`create_matcher()` picks the right one for an expression.
"""

from __future__ import annotations

import logging
import os
import zipfile
from abc import ABC, abstractmethod
from collections.abc import Sequence
from functools import partial
from pathlib import Path
from urllib.parse import urlsplit

from resglob.concurrency import run_indexed_tasks_fail_fast
from resglob.resolver.errors import (
    InvalidExpressionError,
    ResourceIOError,
    ResourceNotFoundError,
)
from resglob.resolver.expression import PathExpression
from resglob.resolver.locations import ArchiveLocation, LocationResolver
from resglob.resolver.patterns import compile_pattern
from resglob.resolver.types import ResolverConfig, ResourceRef

logger = logging.getLogger(__name__)

CLASSPATH_ORIGIN = "classpath"
FILE_ORIGIN = "file"


class OriginMatcher(ABC):
    """Lists the resources matching one expression within a single origin."""

    def __init__(self, expression: PathExpression) -> None:
        self.expression: PathExpression = expression

    @abstractmethod
    def list(self) -> list[ResourceRef]:
        """Return the matching resources. Never returns `None`."""


class ArchiveMatcher(OriginMatcher):
    """
    Matches the expression pattern against the members of one or more zip
    archives that all provide the expression's root.

    Results keep archive order, then member order within each archive, and
    members exposed by several archives are reported once.
    """

    def __init__(
        self,
        expression: PathExpression,
        locations: Sequence[ArchiveLocation],
        max_workers: int = 1,
    ) -> None:
        super().__init__(expression)
        self.locations: list[ArchiveLocation] = list(locations)
        self.max_workers: int = max_workers

    def list(self) -> list[ResourceRef]:
        tasks = [(i, partial(self._scan, location)) for i, location in enumerate(self.locations)]
        results = run_indexed_tasks_fail_fast(tasks, max_workers=self.max_workers)
        matches = dict.fromkeys(ref for _, refs in results for ref in refs)
        logger.debug(
            "Matched %d archive member(s) for %r in %d archive(s)",
            len(matches),
            self.expression.raw,
            len(self.locations),
        )
        return list(matches)

    def _scan(self, location: ArchiveLocation) -> list[ResourceRef]:
        entry_root = location.entry.strip("/")
        if entry_root:
            entry_root += "/"

        try:
            with zipfile.ZipFile(location.archive) as archive:
                members = [info.filename for info in archive.infolist() if not info.is_dir()]
        except (OSError, zipfile.BadZipFile) as e:
            raise ResourceIOError(f"Cannot read archive: {location.archive}") from e

        spec = compile_pattern(self.expression.pattern)
        origin = self.expression.origin or CLASSPATH_ORIGIN
        result: list[ResourceRef] = []
        for name in members:
            if not name.startswith(entry_root):
                continue
            relative = name[len(entry_root) :]
            if spec.match_file(relative):
                result.append(ResourceRef(f"{origin}:{entry_root}{relative}"))
        return result


class TreeMatcher(OriginMatcher):
    """
    Walks a directory tree and matches each file's path, relative to the base
    directory, against the expression pattern. Only files are reported.

    Directory symlinks are followed. Symbolic link loops are not detected.
    """

    def __init__(self, expression: PathExpression, base_dir: Path) -> None:
        super().__init__(expression)
        self.base_dir: Path = base_dir

    def list(self) -> list[ResourceRef]:
        if not self.base_dir.is_dir():
            raise ResourceIOError(f"Base directory not found: {self.base_dir}")

        root = Path(os.path.abspath(self.base_dir))
        spec = compile_pattern(self.expression.pattern)

        def raise_walk_error(error: OSError) -> None:
            raise ResourceIOError(f"Cannot read directory: {error.filename}") from error

        result: list[ResourceRef] = []
        walk = os.walk(root, onerror=raise_walk_error, followlinks=True)
        for dirpath, dirnames, filenames in walk:
            # Sorted in place for a stable traversal order.
            dirnames.sort()
            current = Path(dirpath)
            rel_dir = current.relative_to(root)
            for filename in sorted(filenames):
                if spec.match_file((rel_dir / filename).as_posix()):
                    result.append(ResourceRef(f"{FILE_ORIGIN}:{(current / filename).as_posix()}"))

        logger.debug("Matched %d file(s) for %r under %s", len(result), self.expression.raw, root)
        return result


class RemoteMatcher(OriginMatcher):
    """Returns the expression text itself as the only resource, once it parses as a URL."""

    def list(self) -> list[ResourceRef]:
        location = self.expression.location
        try:
            parts = urlsplit(location)
        except ValueError as e:
            raise InvalidExpressionError(f"Cannot parse remote location: {location}") from e
        if not parts.scheme or not (parts.netloc or parts.path):
            raise InvalidExpressionError(f"Not a valid remote location: {location}")
        return [ResourceRef(location)]


def create_matcher(
    expression: PathExpression,
    location_resolver: LocationResolver,
    config: ResolverConfig | None = None,
) -> OriginMatcher:
    """
    Select the matcher for an expression:

    1. `classpath:` whose root is first found inside an archive → `ArchiveMatcher`
    2. `classpath:` whose root is first found in a directory → `TreeMatcher`
    3. `file:` → `TreeMatcher` rooted at the expression's base directory
    4. anything else → `RemoteMatcher`

    Raises `ResourceNotFoundError` if a `classpath:` root is not on the search path.
    """
    config = config or ResolverConfig()

    if expression.origin == CLASSPATH_ORIGIN:
        locations = location_resolver.resolve(expression.root_dir)
        if not locations:
            raise ResourceNotFoundError(
                f"Classpath resource not found: /{expression.root_dir} (from {expression.raw!r})"
            )
        first = locations[0]
        if isinstance(first, ArchiveLocation):
            archives = [loc for loc in locations if isinstance(loc, ArchiveLocation)]
            logger.debug("Scanning %d archive(s) for %r", len(archives), expression.raw)
            return ArchiveMatcher(expression, archives, max_workers=config.max_workers)
        logger.debug("Scanning directory %s for %r", first.path, expression.raw)
        return TreeMatcher(expression, first.path)

    if expression.origin == FILE_ORIGIN:
        return TreeMatcher(expression, Path(expression.base_dir))

    return RemoteMatcher(expression)
