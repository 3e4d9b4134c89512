"""
Reading the content of resolved resources.

`classpath:` locators are looked up again on the search path (a file in a
directory, or a member of an archive), `file:` locators are read from disk and
`http:`/`https:` locators are fetched with `requests`.
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path

import requests

from resglob.resolver.errors import ResourceIOError, ResourceNotFoundError
from resglob.resolver.locations import ArchiveLocation, LocationResolver, SearchPathResolver
from resglob.resolver.matchers import CLASSPATH_ORIGIN, FILE_ORIGIN
from resglob.resolver.types import ResourceRef

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

_REMOTE_SCHEMES = frozenset({"http", "https"})


def read_text(
    ref: ResourceRef | str,
    location_resolver: LocationResolver | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    encoding: str = "utf-8",
) -> str:
    """
    Read a resource as text.

    Raises `ResourceNotFoundError` for a `classpath:` resource that is not on
    the search path, and `ResourceIOError` for anything that cannot be read.
    """
    locator = str(ref)
    scheme, sep, rest = locator.partition(":")
    if not sep:
        raise ResourceIOError(f"Resource has no scheme: {locator}")

    if scheme == CLASSPATH_ORIGIN:
        return _read_classpath(rest, location_resolver or SearchPathResolver(), encoding)
    if scheme == FILE_ORIGIN:
        # Accept both `file:/abs/path` and `file:///abs/path`.
        path = rest[2:] if rest.startswith("//") else rest
        return _read_file(Path(path), encoding)
    if scheme in _REMOTE_SCHEMES:
        return _read_remote(locator, timeout)
    raise ResourceIOError(f"Unsupported resource scheme {scheme!r}: {locator}")


def _read_classpath(path: str, location_resolver: LocationResolver, encoding: str) -> str:
    entry = path.strip("/")
    for location in location_resolver.resolve(entry):
        if isinstance(location, ArchiveLocation):
            try:
                with zipfile.ZipFile(location.archive) as archive:
                    data = archive.read(entry)
            except KeyError:
                # Only members below `entry` exist here, not `entry` itself.
                continue
            except (OSError, zipfile.BadZipFile) as e:
                raise ResourceIOError(f"Cannot read archive: {location.archive}") from e
            try:
                return data.decode(encoding)
            except UnicodeDecodeError as e:
                raise ResourceIOError(f"Cannot decode {entry} in {location.archive}") from e
        elif location.path.is_file():
            return _read_file(location.path, encoding)
    raise ResourceNotFoundError(f"Classpath resource not found: {CLASSPATH_ORIGIN}:{path}")


def _read_file(path: Path, encoding: str) -> str:
    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceIOError(f"Cannot read file: {path}") from e


def _read_remote(url: str, timeout: float) -> str:
    logger.debug("Fetching %s", url)
    try:
        r = requests.get(url, timeout=timeout, headers={"User-Agent": "resglob"})
        r.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise ResourceIOError(f"Cannot fetch {url}: {e}") from e
    return r.text
