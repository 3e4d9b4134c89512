"""
Parsing of resource expressions.

An expression is an Ant-style path with two optional prefixes:

    [~][origin:]path/with/**/gl?bs/*.js

A leading `~` marks an exclusion. An `origin:` token (appearing before any `/`)
selects where resources are looked up: `classpath`, `file`, or anything else,
which is treated as a literal remote location such as an `http:` URL.

The path is split into a literal `root_dir` and a glob `pattern` at the first
segment containing `*` or `?`. When no segment is a glob, the last segment
becomes the pattern, so `foo/bar/test.ext` has root `foo/bar` and pattern
`test.ext`.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass

from resglob.resolver.errors import InvalidExpressionError

EXCLUSION_MARKER = "~"

ORIGIN_SEPARATOR = ":"

# Characters that make a path segment part of the pattern rather than the root.
_GLOB_CHARS = frozenset("*?")


@dataclass(frozen=True)
class PathExpression:
    """A parsed resource expression. Build instances with `PathExpression.parse()`."""

    raw: str
    exclusion: bool
    origin: str | None
    root_dir: str
    pattern: str
    absolute: bool = False

    @classmethod
    def parse(cls, text: str) -> PathExpression:
        """
        Parse `text` into its exclusion flag, origin, root directory and pattern.

        Raises `InvalidExpressionError` if `text` is empty or blank.
        """
        raw = text.strip()
        if not raw or raw == EXCLUSION_MARKER:
            raise InvalidExpressionError(f"Expression cannot be empty: {text!r}")

        exclusion = raw.startswith(EXCLUSION_MARKER)
        body = raw[1:] if exclusion else raw

        origin, path = _split_origin(body)
        absolute, segments = _normalize_segments(path)
        root_dir, pattern = _partition_segments(segments)

        return cls(
            raw=raw,
            exclusion=exclusion,
            origin=origin,
            root_dir=root_dir,
            pattern=pattern,
            absolute=absolute,
        )

    @property
    def location(self) -> str:
        """The expression text without its exclusion marker."""
        return self.raw[1:] if self.exclusion else self.raw

    @property
    def base_dir(self) -> str:
        """Directory a file-system scan for this expression starts from."""
        if self.absolute:
            return "/" + self.root_dir
        return self.root_dir or "."

    @property
    def path(self) -> str:
        """The normalized path: `root_dir` and `pattern` joined back together."""
        joined = "/".join(part for part in (self.root_dir, self.pattern) if part)
        return "/" + joined if self.absolute else joined


def parse_expression(text: str) -> PathExpression:
    return PathExpression.parse(text)


def _split_origin(body: str) -> tuple[str | None, str]:
    """Split off an `origin:` prefix if a colon appears before the first `/`."""
    colon = body.find(ORIGIN_SEPARATOR)
    if colon <= 0:
        return None, body
    slash = body.find("/")
    if slash != -1 and slash < colon:
        return None, body
    return body[:colon], body[colon + 1 :]


def _normalize_segments(path: str) -> tuple[bool, list[str]]:
    """
    Collapse `.`, `..` and repeated separators. Returns whether the path was
    absolute and its segments, without the leading separator.
    """
    if not path:
        return False, [""]
    absolute = path.startswith("/")
    normalized = posixpath.normpath(path).lstrip("/")
    if normalized == ".":
        normalized = ""
    return absolute, normalized.split("/")


def _partition_segments(segments: list[str]) -> tuple[str, str]:
    """Split segments at the first glob segment, or at the last segment."""
    last = len(segments) - 1
    for index, segment in enumerate(segments):
        if index == last or any(c in segment for c in _GLOB_CHARS):
            return "/".join(segments[:index]), "/".join(segments[index:])
    return "", ""
