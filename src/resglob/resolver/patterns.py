"""
Ant-style path matching implemented as a `pathspec` pattern.

Semantics (case-sensitive, `/`-separated):
- `?` matches exactly one character other than `/`
- `*` matches zero or more characters other than `/`
- `**` as a whole segment matches zero or more whole segments

Unlike gitignore patterns, an Ant pattern is always anchored at the scan root
and never matches the contents of a matched directory implicitly.
"""

from __future__ import annotations

import re

import pathspec
from pathspec.pattern import RegexPattern

_ANY_SEGMENTS = "**"


class AntPattern(RegexPattern):
    """A `pathspec` pattern compiled from an Ant path expression."""

    @classmethod
    def pattern_to_regex(cls, pattern: str) -> tuple[str | None, bool | None]:
        segments = _collapse_any_segments([s for s in pattern.split("/") if s])
        if not segments:
            return None, None

        parts: list[str] = []
        last = len(segments) - 1
        for i, segment in enumerate(segments):
            if segment == _ANY_SEGMENTS:
                if i == last:
                    parts.append("(?:/.*)?" if i > 0 else ".*")
                else:
                    parts.append("(?:/[^/]+)*/" if i > 0 else "(?:[^/]+/)*")
            else:
                follows_any = i > 0 and segments[i - 1] == _ANY_SEGMENTS
                separator = "/" if i > 0 and not follows_any else ""
                parts.append(separator + _segment_to_regex(segment))

        return "^" + "".join(parts) + "$", True


def _collapse_any_segments(segments: list[str]) -> list[str]:
    """Reduce runs of `**` segments to a single one."""
    collapsed: list[str] = []
    for segment in segments:
        if segment == _ANY_SEGMENTS and collapsed and collapsed[-1] == _ANY_SEGMENTS:
            continue
        collapsed.append(segment)
    return collapsed


def _segment_to_regex(segment: str) -> str:
    out: list[str] = []
    for char in segment:
        if char == "*":
            out.append("[^/]*")
        elif char == "?":
            out.append("[^/]")
        else:
            out.append(re.escape(char))
    return "".join(out)


def compile_pattern(pattern: str) -> pathspec.PathSpec:
    """Compile an Ant pattern into a `PathSpec` whose `match_file()` applies it."""
    return pathspec.PathSpec.from_lines(AntPattern, [pattern])


def match_path(pattern: str, path: str) -> bool:
    """Check whether a relative `/`-separated path matches an Ant pattern."""
    return compile_pattern(pattern).match_file(path)
