"""
ResourceSetResolver: main entry point for expanding resource expressions.

Expands a list of expressions into a deduplicated, ordered list of resources:
every inclusion expression contributes its matches in input order, and every
exclusion expression (`~...`) removes its matches from the final result.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from resglob.resolver.expression import PathExpression
from resglob.resolver.locations import LocationResolver, SearchPathResolver
from resglob.resolver.matchers import create_matcher
from resglob.resolver.types import ResolverConfig, ResourceRef

logger = logging.getLogger(__name__)


class ResourceSetResolver:
    """
    Expands resource expressions against a search path, the file system and
    remote locations.

    The `location_resolver` answers `classpath:` lookups; by default it is a
    `SearchPathResolver` over `config.search_path` (or `sys.path`).
    """

    def __init__(
        self,
        location_resolver: LocationResolver | None = None,
        config: ResolverConfig | None = None,
    ) -> None:
        self._config: ResolverConfig = config or ResolverConfig()
        self._location_resolver: LocationResolver = location_resolver or SearchPathResolver(
            self._config.search_path
        )

    def expand(self, expressions: Sequence[str]) -> list[ResourceRef]:
        """
        Expand expressions into resources, inclusions minus exclusions.

        Empty strings are skipped. Resources keep the order in which inclusion
        expressions first produced them. Any error aborts the whole expansion.
        """
        includes: list[ResourceRef] = []
        excludes: list[ResourceRef] = []

        for text in expressions:
            if not text:
                continue
            expression = PathExpression.parse(text)
            matcher = create_matcher(expression, self._location_resolver, self._config)
            matches = matcher.list()
            logger.debug(
                "%s %r: %d resource(s) via %s",
                "Excluding" if expression.exclusion else "Including",
                expression.raw,
                len(matches),
                type(matcher).__name__,
            )
            if expression.exclusion:
                excludes.extend(matches)
            else:
                includes.extend(matches)

        excluded = set(excludes)
        return [ref for ref in dict.fromkeys(includes) if ref not in excluded]


def expand(
    expressions: str | Sequence[str],
    location_resolver: LocationResolver | None = None,
    config: ResolverConfig | None = None,
) -> list[ResourceRef]:
    """Expand one expression or a sequence of expressions. See `ResourceSetResolver.expand()`."""
    if isinstance(expressions, str):
        expressions = [expressions]
    return ResourceSetResolver(location_resolver, config).expand(expressions)
