"""
Resolution of Ant-style resource expressions into concrete resources.

Expressions look like `classpath:/org/app/**/*.js`, `file:src/*.js`,
`~file:src/*Test.js` (an exclusion) or `https://example.com/lib.js` (a literal
remote location).

Usage::

    from resglob.resolver import ResolverConfig, ResourceSetResolver

    resolver = ResourceSetResolver(config=ResolverConfig(search_path=["lib/app.zip"]))
    refs = resolver.expand(["classpath:/app/**/*.js", "~classpath:/app/**/*Test.js"])
"""

from resglob.resolver.errors import (
    InvalidExpressionError,
    ResourceError,
    ResourceIOError,
    ResourceNotFoundError,
)
from resglob.resolver.expression import PathExpression, parse_expression
from resglob.resolver.locations import (
    ArchiveLocation,
    Location,
    LocationResolver,
    SearchPathResolver,
    TreeLocation,
)
from resglob.resolver.matchers import (
    ArchiveMatcher,
    OriginMatcher,
    RemoteMatcher,
    TreeMatcher,
    create_matcher,
)
from resglob.resolver.patterns import AntPattern, match_path
from resglob.resolver.resolver import ResourceSetResolver, expand
from resglob.resolver.types import ResolverConfig, ResourceRef

__all__ = [
    "AntPattern",
    "ArchiveLocation",
    "ArchiveMatcher",
    "InvalidExpressionError",
    "Location",
    "LocationResolver",
    "OriginMatcher",
    "PathExpression",
    "RemoteMatcher",
    "ResolverConfig",
    "ResourceError",
    "ResourceIOError",
    "ResourceNotFoundError",
    "ResourceRef",
    "ResourceSetResolver",
    "SearchPathResolver",
    "TreeLocation",
    "TreeMatcher",
    "create_matcher",
    "expand",
    "match_path",
    "parse_expression",
]
