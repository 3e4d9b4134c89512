from resglob.reading import read_text
from resglob.render import generate_script_tags
from resglob.resolver import (
    InvalidExpressionError,
    PathExpression,
    ResolverConfig,
    ResourceError,
    ResourceIOError,
    ResourceNotFoundError,
    ResourceRef,
    ResourceSetResolver,
    expand,
)

__all__ = [
    "InvalidExpressionError",
    "PathExpression",
    "ResolverConfig",
    "ResourceError",
    "ResourceIOError",
    "ResourceNotFoundError",
    "ResourceRef",
    "ResourceSetResolver",
    "expand",
    "generate_script_tags",
    "read_text",
]
