"""Rendering of resolved resources for HTML test pages."""

from __future__ import annotations

from collections.abc import Iterable

from jinja2 import Environment, StrictUndefined

from resglob.resolver.types import ResourceRef

_env = Environment(autoescape=True, undefined=StrictUndefined)

_SCRIPT_TAGS = _env.from_string(
    "{% for src in sources %}"
    '<script type="text/javascript" src="{{ src }}"></script>'
    "{% endfor %}"
)


def generate_script_tags(sources: Iterable[ResourceRef | str]) -> str:
    """
    Render one `<script>` tag per source, in order, with no separators.
    Source locators are HTML-escaped inside the `src` attribute.
    """
    return _SCRIPT_TAGS.render(sources=[str(source) for source in sources])
