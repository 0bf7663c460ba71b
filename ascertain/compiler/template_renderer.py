"""Template rendering for generated validator modules."""

from __future__ import annotations

import os
from typing import Optional, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined


VALIDATOR_TEMPLATE = "validator.py.j2"


def _get_template_directories() -> list[str]:
    # Base dir is .../ascertain/compiler
    base_dir = os.path.dirname(os.path.abspath(__file__))
    return [os.path.abspath(os.path.join(base_dir, "../template"))]


class TemplateRenderer:
    """Unified template rendering utility."""

    def __init__(self, template_dir: str | list[str] | None = None):
        if template_dir is None:
            template_dirs = _get_template_directories()
        elif isinstance(template_dir, str):
            template_dirs = [template_dir]
        else:
            template_dirs = list(template_dir)

        self.template_dirs = template_dirs
        self.env = Environment(
            loader=FileSystemLoader(self.template_dirs),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            newline_sequence="\n",
            autoescape=False,
            undefined=StrictUndefined,
        )

    def render_template(self, template_name: str, **kwargs) -> str:
        template = self.env.get_template(template_name)
        return template.render(**kwargs)

    def render_validator(self, *, mode: str, functions: Sequence[str], entry: str, registry_size: int) -> str:
        """Assemble generated functions into a module exposing ``factory(registry)``."""
        return self.render_template(
            VALIDATOR_TEMPLATE,
            mode=mode,
            functions=functions,
            entry=entry,
            registry_size=registry_size,
        )


_RENDERER: Optional[TemplateRenderer] = None


def get_renderer() -> TemplateRenderer:
    """Return the shared renderer (cached)."""
    global _RENDERER
    if _RENDERER is None:
        _RENDERER = TemplateRenderer()
    return _RENDERER
