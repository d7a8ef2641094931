"""Kida environment setup for views.

Creates a kida Environment from sentier's PipelineConfig. The Pipeline
builds one lazily the first time ``view()`` is called, unless an
environment was injected at construction.
"""

from collections.abc import Mapping
from typing import Any

from kida import Environment, FileSystemLoader

from sentier.config import PipelineConfig


def create_environment(config: PipelineConfig) -> Environment:
    """Create a kida Environment rooted at ``config.template_dir``."""
    return Environment(
        loader=FileSystemLoader(str(config.template_dir)),
        autoescape=config.autoescape,
        auto_reload=config.debug,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )


def render_view(env: Environment, name: str, context: Mapping[str, Any]) -> str:
    """Render the template *name* to a string."""
    template = env.get_template(name)
    return template.render(dict(context))
