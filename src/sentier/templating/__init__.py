"""Templating: view rendering through kida."""

from sentier.templating.views import create_environment, render_view

__all__ = ["create_environment", "render_view"]
