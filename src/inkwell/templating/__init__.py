"""Jinja2 templating: environment setup and the ``Template`` return type."""

from inkwell.templating.integration import create_environment, render_template
from inkwell.templating.returns import Template

__all__ = ["Template", "create_environment", "render_template"]
