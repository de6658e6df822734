"""Jinja2 environment setup.

The environment is created once when the blog freezes and is shared by
every request afterwards.
"""

from pathlib import Path

import jinja2
from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from inkwell.errors import TemplateError
from inkwell.templating.returns import Template


def create_environment(
    template_dir: str | Path | None,
    *,
    debug: bool = False,
) -> Environment:
    """Create a jinja2 Environment.

    A configured *template_dir* takes precedence over the packaged
    templates, so individual pages can be overridden one file at a time.
    """
    loaders: list[jinja2.BaseLoader] = []
    if template_dir is not None:
        loaders.append(FileSystemLoader(str(template_dir)))
    loaders.append(PackageLoader("inkwell", "templates"))

    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=select_autoescape(["html"]),
        auto_reload=debug,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_template(env: Environment, tpl: Template) -> str:
    """Render a full template to string.

    Raises ``TemplateError`` if the template is missing or fails to render.
    """
    try:
        template = env.get_template(tpl.name)
        return template.render(tpl.context)
    except jinja2.TemplateError as exc:
        raise TemplateError(tpl.name, str(exc) or type(exc).__name__) from exc
