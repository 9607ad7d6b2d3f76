from __future__ import annotations

from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined


class Renderer:
    """
    Render a Jinja template

    Sets up Jinja renderer and renders templates using provided context.
    Rendered templates are returned as strings. Nothing is written
    to disk.

    Usage:

    >>> from setupkit.templates.render import Renderer
    >>> r = Renderer('path/to/templates')
    >>> output_string = r.render_template('vite.config.ts', {'framework': 'vue-ts'})
    """

    def __init__(self, template_dir: str):
        self.template_dir = template_dir
        self.jinja_env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=False,
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def render_template(self, template: str, context: Any) -> str:
        """
        Render a single template to a string using provided context

        :param template: Name of the template file, relative to `template_dir`.
        :param context: Context to render the template with.
        :return: The resulting string.
        """

        # Jinja2 always uses /, even on Windows
        template = template.replace("\\", "/")

        tpl_object = self.jinja_env.get_template(template)
        return tpl_object.render(context)
