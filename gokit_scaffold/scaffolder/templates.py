"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which expands a template body against a
small project-data context.  Rendering is pure: nothing is written to disk
here, and any problem surfaces as a :class:`~gokit_scaffold.errors.TemplateError`
naming the offending template key.
"""

from __future__ import annotations

from typing import Any, Mapping

from jinja2 import Environment, StrictUndefined
from jinja2 import TemplateError as JinjaTemplateError

from gokit_scaffold.errors import TemplateError


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    Undefined variables are errors, not empty strings, so a template that
    references a field the context does not provide fails closed.
    """

    def __init__(self) -> None:
        self.env = Environment(
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )

    def render(self, template_key: str, body: str, context: Mapping[str, Any]) -> bytes:
        """Render *body* with *context* and return UTF-8 bytes.

        Args:
            template_key: Logical key of the template, used in error messages.
            body: The template source.
            context: Variables available inside the template.

        Raises:
            TemplateError: If the template cannot be parsed or references an
                undefined variable.
        """
        try:
            template = self.env.from_string(body)
        except JinjaTemplateError as exc:
            raise TemplateError(template_key, f"parse template {template_key}: {exc}") from exc

        try:
            rendered = template.render(**context)
        except JinjaTemplateError as exc:
            raise TemplateError(template_key, f"render template {template_key}: {exc}") from exc

        return rendered.encode("utf-8")
