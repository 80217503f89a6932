"""
Jinja2 frames for generated source files.

Each language ships its file, class and method frames as an in-memory
mapping of template name to source. Statements are rendered by the
language renderer and passed in as pre-formatted text.
"""

from typing import Dict, Any, Optional

from jinja2 import Environment, DictLoader, StrictUndefined


class TemplateError(Exception):
    """A frame template is missing or failed to render."""

    pass


def indent_lines(value: str, spaces: int = 4) -> str:
    """Indent every non-blank line; blank lines stay empty."""
    prefix = " " * spaces
    return "\n".join(prefix + line if line.strip() else "" for line in str(value).split("\n"))


class TemplateEngine:
    """Renders named in-memory templates for one target language."""

    def __init__(self, templates: Optional[Dict[str, str]] = None):
        self._loader = DictLoader(dict(templates or {}))
        self._env = Environment(
            loader=self._loader,
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.filters["indent"] = indent_lines

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a frame.

        Raises:
            TemplateError: If the template is unknown or references a
                variable missing from ``context``
        """
        try:
            return self._env.get_template(template_name).render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def add_template(self, name: str, content: str):
        self._loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        return template_name in self._loader.mapping


def create_template_engine(templates: Optional[Dict[str, str]] = None) -> TemplateEngine:
    """Create a template engine preloaded with in-memory templates."""
    return TemplateEngine(templates)
