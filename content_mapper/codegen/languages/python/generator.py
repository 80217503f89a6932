"""
Python mapper generator implementation.

Generates mapper classes built on ``content_mapper.runtime``.
"""

from typing import Dict, Optional

from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator, GeneratorError
from ...core.naming import to_snake_case
from ...core.nodes import GeneratedUnit
from ...core.schema import ContentTypeSchema
from ...core.synthesizer import mapper_name_for
from .renderer import PythonRenderer
from .templates import TEMPLATES

# Names a StudlyCase class name can collide with
PYTHON_RESERVED_CLASS_NAMES = frozenset({"None", "True", "False"})


class PythonGenerator(CodeGenerator):
    """Code generator for Python mapper classes."""

    reserved_words = PYTHON_RESERVED_CLASS_NAMES

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Python generator with configuration."""
        super().__init__(config)
        self.renderer = PythonRenderer(self.template_engine, self.config.indent_size)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "python"

    @property
    def file_extension(self) -> str:
        """Return Python file extension."""
        return ".py"

    def get_templates(self) -> Dict[str, str]:
        return TEMPLATES

    def build_unit(self, schema: ContentTypeSchema, namespace: Optional[str] = None) -> GeneratedUnit:
        """Build the tree; resource classes must live in a module to be imported."""
        if namespace is None:
            namespace = self.config.namespace
        if not namespace.strip("."):
            raise GeneratorError(
                f"No module for the {schema.id} resource class: the namespace is empty"
            )
        return super().build_unit(schema, namespace)

    def render(self, unit: GeneratedUnit) -> str:
        return self.renderer.render(unit)

    def get_file_name(self, schema: ContentTypeSchema) -> str:
        """Module name of the mapper, e.g. ``blog_post_mapper.py``."""
        return to_snake_case(mapper_name_for(schema.id)) + self.file_extension


def create_python_generator(config: Optional[GeneratorConfig] = None, **overrides) -> PythonGenerator:
    """Create a Python generator, applying keyword overrides to the defaults."""
    if config is None:
        from ...core.config import load_config

        config = load_config("python", custom_config=overrides or None)

    return PythonGenerator(config)
