"""
Core code generation components.

Provides the schema model, the program tree, the mapper synthesizer and
the base classes used by all language generators.
"""

from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .schema import (
    ContentTypeSchema,
    FieldKind,
    FieldSchema,
    SchemaError,
    parse_content_type,
    parse_content_types,
)
from .synthesizer import (
    ImportSet,
    MapperSynthesizer,
    RuntimeTypes,
    class_name_for,
    mapper_name_for,
)
from .naming import NamingCase, to_studly_case, to_snake_case
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Schema system - core data structures
    "ContentTypeSchema",
    "FieldKind",
    "FieldSchema",
    "SchemaError",
    "parse_content_type",
    "parse_content_types",
    # Mapper synthesis - language-agnostic
    "ImportSet",
    "MapperSynthesizer",
    "RuntimeTypes",
    "class_name_for",
    "mapper_name_for",
    # Naming utilities
    "NamingCase",
    "to_studly_case",
    "to_snake_case",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system - language-agnostic
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
