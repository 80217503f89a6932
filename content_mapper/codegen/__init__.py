"""
Content Mapper Code Generation Module

Generates mapper classes from content type definitions.
"""

from typing import Any, Dict, Optional, Union

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    list_all_language_info,
    list_supported_languages,
    register_generator,
)
from .core.generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .core.schema import (
    ContentTypeSchema,
    FieldKind,
    FieldSchema,
    SchemaError,
    parse_content_type,
)
from .core.config import GeneratorConfig, ConfigManager, load_config

# Version info
__version__ = "0.1.0"


# Convenience functions
def generate_mapper(
    schema: Union[ContentTypeSchema, Dict[str, Any]],
    language: str = "python",
    namespace: Optional[str] = None,
    config=None,
) -> str:
    """
    Generate a mapper class in one call.

    Args:
        schema: Content type as a ContentTypeSchema or an API document
        language: Target language
        namespace: Namespace of the resource classes
        config: Generator configuration dict, path or GeneratorConfig

    Returns:
        Generated code string

    Raises:
        GeneratorError: If generation fails
    """
    if not isinstance(schema, ContentTypeSchema):
        schema = parse_content_type(schema)

    generator = get_generator(language, config)
    result = generate_code(generator, schema, namespace)

    if result.success:
        return result.code
    else:
        raise GeneratorError(result.error_message) from result.exception


# Export main interfaces
__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "ContentTypeSchema",
    "FieldKind",
    "FieldSchema",
    "SchemaError",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "generate_code",
    "generate_mapper",
    "get_generator",
    "get_language_info",
    "list_all_language_info",
    "list_supported_languages",
    "register_generator",
]
