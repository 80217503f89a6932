"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from collections import Counter
from typing import Dict, List, Any, Optional

from .config import GeneratorConfig, load_config
from .naming import is_reserved
from .nodes import GeneratedUnit
from .schema import ContentTypeSchema, FieldKind
from .synthesizer import MapperSynthesizer, RuntimeTypes, class_name_for, mapper_name_for
from .templates import TemplateEngine, create_template_engine
from ...logging_config import get_logger

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all mapper generators."""

    #: Words that cannot be used as class names in the target language
    reserved_words: frozenset = frozenset()
    reserved_case_sensitive: bool = True

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or load_config(self.language_name)
        self._template_engine = None
        self._synthesizer = None

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'python', 'php')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.py', '.php')."""
        pass

    def get_templates(self) -> Dict[str, str]:
        """
        Return the in-memory templates this generator renders with.

        Returns:
            Mapping of template name to template source
        """
        return {}

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._template_engine = create_template_engine(self.get_templates())
        return self._template_engine

    @property
    def synthesizer(self) -> MapperSynthesizer:
        """Synthesizer configured with this generator's runtime types."""
        if self._synthesizer is None:
            self._synthesizer = MapperSynthesizer(
                self.config.get_runtime_types(), add_comments=self.config.add_comments
            )
        return self._synthesizer

    @abstractmethod
    def render(self, unit: GeneratedUnit) -> str:
        """
        Render a program tree to source text.

        Args:
            unit: Tree built by the synthesizer

        Returns:
            Source code of the unit
        """
        pass

    def build_unit(
        self, schema: ContentTypeSchema, namespace: Optional[str] = None
    ) -> GeneratedUnit:
        """Build the program tree of the mapper for a content type."""
        if namespace is None:
            namespace = self.config.namespace
        return self.synthesizer.build(schema, namespace)

    def generate(self, schema: ContentTypeSchema, namespace: Optional[str] = None) -> str:
        """
        Generate the mapper class for a content type.

        Args:
            schema: Content type to generate a mapper for
            namespace: Namespace of the resource classes (config default if None)

        Returns:
            Generated source code
        """
        return self.format_code(self.render(self.build_unit(schema, namespace)))

    def get_file_name(self, schema: ContentTypeSchema) -> str:
        """File name the mapper for a content type should be written to."""
        return mapper_name_for(schema.id) + self.file_extension

    def validate_schema(self, schema: ContentTypeSchema) -> List[str]:
        """
        Validate a schema for basic structural issues.

        Nothing here stops generation; unrecognized field types are
        generated as plain pass-through assignments.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        if not schema.fields:
            warnings.append(f"Content type '{schema.id}' has no fields")

        class_name = class_name_for(schema.id)
        if not class_name:
            warnings.append(f"Content type id '{schema.id}' yields an empty class name")
        elif class_name[0].isdigit():
            warnings.append(f"Class name '{class_name}' starts with a digit")
        elif is_reserved(class_name, self.reserved_words, self.reserved_case_sensitive):
            warnings.append(
                f"Class name '{class_name}' is reserved in {self.language_name}"
            )

        runtime_names = {RuntimeTypes.short(name) for name in self.config.runtime_types.values()}
        if mapper_name_for(schema.id) in runtime_names:
            warnings.append(
                f"Mapper class name '{mapper_name_for(schema.id)}' is also a runtime type"
            )

        counts = Counter(field.id for field in schema.fields)
        for field_id, count in counts.items():
            if count > 1:
                warnings.append(f"Field '{field_id}' is declared {count} times")

        for field in schema.fields:
            if field.kind == FieldKind.UNKNOWN:
                warnings.append(
                    f"Unknown type '{field.type_name}' in {schema.id}.{field.id}, "
                    f"values are passed through"
                )
            elif field.kind == FieldKind.ARRAY and not field.items_type:
                warnings.append(f"Array field {schema.id}.{field.id} has no item type")

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code ending with a single newline
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:  # Allow max 2 consecutive blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        code: str,
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator,
    schema: ContentTypeSchema,
    namespace: Optional[str] = None,
) -> GenerationResult:
    """
    Generate a mapper using the specified generator with error handling.

    Args:
        generator: Code generator instance
        schema: Content type to generate a mapper for
        namespace: Namespace of the resource classes

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = generator.validate_schema(schema)

        unit = generator.build_unit(schema, namespace)
        code = generator.format_code(generator.render(unit))

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "file_name": generator.get_file_name(schema),
            "content_type": schema.id,
            "class_name": unit.class_decl.name,
            "namespace": unit.namespace,
            "field_count": len(schema.fields),
            "uses_link": unit.has_import(generator.synthesizer.runtime_types.link),
            "uses_timestamp": unit.has_import(generator.synthesizer.runtime_types.timestamp),
        }

        for warning in warnings:
            logger.warning(warning)

        return GenerationResult(code, warnings, metadata)

    except Exception as e:
        logger.error("Code generation failed for %s: %s", schema.id, e)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)
