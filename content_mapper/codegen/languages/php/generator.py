"""
PHP mapper generator implementation.

Generates mapper classes for the PHP management SDK.
"""

from typing import Dict, Optional

from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator
from ...core.nodes import GeneratedUnit
from .renderer import PhpRenderer
from .templates import TEMPLATES

# PHP keywords and reserved type names, compared case-insensitively
PHP_RESERVED_WORDS = frozenset(
    {
        "abstract",
        "and",
        "array",
        "as",
        "bool",
        "break",
        "callable",
        "case",
        "catch",
        "class",
        "clone",
        "const",
        "continue",
        "declare",
        "default",
        "do",
        "echo",
        "else",
        "elseif",
        "empty",
        "enum",
        "eval",
        "exit",
        "extends",
        "false",
        "final",
        "finally",
        "float",
        "fn",
        "for",
        "foreach",
        "function",
        "global",
        "goto",
        "if",
        "implements",
        "include",
        "instanceof",
        "insteadof",
        "int",
        "interface",
        "isset",
        "iterable",
        "list",
        "match",
        "mixed",
        "namespace",
        "never",
        "new",
        "null",
        "object",
        "or",
        "parent",
        "print",
        "private",
        "protected",
        "public",
        "readonly",
        "require",
        "return",
        "self",
        "static",
        "string",
        "switch",
        "throw",
        "trait",
        "true",
        "try",
        "unset",
        "use",
        "var",
        "void",
        "while",
        "xor",
        "yield",
    }
)


class PhpGenerator(CodeGenerator):
    """Code generator for PHP mapper classes."""

    reserved_words = PHP_RESERVED_WORDS
    reserved_case_sensitive = False

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize PHP generator with configuration."""
        super().__init__(config)
        self.renderer = PhpRenderer(
            self.template_engine,
            indent_size=self.config.indent_size,
            add_comments=self.config.add_comments,
        )

    @property
    def language_name(self) -> str:
        return "php"

    @property
    def file_extension(self) -> str:
        return ".php"

    def get_templates(self) -> Dict[str, str]:
        return TEMPLATES

    def render(self, unit: GeneratedUnit) -> str:
        return self.renderer.render(unit)
