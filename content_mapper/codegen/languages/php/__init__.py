"""
PHP mapper generator module.

Generates mapper classes in the shape used by the PHP management SDK.
"""

from .generator import PhpGenerator
from .renderer import PhpRenderer

__all__ = [
    "PhpGenerator",
    "PhpRenderer",
]
