"""
Language-specific mapper generators.

This module contains generators for different programming languages.
"""

from .python import PythonGenerator, create_python_generator
from .php import PhpGenerator

__all__ = [
    "PythonGenerator",
    "PhpGenerator",
    "create_python_generator",
]
