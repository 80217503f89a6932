"""
Python mapper generator module.

Generates Python mapper classes for content types.
"""

from .generator import PythonGenerator, create_python_generator
from .renderer import PythonRenderer

__all__ = [
    "PythonGenerator",
    "PythonRenderer",
    "create_python_generator",
]
