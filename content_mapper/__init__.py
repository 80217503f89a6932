"""Mapper class generator for content management SDKs."""

from .codegen import __version__, generate_mapper

__all__ = ["__version__", "generate_mapper"]
