"""
Naming utilities for code generation.

Case conversions used to derive class, method and file names from
content type and field identifiers.
"""

import re
from typing import Iterable
from enum import Enum


class NamingCase(Enum):
    """Different naming case styles."""

    STUDLY_CASE = "studly"  # BlogPost
    CAMEL_CASE = "camel"  # blogPost
    SNAKE_CASE = "snake"  # blog_post


_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def to_studly_case(name: str) -> str:
    """
    Convert an identifier to StudlyCase.

    Splits on any run of non-alphanumeric characters and upper-cases the
    first letter of every segment. The rest of each segment is kept as is,
    so already StudlyCase input comes back unchanged.

    Args:
        name: Identifier such as ``blog_post`` or ``blog-post``

    Returns:
        StudlyCase name such as ``BlogPost``
    """
    segments = [segment for segment in _SEPARATORS.split(name) if segment]
    return "".join(segment[0].upper() + segment[1:] for segment in segments)


def to_camel_case(name: str) -> str:
    """Convert to camelCase."""
    studly = to_studly_case(name)
    if not studly:
        return studly
    return studly[0].lower() + studly[1:]


def to_snake_case(name: str) -> str:
    """Convert to snake_case."""
    # Insert underscore before uppercase letters
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    name = _SEPARATORS.sub("_", name)

    return name.lower().strip("_")


def convert_case(name: str, target_case: NamingCase) -> str:
    """Convert name to target case style."""
    if target_case == NamingCase.STUDLY_CASE:
        return to_studly_case(name)
    elif target_case == NamingCase.CAMEL_CASE:
        return to_camel_case(name)
    elif target_case == NamingCase.SNAKE_CASE:
        return to_snake_case(name)
    else:
        return name


def is_reserved(name: str, reserved_words: Iterable[str], case_sensitive: bool = True) -> bool:
    """Check whether a generated name collides with a reserved word."""
    if case_sensitive:
        return name in set(reserved_words)
    return name.lower() in {word.lower() for word in reserved_words}
