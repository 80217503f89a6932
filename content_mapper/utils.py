"""Loading content type documents.

A document is the JSON exported from the management API: a single
content type, a list of them, or a collection with ``items``. It can come
from a local file, a plain GET of a URL, or standard input.
"""

import json
import sys
from pathlib import Path
from typing import Any, TextIO
from urllib.parse import urlparse

import requests

from .codegen.core.schema import ContentTypeSchema, SchemaError, parse_content_types
from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30


class JSONLoaderError(Exception):
    """A document could not be read, fetched or decoded."""

    pass


def _decode(text: str, source: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise JSONLoaderError(f"Invalid JSON in {source}: {e}") from e


def load_json_from_file(file_path: str | Path) -> tuple[str, Any]:
    """Read and decode a JSON file.

    Returns:
        Tuple of (path as a string, decoded document).

    Raises:
        FileNotFoundError: If the file does not exist.
        JSONLoaderError: If it cannot be read or is not JSON.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if path.suffix.lower() != ".json":
        logger.warning("Reading %s as JSON despite its extension", path)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise JSONLoaderError(f"Error reading file {path}: {e}") from e

    data = _decode(text, f"file {path}")
    logger.info("Loaded %s", path)
    return str(path), data


def load_json_from_url(url: str, timeout: int = DEFAULT_TIMEOUT) -> tuple[str, Any]:
    """Fetch an exported document with a single unauthenticated GET.

    Raises:
        JSONLoaderError: If the URL is malformed, the request fails or the
            body is not JSON.
    """
    parts = urlparse(url)
    if not (parts.scheme and parts.netloc):
        raise JSONLoaderError(f"Invalid URL: {url}")

    logger.debug("GET %s (timeout %ss)", url, timeout)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        raise JSONLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        raise JSONLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        raise JSONLoaderError(f"HTTP error {e.response.status_code} for URL: {url}") from e
    except requests.exceptions.RequestException as e:
        raise JSONLoaderError(f"Request error for URL {url}: {e}") from e

    try:
        data = response.json()
    except ValueError as e:
        content_type = response.headers.get("content-type", "unknown")
        raise JSONLoaderError(
            f"Invalid JSON response from URL {url} ({content_type}): {e}"
        ) from e

    logger.info("Fetched %s", url)
    return url, data


def load_json_from_stream(stream: TextIO | None = None) -> tuple[str, Any]:
    """Decode a document from a text stream, standard input by default."""
    return "<stdin>", _decode((stream or sys.stdin).read(), "input")


def load_json(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> tuple[str, Any]:
    """Load a document from exactly one of ``file_path`` or ``url``."""
    if file_path and url:
        raise JSONLoaderError("Cannot specify both file_path and url")
    if file_path:
        return load_json_from_file(file_path)
    if url:
        return load_json_from_url(url, timeout)
    raise JSONLoaderError("Either file_path or url must be provided")


def load_content_types(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> tuple[str, list[ContentTypeSchema]]:
    """Load a document and parse every content type it contains.

    Raises:
        JSONLoaderError: If the document cannot be loaded or holds no valid
            content types.
    """
    source, data = load_json(file_path, url, timeout)
    try:
        schemas = parse_content_types(data)
    except SchemaError as e:
        raise JSONLoaderError(f"Invalid content type document {source}: {e}") from e

    logger.info("Parsed %d content type(s) from %s", len(schemas), source)
    return source, schemas
