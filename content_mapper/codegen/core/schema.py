"""
Content type schema representation for code generation.

Converts content type documents from the management API into a
normalized, immutable form the mapper synthesizer works with.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
from enum import Enum

from ...logging_config import get_logger

logger = get_logger(__name__)


class SchemaError(Exception):
    """Exception raised when a content type document cannot be converted."""

    pass


class FieldKind(Enum):
    """Field types a content type can declare."""

    SYMBOL = "Symbol"
    TEXT = "Text"
    RICH_TEXT = "RichText"
    INTEGER = "Integer"
    NUMBER = "Number"
    DATE = "Date"
    BOOLEAN = "Boolean"
    LOCATION = "Location"
    OBJECT = "Object"
    LINK = "Link"
    ARRAY = "Array"
    UNKNOWN = "unknown"  # Anything the API adds later

    @classmethod
    def from_api_type(cls, type_name: Optional[str]) -> "FieldKind":
        """Map an API ``type`` string onto a kind, UNKNOWN if unrecognized."""
        try:
            return cls(type_name)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class FieldSchema:
    """A single field of a content type."""

    id: str
    kind: FieldKind
    type_name: str  # Raw API type, kept for UNKNOWN kinds
    items_type: Optional[str] = None  # Only for arrays

    @property
    def is_link_array(self) -> bool:
        return self.kind == FieldKind.ARRAY and self.items_type == "Link"


@dataclass(frozen=True)
class ContentTypeSchema:
    """A content type: an identifier and its ordered fields."""

    id: str
    fields: Tuple[FieldSchema, ...] = ()
    name: Optional[str] = None

    def get_field(self, field_id: str) -> Optional[FieldSchema]:
        """Get field by id."""
        for field in self.fields:
            if field.id == field_id:
                return field
        return None


def link_field(field_id: str) -> FieldSchema:
    """Build a single reference field."""
    return FieldSchema(field_id, FieldKind.LINK, FieldKind.LINK.value)


def array_field(field_id: str, items_type: str) -> FieldSchema:
    """Build an array field with the given item type."""
    return FieldSchema(field_id, FieldKind.ARRAY, FieldKind.ARRAY.value, items_type)


def date_field(field_id: str) -> FieldSchema:
    """Build a date field."""
    return FieldSchema(field_id, FieldKind.DATE, FieldKind.DATE.value)


def scalar_field(field_id: str, type_name: str = "Symbol") -> FieldSchema:
    """Build a field of any other type."""
    return FieldSchema(field_id, FieldKind.from_api_type(type_name), type_name)


def parse_field(data: Dict[str, Any]) -> FieldSchema:
    """
    Convert one entry of a content type's ``fields`` list.

    Args:
        data: Field document, e.g. ``{"id": "tags", "type": "Array",
            "items": {"type": "Symbol"}}``

    Returns:
        FieldSchema for the entry

    Raises:
        SchemaError: If the entry is not a mapping or has no id
    """
    if not isinstance(data, dict):
        raise SchemaError(f"Field definition must be an object, got {type(data).__name__}")

    field_id = data.get("id")
    if not field_id or not isinstance(field_id, str):
        raise SchemaError(f"Field definition without a valid id: {data!r}")

    type_name = str(data.get("type") or "")
    kind = FieldKind.from_api_type(type_name)
    if kind == FieldKind.UNKNOWN:
        logger.debug("Field %s has unrecognized type %r", field_id, type_name)

    items_type = None
    if kind == FieldKind.ARRAY:
        items = data.get("items") or {}
        if isinstance(items, dict):
            items_type = items.get("type")

    return FieldSchema(id=field_id, kind=kind, type_name=type_name, items_type=items_type)


def parse_content_type(data: Dict[str, Any]) -> ContentTypeSchema:
    """
    Convert a content type document into a ContentTypeSchema.

    Accepts both the management API shape (id under ``sys``) and a bare
    ``{"id": ..., "fields": [...]}`` mapping.

    Raises:
        SchemaError: If the document has no id or malformed fields
    """
    if not isinstance(data, dict):
        raise SchemaError(f"Content type must be an object, got {type(data).__name__}")

    sys = data.get("sys") if isinstance(data.get("sys"), dict) else {}
    content_type_id = sys.get("id") or data.get("id")
    if not content_type_id or not isinstance(content_type_id, str):
        raise SchemaError("Content type document has no id")

    raw_fields = data.get("fields") or []
    if not isinstance(raw_fields, list):
        raise SchemaError(f"Fields of content type {content_type_id} must be a list")

    try:
        fields = tuple(parse_field(field) for field in raw_fields)
    except SchemaError as e:
        raise SchemaError(f"Content type {content_type_id}: {e}") from e

    return ContentTypeSchema(id=content_type_id, fields=fields, name=data.get("name"))


def parse_content_types(document: Any) -> List[ContentTypeSchema]:
    """
    Convert a document holding one or many content types.

    Supported shapes are a single content type, a collection response
    (``{"items": [...]}``) and a plain list.
    """
    if isinstance(document, list):
        items = document
    elif isinstance(document, dict) and isinstance(document.get("items"), list):
        items = document["items"]
    else:
        items = [document]

    schemas = [parse_content_type(item) for item in items]
    logger.debug("Parsed %d content type(s)", len(schemas))

    return schemas
