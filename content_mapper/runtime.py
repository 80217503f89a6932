"""Runtime support for generated Python mappers.

Generated mapper modules import ``BaseMapper``, ``SystemProperties``,
``Link`` and ``Timestamp`` from here (the import paths are configurable
through ``runtime_types``).
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Mapping

import dateparser

from .logging_config import get_logger

logger = get_logger(__name__)

# API dates are ISO 8601: a full calendar date, optionally followed by a time
ISO_DATE = re.compile(
    r"^\d{4}-\d{2}-\d{2}"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?$"
)

DATEPARSER_SETTINGS = {
    "RETURN_AS_TIMEZONE_AWARE": True,
    "TIMEZONE": "UTC",
    "DATE_ORDER": "YMD",
    "STRICT_PARSING": True,
    "PREFER_DAY_OF_MONTH": "first",
}


class Resource:
    """Base class for resource classes hydrated by mappers."""

    sys: SystemProperties | None = None
    fields: dict | None = None

    def get_id(self) -> str | None:
        return self.sys.id if self.sys is not None else None

    def get_field(self, field_id: str, locale: str | None = None) -> Any:
        value = (self.fields or {}).get(field_id)
        if locale is None or not isinstance(value, dict):
            return value
        return value.get(locale)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.get_id()!r}>"


class BaseMapper:
    """Base class of generated mappers."""

    def map(self, resource, data: dict):
        raise NotImplementedError

    def hydrate(self, target, data: Mapping[str, Any]):
        """Set every key of ``data`` as an attribute of ``target``.

        A class target is instantiated without calling its constructor;
        an instance target is updated in place.
        """
        if isinstance(target, type):
            target = target.__new__(target)

        for key, value in data.items():
            setattr(target, key, value)

        logger.debug("Hydrated %s with %s", type(target).__name__, ", ".join(data))
        return target


class Timestamp(datetime):
    """A ``datetime`` parsed from an API date string.

    Only ISO 8601 dates are accepted; partial or locale-ordered dates
    raise ``ValueError`` instead of being completed from the current date.
    """

    def __new__(cls, value, *args, **kwargs):
        if not isinstance(value, str):
            return super().__new__(cls, value, *args, **kwargs)

        parsed = None
        if ISO_DATE.match(value.strip()):
            parsed = dateparser.parse(value.strip(), settings=DATEPARSER_SETTINGS)
        if parsed is None:
            raise ValueError(f"Unrecognized date: {value!r}")

        return super().__new__(
            cls,
            parsed.year,
            parsed.month,
            parsed.day,
            parsed.hour,
            parsed.minute,
            parsed.second,
            parsed.microsecond,
            parsed.tzinfo,
        )


class SystemProperties:
    """System metadata of a resource, wrapping its ``sys`` mapping."""

    def __init__(self, data: Mapping[str, Any] | None):
        self.data = dict(data or {})

    @property
    def id(self) -> str | None:
        return self.data.get("id")

    @property
    def type(self) -> str | None:
        return self.data.get("type")

    @property
    def version(self) -> int | None:
        return self.data.get("version")

    @property
    def created_at(self) -> Timestamp | None:
        return self._timestamp("createdAt")

    @property
    def updated_at(self) -> Timestamp | None:
        return self._timestamp("updatedAt")

    @property
    def content_type(self) -> Link | None:
        link = self.data.get("contentType")
        if not link:
            return None
        return Link(link["sys"]["id"], link["sys"]["linkType"])

    def _timestamp(self, key: str) -> Timestamp | None:
        value = self.data.get(key)
        return Timestamp(value) if value else None

    def __repr__(self) -> str:
        return f"SystemProperties(id={self.id!r}, type={self.type!r})"


class Link:
    """Reference to another resource by id and link type."""

    __slots__ = ("link_id", "link_type")

    def __init__(self, link_id: str, link_type: str):
        self.link_id = link_id
        self.link_type = link_type

    def __eq__(self, other) -> bool:
        if not isinstance(other, Link):
            return NotImplemented
        return (self.link_id, self.link_type) == (other.link_id, other.link_type)

    def __hash__(self) -> int:
        return hash((self.link_id, self.link_type))

    def __repr__(self) -> str:
        return f"Link({self.link_id!r}, {self.link_type!r})"
