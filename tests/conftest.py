"""Test fixtures for content-mapper tests."""

from __future__ import annotations

import json
import sys
import types
from typing import Any

import pytest

from content_mapper.codegen.core.config import load_config
from content_mapper.codegen.core.schema import ContentTypeSchema, parse_content_type
from content_mapper.codegen.languages.php import PhpGenerator
from content_mapper.codegen.languages.python import PythonGenerator
from content_mapper.runtime import Resource


def make_field(field_id: str, type_name: str = "Symbol", items_type: str | None = None) -> dict:
    """Create a field document as the management API returns it."""
    field: dict[str, Any] = {
        "id": field_id,
        "name": field_id.title(),
        "type": type_name,
        "localized": True,
        "required": False,
    }
    if items_type is not None:
        field["items"] = {"type": items_type}
    return field


def make_content_type_document(content_type_id: str = "post", fields: list[dict] | None = None) -> dict:
    """Create a content type document in the management API shape."""
    return {
        "sys": {"id": content_type_id, "type": "ContentType", "version": 3},
        "name": content_type_id.title(),
        "displayField": "title",
        "fields": fields if fields is not None else [make_field("title")],
    }


def make_schema(content_type_id: str = "post", fields: list[dict] | None = None) -> ContentTypeSchema:
    """Create a parsed content type schema."""
    return parse_content_type(make_content_type_document(content_type_id, fields))


def make_link(link_id: str, link_type: str = "Entry") -> dict:
    return {"sys": {"type": "Link", "linkType": link_type, "id": link_id}}


def make_entry_data(fields: dict | None = None, entry_id: str = "entry-1") -> dict:
    """Create entry data as passed to a mapper's map method."""
    return {
        "sys": {
            "id": entry_id,
            "type": "Entry",
            "version": 1,
            "createdAt": "2024-01-15T10:00:00.000Z",
            "updatedAt": "2024-01-16T12:30:00.000Z",
        },
        "fields": fields if fields is not None else {},
    }


@pytest.fixture
def python_generator() -> PythonGenerator:
    return PythonGenerator(load_config("python"))


@pytest.fixture
def php_generator() -> PhpGenerator:
    return PhpGenerator(load_config("php"))


@pytest.fixture
def blog_post_schema() -> ContentTypeSchema:
    """A content type using every conversion the generator knows."""
    return make_schema(
        "blog_post",
        [
            make_field("title"),
            make_field("author", "Link"),
            make_field("tags", "Array", "Symbol"),
            make_field("related", "Array", "Link"),
            make_field("publishedAt", "Date"),
            make_field("views", "Integer"),
        ],
    )


@pytest.fixture
def content_types_file(tmp_path, blog_post_schema):
    """A collection document on disk holding two content types."""
    document = {
        "sys": {"type": "Array"},
        "total": 2,
        "items": [
            make_content_type_document("post"),
            make_content_type_document(
                "blog_post",
                [
                    make_field("title"),
                    make_field("author", "Link"),
                    make_field("publishedAt", "Date"),
                ],
            ),
        ],
    }
    path = tmp_path / "content_types.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


@pytest.fixture
def resource_module(monkeypatch):
    """Install a ``models`` module holding resource classes for generated mappers."""
    module = types.ModuleType("models")

    class Post(Resource):
        pass

    class BlogPost(Resource):
        pass

    class Link(Resource):
        pass

    module.Post = Post
    module.BlogPost = BlogPost
    module.Link = Link
    monkeypatch.setitem(sys.modules, "models", module)
    return module


@pytest.fixture
def load_mapper(resource_module):
    """Execute generated Python source and return the named mapper class."""

    def _load(code: str, class_name: str):
        namespace: dict[str, Any] = {}
        exec(compile(code, "<generated>", "exec"), namespace)
        return namespace[class_name]

    return _load
