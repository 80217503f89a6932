"""Tests for content type document parsing."""

from __future__ import annotations

import pytest

from content_mapper.codegen.core.schema import (
    ContentTypeSchema,
    FieldKind,
    SchemaError,
    array_field,
    date_field,
    link_field,
    parse_content_type,
    parse_content_types,
    parse_field,
    scalar_field,
)

from conftest import make_content_type_document, make_field


class TestParseField:
    def test_scalar(self):
        field = parse_field(make_field("title"))
        assert field.id == "title"
        assert field.kind == FieldKind.SYMBOL
        assert field.items_type is None

    def test_array_items_type(self):
        field = parse_field(make_field("related", "Array", "Link"))
        assert field.kind == FieldKind.ARRAY
        assert field.items_type == "Link"
        assert field.is_link_array

    def test_array_without_items(self):
        field = parse_field({"id": "tags", "type": "Array"})
        assert field.items_type is None
        assert not field.is_link_array

    def test_items_ignored_for_non_arrays(self):
        field = parse_field({"id": "title", "type": "Symbol", "items": {"type": "Link"}})
        assert field.items_type is None

    def test_unknown_type_keeps_raw_name(self):
        field = parse_field({"id": "data", "type": "Hologram"})
        assert field.kind == FieldKind.UNKNOWN
        assert field.type_name == "Hologram"

    def test_missing_type_is_unknown(self):
        assert parse_field({"id": "data"}).kind == FieldKind.UNKNOWN

    @pytest.mark.parametrize("data", [{"type": "Symbol"}, {"id": "", "type": "Symbol"}, "title"])
    def test_invalid(self, data):
        with pytest.raises(SchemaError):
            parse_field(data)


class TestParseContentType:
    def test_management_api_shape(self):
        schema = parse_content_type(make_content_type_document("blog_post"))
        assert schema.id == "blog_post"
        assert schema.name == "Blog_Post"
        assert [f.id for f in schema.fields] == ["title"]

    def test_bare_shape(self):
        schema = parse_content_type({"id": "post", "fields": [make_field("body", "Text")]})
        assert schema.id == "post"
        assert schema.fields[0].kind == FieldKind.TEXT

    def test_field_order_preserved(self):
        ids = ["z", "a", "m", "b"]
        schema = parse_content_type({"id": "post", "fields": [make_field(i) for i in ids]})
        assert [f.id for f in schema.fields] == ids

    def test_no_fields(self):
        schema = parse_content_type({"id": "empty"})
        assert schema.fields == ()

    def test_missing_id(self):
        with pytest.raises(SchemaError, match="no id"):
            parse_content_type({"fields": []})

    def test_fields_not_a_list(self):
        with pytest.raises(SchemaError):
            parse_content_type({"id": "post", "fields": {"title": {}}})

    def test_bad_field_names_content_type(self):
        with pytest.raises(SchemaError, match="Content type post"):
            parse_content_type({"id": "post", "fields": [{"type": "Symbol"}]})

    def test_get_field(self):
        schema = parse_content_type(make_content_type_document())
        assert schema.get_field("title").kind == FieldKind.SYMBOL
        assert schema.get_field("missing") is None


class TestParseContentTypes:
    def test_collection(self):
        document = {"items": [make_content_type_document("a"), make_content_type_document("b")]}
        assert [s.id for s in parse_content_types(document)] == ["a", "b"]

    def test_list(self):
        document = [make_content_type_document("a")]
        assert [s.id for s in parse_content_types(document)] == ["a"]

    def test_single(self):
        assert [s.id for s in parse_content_types(make_content_type_document("a"))] == ["a"]


class TestFieldHelpers:
    def test_helpers(self):
        schema = ContentTypeSchema(
            "post",
            (
                link_field("author"),
                array_field("tags", "Symbol"),
                date_field("publishedAt"),
                scalar_field("views", "Integer"),
            ),
        )
        kinds = [f.kind for f in schema.fields]
        assert kinds == [FieldKind.LINK, FieldKind.ARRAY, FieldKind.DATE, FieldKind.INTEGER]
        assert schema.fields[1].items_type == "Symbol"

    def test_scalar_field_unknown_type(self):
        assert scalar_field("x", "Mystery").kind == FieldKind.UNKNOWN
