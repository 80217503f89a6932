"""Tests for identifier case conversion."""

from __future__ import annotations

import pytest

from content_mapper.codegen.core.naming import (
    NamingCase,
    convert_case,
    is_reserved,
    to_camel_case,
    to_snake_case,
    to_studly_case,
)


class TestStudlyCase:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("blog_post", "BlogPost"),
            ("blog-post", "BlogPost"),
            ("blog post", "BlogPost"),
            ("post", "Post"),
            ("blogPost", "BlogPost"),
            ("BlogPost", "BlogPost"),
            ("__blog__post__", "BlogPost"),
            ("landing_page_v2", "LandingPageV2"),
            ("2fa_settings", "2faSettings"),
        ],
    )
    def test_conversion(self, name, expected):
        assert to_studly_case(name) == expected

    def test_idempotent(self):
        for name in ["blog_post", "author-bio", "x", "productCategory"]:
            once = to_studly_case(name)
            assert to_studly_case(once) == once

    def test_empty_and_separator_only(self):
        assert to_studly_case("") == ""
        assert to_studly_case("___") == ""


class TestOtherCases:
    def test_camel_case(self):
        assert to_camel_case("blog_post") == "blogPost"
        assert to_camel_case("") == ""

    def test_snake_case(self):
        assert to_snake_case("BlogPostMapper") == "blog_post_mapper"
        assert to_snake_case("formatFields") == "format_fields"
        assert to_snake_case("blog-post") == "blog_post"

    def test_convert_case(self):
        assert convert_case("blog_post", NamingCase.STUDLY_CASE) == "BlogPost"
        assert convert_case("blog_post", NamingCase.CAMEL_CASE) == "blogPost"
        assert convert_case("BlogPost", NamingCase.SNAKE_CASE) == "blog_post"


class TestReservedWords:
    def test_case_sensitive(self):
        assert is_reserved("None", {"None"})
        assert not is_reserved("none", {"None"})

    def test_case_insensitive(self):
        assert is_reserved("List", {"list"}, case_sensitive=False)
        assert not is_reserved("Post", {"list"}, case_sensitive=False)
