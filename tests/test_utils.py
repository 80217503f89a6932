"""Tests for loading content type documents."""

from __future__ import annotations

import io
import json

import pytest
import requests

from content_mapper import utils
from content_mapper.utils import (
    JSONLoaderError,
    load_content_types,
    load_json,
    load_json_from_stream,
    load_json_from_url,
)

from conftest import make_content_type_document


class FakeResponse:
    def __init__(self, payload=None, status_code=200, content_type="application/json"):
        self._payload = payload
        self.status_code = status_code
        self.headers = {"content-type": content_type}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(response=self)

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


@pytest.fixture
def fake_get(monkeypatch):
    calls = []

    def install(response=None, error=None):
        def get(url, timeout):
            calls.append((url, timeout))
            if error is not None:
                raise error
            return response

        monkeypatch.setattr(utils.requests, "get", get)
        return calls

    return install


class TestLoadFromFile:
    def test_load(self, content_types_file):
        source, data = load_json(file_path=content_types_file)

        assert source == str(content_types_file)
        assert len(data["items"]) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_json(file_path=tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(JSONLoaderError, match="Invalid JSON"):
            load_json(file_path=path)

    def test_other_extension_still_loads(self, tmp_path):
        path = tmp_path / "types.txt"
        path.write_text(json.dumps({"id": "post"}), encoding="utf-8")
        assert load_json(file_path=path)[1] == {"id": "post"}


class TestLoadFromUrl:
    def test_load(self, fake_get):
        calls = fake_get(FakeResponse({"items": []}))

        source, data = load_json(url="https://example.com/content_types.json", timeout=5)

        assert source == "https://example.com/content_types.json"
        assert data == {"items": []}
        assert calls == [("https://example.com/content_types.json", 5)]

    def test_invalid_url(self):
        with pytest.raises(JSONLoaderError, match="Invalid URL"):
            load_json_from_url("content_types.json")

    def test_http_error(self, fake_get):
        fake_get(FakeResponse(status_code=404))
        with pytest.raises(JSONLoaderError, match="HTTP error 404"):
            load_json_from_url("https://example.com/missing")

    def test_timeout(self, fake_get):
        fake_get(error=requests.exceptions.Timeout())
        with pytest.raises(JSONLoaderError, match="timeout"):
            load_json_from_url("https://example.com/slow")

    def test_connection_error(self, fake_get):
        fake_get(error=requests.exceptions.ConnectionError())
        with pytest.raises(JSONLoaderError, match="Connection error"):
            load_json_from_url("https://example.com/down")

    def test_invalid_body(self, fake_get):
        fake_get(FakeResponse(ValueError("Expecting value"), content_type="text/html"))
        with pytest.raises(JSONLoaderError, match="Invalid JSON response"):
            load_json_from_url("https://example.com/page")


class TestLoadJsonArguments:
    def test_requires_a_source(self):
        with pytest.raises(JSONLoaderError, match="Either"):
            load_json()

    def test_rejects_both_sources(self, content_types_file):
        with pytest.raises(JSONLoaderError, match="both"):
            load_json(file_path=content_types_file, url="https://example.com/x.json")


class TestLoadFromStream:
    def test_load(self):
        stream = io.StringIO(json.dumps({"id": "post"}))
        assert load_json_from_stream(stream) == ("<stdin>", {"id": "post"})

    def test_invalid(self):
        with pytest.raises(JSONLoaderError):
            load_json_from_stream(io.StringIO("nope"))


class TestLoadContentTypes:
    def test_from_file(self, content_types_file):
        source, schemas = load_content_types(file_path=content_types_file)

        assert source == str(content_types_file)
        assert [s.id for s in schemas] == ["post", "blog_post"]

    def test_from_url(self, fake_get):
        fake_get(FakeResponse([make_content_type_document("post")]))

        _, schemas = load_content_types(url="https://example.com/types.json")
        assert [s.id for s in schemas] == ["post"]

    def test_invalid_document(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"items": [{"fields": []}]}), encoding="utf-8")

        with pytest.raises(JSONLoaderError, match="Invalid content type document"):
            load_content_types(file_path=path)
