"""Tests for the content-mapper command line interface."""

from __future__ import annotations

import io
import json

import pytest

from content_mapper.cli import create_parser, main

from conftest import make_content_type_document, make_field


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "mappers"


class TestGenerate:
    def test_writes_one_file_per_content_type(self, content_types_file, output_dir):
        exit_code = main(["generate", str(content_types_file), "-o", str(output_dir)])

        assert exit_code == 0
        assert sorted(p.name for p in output_dir.iterdir()) == [
            "blog_post_mapper.py",
            "post_mapper.py",
        ]
        code = (output_dir / "blog_post_mapper.py").read_text(encoding="utf-8")
        assert "class BlogPostMapper(BaseMapper):" in code
        assert "from content_mapper.runtime import BaseMapper, SystemProperties, Timestamp, Link" in code

    def test_php_output(self, content_types_file, output_dir):
        exit_code = main(
            [
                "generate",
                str(content_types_file),
                "--language",
                "php",
                "--namespace",
                "Site.Entry",
                "-o",
                str(output_dir),
            ]
        )

        assert exit_code == 0
        code = (output_dir / "PostMapper.php").read_text(encoding="utf-8")
        assert "namespace Site\\Entry\\Mapper;" in code
        assert "use Site\\Entry\\Post;" in code

    def test_prints_to_stdout(self, content_types_file, capsys):
        assert main(["generate", str(content_types_file), "--only", "post"]) == 0

        out = capsys.readouterr().out
        assert "post_mapper.py" in out
        assert "class PostMapper(BaseMapper):" in out
        assert "BlogPostMapper" not in out

    def test_only_is_repeatable(self, content_types_file, output_dir):
        argv = ["generate", str(content_types_file), "-o", str(output_dir)]
        assert main(argv + ["--only", "post", "--only", "blog_post"]) == 0
        assert len(list(output_dir.iterdir())) == 2

    def test_unknown_only_id(self, content_types_file, capsys):
        assert main(["generate", str(content_types_file), "--only", "page"]) == 1
        assert "Content type(s) not found: page" in capsys.readouterr().out

    def test_stdin(self, monkeypatch, output_dir):
        document = make_content_type_document("post")
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(document)))

        assert main(["generate", "--stdin", "-o", str(output_dir)]) == 0
        assert (output_dir / "post_mapper.py").exists()

    def test_config_file_and_no_comments(self, content_types_file, output_dir, tmp_path):
        config_path = tmp_path / "mapper.json"
        config_path.write_text(json.dumps({"namespace": "cms", "indent_size": 2}))

        exit_code = main(
            [
                "generate",
                str(content_types_file),
                "--config",
                str(config_path),
                "--no-comments",
                "-o",
                str(output_dir),
            ]
        )

        assert exit_code == 0
        code = (output_dir / "post_mapper.py").read_text(encoding="utf-8")
        assert "from cms import Post\n" in code
        assert "\n  def map(" in code
        assert "autogenerated" not in code

    def test_bad_config_file(self, content_types_file, tmp_path, capsys):
        config_path = tmp_path / "mapper.json"
        config_path.write_text("{")

        assert main(["generate", str(content_types_file), "--config", str(config_path)]) == 1
        assert "Configuration error" in capsys.readouterr().out

    def test_warnings_are_reported(self, tmp_path, capsys):
        path = tmp_path / "types.json"
        path.write_text(
            json.dumps(make_content_type_document("post", [make_field("shape", "Hologram")]))
        )

        assert main(["generate", str(path), "-o", str(tmp_path / "out")]) == 0
        assert "Unknown type 'Hologram'" in capsys.readouterr().out

    def test_content_types_sharing_a_file_name(self, tmp_path, output_dir, capsys):
        path = tmp_path / "types.json"
        path.write_text(
            json.dumps(
                [make_content_type_document("blog_post"), make_content_type_document("blog-post")]
            )
        )

        assert main(["generate", str(path), "-o", str(output_dir)]) == 1
        assert "'blog_post' and 'blog-post' would both be written" in capsys.readouterr().out
        assert not output_dir.exists()

    def test_empty_namespace_in_config(self, content_types_file, tmp_path, capsys):
        config_path = tmp_path / "mapper.json"
        config_path.write_text(json.dumps({"namespace": ""}))

        assert main(["generate", str(content_types_file), "--config", str(config_path)]) == 1

        out = capsys.readouterr().out
        assert "Empty namespace" in out
        assert "Code generation failed for post" in out

    def test_verbose_metadata(self, content_types_file, output_dir, capsys):
        argv = ["generate", str(content_types_file), "-o", str(output_dir), "--verbose"]
        assert main(argv + ["--only", "post"]) == 0
        assert "Class Name" in capsys.readouterr().out

    def test_missing_input(self, capsys):
        assert main(["generate"]) == 1
        assert "Input source required" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        assert main(["generate", str(tmp_path / "nope.json")]) == 1
        assert "Failed to load input" in capsys.readouterr().out

    def test_invalid_document(self, tmp_path, capsys):
        path = tmp_path / "types.json"
        path.write_text(json.dumps([{"name": "No id"}]))

        assert main(["generate", str(path)]) == 1
        assert "Failed to load input" in capsys.readouterr().out

    def test_unsupported_language(self, content_types_file, capsys):
        assert main(["generate", str(content_types_file), "-l", "go"]) == 1
        assert "Unsupported language 'go'" in capsys.readouterr().out


class TestInformation:
    def test_languages(self, capsys):
        assert main(["languages"]) == 0

        out = capsys.readouterr().out
        assert "python" in out
        assert "php" in out
        assert "PhpGenerator" in out

    def test_info(self, capsys):
        assert main(["info", "py"]) == 0
        assert "PythonGenerator" in capsys.readouterr().out

    def test_info_unknown_language(self, capsys):
        assert main(["info", "go"]) == 1
        assert "not supported" in capsys.readouterr().out


class TestParser:
    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "usage: content-mapper" in capsys.readouterr().out

    def test_log_level_is_case_insensitive(self):
        args = create_parser().parse_args(["--log-level", "debug", "languages"])
        assert args.log_level == "DEBUG"

    def test_generate_defaults(self):
        args = create_parser().parse_args(["generate", "types.json"])

        assert args.language == "python"
        assert args.only is None
        assert args.output is None
