"""Unit tests for utility functions (lambda_starter.utils).

Tests cover:
- load_json / save_json (use tmp_path)
- Rich output helpers (print_step_header, print_summary_table, print_help_links, etc.)
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from lambda_starter import utils
from lambda_starter.utils import (
    load_json,
    print_error,
    print_help_links,
    print_step_header,
    print_success,
    print_summary_table,
    print_warning,
    save_json,
)


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


class TestLoadJson:
    @pytest.mark.unit
    def test_load_dict(self, tmp_path: Path):
        path = tmp_path / "data.json"
        path.write_text('{"a": 1}', encoding="utf-8")
        assert load_json(path) == {"a": 1}

    @pytest.mark.unit
    def test_non_dict_root_is_wrapped(self, tmp_path: Path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert load_json(path) == {"_root": [1, 2]}

    @pytest.mark.unit
    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / "missing.json")

    @pytest.mark.unit
    def test_invalid_json_raises(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            load_json(path)


class TestSaveJson:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_creates_parent_dirs(self, tmp_path: Path):
        path = tmp_path / "a" / "b" / "out.json"
        written = await save_json({"key": "value"}, path)
        assert written == path
        assert json.loads(path.read_text(encoding="utf-8")) == {"key": "value"}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_non_json_values_are_stringified(self, tmp_path: Path):
        path = tmp_path / "out.json"
        await save_json({"path": Path("/x/y")}, path)
        assert json.loads(path.read_text(encoding="utf-8")) == {"path": "/x/y"}


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestRichHelpers:
    @pytest.mark.unit
    def test_print_step_header(self, memory_console):
        with patch.object(utils, "console", memory_console):
            print_step_header("Resolved configuration")
        assert "Resolved configuration" in memory_console.file.getvalue()

    @pytest.mark.unit
    def test_print_summary_table(self, memory_console):
        with patch.object(utils, "console", memory_console):
            print_summary_table({"Language": "Java", "JDK": "17"}, title="Project")
        output = memory_console.file.getvalue()
        assert "Project" in output
        assert "Language" in output
        assert "Java" in output

    @pytest.mark.unit
    def test_summary_values_are_not_markup(self, memory_console):
        with patch.object(utils, "console", memory_console):
            print_summary_table({"Odd": "[bold]literal[/bold]"})
        assert "[bold]literal[/bold]" in memory_console.file.getvalue()

    @pytest.mark.unit
    def test_print_help_links(self, memory_console):
        with patch.object(utils, "console", memory_console):
            print_help_links([("AWS Lambda", "https://aws.amazon.com/lambda/")])
        output = memory_console.file.getvalue()
        assert "Documentation" in output
        assert "AWS Lambda: https://aws.amazon.com/lambda/" in output

    @pytest.mark.unit
    def test_print_help_links_empty_prints_nothing(self, memory_console):
        with patch.object(utils, "console", memory_console):
            print_help_links([])
        assert memory_console.file.getvalue() == ""

    @pytest.mark.unit
    def test_status_messages(self, memory_console):
        with patch.object(utils, "console", memory_console):
            print_success("Wrote build.gradle")
            print_error("Something failed")
            print_warning("Dry run")
        output = memory_console.file.getvalue()
        assert "Wrote build.gradle" in output
        assert "Something failed" in output
        assert "Dry run" in output
