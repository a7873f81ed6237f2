"""Tests for the formatters package."""

import json

import pytest
from rich.console import Console

from codegauge import analyze_many
from codegauge.formatters import JsonFormatter, RichFormatter, get_formatter

DUPLICATED = "\n".join(["a();", "b();", "c();", "x();", "a();", "b();", "c();"])


def _results():
    return analyze_many({"dup.js": DUPLICATED, "empty.js": ""}, language="cobol")


class TestGetFormatter:
    def test_known_formatters(self):
        assert isinstance(get_formatter("rich"), RichFormatter)
        assert isinstance(get_formatter("json"), JsonFormatter)

    def test_kwargs_forwarded(self):
        assert get_formatter("json", metrics_only=True).metrics_only

    def test_unknown_formatter(self):
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("xml")


class TestJsonFormatter:
    def test_full_results(self):
        data = json.loads(JsonFormatter().format(_results()))
        assert [d["file"] for d in data] == ["dup.js", "empty.js"]
        assert data[0]["metrics"]["duplication"]["totalLines"] == 3
        assert "structure" in data[0]

    def test_metrics_only(self):
        data = json.loads(JsonFormatter(metrics_only=True).format(_results()))
        assert set(data[1]) == {"file", "metrics"}
        assert data[1]["metrics"]["qualityScore"] == 50


class TestRichFormatter:
    def test_table_contains_files(self):
        console = Console(width=200, record=True)
        output = RichFormatter(console=console).format(_results())
        assert "dup.js" in output
        assert "empty.js" in output
        assert "Fallback metrics for 1 file(s)" in output

    def test_verbose_detail(self):
        console = Console(width=200)
        output = RichFormatter(console=console, verbose=True).format(_results())
        assert "Duplicate block of 3 lines" in output
        assert "lines 1-3 and 5-7" in output
