"""Tests for the metrics orchestrator."""

import logging

import pytest

from codegauge.config import MetricsConfig
from codegauge.metrics import orchestrator
from codegauge.metrics.orchestrator import calculate_all_metrics, fallback_record
from codegauge.syntax.nodes import SyntaxNode

ADD = "function add(a,b){return a+b;}"


class TestFallback:
    """Degraded record for unmeasurable input."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\n\t\n"])
    def test_empty_input(self, text):
        record = calculate_all_metrics(text)
        assert record.is_fallback
        assert record.cyclomatic_complexity == 1
        assert record.cognitive_complexity == 0
        assert record.maintainability_index == 50
        assert record.quality_score == 50
        assert record.duplication.blocks == ()

    def test_internal_failure_returns_fallback(self, monkeypatch, caplog):
        def broken(text):
            raise RuntimeError("boom")

        monkeypatch.setattr(orchestrator, "halstead", broken)
        with caplog.at_level(logging.WARNING):
            record = calculate_all_metrics(ADD)
        assert record.is_fallback
        assert record.quality_score == 50
        assert "fallback" in caplog.text

    def test_malformed_tree_returns_fallback(self):
        """A node with an unexpected shape never escapes as an exception."""
        tree = SyntaxNode("Program", {"body": [SyntaxNode("IfStatement")]})
        tree.fields["body"].append(object.__new__(SyntaxNode))  # no attributes set
        record = calculate_all_metrics(ADD, tree)
        assert record.is_fallback

    def test_fallback_keeps_line_total(self):
        record = fallback_record("a\nb\nc")
        assert record.lines.total == 3
        assert record.ratings["maintainability"].level == "Fair"


class TestCalculateAllMetrics:
    def test_simple_function(self, add_function_tree):
        record = calculate_all_metrics(ADD, add_function_tree)
        assert not record.is_fallback
        assert record.cyclomatic_complexity == 1
        assert record.cognitive_complexity == 0
        assert record.lines.total == 1
        assert record.lines.code == 1
        assert 0 <= record.maintainability_index <= 100
        assert 0 <= record.quality_score <= 100
        assert record.technical_debt_hours == 0
        assert record.ratings["complexity"].level == "Low"

    def test_ratings_are_read_only(self, add_function_tree):
        record = calculate_all_metrics(ADD, add_function_tree)
        with pytest.raises(TypeError):
            record.ratings["complexity"] = None
        assert record.to_dict()["ratings"]["complexity"]["level"] == "Low"

    def test_no_tree_uses_default_complexity(self):
        record = calculate_all_metrics("if (a) { if (b) { c(); } }", None)
        assert not record.is_fallback
        assert record.cyclomatic_complexity == 1
        assert record.cognitive_complexity == 0
        assert record.halstead.total_operands > 0

    def test_nested_ifs(self, nested_if_tree):
        record = calculate_all_metrics("if (x) {}", nested_if_tree)
        assert record.cyclomatic_complexity == 6
        assert record.cognitive_complexity == 15

    def test_idempotent(self, add_function_tree):
        first = calculate_all_metrics(ADD, add_function_tree)
        second = calculate_all_metrics(ADD, add_function_tree)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_findings_add_debt(self, add_function_tree):
        record = calculate_all_metrics(
            ADD, add_function_tree, vulnerabilities=[{"severity": "Critical"}], code_smells=[{"severity": "Low"}]
        )
        assert record.technical_debt_hours == pytest.approx(4.25)

    def test_duplication_skipped_over_limit(self, caplog):
        text = "\n".join(["x();"] * 20)
        config = MetricsConfig(max_duplication_lines=10)
        with caplog.at_level(logging.WARNING):
            record = calculate_all_metrics(text, None, config=config)
        assert record.duplication.skipped
        assert record.duplication_percentage == 0
        assert "Skipping duplication" in caplog.text

    def test_min_block_lines_from_config(self):
        text = "a();\nb();\nc();\nx();\na();\nb();\nc();"
        assert calculate_all_metrics(text).duplication.total_duplicated_lines == 3
        config = MetricsConfig(min_block_lines=4)
        assert calculate_all_metrics(text, config=config).duplication.total_duplicated_lines == 0

    def test_to_dict_wire_fields(self, add_function_tree):
        data = calculate_all_metrics(ADD, add_function_tree).to_dict()
        assert set(data) == {
            "linesOfCode",
            "codeLines",
            "commentLines",
            "blankLines",
            "commentRatio",
            "cyclomaticComplexity",
            "cognitiveComplexity",
            "maintainabilityIndex",
            "halstead",
            "duplication",
            "technicalDebt",
            "qualityScore",
            "ratings",
        }
        assert data["ratings"]["complexity"] == {"level": "Low", "color": "green", "score": 90}

    def test_maintainability_uses_unrounded_volume(self, add_function_tree):
        from codegauge.metrics.halstead import halstead
        from codegauge.metrics.maintainability import maintainability_index

        record = calculate_all_metrics(ADD, add_function_tree)
        expected = maintainability_index(1, halstead(ADD).volume, 1)
        assert record.maintainability_index == expected
