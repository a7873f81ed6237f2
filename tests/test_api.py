"""Tests for the public analysis API."""

import pytest

from codegauge import AnalysisResult, analyze_many, analyze_source
from codegauge.api import _PARALLEL_THRESHOLD
from codegauge.config import MetricsConfig


SAMPLE = """
import { get } from "./http";

export async function fetchUser(id) {
  if (!id) {
    throw new Error("id required");
  }
  for (const attempt of [1, 2, 3]) {
    try {
      return await get(`/users/${id}`);
    } catch (err) {
      if (attempt === 3 && err.fatal) {
        throw err;
      }
    }
  }
}
"""


class TestAnalyzeSource:
    def test_empty_source(self):
        result = analyze_source("")
        assert isinstance(result, AnalysisResult)
        assert result.metrics.is_fallback
        assert result.metrics.quality_score == 50
        assert result.structure.functions == ()

    def test_unsupported_language_degrades(self):
        result = analyze_source("x = 1\n", language="cobol")
        assert not result.parse.success
        assert result.metrics.cyclomatic_complexity == 1
        assert result.metrics.cognitive_complexity == 0
        assert not result.metrics.is_fallback
        assert result.metrics.halstead.total_operands == 2

    def test_secrets_count_as_vulnerabilities(self):
        result = analyze_source('const password = "hunter2";\n', language="cobol")
        assert len(result.secrets) == 1
        assert result.security_score == 75
        assert result.owasp_compliance["A07_IdentificationFailures"] is False
        assert result.metrics.technical_debt_hours >= 4

    def test_secrets_can_be_disabled(self):
        result = analyze_source('const password = "hunter2";\n', include_secrets=False)
        assert result.secrets == ()
        assert result.security_score == 100

    def test_external_findings(self):
        result = analyze_source("x();\n", vulnerabilities=[{"severity": "High", "owaspCategory": "A03"}])
        assert result.security_score == 85
        assert result.owasp_compliance["A03_Injection"] is False

    def test_to_dict(self):
        data = analyze_source("x();\n").to_dict()
        assert set(data) == {"parse", "structure", "metrics", "secrets", "securityScore", "owaspCompliance"}

    def test_parsed_sample(self):
        result = analyze_source(SAMPLE)
        assert result.parse.success
        # if, for-of, catch, inner if, &&
        assert result.metrics.cyclomatic_complexity == 6
        # if(1) + for(1) + catch(2) + inner if(3) + &&(1)
        assert result.metrics.cognitive_complexity == 8
        assert [f.name for f in result.structure.functions] == ["fetchUser"]
        assert result.structure.functions[0].is_async
        assert result.structure.imports[0].source_module == "./http"

    def test_syntax_error_still_measures_text(self):
        result = analyze_source("function broken( {\n  return 1;\n")
        assert not result.parse.success
        assert result.parse.line is not None
        assert result.metrics.cyclomatic_complexity == 1
        assert result.metrics.lines.total == 3


class TestAnalyzeMany:
    def test_preserves_order_sequential(self):
        sources = {"b.js": "b();", "a.js": "", "c.js": "c(); d();"}
        results = analyze_many(sources, language="cobol")
        assert list(results) == ["b.js", "a.js", "c.js"]
        assert results["a.js"].metrics.is_fallback

    def test_parallel_matches_sequential(self):
        sources = {f"f{i}.js": f"call{i}();\n" * (i + 1) for i in range(_PARALLEL_THRESHOLD + 2)}
        config = MetricsConfig(workers=2)
        parallel = analyze_many(sources, config=config)
        sequential = analyze_many(sources, config=config, parallel=False)
        assert list(parallel) == list(sources)
        assert {k: v.metrics for k, v in parallel.items()} == {k: v.metrics for k, v in sequential.items()}

    def test_per_source_language(self):
        results = analyze_many({"a": "x();", "b": "y();"}, language="cobol", languages={"b": "fortran"})
        assert results["a"].parse.language == "cobol"
        assert results["b"].parse.language == "fortran"

    def test_failure_isolated(self, monkeypatch):
        from codegauge import api

        real = api.analyze_source

        def flaky(source_text, **kwargs):
            if source_text == "boom":
                raise RuntimeError("boom")
            return real(source_text, **kwargs)

        monkeypatch.setattr(api, "analyze_source", flaky)
        results = analyze_many({"ok.js": "x();", "bad.js": "boom"}, language="cobol")
        assert not results["ok.js"].metrics.is_fallback
        assert results["bad.js"].metrics.is_fallback
        assert results["bad.js"].parse.error == "boom"

    def test_declarations_survive_batch_analysis(self):
        source = "const a = 1;\n" + "if (a) { a++; }\n" * 30
        result = analyze_many({"x.js": source})["x.js"]
        assert result.parse.success
        assert not result.metrics.is_fallback
        assert result.metrics.cyclomatic_complexity == 31
        assert result.metrics.cognitive_complexity == 30


def _nested_ifs_source(depth):
    lines = ["const x = 1;", "function check() {"]
    for level in range(depth):
        lines.append("  " * (level + 1) + "if (x) {")
    lines.append("  " * (depth + 1) + "return 1;")
    for level in reversed(range(depth)):
        lines.append("  " * (level + 1) + "}")
    lines.append("}")
    return "\n".join(lines) + "\n"


class TestParsedScenarios:
    """Metric scenarios measured on real parsed JavaScript."""

    def test_single_line_function(self):
        result = analyze_source("function add(a,b){return a+b;}")
        assert result.parse.success
        assert result.metrics.cyclomatic_complexity == 1
        assert result.metrics.cognitive_complexity == 0

    def test_five_nested_ifs(self):
        result = analyze_source(_nested_ifs_source(5), language="javascript")
        assert result.parse.success
        assert result.metrics.cyclomatic_complexity == 6
        assert result.metrics.cognitive_complexity == 15
        assert [v.name for v in result.structure.variables] == ["x"]

    def test_class_with_method(self):
        result = analyze_source("class A { run() { if (this.ready) { return 1; } } }")
        assert result.parse.success
        assert [(f.name, f.method_kind) for f in result.structure.functions] == [("run", "method")]
        assert result.metrics.cyclomatic_complexity == 2

    def test_repeated_block(self):
        block = "".join(f"total += values[{i}];\n" for i in range(10))
        source = "let total = 0;\n" + block + "report(total);\n" + block
        result = analyze_source(source)
        assert result.parse.success
        duplication = result.metrics.duplication
        assert [b.line_count for b in duplication.blocks] == [10]
        assert duplication.duplication_percentage == pytest.approx(10 / 22 * 100, abs=0.01)

    def test_empty_source_falls_back(self):
        result = analyze_source("   \n")
        assert result.metrics.is_fallback
        assert result.metrics.cyclomatic_complexity == 1
        assert result.metrics.quality_score == 50


class TestTreeBuildFailure:
    def test_normalizer_error_keeps_text_metrics(self, monkeypatch):
        from codegauge.syntax import parser

        def broken(self, node):
            raise KeyError("unexpected node shape")

        monkeypatch.setattr(parser.EstreeNormalizer, "convert", broken)
        result = analyze_source("let total = a + b;\n")
        assert result.parse.success is False
        assert "unexpected node shape" in result.parse.error
        assert not result.metrics.is_fallback
        assert result.metrics.cyclomatic_complexity == 1
        assert result.metrics.cognitive_complexity == 0
        assert result.metrics.halstead.total_operands > 0
