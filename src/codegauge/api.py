"""Public API for codegauge.

Callers hand over source text and get back everything the engine can
say about it without any external service: the parse outcome, the
script's structure, the metrics record, and local security checks.

Example:
    >>> from codegauge import analyze_source
    >>>
    >>> result = analyze_source("function add(a, b) { return a + b; }")
    >>> result.metrics.cyclomatic_complexity
    1
    >>>
    >>> # With findings from external analyzers
    >>> result = analyze_source(
    ...     code,
    ...     language="typescript",
    ...     vulnerabilities=[{"severity": "High"}],
    ... )
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from .config import DEFAULT_CONFIG, MetricsConfig
from .logging_config import get_logger
from .metrics.models import MetricsRecord
from .metrics.orchestrator import calculate_all_metrics, fallback_record
from .security.scoring import owasp_compliance, security_score
from .security.secrets import SecretFinding, detect_hardcoded_secrets
from .structure.extractor import extract_structure
from .structure.models import CodeStructure
from .syntax.parser import ParseResult, parse_source

logger = get_logger(__name__)

# Below this many inputs, a thread pool costs more than it saves
_PARALLEL_THRESHOLD = 4


@dataclass(frozen=True)
class AnalysisResult:
    """Everything computed for one source text.

    Attributes:
        parse: Parser outcome; ``parse.tree`` is None on failure
        structure: Functions, classes, imports, variables (empty without a tree)
        metrics: The metrics record
        secrets: Hardcoded credentials found in the text
        security_score: 0-100 score over supplied vulnerabilities plus secrets
        owasp_compliance: OWASP category -> no finding in that category
    """

    parse: ParseResult
    structure: CodeStructure
    metrics: MetricsRecord
    secrets: tuple[SecretFinding, ...] = ()
    security_score: int = 100
    owasp_compliance: Mapping[str, bool] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "owasp_compliance", MappingProxyType(dict(self.owasp_compliance)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "parse": self.parse.to_dict(),
            "structure": self.structure.to_dict(),
            "metrics": self.metrics.to_dict(),
            "secrets": [s.to_dict() for s in self.secrets],
            "securityScore": self.security_score,
            "owaspCompliance": dict(self.owasp_compliance),
        }


def analyze_source(
    source_text: str,
    language: Optional[str] = None,
    vulnerabilities: Iterable[Any] = (),
    code_smells: Iterable[Any] = (),
    config: Optional[MetricsConfig] = None,
    include_secrets: bool = True,
) -> AnalysisResult:
    """Parse and measure one source text.

    Parse failures do not raise: the tree-dependent parts degrade to
    their defaults and text-based metrics are still computed.

    Args:
        source_text: Raw source code
        language: Language hint ("javascript", "ts", "tsx" ...); defaults
            to ``config.default_language``
        vulnerabilities: Findings from an external security analyzer
        code_smells: Findings from an external quality analyzer
        config: Runtime policy
        include_secrets: Scan for hardcoded secrets and count each one as
            a Critical vulnerability

    Returns:
        AnalysisResult
    """
    config = config or DEFAULT_CONFIG
    language = language or config.default_language

    parse = parse_source(source_text, language)
    if not parse.success:
        logger.debug(f"Parse failed for {parse.language}: {parse.error}")

    structure = extract_structure(parse.tree)

    all_vulnerabilities = list(vulnerabilities)
    secrets: list[SecretFinding] = []
    if include_secrets:
        secrets = detect_hardcoded_secrets(source_text)
        if secrets:
            logger.info(f"Found {len(secrets)} hardcoded secrets")
        all_vulnerabilities.extend(s.as_vulnerability() for s in secrets)

    metrics = calculate_all_metrics(
        source_text, parse.tree, all_vulnerabilities, code_smells, config
    )

    return AnalysisResult(
        parse=parse,
        structure=structure,
        metrics=metrics,
        secrets=tuple(secrets),
        security_score=security_score(all_vulnerabilities),
        owasp_compliance=owasp_compliance(all_vulnerabilities),
    )


def analyze_many(
    sources: Mapping[str, str],
    language: Optional[str] = None,
    languages: Optional[Mapping[str, str]] = None,
    config: Optional[MetricsConfig] = None,
    parallel: bool = True,
) -> dict[str, AnalysisResult]:
    """Analyze several independent source texts.

    Args:
        sources: Name (typically a file path) -> source text
        language: Language hint applied to every source
        languages: Per-name language hints, overriding ``language``
        config: Runtime policy; ``config.resolved_workers`` sizes the pool
        parallel: Use a thread pool for larger batches

    Returns:
        Name -> AnalysisResult, in the order of ``sources``. A source whose
        analysis fails outright gets a fallback result.
    """
    config = config or DEFAULT_CONFIG
    languages = languages or {}

    def _analyze(name: str) -> AnalysisResult:
        result = analyze_source(
            sources[name], language=languages.get(name, language), config=config
        )
        if not result.parse.success:
            logger.warning(f"{name}: not parsed ({result.parse.error}), complexity defaults used")
        return result

    results: dict[str, AnalysisResult] = {}

    if not parallel or len(sources) < _PARALLEL_THRESHOLD:
        for name in sources:
            try:
                results[name] = _analyze(name)
            except Exception as e:
                logger.warning(f"Analysis failed for {name}: {e}")
                results[name] = _failed_result(sources[name], e)
        return results

    with ThreadPoolExecutor(max_workers=config.resolved_workers) as executor:
        futures = {executor.submit(_analyze, name): name for name in sources}
        for future in as_completed(futures):
            name = futures[future]
            try:
                results[name] = future.result()
            except Exception as e:
                logger.warning(f"Analysis failed for {name}: {e}")
                results[name] = _failed_result(sources[name], e)

    return {name: results[name] for name in sources}


def _failed_result(source_text: str, error: Exception) -> AnalysisResult:
    return AnalysisResult(
        parse=ParseResult(success=False, language="unknown", error=str(error)),
        structure=CodeStructure(),
        metrics=fallback_record(source_text),
    )
