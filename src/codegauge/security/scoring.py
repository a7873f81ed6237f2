"""Security score and OWASP Top 10 coverage from a list of findings."""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

from ..metrics.maintainability import severity_of

SEVERITY_DEDUCTIONS = {
    "Critical": 25,
    "High": 15,
    "Medium": 8,
    "Low": 3,
}

OWASP_CATEGORIES = (
    "A01_BrokenAccessControl",
    "A02_CryptographicFailures",
    "A03_Injection",
    "A04_InsecureDesign",
    "A05_SecurityMisconfiguration",
    "A06_VulnerableComponents",
    "A07_IdentificationFailures",
    "A08_SoftwareDataIntegrity",
    "A09_SecurityLoggingFailures",
    "A10_SSRF",
)

_CATEGORY_CODE = re.compile(r"^(A\d{2})")


def security_score(vulnerabilities: Iterable[Any]) -> int:
    """100 minus a per-severity deduction for each finding, floored at 0.

    Unknown severities deduct nothing.
    """
    deduction = sum(SEVERITY_DEDUCTIONS.get(severity_of(v), 0) for v in vulnerabilities)
    return max(0, 100 - deduction)


def owasp_compliance(vulnerabilities: Iterable[Any]) -> dict[str, bool]:
    """Map each OWASP 2021 category to False if any finding falls in it.

    Findings name their category by code ("A03"), by code and title
    ("A03: Injection") or by the category key itself.
    """
    compliance = {category: True for category in OWASP_CATEGORIES}
    by_code = {category[:3]: category for category in OWASP_CATEGORIES}

    for vulnerability in vulnerabilities:
        category = _owasp_category_of(vulnerability)
        if not category:
            continue
        key = re.sub(r"\s+", "", category.replace(":", "_", 1))
        if key in compliance:
            compliance[key] = False
            continue
        match = _CATEGORY_CODE.match(key)
        if match and match.group(1) in by_code:
            compliance[by_code[match.group(1)]] = False

    return compliance


def _owasp_category_of(finding: Any) -> str:
    if isinstance(finding, Mapping):
        value = finding.get("owaspCategory") or finding.get("owasp_category")
    else:
        value = getattr(finding, "owasp_category", None)
    return str(value) if value else ""
