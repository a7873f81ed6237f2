"""Hardcoded secret detection.

A per-line regex scan for credentials committed in source: key/secret/
token assignments, credentials embedded in database URLs, and the token
shapes of a few well-known providers. Each hit can be turned into a
Critical finding so it weighs on security score and technical debt.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from ..metrics.models import Finding

SECRET_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (
        re.compile(r"(?:api[_-]?key|apikey)\s*[=:]\s*['\"]([^'\"]+)['\"]", re.IGNORECASE),
        "API Key",
    ),
    (
        re.compile(
            r"(?:secret|password|passwd|pwd)\s*[=:]\s*['\"]([^'\"]+)['\"]", re.IGNORECASE
        ),
        "Password/Secret",
    ),
    (
        re.compile(r"(?:token|auth[_-]?token)\s*[=:]\s*['\"]([^'\"]+)['\"]", re.IGNORECASE),
        "Auth Token",
    ),
    (
        re.compile(
            r"(?:aws[_-]?access[_-]?key[_-]?id)\s*[=:]\s*['\"]([A-Z0-9]{20})['\"]",
            re.IGNORECASE,
        ),
        "AWS Access Key",
    ),
    (
        re.compile(r"(?:private[_-]?key)\s*[=:]\s*['\"]([^'\"]+)['\"]", re.IGNORECASE),
        "Private Key",
    ),
    (re.compile(r"mongodb(?:\+srv)?://[^:]+:([^@]+)@", re.IGNORECASE), "MongoDB Password"),
    (re.compile(r"postgres(?:ql)?://[^:]+:([^@]+)@", re.IGNORECASE), "PostgreSQL Password"),
    (re.compile(r"sk-[a-zA-Z0-9]{32,}"), "OpenAI API Key"),
    (re.compile(r"gsk_[a-zA-Z0-9]{32,}"), "Groq API Key"),
    (re.compile(r"ghp_[a-zA-Z0-9]{36}"), "GitHub Personal Access Token"),
)

HARDCODED_SECRET_CWE = "CWE-798"
HARDCODED_SECRET_OWASP = "A07"


@dataclass(frozen=True)
class SecretFinding:
    """A credential found in source.

    Attributes:
        type: Pattern label, e.g. "API Key"
        line: 1-based line number
        value: The captured secret (the whole match when the pattern has
            no capture group)
        snippet: The trimmed source line
    """

    type: str
    line: int
    value: str
    snippet: str

    def as_vulnerability(self) -> Finding:
        return Finding(
            severity="Critical",
            title=f"Hardcoded {self.type}",
            description=f"Found hardcoded {self.type} in code. This is a security risk.",
            line_number=self.line,
            cwe=HARDCODED_SECRET_CWE,
            owasp_category=HARDCODED_SECRET_OWASP,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "line": self.line,
            "value": self.value,
            "snippet": self.snippet,
        }


def detect_hardcoded_secrets(source_text: str) -> list[SecretFinding]:
    """Scan every line against every secret pattern.

    One line can yield several findings, one per matching pattern and
    match.
    """
    findings: list[SecretFinding] = []
    for number, line in enumerate(source_text.split("\n"), start=1):
        for pattern, label in SECRET_PATTERNS:
            for match in pattern.finditer(line):
                value = match.group(1) if match.groups() and match.group(1) else match.group(0)
                findings.append(
                    SecretFinding(type=label, line=number, value=value, snippet=line.strip())
                )
    return findings
