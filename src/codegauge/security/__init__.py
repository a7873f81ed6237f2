"""Local security checks: hardcoded secrets and finding-based scores."""

from .scoring import OWASP_CATEGORIES, owasp_compliance, security_score
from .secrets import SecretFinding, detect_hardcoded_secrets

__all__ = [
    "detect_hardcoded_secrets",
    "SecretFinding",
    "security_score",
    "owasp_compliance",
    "OWASP_CATEGORIES",
]
