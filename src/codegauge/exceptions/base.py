"""Base exception for codegauge."""

from typing import Any, Dict, Optional


class CodeGaugeError(Exception):
    """Base exception for all codegauge errors.

    ``details`` carries the structured context (language, config key,
    line ...) shown after the message and emitted by ``to_dict`` when a
    command reports errors as JSON.
    """

    #: Process exit status the CLI uses for this error
    exit_code = 1

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": {k: str(v) for k, v in self.details.items()},
        }
