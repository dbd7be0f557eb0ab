"""
Diagnostics returned to the orchestration host for each lifecycle call
"""

from dataclasses import dataclass
from typing import List

from ..exceptions import (
    ApiError,
    ConfigurationError,
    DecodingError,
    MissingFieldError,
    OperationCancelledError,
    OperationFailedError,
    OperationTimeoutError,
    RequestConstructionError,
    TransportError,
    ValidationError,
)

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

# Most specific first: MissingFieldError is a DecodingError
_SUMMARIES = [
    (ConfigurationError, "Provider configuration error"),
    (ValidationError, "Invalid resource state"),
    (RequestConstructionError, "Error creating request"),
    (TransportError, "Error sending request"),
    (ApiError, "API Error"),
    (MissingFieldError, "Unexpected response format"),
    (DecodingError, "Error parsing response"),
    (OperationFailedError, "Operation failed"),
    (OperationTimeoutError, "Operation timed out"),
    (OperationCancelledError, "Operation cancelled"),
]


@dataclass(frozen=True)
class Diagnostic:
    severity: str
    summary: str
    detail: str

    def __str__(self) -> str:
        return f"{self.severity.upper()}: {self.summary}: {self.detail}"


class Diagnostics(list):
    """Ordered diagnostics for one lifecycle call."""

    def add_error(self, summary: str, detail: str):
        self.append(Diagnostic(SEVERITY_ERROR, summary, detail))

    def add_warning(self, summary: str, detail: str):
        self.append(Diagnostic(SEVERITY_WARNING, summary, detail))

    def add_exception(self, error: Exception):
        """Record an exception as an error diagnostic, keeping status and raw body for API errors."""
        summary = "Unexpected error"
        for error_type, text in _SUMMARIES:
            if isinstance(error, error_type):
                summary = text
                break
        self.add_error(summary, str(error))

    def has_error(self) -> bool:
        return any(d.severity == SEVERITY_ERROR for d in self)

    def errors(self) -> List[Diagnostic]:
        return [d for d in self if d.severity == SEVERITY_ERROR]
