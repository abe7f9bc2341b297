"""
Error taxonomy for the Gemini review core.

classify_failure() is the only place that looks at the raw status fields on
errors raised by the google-genai SDK. Everything downstream works with
FailureClassification.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence


class GeminiError(Exception):
    """Base exception for the review core."""


class ConfigurationError(GeminiError):
    """Missing credential or empty model preference list. Fatal at startup."""


class EmptyResponseError(GeminiError):
    """Gemini answered but the response carried no usable text."""


# ─── Classification ───────────────────────────────────────────────────

class FailureClassification(Enum):
    NOT_FOUND = "not_found"
    QUOTA_EXCEEDED = "quota_exceeded"
    OTHER = "other"

    @property
    def retryable(self) -> bool:
        """True when trying the next model could plausibly succeed."""
        return self in (FailureClassification.NOT_FOUND, FailureClassification.QUOTA_EXCEEDED)

    @property
    def hint(self) -> str:
        return _HINTS.get(self, "")


_HINTS = {
    FailureClassification.NOT_FOUND: (
        "All tried models returned 404. Set GOOGLE_GEMINI_MODEL to a supported model "
        "(e.g. gemini-2.0-flash) and restart."
    ),
    FailureClassification.QUOTA_EXCEEDED: (
        "Quota exceeded. Enable billing or request quota for your project, "
        "or try a lighter model like gemini-2.0-flash-lite."
    ),
}

_CODES = {
    404: FailureClassification.NOT_FOUND,
    429: FailureClassification.QUOTA_EXCEEDED,
}

_STATUSES = {
    "NOT_FOUND": FailureClassification.NOT_FOUND,
    "RESOURCE_EXHAUSTED": FailureClassification.QUOTA_EXCEEDED,
}


def classify_failure(exc: BaseException) -> FailureClassification:
    """
    Map an exception raised by a generation attempt to a classification.

    google.genai.errors.APIError exposes the HTTP status as an int `code`
    and the RPC status name as a string `status`. Either is enough.
    """
    code = getattr(exc, "code", None)
    if isinstance(code, int) and code in _CODES:
        return _CODES[code]

    status = getattr(exc, "status", None)
    if isinstance(status, int):
        return _CODES.get(status, FailureClassification.OTHER)
    if isinstance(status, str):
        return _STATUSES.get(status.upper(), FailureClassification.OTHER)

    return FailureClassification.OTHER


# ─── Aggregate error ──────────────────────────────────────────────────

@dataclass(frozen=True)
class Attempt:
    """One generation attempt against one model. classification is None on success."""
    model: str
    classification: Optional[FailureClassification] = None
    error: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.classification is None


class AggregateGenerationError(GeminiError):
    """
    Raised when no model in the preference list produced a review.

    The message is self-contained: the last underlying error, a remediation
    hint keyed by its classification, and every candidate model in order.
    """

    def __init__(
        self,
        candidates: Sequence[str],
        attempts: Sequence[Attempt],
        cause: Optional[BaseException] = None,
        classification: Optional[FailureClassification] = None,
    ):
        self.candidates = tuple(candidates)
        self.attempts = tuple(attempts)
        self.cause = cause
        self.classification = classification
        super().__init__(self._format())

    @property
    def tried(self) -> list[str]:
        return [attempt.model for attempt in self.attempts]

    @property
    def hint(self) -> str:
        if self.cause is None or self.classification is None:
            return ""
        return self.classification.hint

    def _format(self) -> str:
        base = str(self.cause) if self.cause is not None else ""
        parts = [base or "Failed to generate content"]
        if self.hint:
            parts.append(self.hint)
        parts.append(f"Tried: {', '.join(self.candidates)}")
        return " | ".join(parts)
