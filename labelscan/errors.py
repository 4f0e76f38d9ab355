# labelscan/errors.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence


class LabelScanError(Exception):
    """Base class for every error raised by the label pipeline."""


class InputValidationError(LabelScanError):
    """Request rejected before any engine call (no images, no ingredients, empty batch)."""

    def __init__(self, error: str, message: Optional[str] = None):
        super().__init__(message or error)
        self.error = error
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.message:
            body["message"] = self.message
        return body


class NoTextFoundError(LabelScanError):
    """
    Every image failed OCR or produced blank text.
    Carries all per-image outcomes so the caller can show what went wrong where.
    """

    error = "No text found in images"
    message = "Please ensure images contain clear, readable text"

    def __init__(self, outcomes: Sequence[Any]):
        super().__init__(self.message)
        self.outcomes = list(outcomes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.error,
            "message": self.message,
            "imageAnalysis": [o.to_summary() for o in self.outcomes],
        }


class RecognitionError(LabelScanError):
    """Raised by a recognizer for one image; isolated by the OCR stage."""


class GenerationEngineError(LabelScanError):
    """Transport or service failure from the text-generation engine."""


class MalformedGenerationOutputError(LabelScanError):
    """
    Generation output could not be parsed into the expected JSON shape.
    Single requests absorb it into a fallback; batch items record it as their error.
    """

    def __init__(self, reason: str, raw: str = ""):
        super().__init__(reason)
        self.reason = reason
        self.raw = raw


def describe(exc: BaseException) -> str:
    msg = str(exc).strip()
    return msg or exc.__class__.__name__


__all__: List[str] = [
    "LabelScanError",
    "InputValidationError",
    "NoTextFoundError",
    "RecognitionError",
    "GenerationEngineError",
    "MalformedGenerationOutputError",
    "describe",
]
