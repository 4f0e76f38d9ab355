# labelscan/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Generic, List, Optional, TypeVar, Union

T = TypeVar("T")

RAW_TEXT_SAMPLE_CHARS = 500
PREVIEW_CHARS = 100


def _excerpt(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


# ======================================================================
# Inputs / OCR
# ======================================================================

@dataclass(frozen=True, slots=True)
class ImageInput:
    data: bytes
    mime_type: str
    index: int


@dataclass(frozen=True, slots=True)
class OcrOutcome:
    """
    Result of recognizing one image.

    `succeeded` with blank `text` means the engine ran but found nothing;
    that is distinct from a failed outcome, which carries `error_message`.
    """

    index: int
    succeeded: bool
    text: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def text_found(self) -> bool:
        return self.succeeded and bool((self.text or "").strip())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "succeeded": self.succeeded,
            "text": self.text,
            "errorMessage": self.error_message,
        }

    def to_summary(self) -> Dict[str, Any]:
        """Per-image line for API responses."""
        if self.text_found:
            text = self.text or ""
            return {
                "imageIndex": self.index,
                "textFound": True,
                "textLength": len(text),
                "preview": _excerpt(text, PREVIEW_CHARS),
            }
        if self.succeeded:
            return {
                "imageIndex": self.index,
                "textFound": False,
                "message": "No text detected in this image",
            }
        return {
            "imageIndex": self.index,
            "textFound": False,
            "error": self.error_message or "Recognition failed",
        }


# ======================================================================
# Generation results (tagged)
# ======================================================================

@dataclass(frozen=True)
class Parsed(Generic[T]):
    value: T
    is_fallback: ClassVar[bool] = False


@dataclass(frozen=True)
class Fallback(Generic[T]):
    value: T
    reason: str
    raw: str = ""
    is_fallback: ClassVar[bool] = True


GenerationResult = Union[Parsed[T], Fallback[T]]


# ======================================================================
# Records
# ======================================================================

@dataclass(frozen=True, slots=True)
class ExtractedProductRecord:
    product_name: Optional[str]
    mfg_date: Optional[str]
    exp_date: Optional[str]
    ingredients: List[str] = field(default_factory=list)
    nutrition: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "productName": self.product_name,
            "mfgDate": self.mfg_date,
            "expDate": self.exp_date,
            "ingredients": list(self.ingredients),
            "nutrition": dict(self.nutrition),
        }


@dataclass(frozen=True, slots=True)
class HealthAssessment:
    rating: int
    good_contents: List[str]
    bad_contents: List[str]
    summary: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rating": self.rating,
            "goodContents": list(self.good_contents),
            "badContents": list(self.bad_contents),
            "summary": self.summary,
        }


@dataclass(frozen=True, slots=True)
class AnalysisReport:
    record: ExtractedProductRecord
    outcomes: List[OcrOutcome]
    corpus: str
    record_is_fallback: bool = False
    assessment: Optional[HealthAssessment] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "success": True,
            "data": self.record.to_dict(),
            "metadata": {
                "imagesProcessed": len(self.outcomes),
                "textExtracted": len(self.corpus),
                "perImageOutcomes": [o.to_summary() for o in self.outcomes],
                "usedFallback": self.record_is_fallback,
            },
            "rawTextSample": _excerpt(self.corpus, RAW_TEXT_SAMPLE_CHARS),
        }
        if self.assessment is not None:
            out["healthAssessment"] = self.assessment.to_dict()
        return out


# ======================================================================
# Batch
# ======================================================================

@dataclass(frozen=True, slots=True)
class BatchItem:
    id: Any
    product_name: Optional[str]
    ingredients: Any

    @classmethod
    def from_dict(cls, d: Any) -> "BatchItem":
        if not isinstance(d, dict):
            return cls(id=None, product_name=None, ingredients=None)
        name = d.get("productName")
        name = name.strip() or None if isinstance(name, str) else None
        return cls(id=d.get("id"), product_name=name, ingredients=d.get("ingredients"))


@dataclass(frozen=True, slots=True)
class BatchItemResult:
    id: Any
    product_name: Optional[str]
    succeeded: bool
    analysis: Optional[HealthAssessment] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"id": self.id, "productName": self.product_name, "succeeded": self.succeeded}
        if self.succeeded and self.analysis is not None:
            out["analysis"] = self.analysis.to_dict()
        else:
            out["error"] = self.error
        return out


@dataclass(frozen=True, slots=True)
class BatchReport:
    results: List[BatchItemResult]

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.succeeded)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "results": [r.to_dict() for r in self.results],
            "summary": {"total": self.total, "succeeded": self.succeeded, "failed": self.failed},
        }


# ======================================================================
# Recipes
# ======================================================================

@dataclass(frozen=True, slots=True)
class RecipeIdea:
    id: str
    name: str
    time: str
    difficulty: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "time": self.time,
            "difficulty": self.difficulty,
            "description": self.description,
        }


@dataclass(frozen=True, slots=True)
class RecipeDetails:
    name: str
    ingredients: List[str]
    steps: List[str]
    servings: Optional[str] = None
    prep_time: Optional[str] = None
    cook_time: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "ingredients": list(self.ingredients),
            "steps": list(self.steps),
            "servings": self.servings,
            "prepTime": self.prep_time,
            "cookTime": self.cook_time,
        }
