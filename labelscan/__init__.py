"""
Product-label scanning: OCR over label photos, structured extraction through a
text-generation model, and ingredient health ratings.
"""

from .batch import rate_batch
from .errors import (
    GenerationEngineError,
    InputValidationError,
    LabelScanError,
    MalformedGenerationOutputError,
    NoTextFoundError,
    RecognitionError,
)
from .extraction import extract_product_record
from .models import (
    AnalysisReport,
    BatchReport,
    ExtractedProductRecord,
    Fallback,
    HealthAssessment,
    ImageInput,
    OcrOutcome,
    Parsed,
)
from .pipeline import Services, analyze, build_services
from .rating import analyze_rating, rate_ingredients

__all__ = [
    "AnalysisReport",
    "BatchReport",
    "ExtractedProductRecord",
    "Fallback",
    "GenerationEngineError",
    "HealthAssessment",
    "ImageInput",
    "InputValidationError",
    "LabelScanError",
    "MalformedGenerationOutputError",
    "NoTextFoundError",
    "OcrOutcome",
    "Parsed",
    "RecognitionError",
    "Services",
    "analyze",
    "analyze_rating",
    "build_services",
    "extract_product_record",
    "rate_batch",
    "rate_ingredients",
]
