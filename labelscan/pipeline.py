# labelscan/pipeline.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from labelscan.config import Settings
from labelscan.engines import OpenAIGenerator, build_recognizer
from labelscan.engines.base import Generator, Recognizer
from labelscan.errors import InputValidationError
from labelscan.extraction import extract_product_record
from labelscan.models import AnalysisReport, ImageInput
from labelscan.ocr_stage import aggregate_corpus, run_ocr
from labelscan.rating import rate_ingredients

logger = logging.getLogger(__name__)


@dataclass
class Services:
    recognizer: Recognizer
    generator: Generator
    settings: Settings = field(default_factory=Settings)


def build_services(settings: Settings) -> Services:
    recognizer = build_recognizer(
        settings.ocr_engine,
        lang=settings.tesseract_lang,
        model=settings.vision_model,
        attempts=settings.engine_max_attempts,
        timeout=settings.engine_timeout_s,
    )
    generator = OpenAIGenerator(
        model=settings.generation_model,
        attempts=settings.engine_max_attempts,
        timeout=settings.engine_timeout_s,
    )
    return Services(recognizer=recognizer, generator=generator, settings=settings)


def validate_images(images: Sequence[ImageInput], max_images: int,
                    max_image_bytes: Optional[int] = None) -> None:
    if not images:
        raise InputValidationError("No images provided", "Please upload at least one image")
    if len(images) > max_images:
        raise InputValidationError("Too many images", f"Please upload at most {max_images} images")
    if max_image_bytes is not None:
        for img in images:
            if len(img.data) > max_image_bytes:
                raise InputValidationError(
                    "Image too large",
                    f"Image {img.index + 1} exceeds the {max_image_bytes // (1024 * 1024)}MB limit",
                )


def analyze(images: Sequence[ImageInput], recognizer: Recognizer, generator: Generator, *,
            max_images: int = 4, max_image_bytes: Optional[int] = None,
            include_rating: bool = False) -> AnalysisReport:
    """
    images -> OCR (parallel) -> corpus -> extraction -> normalized record,
    then an optional health rating when the record lists ingredients.

    Raises InputValidationError, NoTextFoundError or GenerationEngineError.
    """
    validate_images(images, max_images, max_image_bytes)
    logger.info("Analyzing %d image(s)", len(images))

    outcomes = run_ocr(images, recognizer, max_workers=max_images)
    corpus = aggregate_corpus(outcomes)

    extracted = extract_product_record(corpus, generator)
    record = extracted.value

    assessment = None
    if include_rating and record.ingredients:
        assessment = rate_ingredients(record.ingredients, generator, record.product_name).value

    logger.info("Analysis complete%s", " (fallback record)" if extracted.is_fallback else "")
    return AnalysisReport(
        record=record,
        outcomes=outcomes,
        corpus=corpus,
        record_is_fallback=extracted.is_fallback,
        assessment=assessment,
    )
