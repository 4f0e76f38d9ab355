# labelscan/extraction.py
from __future__ import annotations

import logging

from labelscan.engines.base import Generator
from labelscan.models import ExtractedProductRecord, GenerationResult
from labelscan.normalize import fallback_record, normalize_record
from labelscan.prompts.extraction import build_extraction_prompt
from labelscan.sanitize import sanitize

logger = logging.getLogger(__name__)


def extract_product_record(corpus: str, generator: Generator) -> GenerationResult[ExtractedProductRecord]:
    """
    One generation call over the corpus. Engine failures propagate
    (GenerationEngineError); unusable output becomes the fallback record.
    """
    logger.info("Sending %d characters for structured extraction", len(corpus))
    raw = generator.generate(build_extraction_prompt(corpus))
    return sanitize(
        raw,
        normalize=normalize_record,
        fallback=lambda: fallback_record(corpus),
        label="extraction",
    )
