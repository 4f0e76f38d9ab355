# labelscan/ocr_stage.py
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from labelscan.engines.base import Recognizer
from labelscan.errors import NoTextFoundError, describe
from labelscan.models import ImageInput, OcrOutcome

logger = logging.getLogger(__name__)

CORPUS_SEPARATOR = "\n\n"


def _recognize_one(recognizer: Recognizer, image: ImageInput) -> OcrOutcome:
    try:
        text = recognizer.recognize(image.data, image.mime_type)
    except Exception as e:
        logger.warning("Image %d: recognition failed: %s", image.index + 1, describe(e))
        return OcrOutcome(index=image.index, succeeded=False, error_message=describe(e))
    text = text or ""
    if text.strip():
        logger.info("Image %d: found %d characters", image.index + 1, len(text))
    else:
        logger.info("Image %d: no text detected", image.index + 1)
    return OcrOutcome(index=image.index, succeeded=True, text=text)


def run_ocr(images: Sequence[ImageInput], recognizer: Recognizer,
            max_workers: Optional[int] = None) -> List[OcrOutcome]:
    """
    Recognize every image concurrently and wait for all of them.
    Output is sorted by image index whatever order the calls finish in.
    """
    if not images:
        return []
    workers = max(1, min(len(images), max_workers or len(images)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ocr") as pool:
        futures = [pool.submit(_recognize_one, recognizer, img) for img in images]
        outcomes = [f.result() for f in futures]
    return sorted(outcomes, key=lambda o: o.index)


def aggregate_corpus(outcomes: Sequence[OcrOutcome]) -> str:
    """
    Blank-line-joined text of succeeded, non-empty outcomes in index order.
    Raises NoTextFoundError when nothing usable was recognized.
    """
    ordered = sorted(outcomes, key=lambda o: o.index)
    corpus = CORPUS_SEPARATOR.join(o.text for o in ordered if o.text_found)
    if not corpus.strip():
        raise NoTextFoundError(ordered)
    return corpus
