# labelscan/batch.py
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Sequence

from labelscan.engines.base import Generator
from labelscan.errors import InputValidationError, describe
from labelscan.models import BatchItem, BatchItemResult, BatchReport
from labelscan.rating import rate_ingredients_strict

logger = logging.getLogger(__name__)


def _rate_item(item: BatchItem, generator: Generator) -> BatchItemResult:
    try:
        analysis = rate_ingredients_strict(item.ingredients, generator, item.product_name)
    except InputValidationError as e:
        return BatchItemResult(id=item.id, product_name=item.product_name, succeeded=False, error=e.error)
    except Exception as e:
        # Any item failure stays with that item.
        logger.warning("Batch item %r failed: %s", item.id, describe(e))
        return BatchItemResult(id=item.id, product_name=item.product_name, succeeded=False, error=describe(e))
    return BatchItemResult(id=item.id, product_name=item.product_name, succeeded=True, analysis=analysis)


def rate_batch(products: Any, generator: Generator, max_workers: int = 1) -> BatchReport:
    """
    Rate every product independently. Results keep input order; the report
    counts successes and failures.
    """
    if not isinstance(products, (list, tuple)) or not products:
        raise InputValidationError("Products array is required")

    items: Sequence[BatchItem] = [BatchItem.from_dict(p) for p in products]
    logger.info("Batch analyzing %d product(s)", len(items))

    if max_workers <= 1 or len(items) == 1:
        results: List[BatchItemResult] = [_rate_item(it, generator) for it in items]
    else:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(items)), thread_name_prefix="batch") as pool:
            results = list(pool.map(lambda it: _rate_item(it, generator), items))

    report = BatchReport(results=results)
    logger.info("Batch analysis complete: %d/%d succeeded", report.succeeded, report.total)
    return report
