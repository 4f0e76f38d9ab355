# labelscan/rating.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

from labelscan.engines.base import Generator
from labelscan.errors import InputValidationError, MalformedGenerationOutputError
from labelscan.fallbacks import DEFAULT_BATCH_PRODUCT_NAME, DEFAULT_RATED_PRODUCT_NAME, FALLBACK_ASSESSMENT
from labelscan.models import GenerationResult, HealthAssessment
from labelscan.normalize import normalize_assessment, string_list
from labelscan.prompts.rating import build_batch_rating_prompt, build_rating_prompt
from labelscan.sanitize import parse_json_block, sanitize

logger = logging.getLogger(__name__)

NO_INGREDIENTS = "No ingredients provided"


def require_ingredients(ingredients: Any) -> List[str]:
    items = string_list(ingredients)
    if not items:
        raise InputValidationError(NO_INGREDIENTS, "Please provide ingredient list for analysis")
    return items


def _product_label(name: Any, default: str) -> str:
    return name.strip() or default if isinstance(name, str) else default


def fallback_assessment() -> HealthAssessment:
    return normalize_assessment(FALLBACK_ASSESSMENT)


def rate_ingredients(ingredients: Any, generator: Generator,
                     product_name: Any = None) -> GenerationResult[HealthAssessment]:
    """
    Health rating for one ingredient list. Unparseable output gives the fixed
    fallback assessment; engine failures propagate.
    """
    items = require_ingredients(ingredients)
    product = _product_label(product_name, DEFAULT_RATED_PRODUCT_NAME)
    logger.info("Analyzing health rating for %r (%d ingredients)", product, len(items))
    raw = generator.generate(build_rating_prompt(items, product))
    result = sanitize(raw, normalize=normalize_assessment, fallback=fallback_assessment, label="rating")
    logger.info("Health rating: %d stars%s", result.value.rating, " (fallback)" if result.is_fallback else "")
    return result


def rate_ingredients_strict(ingredients: Any, generator: Generator,
                            product_name: Any = None) -> HealthAssessment:
    """
    Terse variant for batch items: unparseable output raises
    MalformedGenerationOutputError instead of substituting a fallback.
    """
    items = require_ingredients(ingredients)
    raw = generator.generate(build_batch_rating_prompt(items, _product_label(product_name, DEFAULT_BATCH_PRODUCT_NAME)))
    value, reason = parse_json_block(raw)
    if reason is None and not isinstance(value, dict):
        reason = f"unexpected JSON type {type(value).__name__}"
    if reason is not None:
        raise MalformedGenerationOutputError(reason, raw or "")
    return normalize_assessment(value)


def analyze_rating(ingredients: Any, generator: Generator, product_name: Any = None) -> Dict[str, Any]:
    """`rating.analyze` response body."""
    items = require_ingredients(ingredients)
    result = rate_ingredients(items, generator, product_name)
    return {
        "success": True,
        "analysis": result.value.to_dict(),
        "productName": _product_label(product_name, DEFAULT_RATED_PRODUCT_NAME),
        "analyzedIngredients": items,
        "usedFallback": result.is_fallback,
    }
