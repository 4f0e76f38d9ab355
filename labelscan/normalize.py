# labelscan/normalize.py
# Shape coercion for parsed generation output. All functions are idempotent:
# feeding a normalized value's dict back in yields the same value.
from __future__ import annotations

import math
import re
from datetime import date
from typing import Any, Dict, List, Optional

from labelscan.fallbacks import (
    DEFAULT_RATING, FALLBACK_NAME_MAX_CHARS, MAX_RATING, MIN_RATING,
    PLACEHOLDER_PRODUCT_NAME, SUMMARY_TEMPLATE,
)
from labelscan.models import ExtractedProductRecord, HealthAssessment

ISO_DATE_PAT = re.compile(r"^\d{4}-\d{2}-\d{2}$")


# ---------- Scalars ----------

def _clean_str(v: Any) -> Optional[str]:
    if not isinstance(v, str):
        return None
    v = v.strip()
    return v or None


def _iso_date(v: Any) -> Optional[str]:
    s = _clean_str(v)
    if s is None or not ISO_DATE_PAT.match(s):
        return None
    try:
        date.fromisoformat(s)
    except ValueError:
        return None
    return s


def _to_number(v: Any) -> Optional[float]:
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        try:
            return float(v)
        except OverflowError:
            # JSON integers are unbounded; the clamp in coerce_rating takes the sign.
            return math.inf if v > 0 else -math.inf
    if isinstance(v, float):
        f = v
    elif isinstance(v, str):
        try:
            f = float(v.strip())
        except ValueError:
            return None
    else:
        return None
    return f if math.isfinite(f) else None


def coerce_rating(v: Any) -> int:
    """Nearest integer (halves up), default 3 when absent/non-numeric, clamped to [1, 5]."""
    n = _to_number(v)
    if n is None:
        n = float(DEFAULT_RATING)
    n = max(float(MIN_RATING), min(float(MAX_RATING), n))
    return int(math.floor(n + 0.5))


# ---------- Collections ----------

def string_list(v: Any) -> List[str]:
    if not isinstance(v, (list, tuple)):
        return []
    out: List[str] = []
    for item in v:
        if isinstance(item, bool):
            continue
        if isinstance(item, (int, float)):
            item = str(item)
        s = _clean_str(item)
        if s:
            out.append(s)
    return out


def _mapping(v: Any) -> Dict[str, Any]:
    if not isinstance(v, dict):
        return {}
    return {str(k): val for k, val in v.items() if k is not None}


# ======================================================================
# Records
# ======================================================================

def normalize_record(data: Any) -> ExtractedProductRecord:
    if isinstance(data, ExtractedProductRecord):
        data = data.to_dict()
    if not isinstance(data, dict):
        data = {}
    return ExtractedProductRecord(
        product_name=_clean_str(data.get("productName")),
        mfg_date=_iso_date(data.get("mfgDate")),
        exp_date=_iso_date(data.get("expDate")),
        ingredients=string_list(data.get("ingredients")),
        nutrition=_mapping(data.get("nutrition")),
    )


def fallback_record(corpus: str) -> ExtractedProductRecord:
    """Record used when extraction output is unparseable: name from the first corpus line."""
    first = next((ln.strip() for ln in (corpus or "").splitlines() if ln.strip()), "")
    name = first[:FALLBACK_NAME_MAX_CHARS].strip() or PLACEHOLDER_PRODUCT_NAME
    return ExtractedProductRecord(product_name=name, mfg_date=None, exp_date=None, ingredients=[], nutrition={})


def normalize_assessment(data: Any) -> HealthAssessment:
    if isinstance(data, HealthAssessment):
        data = data.to_dict()
    if not isinstance(data, dict):
        data = {}
    rating = coerce_rating(data.get("rating"))
    summary = _clean_str(data.get("summary")) or SUMMARY_TEMPLATE.format(rating=rating)
    return HealthAssessment(
        rating=rating,
        good_contents=string_list(data.get("goodContents")),
        bad_contents=string_list(data.get("badContents")),
        summary=summary,
    )
