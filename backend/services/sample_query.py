# services/sample_query.py
"""
Query engine for the samples endpoint.

Validates the enumerated filters, narrows the cached samples in a fixed
order (zone, sample type, status, operator, date range) and slices the
result into one page.
"""

import logging
import math
from typing import Any, List, Optional, Sequence

import pandas as pd

from constants.sample_filters import (
    VALID_ZONES,
    VALID_SAMPLE_TYPES,
    VALID_STATUSES,
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MIN_PAGE_SIZE,
    MAX_PAGE_SIZE,
)
from schemas.sample import Sample, SampleQuery, SamplePage

logger = logging.getLogger(__name__)


class InvalidFilterError(ValueError):
    """A filter value outside its allowed set."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


# (query attribute, sample key, allowed values, error message)
ENUM_FILTERS = [
    ("zone", "zone", VALID_ZONES, "Invalid zone"),
    ("sample_type", "sampleType", VALID_SAMPLE_TYPES, "Invalid sample type"),
    ("status", "status", VALID_STATUSES, "Invalid status"),
]


# =======================================================
# PAGINATION COERCION
# =======================================================

def _to_int(raw: Optional[str], default: int) -> int:
    """
    Number-like string -> int, truncated toward zero.
    Missing, blank, non-numeric, non-finite and zero all give `default`.
    """
    if raw is None:
        return default
    try:
        number = float(str(raw).strip())
    except ValueError:
        return default

    if not math.isfinite(number) or number == 0:
        return default
    return int(number)


def parse_page(raw: Optional[str]) -> int:
    """Requested page, at least 1 (default 1)."""
    return max(_to_int(raw, DEFAULT_PAGE), 1)


def parse_page_size(raw: Optional[str]) -> int:
    """Requested page size, clamped to [1, 50] (default 10)."""
    return min(max(_to_int(raw, DEFAULT_PAGE_SIZE), MIN_PAGE_SIZE), MAX_PAGE_SIZE)


# =======================================================
# VALIDATION
# =======================================================

def validate_filters(query: SampleQuery):
    """Fails on the first enumerated filter with a value outside its set."""
    for attr, _, allowed, message in ENUM_FILTERS:
        value = getattr(query, attr)
        if value and value not in allowed:
            raise InvalidFilterError(attr, message)


# =======================================================
# FILTERING
# =======================================================

def _field(sample: Any, key: str) -> Any:
    # records are not schema-checked; anything that is not an object has no fields
    return sample.get(key) if isinstance(sample, dict) else None


def parse_date(value: Any) -> Optional[pd.Timestamp]:
    """UTC timestamp, or None when the value is not a date."""
    if value is None or value == "":
        return None
    try:
        parsed = pd.to_datetime(value, utc=True, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if pd.isna(parsed):
        return None
    return parsed


def filter_by_date(
    samples: List[Sample],
    min_date: Optional[str] = None,
    max_date: Optional[str] = None,
) -> List[Sample]:
    """
    Keep samples collected within [min_date, max_date].
    Bounds that are not valid dates are ignored; a sample without a valid
    collectionDate never satisfies an active bound.
    """
    lower = parse_date(min_date)
    upper = parse_date(max_date)
    if (lower is None and upper is None) or not samples:
        return samples

    dates = pd.to_datetime(
        pd.Series([_field(s, "collectionDate") for s in samples], dtype="object"),
        utc=True,
        errors="coerce",
        format="mixed",
    )

    mask = pd.Series(True, index=dates.index)
    if lower is not None:
        mask &= dates >= lower
    if upper is not None:
        mask &= dates <= upper

    return [s for s, keep in zip(samples, mask.tolist()) if keep]


def filter_samples(samples: Sequence[Sample], query: SampleQuery) -> List[Sample]:
    result = list(samples)

    for attr, key, _, _ in ENUM_FILTERS:
        value = getattr(query, attr)
        if value:
            result = [s for s in result if _field(s, key) == value]

    if query.operator:
        result = [s for s in result if _field(s, "operator") == query.operator]

    if query.min_date or query.max_date:
        result = filter_by_date(result, query.min_date, query.max_date)

    return result


# =======================================================
# PAGINATION
# =======================================================

def paginate(samples: List[Sample], page: int, page_size: int) -> SamplePage:
    total_items = len(samples)
    total_pages = max(math.ceil(total_items / page_size), 1)

    # page=999 serves the last page instead of an empty one
    current = min(page, total_pages)
    start = (current - 1) * page_size

    return SamplePage(
        page=current,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
        items=samples[start:start + page_size],
    )


# =======================================================
# ENTRY POINT
# =======================================================

def execute(samples: Sequence[Sample], query: SampleQuery) -> SamplePage:
    """Validate, filter, paginate. Raises InvalidFilterError before any filtering."""
    validate_filters(query)

    page = parse_page(query.page)
    page_size = parse_page_size(query.page_size)

    filtered = filter_samples(samples, query)
    logger.debug(
        f"Samples query {query.model_dump(exclude_none=True)}: "
        f"{len(filtered)}/{len(samples)} match"
    )

    return paginate(filtered, page, page_size)
