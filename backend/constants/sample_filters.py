# constants/sample_filters.py
"""
Filter domains and pagination bounds for the samples endpoint
"""

from enum import Enum
from typing import Set, Tuple


class Zone(str, Enum):
    """Zones a sample can be filtered by"""
    INDUSTRIAL = "industrial"
    COMMERCIAL = "commercial"
    RESIDENTIAL = "residential"
    RURAL = "rural"
    URBAN = "urban"
    COASTAL = "coastal"


class SampleType(str, Enum):
    """Medium the sample was taken from"""
    AIR = "air"
    WATER = "water"
    SOIL = "soil"
    NOISE = "noise"


class SampleStatus(str, Enum):
    """Lab assessment of the reading"""
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


VALID_ZONES: Set[str] = {z.value for z in Zone}
VALID_SAMPLE_TYPES: Set[str] = {t.value for t in SampleType}
VALID_STATUSES: Set[str] = {s.value for s in SampleStatus}


# ============================================================================
#  PAGINATION
# ============================================================================

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 50


# ============================================================================
#  DATASET SHAPE
# ============================================================================

# Object-wrapped datasets: first key present wins
WRAPPER_KEYS: Tuple[str, ...] = ("items", "samples", "data")
