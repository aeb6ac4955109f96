# dataset.py
import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, List, Optional

from config import BASE_DIR, DATA_FILE_ENV, DATA_FILE_NAME
from constants.sample_filters import WRAPPER_KEYS
from schemas.sample import Sample

logger = logging.getLogger(__name__)


class DatasetUnavailableError(RuntimeError):
    """Raised when the samples file is missing, unreadable or malformed."""


# ============================================================
# SOURCE RESOLUTION
# ============================================================

def candidate_paths() -> List[Path]:
    """
    Search order:
      1. DATA_FILE env override
      2. ../data/<file>   (server started from backend/)
      3. ./data/<file>    (server started from the project root)
      4. <project>/data/<file> relative to this module
    """
    cwd = Path.cwd()
    candidates = []

    override = os.getenv(DATA_FILE_ENV, "").strip()
    if override:
        candidates.append(Path(override))

    candidates.append(cwd.parent / "data" / DATA_FILE_NAME)
    candidates.append(cwd / "data" / DATA_FILE_NAME)
    candidates.append(BASE_DIR.parent / "data" / DATA_FILE_NAME)
    return candidates


def resolve_data_file() -> Path:
    for path in candidate_paths():
        if path.is_file():
            return path

    # Nothing found: point at the conventional location so the read fails loudly
    return Path.cwd().parent / "data" / DATA_FILE_NAME


# ============================================================
# DECODING
# ============================================================

def extract_records(parsed: Any) -> List[Sample]:
    """Accept a bare array, or an object wrapping it under a known key."""
    if isinstance(parsed, list):
        return parsed

    if isinstance(parsed, dict):
        for key in WRAPPER_KEYS:
            if key not in parsed:
                continue
            records = parsed[key]
            if not isinstance(records, list):
                raise DatasetUnavailableError(
                    f"Samples JSON field '{key}' must be an array, got {type(records).__name__}"
                )
            return records
        raise DatasetUnavailableError(
            f"Samples JSON object has none of the expected fields {list(WRAPPER_KEYS)}"
        )

    raise DatasetUnavailableError(
        f"Samples JSON must be an array or an object, got {type(parsed).__name__}"
    )


def read_samples(path: Path) -> List[Sample]:
    try:
        content = path.read_text(encoding="utf-8")
        parsed = json.loads(content)
    except FileNotFoundError as exc:
        raise DatasetUnavailableError(f"Samples file not found: {path}") from exc
    except UnicodeDecodeError as exc:
        raise DatasetUnavailableError(f"Samples file is not valid UTF-8: {path}") from exc
    except json.JSONDecodeError as exc:
        raise DatasetUnavailableError(f"Samples file is not valid JSON: {path} ({exc})") from exc
    except OSError as exc:
        raise DatasetUnavailableError(f"Samples file could not be read: {path} ({exc})") from exc

    return extract_records(parsed)


# ============================================================
# PROCESS-WIDE CACHE
# ============================================================

class SampleCache:
    """
    Loads the samples once and serves the same list afterwards.

    The lock makes first access safe when several requests race (sync
    dependencies run in the threadpool). A failed load is not stored, so
    the next call tries again.
    """

    def __init__(self, path: Optional[Path] = None):
        self._path = path
        self._lock = threading.Lock()
        self._samples: Optional[List[Sample]] = None

    @property
    def loaded(self) -> bool:
        return self._samples is not None

    def load(self) -> List[Sample]:
        if self._samples is not None:
            return self._samples

        with self._lock:
            if self._samples is None:
                path = self._path or resolve_data_file()
                try:
                    samples = read_samples(path)
                except DatasetUnavailableError as exc:
                    logger.error(f"❌ Could not load samples: {exc}")
                    raise
                logger.info(f"✅ Loaded {len(samples)} samples from {path}")
                self._samples = samples

        return self._samples

    def clear(self):
        with self._lock:
            self._samples = None


sample_cache = SampleCache()


# ============================================================
# FastAPI dependency
# ============================================================

def get_samples() -> List[Sample]:
    return sample_cache.load()
