"""Shared fixtures for the environmental samples API test suite."""

import sys
import os
import json

import pytest

# backend/ modules import each other as top-level names
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "backend"))

from dataset import sample_cache


ZONES = ["industrial", "commercial", "residential", "rural", "urban", "coastal"]
TYPES = ["air", "water", "soil", "noise"]


def make_sample(index, **overrides):
    """One well-formed sample; fields can be overridden per test."""
    sample = {
        "sampleId": f"SMP-{index:04d}",
        "location": f"Station {index}",
        "zone": ZONES[index % len(ZONES)],
        "sampleType": TYPES[index % len(TYPES)],
        "collectionDate": f"2024-{(index % 12) + 1:02d}-15T10:00:00Z",
        "parameters": {
            "pH": 7.0,
            "temperature": 18.5,
            "conductivity": 420,
            "turbidity": 2.1,
            "dissolvedOxygen": 7.4,
            "heavyMetals": {"lead": 0.004, "mercury": 0.0007, "arsenic": 0.003},
            "vocs": 0.3,
            "pm25": 12.0,
            "pm10": 25.0,
            "noiseLevel": 48.0,
        },
        "status": "normal",
        "operator": "Laura Gómez" if index % 2 else "Carlos Ruiz",
        "labCode": "LAB-NORTE",
        "notes": "",
    }
    sample.update(overrides)
    return sample


@pytest.fixture
def twelve_samples():
    """12 samples, the first three critical."""
    return [
        make_sample(i, status="critical" if i < 3 else "normal")
        for i in range(12)
    ]


@pytest.fixture
def twenty_five_samples():
    return [make_sample(i) for i in range(25)]


@pytest.fixture
def write_dataset(tmp_path):
    """Write a JSON payload to a temp file and return its path."""
    def _write(payload, name="environmental-samples.json"):
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path
    return _write


@pytest.fixture(autouse=True)
def fresh_cache():
    """Every test starts and ends with an empty process cache."""
    sample_cache.clear()
    yield
    sample_cache.clear()
