"""Shared pytest configuration and fixtures for foodmeds tests."""

import json
import tempfile
from pathlib import Path
from typing import List

import pytest

from foodmeds.catalog import DiseaseCatalog
from foodmeds.matching import DiseaseSearchStrategy, FuzzyMatcher
from foodmeds.matching.models import Suggestion


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_disease_records():
    """Raw catalog records as they appear in diseases.json."""
    return [
        {
            "name": "Anemia",
            "symptoms": ["fatigue", "pale skin", "dizziness"],
            "vitamins": [
                {"name": "Iron", "benefit": "Needed for hemoglobin", "dosage": "18 mg/day"},
            ],
            "foods": [
                {"name": "Spinach", "nutrients": "Iron, folate", "benefit": "Plant source of iron"},
            ],
            "generalAdvice": "Pair iron-rich foods with vitamin C.",
        },
        {
            "name": "Iron Deficiency",
            "symptoms": ["fatigue", "brittle nails"],
            "foods": ["Red meat", "Beans"],
            "cure": "Take iron supplements with food",
        },
        {
            "name": "Diabetes",
            "symptoms": ["thirst", "fatigue"],
            "diet": "Low sugar, whole grains",
        },
        {
            "name": "Diabetic Neuropathy",
            "symptoms": ["numbness"],
        },
        {
            "name": "Common Cold",
            "symptoms": ["cough", "sneezing", "sore throat"],
        },
        {
            # No symptoms field at all
            "name": "Mystery Condition",
        },
    ]


@pytest.fixture
def sample_catalog(sample_disease_records):
    """DiseaseCatalog built from the sample records."""
    return DiseaseCatalog.from_records(sample_disease_records)


@pytest.fixture
def diabetes_catalog():
    """Two-entry catalog used for the Diabetes scenario."""
    return DiseaseCatalog.from_records([
        {"name": "Diabetes", "symptoms": ["thirst", "fatigue"]},
        {"name": "Diabetic Neuropathy", "symptoms": ["numbness"]},
    ])


@pytest.fixture
def catalog_json_file(temp_dir, sample_disease_records):
    """Write the sample records to a diseases.json file."""
    path = temp_dir / "diseases.json"
    path.write_text(json.dumps(sample_disease_records), encoding="utf-8")
    return path


@pytest.fixture
def fuzzy_matcher():
    """Create a FuzzyMatcher instance for testing."""
    return FuzzyMatcher(similarity_threshold=0.6)


@pytest.fixture
def search_strategy(sample_catalog, fuzzy_matcher):
    """DiseaseSearchStrategy over the sample catalog."""
    return DiseaseSearchStrategy(sample_catalog, fuzzy_matcher)


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Keep FOODMEDS_* settings from the developer's shell out of the tests."""
    for key in ("FOODMEDS_CATALOG_PATH", "FOODMEDS_LOGFILE", "FOODMEDS_SIMILARITY_THRESHOLD"):
        monkeypatch.delenv(key, raising=False)

    yield


# Test markers for different test categories
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# Custom assertions for testing
class CustomAssertions:
    """Custom assertion helpers for domain-specific testing."""

    @staticmethod
    def assert_tier_order(suggestions: List[Suggestion]) -> None:
        """Assert that suggestion tiers never decrease along the list."""
        tiers = [s.tier for s in suggestions]
        assert tiers == sorted(tiers), f"Tiers out of order: {tiers}"

    @staticmethod
    def assert_valid_score(score: float) -> None:
        assert isinstance(score, float)
        assert 0.0 <= score <= 1.0


@pytest.fixture
def custom_assertions():
    """Provide custom assertion helpers."""
    return CustomAssertions()
