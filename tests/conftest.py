"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from bloomspec.core.taxonomy import CognitiveLevel  # noqa: E402
from config import Settings, get_settings  # noqa: E402

# Standard / Balanced / 20 questions
STANDARD_ALLOCATION = {
    CognitiveLevel.REMEMBER: 2,
    CognitiveLevel.UNDERSTAND: 4,
    CognitiveLevel.APPLY: 7,
    CognitiveLevel.ANALYZE: 5,
    CognitiveLevel.EVALUATE: 1,
    CognitiveLevel.CREATE: 1,
}


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (specification -> verification)")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def settings():
    """Default settings, isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Keep the cached settings from leaking across tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def build_problem(index: int = 0, **overrides) -> dict:
    """A fully valid problem dict; keyword overrides replace fields."""
    problem = {
        "problem_id": f"P-{index:03d}",
        "cognitive_level": "Apply",
        "complexity": 0.5,
        "estimated_time_minutes": 3,
        "difficulty": 3,
        "response_type": "multiple-choice",
        "content": f"Solve problem {index}.",
        "sequence_index": index,
    }
    problem.update(overrides)
    return problem


def build_batch(allocation: dict, minutes_each: int = 3) -> list[dict]:
    """One valid problem per allocated slot, indexed 0..n-1."""
    problems = []
    for level, count in allocation.items():
        for _ in range(count):
            index = len(problems)
            problems.append(
                build_problem(
                    index,
                    cognitive_level=level.value,
                    estimated_time_minutes=minutes_each,
                )
            )
    return problems


@pytest.fixture
def make_problem():
    """Factory for valid problem dicts."""
    return build_problem


@pytest.fixture
def make_batch():
    """Factory for valid batches from an allocation mapping."""
    return build_batch


@pytest.fixture
def sample_problem():
    """Provide a single valid problem."""
    return build_problem(0)


@pytest.fixture
def standard_batch():
    """20 problems matching the Standard baseline, 3 minutes each (60 min total)."""
    return build_batch(STANDARD_ALLOCATION)


@pytest.fixture
def wire_problem():
    """A valid problem using the generator's wire field names."""
    return {
        "ProblemId": "gen-001",
        "BloomLevel": "Analyze",
        "LinguisticComplexity": 0.45,
        "EstimatedTimeMinutes": 4,
        "Difficulty": 2,
        "Type": "short-answer",
        "Content": "Compare the two approaches.",
        "SequenceIndex": 0,
    }
