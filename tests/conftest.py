"""Pytest configuration and fixtures."""

import os

# Settings objects are built at import time, so the environment is fixed here
os.environ["OPTIMIZATION_GROQ_API_KEY"] = ""
os.environ["OPTIMIZATION_NVIDIA_API_KEY"] = ""
os.environ.setdefault("LIFECYCLE_LOG_LEVEL", "DEBUG")

import pytest  # noqa: E402

from services.regional_factors import RegionalFactorRegistry  # noqa: E402
from services.lifecycle import LifecycleEmissionsCalculator, MaterialInput  # noqa: E402
from services.compliance import ComplianceStandardsEngine  # noqa: E402


class FakeClock:
    """Monotonic clock that only moves when told to"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def registry():
    return RegionalFactorRegistry()


@pytest.fixture
def calculator(registry):
    return LifecycleEmissionsCalculator(registry)


@pytest.fixture
def compliance_engine():
    return ComplianceStandardsEngine()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sample_materials():
    return [
        MaterialInput(name="concrete", quantity=10, unit="kg", carbon_footprint=2),
        MaterialInput(name="steel", quantity=5, unit="kg", carbon_footprint=3),
    ]
