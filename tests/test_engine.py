"""Tests for engine wiring and shared logging setup."""

import logging

import pytest

from services.engine import create_engine
from services.lifecycle import LifecycleParameters
from services.optimization import ReportSource
from shared.logging_config import setup_logging
from shared.models.exceptions import CarbonEngineException, UnknownRegionException


class TestCreateEngine:
    def test_components_share_one_registry(self):
        engine = create_engine(use_configured_provider=False)
        assert engine.calculator.registry is engine.registry
        assert engine.optimization.provider is None
        assert len(engine.compliance.all_standards()) == 8

    def test_engines_are_independent(self):
        first = create_engine(use_configured_provider=False)
        second = create_engine(use_configured_provider=False)
        assert first.registry is not second.registry
        assert first.optimization is not second.optimization

    def test_custom_parameters(self, sample_materials):
        engine = create_engine(parameters=LifecycleParameters(installation_share=0.5), use_configured_provider=False)
        assert engine.calculator.calculate(sample_materials).stage("A5") == pytest.approx(17.5)

    def test_no_keys_means_local_fallback(self):
        # conftest clears the provider keys
        engine = create_engine()
        assert engine.optimization.provider is None

    @pytest.mark.asyncio
    async def test_end_to_end(self, sample_materials):
        engine = create_engine(use_configured_provider=False)

        lifecycle = engine.calculator.calculate(sample_materials)
        compliance = engine.compliance.calculate_compliance("leed-v4.1", {"compliant": True}, sample_materials)
        report = await engine.optimization.get(sample_materials)

        assert lifecycle.stage("A1") == 35
        assert compliance.metadata["embodied_carbon_kg"] == 35
        assert report.source == ReportSource.FALLBACK


class TestLogging:
    def test_setup_is_idempotent(self):
        setup_logging("carbon-test", "DEBUG")
        setup_logging("carbon-test", "INFO")
        root = logging.getLogger()
        marked = [h for h in root.handlers if getattr(h, "_carbon_engine_console", False)]
        assert len(marked) == 1
        assert root.level == logging.INFO

    def test_returns_named_logger(self):
        assert setup_logging("lifecycle-emissions").name == "lifecycle-emissions"


class TestExceptions:
    def test_hierarchy_and_codes(self):
        error = UnknownRegionException("Region Atlantis not registered")
        assert isinstance(error, CarbonEngineException)
        assert (error.error_code, error.status_code) == ("unknown_region", 404)
        assert "Atlantis" in str(error)
