"""
Construction Carbon Engine

Builds the registry, calculator, compliance engine and optimization cache as
explicit instances that callers hold and pass around.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from shared.logging_config import setup_logging
from services.regional_factors import RegionalFactorRegistry
from services.lifecycle import LifecycleEmissionsCalculator, LifecycleParameters
from services.lifecycle.config import settings as lifecycle_settings
from services.compliance import ComplianceStandardsEngine
from services.optimization import OptimizationRecommendationCache, build_default_provider
from services.optimization.cache import RecommendationProvider
from services.optimization.config import settings as optimization_settings

logger = logging.getLogger(__name__)


@dataclass
class CarbonEngine:
    registry: RegionalFactorRegistry
    calculator: LifecycleEmissionsCalculator
    compliance: ComplianceStandardsEngine
    optimization: OptimizationRecommendationCache


def create_engine(
    provider: Optional[RecommendationProvider] = None,
    parameters: Optional[LifecycleParameters] = None,
    use_configured_provider: bool = True,
    configure_logging: bool = False,
) -> CarbonEngine:
    """
    Wire up one engine instance.

    Args:
        provider: Recommendation provider for the optimization cache. When
            omitted and ``use_configured_provider`` is set, an LLM provider
            is built from configured API keys if any exist.
        parameters: Lifecycle heuristic constants; defaults come from
            LIFECYCLE_* settings.
        configure_logging: Install the shared console log handler.
    """
    if configure_logging:
        setup_logging(lifecycle_settings.service_name, lifecycle_settings.log_level)

    if provider is None and use_configured_provider:
        provider = build_default_provider(optimization_settings)

    registry = RegionalFactorRegistry()
    engine = CarbonEngine(
        registry=registry,
        calculator=LifecycleEmissionsCalculator(registry, parameters),
        compliance=ComplianceStandardsEngine(),
        optimization=OptimizationRecommendationCache(provider),
    )
    logger.info(
        f"Carbon engine ready: {len(registry.countries)} regions, "
        f"{len(engine.compliance.all_standards())} standards, "
        f"provider={'configured' if provider else 'local fallback'}"
    )
    return engine
