"""
Material Optimization Service

TTL cache of material-alternative recommendations, keyed by a fingerprint of
the material set, with a deterministic local fallback.
"""

from .models import (
    ReportSource,
    MaterialAlternative,
    OptimizationRecommendation,
    MaterialAnalysis,
    ComplianceImprovement,
    OptimizationReport,
    OptimizationCacheEntry,
)
from .fallback import build_fallback_report, basic_alternatives, basic_recommendations
from .parsing import parse_provider_report, extract_json
from .cache import OptimizationRecommendationCache, RecommendationProvider, fingerprint
from .ai_provider import GroqRecommendationProvider, build_default_provider
from .config import OptimizationSettings, settings

__version__ = "1.0.0"
__all__ = [
    "ReportSource",
    "MaterialAlternative",
    "OptimizationRecommendation",
    "MaterialAnalysis",
    "ComplianceImprovement",
    "OptimizationReport",
    "OptimizationCacheEntry",
    "build_fallback_report",
    "basic_alternatives",
    "basic_recommendations",
    "parse_provider_report",
    "extract_json",
    "OptimizationRecommendationCache",
    "RecommendationProvider",
    "fingerprint",
    "GroqRecommendationProvider",
    "build_default_provider",
    "OptimizationSettings",
    "settings",
]
