"""
Deterministic local optimization report, used when no provider is configured
or the provider fails.
"""

import logging
from typing import List, Optional

from services.lifecycle.models import MaterialInput

from .config import settings
from .models import (
    ComplianceImprovement,
    ComplianceStatus,
    EstimatedSavings,
    MaterialAlternative,
    MaterialAnalysis,
    OptimizationRecommendation,
    OptimizationReport,
    ReportSource,
)

logger = logging.getLogger(__name__)

# Factor used when a material has no carbon factor of its own
DEFAULT_CARBON_FACTOR = 1.0


def rank_by_impact(materials: List[MaterialInput]) -> List[MaterialInput]:
    """Materials ordered by embodied carbon, highest first, ties broken by name"""
    return sorted(materials, key=lambda m: (-(m.quantity * m.carbon_footprint), m.name))


def basic_alternatives(material: MaterialInput, carbon_ratio: Optional[float] = None,
                       cost_ratio: Optional[float] = None) -> List[MaterialAlternative]:
    carbon_ratio = settings.alternative_carbon_ratio if carbon_ratio is None else carbon_ratio
    cost_ratio = settings.alternative_cost_ratio if cost_ratio is None else cost_ratio
    factor = material.carbon_footprint or DEFAULT_CARBON_FACTOR

    return [
        MaterialAlternative(
            id=f"{material.name}-alt-1",
            name=f"Eco-{material.name}",
            type="Sustainable alternative",
            carbon_footprint=factor * carbon_ratio,
            carbon_reduction=round((1 - carbon_ratio) * 100, 6),
            cost=cost_ratio,
            cost_impact="higher" if cost_ratio > 1 else "similar",
            availability="Medium",
            sustainability_score=85,
            description=f"Sustainable alternative to {material.name}",
            benefits=["Reduced carbon footprint", "Improved sustainability"],
            tradeoffs=["Slightly higher cost"],
            considerations=["Verify local availability", "Check cost implications"],
            compliance_status=ComplianceStatus(ncc=True, nabers=True),
            estimated_savings=EstimatedSavings(co2=factor * (1 - carbon_ratio), cost=0),
        )
    ]


def basic_recommendations(materials: List[MaterialInput],
                          limit: Optional[int] = None) -> List[OptimizationRecommendation]:
    limit = settings.max_recommendations if limit is None else limit
    ranked = rank_by_impact(materials)[:limit]

    recommendations = []
    for index, material in enumerate(ranked):
        alternatives = basic_alternatives(material)
        recommendations.append(OptimizationRecommendation(
            material_id=material.name,
            current_material=material.name,
            category="carbon_reduction",
            title=f"Optimize {material.name}",
            description=f"Consider sustainable alternatives for {material.name} to reduce environmental impact",
            issue="Optimization opportunity identified",
            recommendation=f"Consider sustainable alternatives for {material.name}",
            impact="Moderate carbon reduction potential",
            timeframe="2-4 weeks",
            confidence=75,
            potential_saving=alternatives[0].carbon_reduction,
            priority="High" if index == 0 else "Medium",
            alternatives=alternatives,
            implementation_steps=["Research alternatives", "Evaluate feasibility", "Plan implementation"],
        ))
    return recommendations


def build_fallback_report(materials: List[MaterialInput]) -> OptimizationReport:
    """Rule-based report; identical inputs always give identical content"""
    ranked = rank_by_impact(materials)
    report = OptimizationReport(
        overall_score=75,
        potential_co2_reduction=12,
        cost_impact=3,
        recommendations=basic_recommendations(materials),
        summary=("Basic analysis completed. Consider sustainable alternatives to improve "
                 "your project's environmental impact."),
        key_insights=["Focus on high-impact materials", "Balance cost and sustainability", "Monitor compliance"],
        next_steps=["Review recommendations", "Research alternatives", "Consult with suppliers"],
        material_analysis=MaterialAnalysis(
            high_impact_materials=[m.name for m in ranked[:2]],
            sustainable_materials=[m.name for m in materials if m.carbon_footprint < 0],
            improvement_areas=["Carbon footprint reduction", "Cost optimization"],
        ),
        compliance_improvement=ComplianceImprovement(
            ncc_gaps=["Review compliance requirements"],
            nabers_opportunities=["Improve sustainability rating"],
        ),
        source=ReportSource.FALLBACK,
    )
    logger.info(f"Using fallback optimization report for {len(materials)} materials")
    return report
