"""
Catalog of green-building and greenhouse-gas reporting standards.

Each standard is a fixed data table: weighted categories, subcategories with
a calculation type, published thresholds and a certification ladder.
"""

from datetime import date
from typing import List, Optional, Sequence, Tuple

from .models import (
    BeeRole,
    CalculationType,
    CategoryRequirement,
    CertificationLevel,
    ComplianceCategory,
    ComplianceStandard,
    ComplianceThreshold,
    ScoreBasis,
    SubCategory,
)

ABSOLUTE = CalculationType.ABSOLUTE
PERCENTAGE = CalculationType.PERCENTAGE
RATIO = CalculationType.RATIO


def _sub(sub_id: str, name: str, max_points: float, calculation_type: CalculationType,
         min_required: Optional[float] = None) -> SubCategory:
    return SubCategory(sub_id, name, max_points, calculation_type, min_required)


def _req(req_id: str, description: str, mandatory: bool = False, points: float = 0) -> CategoryRequirement:
    return CategoryRequirement(req_id, description, mandatory, points)


def _ladder(levels: Sequence[Tuple[str, str, float, str, str, Tuple[str, ...]]],
            category: str = "overall", requirements: Tuple[str, ...] = ()):
    certification = tuple(
        CertificationLevel(level_id, name, min_score, badge, description, benefits)
        for level_id, name, min_score, badge, description, benefits in levels
    )
    thresholds = tuple(
        ComplianceThreshold(level=level_id, min_score=min_score, category=category, requirements=requirements)
        for level_id, _name, min_score, _badge, _desc, _benefits in levels
    )
    return thresholds, certification


LEED_THRESHOLDS, LEED_LEVELS = _ladder([
    ("certified", "Certified", 40, "🥉", "Basic LEED certification", ("Market recognition", "Energy savings")),
    ("silver", "Silver", 50, "🥈", "Silver level certification", ("Enhanced marketability", "Operational savings")),
    ("gold", "Gold", 60, "🥇", "Gold level certification", ("Premium market position", "Significant cost savings")),
    ("platinum", "Platinum", 80, "💎", "Highest LEED certification", ("Market leadership", "Maximum efficiency")),
], requirements=("All prerequisites met",))

BREEAM_THRESHOLDS, BREEAM_LEVELS = _ladder([
    ("pass", "Pass", 30, "⭐", "Basic BREEAM certification", ("Regulatory compliance",)),
    ("good", "Good", 45, "⭐⭐", "Good performance level", ("Market recognition",)),
    ("very-good", "Very Good", 55, "⭐⭐⭐", "Very good performance", ("Enhanced value",)),
    ("excellent", "Excellent", 70, "⭐⭐⭐⭐", "Excellent performance", ("Market leadership",)),
    ("outstanding", "Outstanding", 85, "⭐⭐⭐⭐⭐", "Outstanding performance", ("Innovation recognition",)),
], requirements=("All mandatory credits achieved",))

CASBEE_THRESHOLDS, CASBEE_LEVELS = _ladder([
    ("c", "C", 0.5, "C", "Basic performance", ("Compliance",)),
    ("b-minus", "B-", 1.0, "B-", "Good performance", ("Standard recognition",)),
    ("b-plus", "B+", 1.5, "B+", "Better performance", ("Market advantage",)),
    ("a", "A", 3.0, "A", "Excellent performance", ("Premium recognition",)),
    ("s", "S", 5.0, "S", "Superior performance", ("Leadership status",)),
], category="bee-score")

GREEN_STAR_THRESHOLDS, GREEN_STAR_LEVELS = _ladder([
    ("1-star", "1 Star Green Star", 10, "★", "Minimum practice", ()),
    ("2-star", "2 Star Green Star", 15, "★★", "Average practice", ()),
    ("3-star", "3 Star Green Star", 30, "★★★", "Good practice", ()),
    ("4-star", "4 Star Green Star", 45, "★★★★", "Best practice", ("Market recognition",)),
    ("5-star", "5 Star Green Star", 60, "★★★★★", "Australian excellence", ("Premium market position",)),
    ("6-star", "6 Star Green Star", 75, "★★★★★★", "World leadership", ("Market leadership",)),
])

# NABERS stars expressed as a share of the six-star scale
NABERS_THRESHOLDS, NABERS_LEVELS = _ladder([
    ("1-star", "1 Star", 16.7, "★", "Poor performance", ()),
    ("2-star", "2 Star", 33.3, "★★", "Below average performance", ()),
    ("3-star", "3 Star", 50.0, "★★★", "Average performance", ()),
    ("4-star", "4 Star", 66.7, "★★★★", "Good performance", ("Energy savings",)),
    ("5-star", "5 Star", 83.3, "★★★★★", "Excellent performance", ("Market recognition",)),
    ("6-star", "6 Star", 100.0, "★★★★★★", "Market leading performance", ("Market leadership",)),
])


def default_standards() -> List[ComplianceStandard]:
    """Build the built-in standards catalog"""
    return [
        ComplianceStandard(
            id="leed-v4.1",
            name="LEED",
            full_name="Leadership in Energy and Environmental Design",
            region="North America",
            country="USA",
            version="v4.1",
            effective_date=date(2019, 4, 1),
            categories=(
                ComplianceCategory(
                    "sustainable-sites", "Sustainable Sites", 0.26,
                    subcategories=(
                        _sub("site-assessment", "Site Assessment", 1, ABSOLUTE),
                        _sub("site-development", "Site Development", 2, ABSOLUTE),
                        _sub("transportation", "Transportation", 16, PERCENTAGE, min_required=5),
                    ),
                    requirements=(
                        _req("construction-pollution", "Construction Activity Pollution Prevention", mandatory=True),
                    ),
                ),
                ComplianceCategory(
                    "water-efficiency", "Water Efficiency", 0.11,
                    subcategories=(
                        _sub("outdoor-water", "Outdoor Water Use Reduction", 2, PERCENTAGE),
                        _sub("indoor-water", "Indoor Water Use Reduction", 6, PERCENTAGE),
                    ),
                    requirements=(_req("water-metering", "Water Use Reduction", mandatory=True),),
                ),
            ),
            thresholds=LEED_THRESHOLDS,
            certification_levels=LEED_LEVELS,
        ),
        ComplianceStandard(
            id="breeam-2018",
            name="BREEAM",
            full_name="Building Research Establishment Environmental Assessment Method",
            region="Europe",
            country="UK",
            version="2018",
            effective_date=date(2018, 1, 1),
            categories=(
                ComplianceCategory(
                    "management", "Management", 0.12,
                    subcategories=(
                        _sub("project-brief", "Project Brief and Design", 4, ABSOLUTE),
                        _sub("life-cycle-cost", "Life Cycle Cost and Service Life Planning", 4, ABSOLUTE),
                    ),
                    requirements=(_req("commissioning", "Commissioning and Handover", points=2),),
                ),
                ComplianceCategory(
                    "health-wellbeing", "Health and Wellbeing", 0.15,
                    subcategories=(
                        _sub("visual-comfort", "Visual Comfort", 6, ABSOLUTE),
                        _sub("indoor-air-quality", "Indoor Air Quality", 7, ABSOLUTE),
                    ),
                ),
            ),
            thresholds=BREEAM_THRESHOLDS,
            certification_levels=BREEAM_LEVELS,
        ),
        ComplianceStandard(
            id="casbee-2016",
            name="CASBEE",
            full_name="Comprehensive Assessment System for Built Environment Efficiency",
            region="Asia Pacific",
            country="Japan",
            version="2016",
            effective_date=date(2016, 7, 1),
            categories=(
                ComplianceCategory(
                    "environmental-quality", "Built Environment Quality (Q)", 0.5,
                    subcategories=(
                        _sub("indoor-environment", "Indoor Environment", 3, RATIO),
                        _sub("service-performance", "Quality of Service", 3, RATIO),
                    ),
                    bee_role=BeeRole.QUALITY,
                ),
                ComplianceCategory(
                    "environmental-load", "Built Environment Load (LR)", 0.5,
                    subcategories=(
                        _sub("energy", "Energy", 3, RATIO),
                        _sub("resources-materials", "Resources & Materials", 3, RATIO),
                    ),
                    bee_role=BeeRole.LOAD_REDUCTION,
                ),
            ),
            thresholds=CASBEE_THRESHOLDS,
            certification_levels=CASBEE_LEVELS,
            score_basis=ScoreBasis.BEE_RATIO,
        ),
        ComplianceStandard(
            id="green-star-buildings",
            name="Green Star",
            full_name="Green Star Buildings",
            region="Oceania",
            country="Australia",
            version="1.0",
            effective_date=date(2020, 10, 1),
            # Category points already carry the weighting, 100 in total
            categories=(
                ComplianceCategory("management", "Management", 1.0, subcategories=(
                    _sub("management", "Management", 12, ABSOLUTE),)),
                ComplianceCategory("ieq", "Indoor Environment Quality", 1.0, subcategories=(
                    _sub("ieq", "Indoor Environment Quality", 17, ABSOLUTE),)),
                ComplianceCategory("energy", "Energy", 1.0, subcategories=(
                    _sub("energy", "Energy", 25, PERCENTAGE),)),
                ComplianceCategory("transport", "Transport", 1.0, subcategories=(
                    _sub("transport", "Transport", 8, PERCENTAGE),)),
                ComplianceCategory("water", "Water", 1.0, subcategories=(
                    _sub("water", "Water", 12, PERCENTAGE),)),
                ComplianceCategory("materials", "Materials", 1.0, subcategories=(
                    _sub("materials", "Materials", 15, PERCENTAGE),)),
                ComplianceCategory("land", "Land Use & Ecology", 1.0, subcategories=(
                    _sub("land", "Land Use & Ecology", 6, ABSOLUTE),)),
                ComplianceCategory("emissions", "Emissions", 1.0, subcategories=(
                    _sub("emissions", "Emissions", 5, PERCENTAGE),)),
            ),
            thresholds=GREEN_STAR_THRESHOLDS,
            certification_levels=GREEN_STAR_LEVELS,
        ),
        ComplianceStandard(
            id="nabers-energy",
            name="NABERS",
            full_name="National Australian Built Environment Rating System - Energy",
            region="Oceania",
            country="Australia",
            version="4.0",
            effective_date=date(2020, 1, 1),
            categories=(
                ComplianceCategory(
                    "energy-intensity", "Energy Intensity", 0.5,
                    subcategories=(_sub("base-building-energy", "Base Building Energy", 6, RATIO),),
                    requirements=(_req("metering", "Twelve months of metered energy data", mandatory=True),),
                ),
                ComplianceCategory(
                    "greenhouse-emissions", "Greenhouse Emissions", 0.3,
                    subcategories=(_sub("scope-2-intensity", "Purchased Energy Emissions", 6, RATIO),),
                ),
                ComplianceCategory(
                    "water", "Water", 0.2,
                    subcategories=(_sub("water-intensity", "Water Intensity", 6, RATIO),),
                ),
            ),
            thresholds=NABERS_THRESHOLDS,
            certification_levels=NABERS_LEVELS,
        ),
        ComplianceStandard(
            id="ghg-protocol-scope-1",
            name="GHG Protocol Scope 1",
            full_name="Greenhouse Gas Protocol Corporate Standard - Direct Emissions",
            region="International",
            country="Global",
            version="Revised 2004",
            effective_date=date(2004, 3, 1),
            categories=(
                ComplianceCategory(
                    "direct-emissions", "Direct Emissions", 1.0,
                    subcategories=(
                        _sub("stationary-combustion", "Stationary Combustion", 10, PERCENTAGE),
                        _sub("mobile-combustion", "Mobile Combustion", 10, PERCENTAGE),
                        _sub("fugitive-emissions", "Fugitive Refrigerant Emissions", 10, PERCENTAGE),
                    ),
                    requirements=(_req("scope-1-inventory", "Report emissions from owned or controlled sources",
                                       mandatory=True),),
                ),
            ),
        ),
        ComplianceStandard(
            id="ghg-protocol-scope-2",
            name="GHG Protocol Scope 2",
            full_name="Greenhouse Gas Protocol Scope 2 Guidance - Purchased Energy",
            region="International",
            country="Global",
            version="2015",
            effective_date=date(2015, 1, 20),
            categories=(
                ComplianceCategory(
                    "purchased-energy", "Purchased Energy", 1.0,
                    subcategories=(
                        _sub("purchased-electricity", "Purchased Electricity", 10, PERCENTAGE),
                        _sub("purchased-heat", "Purchased Steam, Heating and Cooling", 10, PERCENTAGE),
                    ),
                    requirements=(_req("dual-reporting", "Report location-based and market-based totals",
                                       mandatory=True),),
                ),
            ),
        ),
        ComplianceStandard(
            id="ghg-protocol-scope-3",
            name="GHG Protocol Scope 3",
            full_name="Greenhouse Gas Protocol Corporate Value Chain (Scope 3) Standard",
            region="International",
            country="Global",
            version="2011",
            effective_date=date(2011, 9, 1),
            categories=(
                ComplianceCategory(
                    "value-chain", "Value Chain Emissions", 1.0,
                    subcategories=(
                        _sub("business-travel", "Business Travel", 10, PERCENTAGE),
                        _sub("employee-commuting", "Employee Commuting", 10, PERCENTAGE),
                        _sub("waste", "Waste Generated in Operations", 10, PERCENTAGE),
                    ),
                ),
            ),
        ),
    ]
