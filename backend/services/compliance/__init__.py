"""
Compliance Standards Service

Scores projects against LEED, BREEAM, CASBEE, Green Star, NABERS and
GHG Protocol scope standards.
"""

from .models import (
    CalculationType,
    ScoreBasis,
    BeeRole,
    SubCategory,
    CategoryRequirement,
    ComplianceCategory,
    ComplianceThreshold,
    CertificationLevel,
    ComplianceStandard,
    ProjectData,
    SubcategoryScore,
    CategoryScore,
    ComplianceResult,
)
from .standards import default_standards
from .scoring import ComplianceStandardsEngine, building_environmental_efficiency
from .rating_calculators import (
    calculate_leed,
    calculate_breeam,
    calculate_green_star,
    calculate_nabers,
    calculate_casbee,
    calculate_ghg_scopes,
    leed_rating,
    breeam_rating,
    green_star_rating,
)

__version__ = "1.0.0"
__all__ = [
    "CalculationType",
    "ScoreBasis",
    "BeeRole",
    "SubCategory",
    "CategoryRequirement",
    "ComplianceCategory",
    "ComplianceThreshold",
    "CertificationLevel",
    "ComplianceStandard",
    "ProjectData",
    "SubcategoryScore",
    "CategoryScore",
    "ComplianceResult",
    "default_standards",
    "ComplianceStandardsEngine",
    "building_environmental_efficiency",
    "calculate_leed",
    "calculate_breeam",
    "calculate_green_star",
    "calculate_nabers",
    "calculate_casbee",
    "calculate_ghg_scopes",
    "leed_rating",
    "breeam_rating",
    "green_star_rating",
]
