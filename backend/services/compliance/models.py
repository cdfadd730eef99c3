from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CalculationType(str, Enum):
    ABSOLUTE = "absolute"
    PERCENTAGE = "percentage"
    RATIO = "ratio"


class ScoreBasis(str, Enum):
    """Which figure is compared against the certification ladder"""
    PERCENTAGE = "percentage"
    BEE_RATIO = "bee_ratio"


class BeeRole(str, Enum):
    QUALITY = "Q"
    LOAD_REDUCTION = "LR"


@dataclass(frozen=True)
class SubCategory:
    id: str
    name: str
    max_points: float
    calculation_type: CalculationType
    min_required: Optional[float] = None


@dataclass(frozen=True)
class CategoryRequirement:
    id: str
    description: str
    mandatory: bool = False
    points: float = 0


@dataclass(frozen=True)
class ComplianceCategory:
    id: str
    name: str
    weight: float
    subcategories: Tuple[SubCategory, ...] = ()
    requirements: Tuple[CategoryRequirement, ...] = ()
    bee_role: Optional[BeeRole] = None

    @property
    def max_points(self) -> float:
        return float(sum(sub.max_points for sub in self.subcategories))


@dataclass(frozen=True)
class ComplianceThreshold:
    level: str
    min_score: float
    category: str = "overall"
    requirements: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CertificationLevel:
    id: str
    name: str
    min_score: float
    badge: str = ""
    description: str = ""
    benefits: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ComplianceStandard:
    """
    Static catalog entry for one rating system.

    Attributes:
        categories: Weighted category tree, in reporting order.
        thresholds: Published minimum scores per level.
        certification_levels: Ladder of levels; read through
            ``sorted_levels`` which is always descending by min_score.
        score_basis: PERCENTAGE compares the weighted overall score,
            BEE_RATIO compares the Q/LR building environmental efficiency.
    """
    id: str
    name: str
    full_name: str
    region: str
    country: str
    version: str
    effective_date: date
    categories: Tuple[ComplianceCategory, ...]
    thresholds: Tuple[ComplianceThreshold, ...] = ()
    certification_levels: Tuple[CertificationLevel, ...] = ()
    score_basis: ScoreBasis = ScoreBasis.PERCENTAGE

    @property
    def sorted_levels(self) -> List[CertificationLevel]:
        return sorted(self.certification_levels, key=lambda level: level.min_score, reverse=True)

    @property
    def lowest_threshold(self) -> Optional[float]:
        if not self.certification_levels:
            return None
        return min(level.min_score for level in self.certification_levels)

    def category(self, category_id: str) -> Optional[ComplianceCategory]:
        return next((c for c in self.categories if c.id == category_id), None)


class ProjectData(BaseModel):
    """Project inputs consumed by subcategory scoring"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    compliant: bool = Field(False, description="Absolute credits achieved")
    improvement: float = Field(0.0, description="Percent improvement over baseline")
    actual_value: Optional[float] = Field(None, description="Measured value for ratio credits")
    baseline_value: Optional[float] = Field(None, description="Reference value for ratio credits")


class SubcategoryScore(BaseModel):
    subcategory_id: str
    subcategory_name: str
    calculation_type: CalculationType
    score: float
    max_score: float
    achievement_level: float


class CategoryScore(BaseModel):
    category_id: str
    category_name: str
    score: float
    max_score: float
    weight: float
    subcategory_scores: List[SubcategoryScore] = Field(default_factory=list)

    @property
    def performance(self) -> float:
        return self.score / self.max_score if self.max_score else 0.0


class ComplianceResult(BaseModel):
    """Result model for a compliance calculation"""
    standard_id: str
    standard_name: str
    overall_score: float = Field(..., description="Weighted score, 0-100")
    rated_score: float = Field(..., description="Score compared against the certification ladder")
    total_score: float
    max_score: float
    category_scores: List[CategoryScore]
    certification_level: Optional[str] = None
    certification_level_id: Optional[str] = None
    compliance: bool
    recommendations: List[str] = Field(default_factory=list)
    materials_considered: int = 0
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    metadata: Dict[str, Any] = Field(default_factory=dict)
