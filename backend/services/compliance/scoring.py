import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from pydantic import ValidationError

from shared.models.exceptions import InvalidInputException, ScoringException, UnknownStandardException
from services.lifecycle.models import MaterialInput, coerce_materials

from .models import (
    BeeRole,
    CalculationType,
    CategoryScore,
    CertificationLevel,
    ComplianceCategory,
    ComplianceResult,
    ComplianceStandard,
    ProjectData,
    ScoreBasis,
    SubCategory,
    SubcategoryScore,
)
from .standards import default_standards

logger = logging.getLogger(__name__)

# Recommendation cut-offs, as shares of the maximum score
CATEGORY_RECOMMENDATION_THRESHOLD = 0.7
SUBCATEGORY_RECOMMENDATION_THRESHOLD = 0.5

# Floor for the CASBEE environmental load so BEE stays finite
MIN_ENVIRONMENTAL_LOAD = 1.0


def building_environmental_efficiency(sq: float, slr: float) -> float:
    """BEE = Q / L with Q = 25(SQ-1) and L = 25(5-SLR), SQ and SLR on the 1-5 scale"""
    quality = 25 * (sq - 1)
    load = max(MIN_ENVIRONMENTAL_LOAD, 25 * (5 - slr))
    return quality / load


def _coerce_project_data(project_data: Union[ProjectData, Dict[str, Any], None]) -> ProjectData:
    if project_data is None:
        return ProjectData()
    if isinstance(project_data, ProjectData):
        return project_data
    try:
        return ProjectData.model_validate(project_data)
    except ValidationError as e:
        raise InvalidInputException(f"Invalid project data: {e}")


class ComplianceStandardsEngine:
    """
    Scores project data against a catalog of rating standards.

    The catalog is built once at construction and only read afterwards.
    """

    def __init__(self, standards: Optional[Iterable[ComplianceStandard]] = None):
        self._standards: Dict[str, ComplianceStandard] = {}
        for standard in (default_standards() if standards is None else standards):
            self._standards[standard.id] = standard
        logger.info(f"Compliance standards initialized: {', '.join(self._standards)}")

    # ------------------------------------------------------------------
    # Catalog queries
    # ------------------------------------------------------------------

    def get_standard(self, standard_id: str) -> Optional[ComplianceStandard]:
        return self._standards.get(standard_id)

    def require_standard(self, standard_id: str) -> ComplianceStandard:
        standard = self._standards.get(standard_id)
        if standard is None:
            raise UnknownStandardException(f"Standard {standard_id} not found")
        return standard

    def all_standards(self) -> List[ComplianceStandard]:
        return list(self._standards.values())

    def standards_by_region(self, region: str) -> List[ComplianceStandard]:
        return [s for s in self._standards.values() if s.region.lower() == region.lower()]

    def standards_by_country(self, country: str) -> List[ComplianceStandard]:
        return [s for s in self._standards.values() if s.country.lower() == country.lower()]

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def calculate_compliance(
        self,
        standard_id: str,
        project_data: Union[ProjectData, Dict[str, Any], None] = None,
        materials: Optional[Sequence[Union[MaterialInput, Dict[str, Any]]]] = None,
    ) -> ComplianceResult:
        """
        Score a project against one standard.

        Args:
            standard_id: Catalog id, e.g. "breeam-2018".
            project_data: Compliance flag, improvement metric and
                actual/baseline values used by the subcategory formulas.
            materials: Optional materials; their embodied carbon is
                reported in the result metadata.

        Returns:
            ComplianceResult with category breakdown, certification level
            and recommendations.

        Raises:
            UnknownStandardException: If the standard id is not in the catalog.
        """
        standard = self.require_standard(standard_id)
        data = _coerce_project_data(project_data)

        logger.debug(f"--- COMPLIANCE START ({standard.id}) ---")

        category_scores = [self.score_category(category, data) for category in standard.categories]

        total_score = sum(c.score * c.weight for c in category_scores)
        max_score = sum(c.max_score * c.weight for c in category_scores)
        overall_score = (total_score / max_score) * 100 if max_score else 0.0

        rated_score = self.rated_score(standard, overall_score, category_scores)
        level = self.certification_level_for(standard, rated_score)
        compliant = self.is_compliant(standard, rated_score)

        metadata: Dict[str, Any] = {"score_basis": standard.score_basis.value}
        material_list = coerce_materials(materials)
        if material_list:
            metadata["embodied_carbon_kg"] = float(sum(m.quantity * m.carbon_footprint for m in material_list))

        logger.debug(
            f"{standard.id}: overall={overall_score:.2f}, rated={rated_score:.3f}, "
            f"level={level.name if level else None}, compliant={compliant}"
        )

        return ComplianceResult(
            standard_id=standard.id,
            standard_name=standard.name,
            overall_score=overall_score,
            rated_score=rated_score,
            total_score=total_score,
            max_score=max_score,
            category_scores=category_scores,
            certification_level=level.name if level else None,
            certification_level_id=level.id if level else None,
            compliance=compliant,
            recommendations=self.generate_recommendations(category_scores),
            materials_considered=len(material_list),
            metadata=metadata,
        )

    def score_category(self, category: ComplianceCategory, data: ProjectData) -> CategoryScore:
        subcategory_scores = [self.score_subcategory(sub, data) for sub in category.subcategories]
        return CategoryScore(
            category_id=category.id,
            category_name=category.name,
            score=sum(s.score for s in subcategory_scores),
            max_score=sum(s.max_score for s in subcategory_scores),
            weight=category.weight,
            subcategory_scores=subcategory_scores,
        )

    def score_subcategory(self, subcategory: SubCategory, data: ProjectData) -> SubcategoryScore:
        max_points = subcategory.max_points
        calculation_type = subcategory.calculation_type

        if calculation_type == CalculationType.ABSOLUTE:
            score = max_points if data.compliant else 0.0
        elif calculation_type == CalculationType.PERCENTAGE:
            score = min(max_points, (data.improvement or 0.0) / 10)
        elif calculation_type == CalculationType.RATIO:
            baseline = data.baseline_value
            actual = data.actual_value
            if not baseline or baseline <= 0 or actual is None:
                score = 0.0
            else:
                score = min(max_points, actual / baseline * max_points)
        else:
            raise ScoringException(f"Unsupported calculation type {calculation_type} for {subcategory.id}")

        score = max(0.0, float(score))
        return SubcategoryScore(
            subcategory_id=subcategory.id,
            subcategory_name=subcategory.name,
            calculation_type=calculation_type,
            score=score,
            max_score=max_points,
            achievement_level=score / max_points if max_points else 0.0,
        )

    def rated_score(self, standard: ComplianceStandard, overall_score: float,
                    category_scores: List[CategoryScore]) -> float:
        """The figure compared against the certification ladder"""
        if standard.score_basis == ScoreBasis.PERCENTAGE:
            return overall_score
        if standard.score_basis == ScoreBasis.BEE_RATIO:
            by_id = {c.category_id: c for c in category_scores}
            quality = [by_id[c.id].performance for c in standard.categories if c.bee_role == BeeRole.QUALITY]
            load = [by_id[c.id].performance for c in standard.categories if c.bee_role == BeeRole.LOAD_REDUCTION]
            if not quality or not load:
                raise ScoringException(f"Standard {standard.id} needs Q and LR categories for a BEE score")
            sq = 1 + 4 * (sum(quality) / len(quality))
            slr = 1 + 4 * (sum(load) / len(load))
            return building_environmental_efficiency(sq, slr)
        raise ScoringException(f"Unsupported score basis {standard.score_basis} for {standard.id}")

    @staticmethod
    def certification_level_for(standard: ComplianceStandard, score: float) -> Optional[CertificationLevel]:
        """Highest level whose minimum score is met; the boundary is inclusive"""
        for level in standard.sorted_levels:
            if score >= level.min_score:
                return level
        return None

    @staticmethod
    def is_compliant(standard: ComplianceStandard, score: float) -> bool:
        lowest = standard.lowest_threshold
        if lowest is None:
            return True
        return score >= lowest

    @staticmethod
    def generate_recommendations(category_scores: List[CategoryScore]) -> List[str]:
        recommendations: List[str] = []
        for category in category_scores:
            if not category.max_score:
                continue
            performance = category.performance
            if performance < CATEGORY_RECOMMENDATION_THRESHOLD:
                recommendations.append(
                    f"Improve {category.category_name} performance (currently {int(performance * 100 + 0.5)}%)"
                )
            for sub in category.subcategory_scores:
                if sub.achievement_level < SUBCATEGORY_RECOMMENDATION_THRESHOLD:
                    recommendations.append(f"Focus on {sub.subcategory_name} - low performance area")
        return recommendations
