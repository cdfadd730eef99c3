"""Tests for the compliance standards engine."""

from types import MappingProxyType

import pytest

from services.compliance import (
    CalculationType,
    ProjectData,
    SubCategory,
    building_environmental_efficiency,
)
from services.lifecycle import MaterialInput
from shared.models.exceptions import UnknownStandardException

ALL_STANDARD_IDS = [
    "leed-v4.1",
    "breeam-2018",
    "casbee-2016",
    "green-star-buildings",
    "nabers-energy",
    "ghg-protocol-scope-1",
    "ghg-protocol-scope-2",
    "ghg-protocol-scope-3",
]


# ============================================================================
# Catalog
# ============================================================================


class TestCatalog:
    def test_all_standards_present(self, compliance_engine):
        assert [s.id for s in compliance_engine.all_standards()] == ALL_STANDARD_IDS

    @pytest.mark.parametrize("standard_id", ALL_STANDARD_IDS)
    def test_levels_sorted_descending(self, compliance_engine, standard_id):
        levels = compliance_engine.get_standard(standard_id).sorted_levels
        scores = [level.min_score for level in levels]
        assert scores == sorted(scores, reverse=True)

    def test_lookup_by_region_and_country(self, compliance_engine):
        assert [s.id for s in compliance_engine.standards_by_region("europe")] == ["breeam-2018"]
        assert [s.id for s in compliance_engine.standards_by_country("Australia")] == [
            "green-star-buildings", "nabers-energy"
        ]

    def test_unknown_standard(self, compliance_engine):
        assert compliance_engine.get_standard("estidama") is None
        with pytest.raises(UnknownStandardException) as exc:
            compliance_engine.calculate_compliance("estidama", {"compliant": True})
        assert exc.value.status_code == 404

    def test_calculation_type_is_closed(self):
        assert {t.value for t in CalculationType} == {"absolute", "percentage", "ratio"}

    def test_green_star_points_total_100(self, compliance_engine):
        standard = compliance_engine.get_standard("green-star-buildings")
        assert sum(c.max_points for c in standard.categories) == 100


# ============================================================================
# Subcategory scoring
# ============================================================================


class TestSubcategoryScoring:
    def test_absolute(self, compliance_engine):
        sub = SubCategory("s", "S", 4, CalculationType.ABSOLUTE)
        assert compliance_engine.score_subcategory(sub, ProjectData(compliant=True)).score == 4
        assert compliance_engine.score_subcategory(sub, ProjectData(compliant=False)).score == 0

    def test_percentage_capped(self, compliance_engine):
        sub = SubCategory("s", "S", 6, CalculationType.PERCENTAGE)
        assert compliance_engine.score_subcategory(sub, ProjectData(improvement=35)).score == 3.5
        assert compliance_engine.score_subcategory(sub, ProjectData(improvement=500)).score == 6

    def test_negative_improvement_floors_at_zero(self, compliance_engine):
        sub = SubCategory("s", "S", 6, CalculationType.PERCENTAGE)
        assert compliance_engine.score_subcategory(sub, ProjectData(improvement=-40)).score == 0

    def test_ratio(self, compliance_engine):
        sub = SubCategory("s", "S", 3, CalculationType.RATIO)
        data = ProjectData(actual_value=40, baseline_value=100)
        assert compliance_engine.score_subcategory(sub, data).score == pytest.approx(1.2)
        data = ProjectData(actual_value=300, baseline_value=100)
        assert compliance_engine.score_subcategory(sub, data).score == 3

    def test_ratio_without_baseline(self, compliance_engine):
        sub = SubCategory("s", "S", 3, CalculationType.RATIO)
        assert compliance_engine.score_subcategory(sub, ProjectData(actual_value=5, baseline_value=0)).score == 0
        assert compliance_engine.score_subcategory(sub, ProjectData(actual_value=5)).score == 0

    def test_camel_case_project_data(self, compliance_engine):
        result = compliance_engine.calculate_compliance(
            "casbee-2016", {"actualValue": 50, "baselineValue": 100}
        )
        assert result.category_scores[0].subcategory_scores[0].achievement_level == pytest.approx(0.5)


# ============================================================================
# Standard scoring
# ============================================================================


class TestCalculateCompliance:
    def test_leed_gold(self, compliance_engine):
        result = compliance_engine.calculate_compliance("leed-v4.1", {"compliant": True, "improvement": 100})
        # Sustainable Sites 13/19, Water Efficiency 8/8
        expected = (13 * 0.26 + 8 * 0.11) / (19 * 0.26 + 8 * 0.11) * 100
        assert result.overall_score == pytest.approx(expected)
        assert result.certification_level == "Gold"
        assert result.certification_level_id == "gold"
        assert result.compliance is True
        assert result.recommendations == ["Improve Sustainable Sites performance (currently 68%)"]

    def test_breeam_all_credits(self, compliance_engine):
        result = compliance_engine.calculate_compliance("breeam-2018", {"compliant": True})
        assert result.overall_score == pytest.approx(100)
        assert result.certification_level == "Outstanding"
        assert result.recommendations == []

    def test_breeam_no_credits(self, compliance_engine):
        result = compliance_engine.calculate_compliance("breeam-2018", ProjectData(compliant=False))
        assert result.overall_score == 0
        assert result.certification_level is None
        assert result.compliance is False
        assert "Improve Management performance (currently 0%)" in result.recommendations
        assert "Focus on Visual Comfort - low performance area" in result.recommendations
        assert len(result.recommendations) == 6

    def test_category_scores(self, compliance_engine):
        result = compliance_engine.calculate_compliance("breeam-2018", {"compliant": True})
        management = result.category_scores[0]
        assert management.category_id == "management"
        assert (management.score, management.max_score, management.weight) == (8, 8, 0.12)
        assert [s.subcategory_id for s in management.subcategory_scores] == ["project-brief", "life-cycle-cost"]

    def test_materials_reported(self, compliance_engine):
        result = compliance_engine.calculate_compliance(
            "leed-v4.1",
            {"compliant": True},
            [MaterialInput(name="steel", quantity=100, carbon_footprint=1.85), {"name": "glass", "quantity": 10}],
        )
        assert result.materials_considered == 2
        assert result.metadata["embodied_carbon_kg"] == pytest.approx(185)

    def test_read_only_mapping_materials_accepted(self, compliance_engine):
        material = MappingProxyType({"name": "steel", "quantity": 100, "carbon_footprint": 1.85})
        result = compliance_engine.calculate_compliance("leed-v4.1", {"compliant": True}, [material])
        assert result.materials_considered == 1
        assert result.metadata["embodied_carbon_kg"] == pytest.approx(185)

    def test_green_star_levels(self, compliance_engine):
        result = compliance_engine.calculate_compliance("green-star-buildings", {"compliant": True, "improvement": 100})
        # Absolute categories 35 points, percentage categories capped at 10 or their maximum
        expected_points = 12 + 17 + 6 + 10 + 8 + 10 + 10 + 5
        assert result.overall_score == pytest.approx(expected_points)
        assert result.certification_level == "6 Star Green Star"

    def test_ghg_scope_has_no_ladder(self, compliance_engine):
        result = compliance_engine.calculate_compliance("ghg-protocol-scope-2", {"improvement": 25})
        assert result.overall_score == pytest.approx(25)
        assert result.certification_level is None
        assert result.compliance is True


# ============================================================================
# Certification ladder
# ============================================================================


class TestCertificationLadder:
    def test_inclusive_boundary(self, compliance_engine):
        breeam = compliance_engine.get_standard("breeam-2018")
        assert compliance_engine.certification_level_for(breeam, 55).name == "Very Good"
        assert compliance_engine.certification_level_for(breeam, 54.99).name == "Good"
        assert compliance_engine.certification_level_for(breeam, 85).name == "Outstanding"
        assert compliance_engine.certification_level_for(breeam, 29.9) is None

    def test_leed_boundaries(self, compliance_engine):
        leed = compliance_engine.get_standard("leed-v4.1")
        assert compliance_engine.certification_level_for(leed, 40).name == "Certified"
        assert compliance_engine.certification_level_for(leed, 80).name == "Platinum"

    def test_compliance_uses_lowest_threshold(self, compliance_engine):
        breeam = compliance_engine.get_standard("breeam-2018")
        assert compliance_engine.is_compliant(breeam, 30) is True
        assert compliance_engine.is_compliant(breeam, 29.99) is False


# ============================================================================
# CASBEE building environmental efficiency
# ============================================================================


class TestCasbee:
    def test_bee_formula(self):
        assert building_environmental_efficiency(3, 3) == pytest.approx(1.0)
        assert building_environmental_efficiency(1, 3) == 0

    def test_load_is_floored(self):
        assert building_environmental_efficiency(5, 5) == pytest.approx(100.0)

    def test_bee_drives_rank(self, compliance_engine):
        result = compliance_engine.calculate_compliance("casbee-2016", {"actual_value": 50, "baseline_value": 100})
        assert result.overall_score == pytest.approx(50)
        assert result.rated_score == pytest.approx(1.0)
        assert result.certification_level == "B-"
        assert result.compliance is True
        assert result.metadata["score_basis"] == "bee_ratio"

    def test_full_performance_is_s(self, compliance_engine):
        result = compliance_engine.calculate_compliance("casbee-2016", {"actual_value": 100, "baseline_value": 100})
        assert result.certification_level == "S"

    def test_no_performance_is_unranked(self, compliance_engine):
        result = compliance_engine.calculate_compliance("casbee-2016", {})
        assert result.rated_score == 0
        assert result.certification_level is None
        assert result.compliance is False
