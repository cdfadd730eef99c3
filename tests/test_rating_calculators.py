"""Tests for the standalone rating calculators."""

import pytest

from services.compliance import (
    calculate_breeam,
    calculate_casbee,
    calculate_ghg_scopes,
    calculate_green_star,
    calculate_leed,
    calculate_nabers,
    leed_rating,
)
from services.compliance.rating_calculators import BREEAM_WEIGHTS, GREEN_STAR_CATEGORIES
from shared.models.exceptions import InvalidInputException


# ============================================================================
# LEED
# ============================================================================


class TestLeed:
    def test_gold_at_sixty_points(self):
        result = calculate_leed(additional_points=60)
        assert result["certification_level"] == "Gold"
        assert result["points_to_gold"] == 0
        assert result["carbon_impact"] == pytest.approx(150)

    def test_below_certified(self):
        result = calculate_leed(additional_points=39)
        assert result["certification_level"] == "Not Certified"
        assert result["points_to_gold"] == 21

    def test_credits_are_summed_once(self):
        result = calculate_leed(["energy-performance", "commissioning", "public-transport", "commissioning"])
        assert result["total_points"] == 29
        assert result["category_breakdown"] == {
            "Energy & Atmosphere": 24,
            "Location & Transportation": 5,
        }

    def test_unknown_credit(self):
        with pytest.raises(InvalidInputException):
            calculate_leed(["solar-roof"])

    @pytest.mark.parametrize("points,level", [(40, "Certified"), (50, "Silver"), (79.9, "Gold"), (80, "Platinum")])
    def test_rating_boundaries(self, points, level):
        assert leed_rating(points) == level


# ============================================================================
# BREEAM
# ============================================================================


class TestBreeam:
    def test_uniform_scores(self):
        result = calculate_breeam({category: 50 for category in BREEAM_WEIGHTS})
        assert result["weighted_score"] == pytest.approx(50)
        assert result["rating"] == "Good"
        assert result["carbon_reduction"] == pytest.approx(40)
        assert result["improvement_areas"] == 2

    def test_single_category_cannot_reach_outstanding(self):
        result = calculate_breeam({"energy": 100})
        assert result["weighted_score"] == pytest.approx(100 * 0.19 / 1.1)
        assert result["rating"] == "Unclassified"

    def test_missing_categories_score_zero(self):
        scores = {category: 100 for category in BREEAM_WEIGHTS if category != "energy"}
        result = calculate_breeam(scores)
        assert result["weighted_score"] == pytest.approx(100 * (1.1 - 0.19) / 1.1)
        assert result["rating"] == "Excellent"

    def test_scores_capped_at_100(self):
        result = calculate_breeam({category: 150 for category in BREEAM_WEIGHTS})
        assert result["weighted_score"] == pytest.approx(100)
        assert result["rating"] == "Outstanding"

    def test_low_score_unclassified(self):
        assert calculate_breeam({"energy": 10})["rating"] == "Unclassified"

    def test_invalid_inputs(self):
        with pytest.raises(InvalidInputException):
            calculate_breeam({"aesthetics": 50})
        with pytest.raises(InvalidInputException):
            calculate_breeam({"energy": -5})


# ============================================================================
# Green Star
# ============================================================================


class TestGreenStar:
    def test_full_marks(self):
        result = calculate_green_star({c: d["max_points"] for c, d in GREEN_STAR_CATEGORIES.items()})
        assert result["total_points"] == 100
        assert result["star_rating"] == 6
        assert result["certification_level"] == "6 Star Green Star"

    def test_points_capped_per_category(self):
        result = calculate_green_star({"energy": 30, "emissions": 5})
        assert result["category_points"]["energy"] == 25
        assert result["percentage"] == pytest.approx(30)
        assert result["certification_level"] == "3 Star Green Star"
        assert result["carbon_performance"] == 30

    def test_not_certified(self):
        result = calculate_green_star({})
        assert result["star_rating"] == 0
        assert result["certification_level"] == "Not Certified"

    def test_unknown_category(self):
        with pytest.raises(InvalidInputException):
            calculate_green_star({"parking": 3})


# ============================================================================
# NABERS
# ============================================================================


class TestNabers:
    @pytest.mark.parametrize("electricity,stars", [(100_000, 6.0), (200_000, 5.5), (500_000, 5.0)])
    def test_energy_rating(self, electricity, stars):
        assert calculate_nabers(area=1000, electricity=electricity)["energy_rating"] == stars

    def test_poor_performance_floors(self):
        assert calculate_nabers(area=1, electricity=100_000)["energy_rating"] == 0.5

    def test_water_rating(self):
        assert calculate_nabers(area=1000, electricity=0, water=1100)["water_rating"] == 5.5

    def test_emissions(self):
        result = calculate_nabers(area=1000, electricity=100_000, gas=1000)
        assert result["total_emissions"] == pytest.approx(82_000 + 51.3)

    def test_zero_area(self):
        result = calculate_nabers(area=0, electricity=100)
        assert result["electricity_intensity"] == 0
        assert result["overall_rating"] == 6.0

    def test_negative_input(self):
        with pytest.raises(InvalidInputException):
            calculate_nabers(area=100, electricity=-1)


# ============================================================================
# CASBEE
# ============================================================================


class TestCasbeeCalculator:
    @pytest.mark.parametrize("sq,slr,rank", [(3, 3, "B-"), (5, 5, "S"), (1, 5, "Unclassified"), (5, 3, "B+")])
    def test_rank(self, sq, slr, rank):
        assert calculate_casbee(sq, slr)["rank"] == rank

    def test_out_of_range(self):
        with pytest.raises(InvalidInputException):
            calculate_casbee(6, 3)
        with pytest.raises(InvalidInputException):
            calculate_casbee(3, 0.5)


# ============================================================================
# GHG Protocol scopes
# ============================================================================


class TestGhgScopes:
    def test_regional_grid_factor(self, registry):
        result = calculate_ghg_scopes({"electricity": 1000}, country="United Kingdom", registry=registry)
        assert result["electricity_factor"] == 0.23
        assert result["scope2_emissions"] == pytest.approx(230)

    def test_unknown_country_keeps_default(self, registry):
        result = calculate_ghg_scopes({"electricity": 1000}, country="Atlantis", registry=registry)
        assert result["scope2_emissions"] == pytest.approx(820)

    def test_scopes(self):
        result = calculate_ghg_scopes({"gas": 100, "travel": 1000, "waste": 2})
        assert result["scope1_emissions"] == pytest.approx(190)
        assert result["scope3_emissions"] == pytest.approx(1210)
        assert result["total_emissions"] == pytest.approx(1400)

    def test_invalid_activity(self):
        with pytest.raises(InvalidInputException):
            calculate_ghg_scopes({"teleportation": 1})
        with pytest.raises(InvalidInputException):
            calculate_ghg_scopes({"gas": -1})
