"""
Standalone rating calculators for LEED, BREEAM, Green Star, NABERS, CASBEE
and GHG Protocol scope inventories.

Each calculator takes the inputs its rating tool publishes, not the generic
category tree used by ComplianceStandardsEngine.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

import numpy as np

from shared.models.exceptions import InvalidInputException
from services.regional_factors import RegionalFactorRegistry

from .scoring import building_environmental_efficiency
from .standards import CASBEE_LEVELS

logger = logging.getLogger(__name__)

NOT_CERTIFIED = "Not Certified"
UNCLASSIFIED = "Unclassified"

# ---------------------------------------------------------------------------
# Fixed data tables
# ---------------------------------------------------------------------------

LEED_CREDITS: Dict[str, Dict[str, Any]] = {
    "site-selection": {"name": "Sustainable Site Selection", "points": 1, "category": "Sustainable Sites"},
    "brownfield": {"name": "Brownfield Redevelopment", "points": 1, "category": "Sustainable Sites"},
    "public-transport": {"name": "Public Transportation Access", "points": 5, "category": "Location & Transportation"},
    "water-reduction": {"name": "Water Use Reduction", "points": 4, "category": "Water Efficiency"},
    "rainwater": {"name": "Rainwater Management", "points": 3, "category": "Water Efficiency"},
    "commissioning": {"name": "Enhanced Commissioning", "points": 6, "category": "Energy & Atmosphere"},
    "energy-performance": {"name": "Optimize Energy Performance", "points": 18, "category": "Energy & Atmosphere"},
    "renewable": {"name": "Renewable Energy Production", "points": 3, "category": "Energy & Atmosphere"},
    "recycled-content": {"name": "Recycled Content Materials", "points": 2, "category": "Materials & Resources"},
    "regional-materials": {"name": "Regional Materials", "points": 2, "category": "Materials & Resources"},
    "indoor-air": {"name": "Enhanced Indoor Air Quality", "points": 2, "category": "Indoor Environmental Quality"},
    "daylight": {"name": "Daylight and Quality Views", "points": 3, "category": "Indoor Environmental Quality"},
    "acoustic-performance": {"name": "Acoustic Performance", "points": 1, "category": "Indoor Environmental Quality"},
    "green-power": {"name": "Green Power and Carbon Offsets", "points": 2, "category": "Energy & Atmosphere"},
    "innovation": {"name": "Innovation in Design", "points": 5, "category": "Innovation"},
    "leed-professional": {"name": "LEED Accredited Professional", "points": 1, "category": "Innovation"},
}

LEED_GOLD_POINTS = 60

BREEAM_WEIGHTS: Dict[str, float] = {
    "management": 0.12,
    "health": 0.15,
    "energy": 0.19,
    "transport": 0.08,
    "water": 0.06,
    "materials": 0.125,
    "waste": 0.075,
    "land": 0.10,
    "pollution": 0.10,
    "innovation": 0.10,
}

GREEN_STAR_CATEGORIES: Dict[str, Dict[str, Any]] = {
    "management": {"name": "Management", "max_points": 12},
    "ieq": {"name": "Indoor Environment Quality", "max_points": 17},
    "energy": {"name": "Energy", "max_points": 25},
    "transport": {"name": "Transport", "max_points": 8},
    "water": {"name": "Water", "max_points": 12},
    "materials": {"name": "Materials", "max_points": 15},
    "land": {"name": "Land Use & Ecology", "max_points": 6},
    "emissions": {"name": "Emissions", "max_points": 5},
}

GREEN_STAR_MAX_POINTS = 100

# kg CO2e per unit of activity
SCOPE_1_FACTORS = {"gas": 1.9, "diesel": 2.7, "petrol": 2.3, "refrigerants": 1400}
SCOPE_2_FACTORS = {"electricity": 0.82, "steam": 0.07, "heating": 0.05, "cooling": 0.05}
SCOPE_3_FACTORS = {"travel": 0.21, "commuting": 0.15, "waste": 500}

NABERS_ELECTRICITY_FACTOR = 0.82   # kg CO2e/kWh
NABERS_GAS_FACTOR = 0.0513         # kg CO2e/MJ


def _non_negative(values: Mapping[str, Any], context: str) -> Dict[str, float]:
    cleaned = {}
    for key, value in values.items():
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise InvalidInputException(f"{context} input '{key}' must be numeric")
        if not np.isfinite(number) or number < 0:
            raise InvalidInputException(f"{context} input '{key}' must be a finite, non-negative number")
        cleaned[key] = number
    return cleaned


# ---------------------------------------------------------------------------
# LEED
# ---------------------------------------------------------------------------

def leed_rating(total_points: float) -> str:
    if total_points >= 80:
        return "Platinum"
    elif total_points >= 60:
        return "Gold"
    elif total_points >= 50:
        return "Silver"
    elif total_points >= 40:
        return "Certified"
    else:
        return NOT_CERTIFIED


def calculate_leed(credit_ids: Iterable[str] = (), additional_points: float = 0) -> Dict[str, Any]:
    """
    Total LEED points from achieved credits.

    Args:
        credit_ids: Ids from LEED_CREDITS that the project achieves.
        additional_points: Points from credits outside the built-in table.

    Returns:
        Dict with total_points, certification_level, points_to_gold,
        category_breakdown and an estimated carbon_impact percentage.
    """
    extra = _non_negative({"additional_points": additional_points}, "LEED")["additional_points"]
    breakdown: Dict[str, float] = {}
    total = extra
    for credit_id in dict.fromkeys(credit_ids):
        credit = LEED_CREDITS.get(credit_id)
        if credit is None:
            raise InvalidInputException(f"Unknown LEED credit '{credit_id}'")
        total += credit["points"]
        breakdown[credit["category"]] = breakdown.get(credit["category"], 0) + credit["points"]
    if extra:
        breakdown["Other"] = extra

    logger.debug(f"LEED total points: {total}")
    return {
        "total_points": total,
        "certification_level": leed_rating(total),
        "points_to_gold": max(0, LEED_GOLD_POINTS - total),
        "category_breakdown": breakdown,
        "carbon_impact": total * 2.5,
    }


# ---------------------------------------------------------------------------
# BREEAM
# ---------------------------------------------------------------------------

def breeam_rating(weighted_score: float) -> str:
    if weighted_score >= 85:
        return "Outstanding"
    elif weighted_score >= 70:
        return "Excellent"
    elif weighted_score >= 55:
        return "Very Good"
    elif weighted_score >= 45:
        return "Good"
    elif weighted_score >= 30:
        return "Pass"
    else:
        return UNCLASSIFIED


def calculate_breeam(category_scores: Mapping[str, float],
                     weights: Optional[Mapping[str, float]] = None) -> Dict[str, Any]:
    """
    Weighted BREEAM score from per-category scores (0-100).

    Every category in the weight table counts; a missing category scores 0.
    The weighted sum is divided by the total table weight, so weight tables
    that do not sum to exactly 1.0 still yield a 0-100 score.
    """
    weights = dict(weights or BREEAM_WEIGHTS)
    scores = _non_negative(category_scores, "BREEAM")
    unknown = set(scores) - set(weights)
    if unknown:
        raise InvalidInputException(f"Unknown BREEAM categories: {sorted(unknown)}")

    total_weight = sum(weights.values())
    weighted_sum = sum(min(scores.get(c, 0.0), 100.0) * weight for c, weight in weights.items())
    weighted_score = weighted_sum / total_weight if total_weight else 0.0

    return {
        "weighted_score": weighted_score,
        "rating": breeam_rating(weighted_score),
        "carbon_reduction": weighted_score * 0.8,
        "improvement_areas": max(0, 3 - int(weighted_score // 30)),
    }


# ---------------------------------------------------------------------------
# Green Star
# ---------------------------------------------------------------------------

def green_star_rating(percentage: float) -> int:
    if percentage >= 75:
        return 6
    elif percentage >= 60:
        return 5
    elif percentage >= 45:
        return 4
    elif percentage >= 30:
        return 3
    elif percentage >= 15:
        return 2
    elif percentage >= 10:
        return 1
    return 0


def calculate_green_star(category_points: Mapping[str, float]) -> Dict[str, Any]:
    points = _non_negative(category_points, "Green Star")
    unknown = set(points) - set(GREEN_STAR_CATEGORIES)
    if unknown:
        raise InvalidInputException(f"Unknown Green Star categories: {sorted(unknown)}")

    capped = {
        category: min(points.get(category, 0.0), details["max_points"])
        for category, details in GREEN_STAR_CATEGORIES.items()
    }
    total_points = sum(capped.values())
    percentage = total_points / GREEN_STAR_MAX_POINTS * 100
    stars = green_star_rating(percentage)

    return {
        "total_points": total_points,
        "percentage": percentage,
        "star_rating": stars,
        "certification_level": f"{stars} Star Green Star" if stars else NOT_CERTIFIED,
        "carbon_performance": capped["energy"] + capped["emissions"],
        "category_points": capped,
    }


# ---------------------------------------------------------------------------
# NABERS
# ---------------------------------------------------------------------------

def _nabers_stars(intensity: float, upper: float, upper_step: float, lower: float, lower_step: float) -> float:
    if intensity > upper:
        return max(0.5, 6 - np.floor((intensity - upper) / upper_step) * 0.5)
    elif intensity > lower:
        return max(3.0, 6 - np.floor((intensity - lower) / lower_step) * 0.5)
    return 6.0


def calculate_nabers(area: float, electricity: float, gas: float = 0.0, water: float = 0.0) -> Dict[str, Any]:
    """
    NABERS energy and water star ratings.

    Args:
        area: Net lettable area in m².
        electricity: Annual electricity use in kWh.
        gas: Annual gas use in MJ.
        water: Annual water use in kL.
    """
    values = _non_negative({"area": area, "electricity": electricity, "gas": gas, "water": water}, "NABERS")

    def per_area(amount: float) -> float:
        return amount / values["area"] if values["area"] > 0 else 0.0

    electricity_intensity = per_area(values["electricity"])
    gas_intensity = per_area(values["gas"])
    water_intensity = per_area(values["water"])

    energy_rating = float(_nabers_stars(electricity_intensity, 300, 100, 150, 50))
    water_rating = float(_nabers_stars(water_intensity, 1.5, 0.5, 0.8, 0.2))
    total_emissions = values["electricity"] * NABERS_ELECTRICITY_FACTOR + values["gas"] * NABERS_GAS_FACTOR

    return {
        "electricity_intensity": electricity_intensity,
        "gas_intensity": gas_intensity,
        "water_intensity": water_intensity,
        "energy_rating": energy_rating,
        "water_rating": water_rating,
        "overall_rating": (energy_rating + water_rating) / 2,
        "total_emissions": total_emissions,
    }


# ---------------------------------------------------------------------------
# CASBEE
# ---------------------------------------------------------------------------

def calculate_casbee(sq: float, slr: float) -> Dict[str, Any]:
    """BEE and rank from SQ and SLR scores on the 1-5 scale"""
    for name, value in (("SQ", sq), ("SLR", slr)):
        if not np.isfinite(value) or not 1 <= value <= 5:
            raise InvalidInputException(f"CASBEE {name} must be within 1-5")

    bee = building_environmental_efficiency(sq, slr)
    rank = next(
        (level.name for level in sorted(CASBEE_LEVELS, key=lambda l: l.min_score, reverse=True)
         if bee >= level.min_score),
        UNCLASSIFIED,
    )
    return {"bee": bee, "rank": rank, "sq": sq, "slr": slr}


# ---------------------------------------------------------------------------
# GHG Protocol scopes
# ---------------------------------------------------------------------------

def calculate_ghg_scopes(activity: Mapping[str, float], country: Optional[str] = None,
                         registry: Optional[RegionalFactorRegistry] = None) -> Dict[str, Any]:
    """
    Scope 1, 2 and 3 emissions in kg CO2e.

    Args:
        activity: Quantities keyed by gas, diesel, petrol, refrigerants,
            electricity, steam, heating, cooling, travel, commuting, waste.
            Missing keys count as zero.
        country: When registered in ``registry``, its grid factor replaces
            the default Scope 2 electricity factor.
        registry: Regional factor registry used for the grid factor.
    """
    known = set(SCOPE_1_FACTORS) | set(SCOPE_2_FACTORS) | set(SCOPE_3_FACTORS)
    values = _non_negative(activity, "GHG")
    unknown = set(values) - known
    if unknown:
        raise InvalidInputException(f"Unknown GHG activity keys: {sorted(unknown)}")

    scope_2_factors = dict(SCOPE_2_FACTORS)
    if country and registry is not None:
        if registry.is_registered(country):
            scope_2_factors["electricity"] = registry.get_factor(country, "electricity")
        else:
            logger.warning(f"Unknown region '{country}', using default Scope 2 electricity factor")

    def scope_total(factors: Mapping[str, float]) -> float:
        return float(sum(values.get(key, 0.0) * factor for key, factor in factors.items()))

    scope_1 = scope_total(SCOPE_1_FACTORS)
    scope_2 = scope_total(scope_2_factors)
    scope_3 = scope_total(SCOPE_3_FACTORS)

    return {
        "scope1_emissions": scope_1,
        "scope2_emissions": scope_2,
        "scope3_emissions": scope_3,
        "total_emissions": scope_1 + scope_2 + scope_3,
        "electricity_factor": scope_2_factors["electricity"],
    }
