import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

import numpy as np

from shared.models.exceptions import InvalidInputException

# Setup logging
logger = logging.getLogger(__name__)


class FactorCategory(str, Enum):
    ELECTRICITY = "electricity"
    FUEL = "fuel"
    MATERIAL = "material"
    TRANSPORT = "transport"


class UnitType(str, Enum):
    AREA = "area"
    VOLUME = "volume"
    WEIGHT = "weight"
    ENERGY = "energy"
    TEMPERATURE = "temperature"


# Subcategory used when a lookup omits one
DEFAULT_SUBCATEGORIES: Dict[FactorCategory, str] = {
    FactorCategory.FUEL: "natural_gas",
    FactorCategory.MATERIAL: "concrete",
    FactorCategory.TRANSPORT: "truck",
}


@dataclass(frozen=True)
class UnitSystem:
    """Measurement units a country reports in"""
    area: str = "m²"
    volume: str = "m³"
    weight: str = "kg"
    energy: str = "kWh"
    temperature: str = "°C"

    def unit_for(self, unit_type: UnitType) -> str:
        return getattr(self, UnitType(unit_type).value)


METRIC_UNITS = UnitSystem()
IMPERIAL_UNITS = UnitSystem(area="ft²", volume="ft³", weight="lbs", energy="kWh", temperature="°F")


def _freeze(factors: Mapping[str, float]) -> Mapping[str, float]:
    return MappingProxyType({str(k): float(v) for k, v in dict(factors).items()})


@dataclass(frozen=True)
class RegionalConfig:
    """
    Carbon factors and reporting conventions for one country.

    Factor maps are copied into read-only views on construction, so a
    registered config cannot be changed through references kept by callers.

    Attributes:
        country: Registry key, e.g. "Australia".
        region: Grouping used for listings, e.g. "Oceania".
        electricity_factor: Grid intensity in kg CO2e per kWh.
        climate_factor: Relative climate severity, 1.0 is the reference climate.
        renewable_percentage: Share of renewables in the grid, 0-100.
    """
    country: str
    region: str
    currency: str
    electricity_factor: float
    climate_factor: float
    renewable_percentage: float
    fuel_factors: Mapping[str, float] = field(default_factory=dict)
    material_factors: Mapping[str, float] = field(default_factory=dict)
    transport_factors: Mapping[str, float] = field(default_factory=dict)
    building_standards: Tuple[str, ...] = ()
    units: UnitSystem = METRIC_UNITS

    def __post_init__(self):
        """Validate and freeze the factor tables"""
        if not self.country:
            raise InvalidInputException("Regional config requires a country")
        for name in ("electricity_factor", "climate_factor", "renewable_percentage"):
            if not np.isfinite(getattr(self, name)):
                raise InvalidInputException(f"{name} must be a finite number for {self.country}")
        if self.climate_factor <= 0:
            raise InvalidInputException(f"climate_factor must be positive for {self.country}")
        if not 0 <= self.renewable_percentage <= 100:
            raise InvalidInputException(f"renewable_percentage must be within 0-100 for {self.country}")

        object.__setattr__(self, "fuel_factors", _freeze(self.fuel_factors))
        object.__setattr__(self, "material_factors", _freeze(self.material_factors))
        object.__setattr__(self, "transport_factors", _freeze(self.transport_factors))
        object.__setattr__(self, "building_standards", tuple(self.building_standards))

    def factor_table(self, category: FactorCategory) -> Mapping[str, float]:
        if category == FactorCategory.FUEL:
            return self.fuel_factors
        if category == FactorCategory.MATERIAL:
            return self.material_factors
        if category == FactorCategory.TRANSPORT:
            return self.transport_factors
        raise InvalidInputException(f"Category {category} has no factor table")
