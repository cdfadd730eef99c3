import logging
from typing import Any, Dict, Iterable, List, Optional

from shared.models.exceptions import InvalidInputException, UnknownRegionException

from .catalog import DEFAULT_TRANSPORT_FACTOR, TRANSPORT_FUEL_FACTORS, default_regional_configs
from .models import DEFAULT_SUBCATEGORIES, FactorCategory, RegionalConfig, UnitType

logger = logging.getLogger(__name__)

# Bilateral conversion table for area, volume and weight
UNIT_CONVERSIONS: Dict[str, Dict[str, float]] = {
    "m²": {"ft²": 10.764},
    "ft²": {"m²": 0.0929},
    "m³": {"ft³": 35.315},
    "ft³": {"m³": 0.0283},
    "kg": {"lbs": 2.205},
    "lbs": {"kg": 0.4536},
}

# Weights of the climate and grid ratios in a cross-region adjustment
CLIMATE_WEIGHT = 0.6
GRID_WEIGHT = 0.4

DEFAULT_CURRENCY = "USD"


class RegionalFactorRegistry:
    """
    Per-country emission factors, unit systems and freight factors.

    Lookups against unregistered countries return documented defaults
    instead of failing. Use ``is_registered`` or ``require_config`` when a
    caller needs strict validation.
    """

    def __init__(self, configs: Optional[Iterable[RegionalConfig]] = None,
                 transport_fuel_factors: Optional[Dict[Any, float]] = None,
                 default_transport_factor: float = DEFAULT_TRANSPORT_FACTOR):
        self._configs: Dict[str, RegionalConfig] = {}
        self._transport_fuel_factors = dict(transport_fuel_factors or TRANSPORT_FUEL_FACTORS)
        self.default_transport_factor = default_transport_factor

        for config in (default_regional_configs() if configs is None else configs):
            self.register(config)

        logger.info(f"Regional carbon factors initialized for {len(self._configs)} countries")

    def register(self, config: RegionalConfig) -> None:
        """Insert or overwrite the configuration for ``config.country``"""
        if not isinstance(config, RegionalConfig):
            raise InvalidInputException("Only RegionalConfig instances can be registered")
        if config.country in self._configs:
            logger.info(f"Overwriting regional config for {config.country}")
        self._configs[config.country] = config

    def is_registered(self, country: str) -> bool:
        return country in self._configs

    def get_regional_config(self, country: str) -> Optional[RegionalConfig]:
        return self._configs.get(country)

    def require_config(self, country: str) -> RegionalConfig:
        config = self._configs.get(country)
        if config is None:
            raise UnknownRegionException(f"No regional configuration registered for '{country}'")
        return config

    def get_factor(self, country: str, category: str, subcategory: Optional[str] = None) -> float:
        """
        Look up an emission factor.

        Args:
            country: Registered country name.
            category: One of electricity, fuel, material or transport.
            subcategory: Key within the category table. Defaults to
                natural_gas, concrete or truck respectively.

        Returns:
            The factor, or 0 (transport: the default truck/diesel factor)
            when the country or subcategory is unknown.
        """
        try:
            category = FactorCategory(category)
        except ValueError:
            raise InvalidInputException(f"Unknown factor category '{category}'")

        default = self.default_transport_factor if category == FactorCategory.TRANSPORT else 0.0

        config = self._configs.get(country)
        if config is None:
            logger.warning(f"Unknown region '{country}', using default {category.value} factor {default}")
            return default

        if category == FactorCategory.ELECTRICITY:
            return config.electricity_factor

        key = subcategory or DEFAULT_SUBCATEGORIES[category]
        table = config.factor_table(category)
        if key not in table:
            logger.debug(f"No {category.value} factor '{key}' for {country}, using {default}")
            return default
        return table[key]

    def get_transport_factor(self, mode: str, fuel_type: str = "diesel") -> float:
        """Freight factor in kg CO2e per tonne-km for a mode and fuel"""
        factor = self._transport_fuel_factors.get((str(mode).lower(), str(fuel_type).lower()))
        if factor is None:
            logger.debug(f"No freight factor for {mode}/{fuel_type}, using default {self.default_transport_factor}")
            return self.default_transport_factor
        return factor

    def convert_units(self, value: float, unit_type: str, from_country: str, to_country: str) -> float:
        from_config = self._configs.get(from_country)
        to_config = self._configs.get(to_country)
        if from_config is None or to_config is None:
            return value

        try:
            unit_type = UnitType(unit_type)
        except ValueError:
            return value

        from_unit = from_config.units.unit_for(unit_type)
        to_unit = to_config.units.unit_for(unit_type)
        if from_unit == to_unit:
            return value

        if unit_type == UnitType.TEMPERATURE:
            if from_unit == "°C" and to_unit == "°F":
                return value * 9 / 5 + 32
            if from_unit == "°F" and to_unit == "°C":
                return (value - 32) * 5 / 9
            return value

        factor = UNIT_CONVERSIONS.get(from_unit, {}).get(to_unit)
        if factor is None:
            return value
        return value * factor

    def calculate_regional_adjustment(self, base_emissions: float, from_country: str, to_country: str) -> float:
        """Scale emissions by the climate and grid intensity of the target country"""
        from_config = self._configs.get(from_country)
        to_config = self._configs.get(to_country)
        if from_config is None or to_config is None:
            return base_emissions
        if from_country == to_country:
            return base_emissions

        climate_ratio = to_config.climate_factor / from_config.climate_factor
        if from_config.electricity_factor == 0:
            grid_ratio = 1.0
        else:
            grid_ratio = to_config.electricity_factor / from_config.electricity_factor

        return base_emissions * (CLIMATE_WEIGHT * climate_ratio + GRID_WEIGHT * grid_ratio)

    def available_regions(self) -> List[str]:
        regions: List[str] = []
        for config in self._configs.values():
            if config.region not in regions:
                regions.append(config.region)
        return regions

    def countries_by_region(self, region: str) -> List[str]:
        return [c.country for c in self._configs.values() if c.region == region]

    def get_renewable_percentage(self, country: str) -> float:
        config = self._configs.get(country)
        return config.renewable_percentage if config else 0.0

    def get_building_standards(self, country: str) -> List[str]:
        config = self._configs.get(country)
        return list(config.building_standards) if config else []

    def get_currency(self, country: str) -> str:
        config = self._configs.get(country)
        return config.currency if config else DEFAULT_CURRENCY

    def regional_comparison(self, countries: List[str]) -> Dict[str, Any]:
        """Side-by-side grid, climate and standards data for registered countries"""
        comparison: Dict[str, Any] = {
            "countries": list(countries),
            "electricity_factors": {},
            "renewable_percentages": {},
            "climate_factors": {},
            "currencies": {},
            "building_standards": {},
        }
        for country in countries:
            config = self._configs.get(country)
            if config is None:
                continue
            comparison["electricity_factors"][country] = config.electricity_factor
            comparison["renewable_percentages"][country] = config.renewable_percentage
            comparison["climate_factors"][country] = config.climate_factor
            comparison["currencies"][country] = config.currency
            comparison["building_standards"][country] = list(config.building_standards)
        return comparison

    @property
    def countries(self) -> List[str]:
        return list(self._configs)
