"""
Regional Carbon Factors

Per-country electricity, fuel, material and transport emission factors,
unit systems and cross-region adjustment.
"""

from .models import (
    FactorCategory,
    UnitType,
    UnitSystem,
    RegionalConfig,
    METRIC_UNITS,
    IMPERIAL_UNITS,
)
from .catalog import (
    TRANSPORT_FUEL_FACTORS,
    DEFAULT_TRANSPORT_FACTOR,
    default_regional_configs,
)
from .registry import RegionalFactorRegistry

__version__ = "1.0.0"
__all__ = [
    "FactorCategory",
    "UnitType",
    "UnitSystem",
    "RegionalConfig",
    "METRIC_UNITS",
    "IMPERIAL_UNITS",
    "TRANSPORT_FUEL_FACTORS",
    "DEFAULT_TRANSPORT_FACTOR",
    "default_regional_configs",
    "RegionalFactorRegistry",
]
