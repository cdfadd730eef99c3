"""
Seed catalog of regional carbon factors.

Electricity factors are kg CO2e/kWh grid averages, fuels kg CO2e per m3 or
litre, materials kg CO2e/kg (negative values are sequestering timber) and
transport kg CO2e per tonne-km.
"""

from typing import Dict, List, Tuple

from .models import IMPERIAL_UNITS, METRIC_UNITS, RegionalConfig, UnitSystem

# Freight factors by (mode, fuel), kg CO2e per tonne-km
TRANSPORT_FUEL_FACTORS: Dict[Tuple[str, str], float] = {
    ("truck", "diesel"): 0.62,
    ("truck", "electric"): 0.31,
    ("rail", "diesel"): 0.22,
    ("rail", "electric"): 0.14,
    ("ship", "diesel"): 0.11,
    ("ship", "electric"): 0.08,
}

DEFAULT_TRANSPORT_FACTOR = TRANSPORT_FUEL_FACTORS[("truck", "diesel")]

# Imperial for area, volume and weight, but temperatures in Celsius
CANADIAN_UNITS = UnitSystem(area="ft²", volume="ft³", weight="lbs", energy="kWh", temperature="°C")


def default_regional_configs() -> List[RegionalConfig]:
    """Build the seven built-in country configurations"""
    return [
        RegionalConfig(
            country="Australia",
            region="Oceania",
            currency="AUD",
            electricity_factor=0.81,
            fuel_factors={"natural_gas": 2.04, "diesel": 2.68, "petrol": 2.31, "lpg": 1.51},
            material_factors={"concrete": 0.83, "steel": 1.85, "aluminium": 8.24, "timber": -0.35},
            transport_factors={"truck": 0.12, "rail": 0.027, "ship": 0.011},
            climate_factor=1.0,
            renewable_percentage=32.5,
            building_standards=("NCC", "NABERS", "Green Star"),
            units=METRIC_UNITS,
        ),
        RegionalConfig(
            country="United States",
            region="North America",
            currency="USD",
            electricity_factor=0.42,
            fuel_factors={"natural_gas": 1.93, "diesel": 2.66, "gasoline": 2.29, "heating_oil": 2.53},
            material_factors={"concrete": 0.93, "steel": 1.95, "aluminum": 8.67, "lumber": -0.42},
            transport_factors={"truck": 0.16, "rail": 0.033, "barge": 0.033},
            climate_factor=0.95,
            renewable_percentage=21.0,
            building_standards=("LEED", "Energy Star", "ASHRAE 90.1"),
            units=IMPERIAL_UNITS,
        ),
        RegionalConfig(
            country="United Kingdom",
            region="Europe",
            currency="GBP",
            electricity_factor=0.23,
            fuel_factors={"natural_gas": 2.04, "diesel": 2.51, "petrol": 2.18, "heating_oil": 2.52},
            material_factors={"concrete": 0.89, "steel": 1.77, "aluminium": 7.89, "timber": -0.38},
            transport_factors={"truck": 0.11, "rail": 0.022, "ship": 0.009},
            climate_factor=0.85,
            renewable_percentage=43.1,
            building_standards=("BREEAM", "Passivhaus", "SAP"),
            units=METRIC_UNITS,
        ),
        RegionalConfig(
            country="Germany",
            region="Europe",
            currency="EUR",
            electricity_factor=0.33,
            fuel_factors={"natural_gas": 2.04, "diesel": 2.51, "gasoline": 2.18, "heating_oil": 2.52},
            material_factors={"concrete": 0.85, "steel": 1.72, "aluminium": 7.45, "timber": -0.41},
            transport_factors={"truck": 0.09, "rail": 0.019, "ship": 0.008},
            climate_factor=0.9,
            renewable_percentage=46.2,
            building_standards=("DGNB", "BNB", "Passivhaus"),
            units=METRIC_UNITS,
        ),
        RegionalConfig(
            country="Japan",
            region="Asia Pacific",
            currency="JPY",
            electricity_factor=0.52,
            fuel_factors={"city_gas": 2.23, "diesel": 2.58, "gasoline": 2.32, "kerosene": 2.49},
            material_factors={"concrete": 0.88, "steel": 1.89, "aluminium": 8.15, "timber": -0.33},
            transport_factors={"truck": 0.13, "rail": 0.025, "ship": 0.012},
            climate_factor=1.1,
            renewable_percentage=22.4,
            building_standards=("CASBEE", "BELS"),
            units=METRIC_UNITS,
        ),
        RegionalConfig(
            country="Singapore",
            region="Asia Pacific",
            currency="SGD",
            electricity_factor=0.41,
            fuel_factors={"natural_gas": 2.04, "diesel": 2.68, "petrol": 2.31},
            # Mostly imported materials
            material_factors={"concrete": 0.91, "steel": 2.05, "aluminium": 8.89, "timber": 0.12},
            transport_factors={"truck": 0.14, "ship": 0.010},
            climate_factor=1.2,
            renewable_percentage=3.0,
            building_standards=("Green Mark", "SS 564"),
            units=METRIC_UNITS,
        ),
        RegionalConfig(
            country="Canada",
            region="North America",
            currency="CAD",
            electricity_factor=0.13,
            fuel_factors={"natural_gas": 1.91, "diesel": 2.66, "gasoline": 2.29, "heating_oil": 2.78},
            material_factors={"concrete": 0.87, "steel": 1.83, "aluminum": 1.89, "lumber": -0.58},
            transport_factors={"truck": 0.15, "rail": 0.031, "ship": 0.034},
            climate_factor=0.8,
            renewable_percentage=68.0,
            building_standards=("LEED Canada", "R-2000", "ENERGY STAR"),
            units=CANADIAN_UNITS,
        ),
    ]
