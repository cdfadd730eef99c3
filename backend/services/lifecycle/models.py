import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

import numpy as np
from pydantic import BaseModel, Field

from shared.models.exceptions import InvalidInputException

# Setup logging
logger = logging.getLogger(__name__)


class EPDStage(str, Enum):
    """EN 15804 lifecycle stage codes, in reporting order"""
    A1 = "A1"
    A2 = "A2"
    A3 = "A3"
    A4 = "A4"
    A5 = "A5"
    B1 = "B1"
    B2 = "B2"
    B3 = "B3"
    B4 = "B4"
    B5 = "B5"
    B6 = "B6"
    B7 = "B7"
    C1 = "C1"
    C2 = "C2"
    C3 = "C3"
    C4 = "C4"
    D = "D"


class StageGroup(str, Enum):
    PRODUCTION = "production"
    CONSTRUCTION = "construction"
    USE = "use"
    END_OF_LIFE = "end_of_life"
    BENEFITS = "benefits"


STAGE_ORDER: List[str] = [stage.value for stage in EPDStage]

STAGE_GROUPS: Dict[StageGroup, List[EPDStage]] = {
    StageGroup.PRODUCTION: [EPDStage.A1, EPDStage.A2, EPDStage.A3],
    StageGroup.CONSTRUCTION: [EPDStage.A4, EPDStage.A5],
    StageGroup.USE: [EPDStage.B1, EPDStage.B2, EPDStage.B3, EPDStage.B4,
                     EPDStage.B5, EPDStage.B6, EPDStage.B7],
    StageGroup.END_OF_LIFE: [EPDStage.C1, EPDStage.C2, EPDStage.C3, EPDStage.C4],
    StageGroup.BENEFITS: [EPDStage.D],
}

STAGE_DESCRIPTIONS: Dict[EPDStage, str] = {
    EPDStage.A1: "Raw material supply",
    EPDStage.A2: "Transport to manufacturer",
    EPDStage.A3: "Manufacturing",
    EPDStage.A4: "Transport to construction site",
    EPDStage.A5: "Installation process",
    EPDStage.B1: "Use",
    EPDStage.B2: "Maintenance",
    EPDStage.B3: "Repair",
    EPDStage.B4: "Replacement",
    EPDStage.B5: "Refurbishment",
    EPDStage.B6: "Operational energy use",
    EPDStage.B7: "Operational water use",
    EPDStage.C1: "Deconstruction/demolition",
    EPDStage.C2: "Transport to waste processing",
    EPDStage.C3: "Waste processing",
    EPDStage.C4: "Final disposal",
    EPDStage.D: "Benefits beyond system boundary",
}


def parse_stage(code) -> EPDStage:
    """Resolve a stage code, raising InvalidInputException for unknown codes"""
    if isinstance(code, EPDStage):
        return code
    try:
        return EPDStage(str(code).strip().upper())
    except ValueError:
        raise InvalidInputException(f"Unknown EPD stage code '{code}'")


def _require_finite(value: float, name: str, allow_negative: bool = False) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidInputException(f"{name} must be a finite number")
    if not np.isfinite(value):
        raise InvalidInputException(f"{name} must be a finite number")
    if not allow_negative and value < 0:
        raise InvalidInputException(f"{name} cannot be negative")
    return value


def _require_percentage(value: float, name: str) -> float:
    value = _require_finite(value, name)
    if value > 100:
        raise InvalidInputException(f"{name} must be within 0-100")
    return value


@dataclass
class MaterialInput:
    """A quantity of construction material and its embodied carbon factor"""
    name: str
    quantity: float                 # in ``unit``, also used as kg for freight
    unit: str = "kg"
    carbon_footprint: float = 0.0   # kg CO2e per unit, negative for sequestering timber

    def __post_init__(self):
        if not self.name:
            raise InvalidInputException("Material name is required")
        self.quantity = _require_finite(self.quantity, f"Quantity of {self.name}")
        self.carbon_footprint = _require_finite(
            self.carbon_footprint, f"Carbon factor of {self.name}", allow_negative=True
        )


@dataclass
class TransportInput:
    """One freight leg from supplier to manufacturer"""
    mode: str = "truck"
    distance: float = 0.0   # km
    weight: float = 0.0     # kg
    fuel_type: str = "diesel"

    def __post_init__(self):
        self.mode = str(self.mode).lower()
        self.fuel_type = str(self.fuel_type).lower()
        self.distance = _require_finite(self.distance, "Transport distance")
        self.weight = _require_finite(self.weight, "Transport weight")


@dataclass
class EnergyInput:
    """Manufacturing energy use"""
    type: str
    amount: float
    unit: str = "kWh"
    renewable_percentage: float = 0.0

    def __post_init__(self):
        self.type = str(self.type).lower()
        self.amount = _require_finite(self.amount, f"{self.type} energy amount")
        self.renewable_percentage = _require_percentage(self.renewable_percentage, "Renewable percentage")


@dataclass
class WasteProfile:
    """End-of-life waste routes as percentages; they need not sum to 100"""
    recycling_rate: float = 0.0
    incineration_rate: float = 0.0
    landfill_rate: float = 0.0

    def __post_init__(self):
        self.recycling_rate = _require_percentage(self.recycling_rate, "Recycling rate")
        self.incineration_rate = _require_percentage(self.incineration_rate, "Incineration rate")
        self.landfill_rate = _require_percentage(self.landfill_rate, "Landfill rate")


def coerce_record(record: Any, cls):
    """Return ``record`` as an instance of the input dataclass ``cls``, building it from a mapping if needed"""
    if isinstance(record, cls):
        return record
    if isinstance(record, Mapping):
        try:
            return cls(**record)
        except TypeError as e:
            raise InvalidInputException(f"Invalid {cls.__name__} fields: {e}")
    raise InvalidInputException(f"Expected {cls.__name__} or mapping, got {type(record).__name__}")


def coerce_materials(materials: Optional[Iterable[Any]]) -> List[MaterialInput]:
    if not materials:
        return []
    if isinstance(materials, (Mapping, MaterialInput)):
        materials = [materials]
    return [coerce_record(m, MaterialInput) for m in materials]


class StageDetail(BaseModel):
    stage: str
    description: str
    value: float


class EPDStageResult(BaseModel):
    """Result model for a lifecycle stage calculation"""
    stages: Dict[str, float] = Field(..., description="kg CO2e per stage, in EN 15804 order")
    total_co2e: float = Field(..., description="Sum of all stage values")
    gwp_fossil: float
    gwp_biogenic: float
    gwp_total: float
    breakdown: Dict[str, float] = Field(default_factory=dict, description="Totals per stage group")
    data_sources: List[str] = Field(default_factory=list)
    calculated_at: datetime = Field(default_factory=datetime.utcnow)

    def stage(self, code) -> float:
        return self.stages[parse_stage(code).value]

    def stage_details(self) -> List[StageDetail]:
        return [
            StageDetail(stage=code, description=STAGE_DESCRIPTIONS[EPDStage(code)], value=value)
            for code, value in self.stages.items()
        ]

    def group_total(self, group: str) -> float:
        return self.breakdown[StageGroup(group).value]


def describe_stage(code) -> str:
    return STAGE_DESCRIPTIONS[parse_stage(code)]


def summarize_stages(stages: Dict[str, float], groups: Optional[Dict[StageGroup, List[EPDStage]]] = None) -> Dict[str, float]:
    """Sum stage values into production, construction, use, end of life and benefits"""
    groups = groups or STAGE_GROUPS
    return {
        group.value: float(sum(stages[stage.value] for stage in members))
        for group, members in groups.items()
    }
