"""
Lifecycle Emissions Service

Computes EN 15804 stage emissions (A1-A5, B1-B7, C1-C4, D) for construction
materials.
"""

from .models import (
    EPDStage,
    StageGroup,
    MaterialInput,
    TransportInput,
    EnergyInput,
    WasteProfile,
    coerce_materials,
    EPDStageResult,
    STAGE_ORDER,
    STAGE_GROUPS,
    STAGE_DESCRIPTIONS,
    describe_stage,
    summarize_stages,
)
from .config import LifecycleParameters, LifecycleSettings, settings
from .score import LifecycleEmissionsCalculator

__version__ = "1.0.0"
__all__ = [
    "EPDStage",
    "StageGroup",
    "MaterialInput",
    "TransportInput",
    "EnergyInput",
    "WasteProfile",
    "coerce_materials",
    "EPDStageResult",
    "STAGE_ORDER",
    "STAGE_GROUPS",
    "STAGE_DESCRIPTIONS",
    "describe_stage",
    "summarize_stages",
    "LifecycleParameters",
    "LifecycleSettings",
    "LifecycleEmissionsCalculator",
    "settings",
]
