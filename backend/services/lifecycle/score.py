import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from services.regional_factors import RegionalFactorRegistry

from .config import LifecycleParameters, settings
from .models import (
    EPDStage,
    EPDStageResult,
    EnergyInput,
    MaterialInput,
    TransportInput,
    WasteProfile,
    STAGE_ORDER,
    coerce_materials,
    coerce_record,
    summarize_stages,
)

logger = logging.getLogger(__name__)

ENERGY_ELECTRICITY = "electricity"
ENERGY_GAS = "gas"


def _as_list(records: Any) -> List[Any]:
    if records is None:
        return []
    if isinstance(records, (Mapping, TransportInput, EnergyInput)):
        return [records]
    return list(records)


class LifecycleEmissionsCalculator:
    """
    Converts material, transport, energy and waste quantities into the 17
    EN 15804 stage values.

    The calculator keeps no per-call state. Freight factors come from the
    registry; all other constants come from ``parameters``.
    """

    def __init__(self, registry: Optional[RegionalFactorRegistry] = None,
                 parameters: Optional[LifecycleParameters] = None):
        self.registry = registry or RegionalFactorRegistry()
        self.parameters = parameters or settings.to_parameters()

    def calculate(
        self,
        materials: Sequence[Union[MaterialInput, Dict[str, Any]]],
        transport: Union[TransportInput, Iterable[TransportInput], None] = None,
        energy: Union[EnergyInput, Iterable[EnergyInput], None] = None,
        waste: Union[WasteProfile, Dict[str, Any], None] = None,
    ) -> EPDStageResult:
        """
        Compute every EPD stage and the aggregate totals.

        Args:
            materials: Materials with quantity (kg) and carbon factor.
            transport: One freight leg or a list of legs to the manufacturer.
            energy: Manufacturing energy inputs.
            waste: End-of-life waste routes. Defaults to all zeros.

        Returns:
            EPDStageResult with stages in A1..D order.

        Raises:
            InvalidInputException: On negative or non-finite quantities.
        """
        material_list = coerce_materials(materials)
        transport_list = [coerce_record(t, TransportInput) for t in _as_list(transport)]
        energy_list = [coerce_record(e, EnergyInput) for e in _as_list(energy)]
        waste_profile = coerce_record(waste, WasteProfile) if waste is not None else WasteProfile()

        p = self.parameters
        total_weight = self.total_material_weight(material_list)
        a1 = self.raw_material_supply(material_list)

        logger.debug(f"--- EPD START (materials={len(material_list)}, weight={total_weight}) ---")

        recycling = waste_profile.recycling_rate / 100
        incineration = waste_profile.incineration_rate / 100
        landfill = waste_profile.landfill_rate / 100

        stages: Dict[str, float] = {code: 0.0 for code in STAGE_ORDER}
        stages[EPDStage.A1.value] = a1
        stages[EPDStage.A2.value] = self.transport_to_manufacturer(transport_list, total_weight)
        stages[EPDStage.A3.value] = self.manufacturing(energy_list)
        stages[EPDStage.A4.value] = self._site_leg(total_weight, p.site_delivery_distance_km)
        stages[EPDStage.A5.value] = p.installation_share * a1
        # B1-B7: use phase is not modeled
        stages[EPDStage.C1.value] = p.deconstruction_share * a1
        stages[EPDStage.C2.value] = self._site_leg(total_weight, p.waste_transport_distance_km)
        stages[EPDStage.C3.value] = (incineration * p.incineration_share * a1
                                     - recycling * p.recycling_processing_credit * a1)
        stages[EPDStage.C4.value] = landfill * p.landfill_share * a1
        stages[EPDStage.D.value] = -(recycling * p.recycling_benefit * a1)

        total_co2e = sum(stages[code] for code in STAGE_ORDER)
        gwp_fossil = total_co2e * p.gwp_fossil_share
        gwp_biogenic = total_co2e * p.gwp_biogenic_share

        logger.debug(f"Stage values: {stages}")
        logger.debug(f"--- EPD END (total={total_co2e:.3f} kg CO2e) ---")

        return EPDStageResult(
            stages=stages,
            total_co2e=total_co2e,
            gwp_fossil=gwp_fossil,
            gwp_biogenic=gwp_biogenic,
            gwp_total=gwp_fossil + gwp_biogenic,
            breakdown=summarize_stages(stages),
            data_sources=self._data_sources(transport_list, energy_list),
        )

    @staticmethod
    def total_material_weight(materials: List[MaterialInput]) -> float:
        return float(sum(m.quantity for m in materials))

    @staticmethod
    def raw_material_supply(materials: List[MaterialInput]) -> float:
        """A1: quantity times carbon factor, summed over materials"""
        return float(sum(m.quantity * m.carbon_footprint for m in materials))

    def transport_to_manufacturer(self, legs: List[TransportInput], total_weight: float) -> float:
        """A2: freight factor x total material weight x distance / 1000, per leg"""
        emissions = 0.0
        for leg in legs:
            factor = self.registry.get_transport_factor(leg.mode, leg.fuel_type)
            emissions += factor * total_weight * leg.distance / 1000
        return emissions

    def manufacturing(self, energy: List[EnergyInput]) -> float:
        """A3: energy emissions net of the renewable share"""
        p = self.parameters
        emissions = 0.0
        for item in energy:
            if item.type == ENERGY_ELECTRICITY:
                factor = p.electricity_factor
            elif item.type == ENERGY_GAS:
                factor = p.gas_factor
            else:
                logger.debug(f"Energy type '{item.type}' has no manufacturing factor, counted as 0")
                continue
            emissions += item.amount * factor * (1 - item.renewable_percentage / 100)
        return emissions

    def _site_leg(self, total_weight: float, distance_km: float) -> float:
        p = self.parameters
        factor = self.registry.get_transport_factor(p.site_transport_mode, p.site_transport_fuel)
        return factor * total_weight * distance_km / 1000

    def _data_sources(self, legs: List[TransportInput], energy: List[EnergyInput]) -> List[str]:
        sources = ["Material carbon factors supplied with inputs"]
        if legs:
            sources.append("Freight factors by transport mode and fuel")
        if energy:
            sources.append("Manufacturing energy factors net of renewable share")
        sources.append(
            f"Assumed {self.parameters.site_delivery_distance_km:g} km site delivery and "
            f"{self.parameters.waste_transport_distance_km:g} km waste transport"
        )
        return sources
