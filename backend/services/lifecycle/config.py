"""
Lifecycle Emissions Configuration

Heuristic constants used by the EN 15804 stage calculator. Every value can be
overridden through LIFECYCLE_* environment variables.
"""

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LifecycleParameters(BaseModel):
    """Heuristic constants for the stage formulas"""
    model_config = {"frozen": True}

    # A3 energy intensities, kg CO2e per kWh
    electricity_factor: float = Field(0.82, description="Manufacturing electricity factor")
    gas_factor: float = Field(0.18, description="Manufacturing gas factor")

    # Stage allowances as shares of A1
    installation_share: float = Field(0.05, description="A5 installation allowance")
    deconstruction_share: float = Field(0.02, description="C1 deconstruction allowance")
    incineration_share: float = Field(0.05, description="C3 emissions per incinerated share")
    recycling_processing_credit: float = Field(0.10, description="C3 credit per recycled share")
    landfill_share: float = Field(0.02, description="C4 emissions per landfilled share")
    recycling_benefit: float = Field(0.15, description="D credit per recycled share")

    # Assumed legs for site delivery (A4) and waste transport (C2)
    site_delivery_distance_km: float = 50.0
    waste_transport_distance_km: float = 25.0
    site_transport_mode: str = "truck"
    site_transport_fuel: str = "diesel"

    # GWP split of the stage total
    gwp_fossil_share: float = 0.85
    gwp_biogenic_share: float = 0.10


class LifecycleSettings(BaseSettings):
    """Lifecycle calculator configuration settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="LIFECYCLE_",
        extra="ignore",
    )

    service_name: str = "lifecycle-emissions"
    version: str = "1.0.0"

    electricity_factor: float = 0.82
    gas_factor: float = 0.18
    installation_share: float = 0.05
    deconstruction_share: float = 0.02
    incineration_share: float = 0.05
    recycling_processing_credit: float = 0.10
    landfill_share: float = 0.02
    recycling_benefit: float = 0.15
    site_delivery_distance_km: float = 50.0
    waste_transport_distance_km: float = 25.0
    site_transport_mode: str = "truck"
    site_transport_fuel: str = "diesel"
    gwp_fossil_share: float = 0.85
    gwp_biogenic_share: float = 0.10

    # Logging
    log_level: str = "INFO"

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Invalid log level. Must be one of: {valid_levels}')
        return v.upper()

    def to_parameters(self) -> LifecycleParameters:
        """Build the parameter table used by the calculator"""
        return LifecycleParameters(**{
            name: getattr(self, name) for name in LifecycleParameters.model_fields
        })


# Global settings instance
settings = LifecycleSettings()


def get_config() -> LifecycleSettings:
    """Get global configuration (singleton pattern)"""
    return settings
