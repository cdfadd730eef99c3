"""
Material Optimization Configuration
Cache lifetime, provider timeout and LLM provider credentials
"""

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class OptimizationSettings(BaseSettings):
    """Material optimization cache configuration settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="OPTIMIZATION_",  # Environment variables prefixed with OPTIMIZATION_
        extra="ignore",
    )

    # Service identity
    service_name: str = "material-optimization"
    version: str = "1.0.0"

    # Cache
    cache_ttl_seconds: float = 30 * 60
    provider_timeout_seconds: float = 30.0

    # Fallback report
    max_recommendations: int = 3
    alternative_carbon_ratio: float = 0.7   # alternative factor as a share of the original
    alternative_cost_ratio: float = 1.1

    # Logging
    log_level: str = "INFO"

    # AI Configuration
    groq_api_key: Optional[str] = None
    nvidia_api_key: Optional[str] = None
    nvidia_base_url: str = "https://integrate.api.nvidia.com/v1"
    groq_model: str = "llama-3.3-70b-versatile"
    nvidia_model: str = "meta/llama-3.1-70b-instruct"
    ai_default_temperature: float = 0.7
    ai_max_tokens: int = 2500

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Invalid log level. Must be one of: {valid_levels}')
        return v.upper()

    @field_validator('cache_ttl_seconds', 'provider_timeout_seconds')
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError('Durations must be positive')
        return v

    @property
    def ai_configured(self) -> bool:
        return bool(self.groq_api_key or self.nvidia_api_key)


# Global settings instance
settings = OptimizationSettings()


def get_config() -> OptimizationSettings:
    """Get global configuration (singleton pattern)"""
    return settings
