"""
LLM-backed recommendation provider.
Uses Groq API (with NVIDIA NIM fallback) to produce material optimization reports
"""

import logging
from typing import List, Optional

from groq import AsyncGroq
from openai import AsyncOpenAI

from services.lifecycle.models import MaterialInput

from .config import OptimizationSettings, settings as default_settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a construction sustainability expert. Respond with a single valid JSON object "
    "describing material optimization recommendations."
)


class GroqRecommendationProvider:
    """
    Generates optimization reports using LLM APIs.
    Implements fallback chain: Groq → NVIDIA NIM → Error

    Returns the raw model text; the cache parses it and falls back to the
    local report when it is unreadable.
    """

    def __init__(self, config: Optional[OptimizationSettings] = None,
                 groq_client=None, nvidia_client=None):
        self.config = config or default_settings
        self.groq_client = groq_client
        self.nvidia_client = nvidia_client
        self.groq_model = self.config.groq_model
        self.nvidia_model = self.config.nvidia_model
        self.current_model = None

        if self.groq_client is None and self.config.groq_api_key:
            self.groq_client = AsyncGroq(api_key=self.config.groq_api_key)
            logger.info(f"✓ Groq client initialized (model: {self.groq_model})")

        # NVIDIA NIM setup (backup)
        if self.nvidia_client is None and self.config.nvidia_api_key:
            self.nvidia_client = AsyncOpenAI(
                base_url=self.config.nvidia_base_url,
                api_key=self.config.nvidia_api_key,
            )
            logger.info(f"✓ NVIDIA NIM client initialized (model: {self.nvidia_model})")

        if not self.groq_client and not self.nvidia_client:
            raise ValueError(
                "No AI API keys configured. Set OPTIMIZATION_GROQ_API_KEY or OPTIMIZATION_NVIDIA_API_KEY"
            )

    async def __call__(self, materials: List[MaterialInput]) -> str:
        return await self._call_llm_with_fallback(self.build_prompt(materials))

    def build_prompt(self, materials: List[MaterialInput], max_alternatives: int = 3) -> str:
        material_list = "\n".join(
            f"- {m.name}: {m.quantity:g} {m.unit}, Carbon: {m.carbon_footprint:g} kg CO2e/{m.unit}"
            for m in materials
        )
        return f"""As a sustainability expert, analyze these construction materials and provide optimization recommendations:

{material_list}

Analysis Requirements:
- Primary focus: carbon reduction
- Include alternatives: Yes
- Max alternatives per material: {max_alternatives}

Respond with JSON using these keys: overallScore, potentialCO2Reduction, costImpact, recommendations
(each with materialId, currentMaterial, title, description, priority, potentialSaving and alternatives
holding id, name, carbonFootprint, carbonReduction, costImpact, availability), summary, keyInsights,
nextSteps, materialAnalysis and complianceImprovement."""

    async def _call_llm_with_fallback(self, prompt: str) -> str:
        """
        Call LLM with fallback chain: Groq → NVIDIA → Raise Error
        """
        errors = []

        if self.groq_client:
            try:
                response = await self._complete(self.groq_client, self.groq_model, prompt)
                self.current_model = f"groq-{self.groq_model}"
                return response
            except Exception as e:
                logger.warning(f"Groq API failed: {e}")
                errors.append(f"Groq: {e}")

        if self.nvidia_client:
            try:
                response = await self._complete(self.nvidia_client, self.nvidia_model, prompt)
                self.current_model = f"nvidia-{self.nvidia_model}"
                return response
            except Exception as e:
                logger.warning(f"NVIDIA API failed: {e}")
                errors.append(f"NVIDIA: {e}")

        error_msg = f"All LLM APIs failed: {'; '.join(errors)}"
        logger.error(error_msg)
        raise RuntimeError(error_msg)

    async def _complete(self, client, model: str, prompt: str) -> str:
        completion = await client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=self.config.ai_default_temperature,
            max_tokens=self.config.ai_max_tokens,
            timeout=self.config.provider_timeout_seconds,
        )
        return completion.choices[0].message.content


def build_default_provider(config: Optional[OptimizationSettings] = None) -> Optional[GroqRecommendationProvider]:
    """Provider from configured API keys, or None so the cache uses the local fallback"""
    config = config or default_settings
    if not config.ai_configured:
        logger.info("No AI API keys configured, optimization will use the local fallback")
        return None
    return GroqRecommendationProvider(config)
