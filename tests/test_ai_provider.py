"""Tests for the LLM recommendation provider, with mocked Groq and NVIDIA clients."""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from services.optimization import (
    GroqRecommendationProvider,
    OptimizationRecommendationCache,
    OptimizationSettings,
    ReportSource,
    build_default_provider,
)


def make_client(content=None, error=None):
    client = MagicMock()
    if error is not None:
        client.chat.completions.create = AsyncMock(side_effect=error)
    else:
        completion = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])
        client.chat.completions.create = AsyncMock(return_value=completion)
    return client


@pytest.fixture
def config():
    return OptimizationSettings(groq_api_key=None, nvidia_api_key=None)


REPORT_JSON = json.dumps({"overallScore": 88, "summary": "Prefer low-carbon concrete."})


# ============================================================================
# Construction
# ============================================================================


class TestProviderSetup:
    def test_requires_a_client(self, config):
        with pytest.raises(ValueError):
            GroqRecommendationProvider(config)

    def test_default_provider_without_keys(self, config):
        assert build_default_provider(config) is None

    def test_default_provider_with_groq_key(self):
        provider = build_default_provider(OptimizationSettings(groq_api_key="test-key", nvidia_api_key=None))
        assert isinstance(provider, GroqRecommendationProvider)
        assert provider.groq_client is not None
        assert provider.nvidia_client is None

    def test_prompt_lists_materials(self, config, sample_materials):
        provider = GroqRecommendationProvider(config, groq_client=make_client("{}"))
        prompt = provider.build_prompt(sample_materials)
        assert "- concrete: 10 kg, Carbon: 2 kg CO2e/kg" in prompt
        assert "- steel: 5 kg, Carbon: 3 kg CO2e/kg" in prompt


# ============================================================================
# Fallback chain
# ============================================================================


class TestFallbackChain:
    @pytest.mark.asyncio
    async def test_groq_answers(self, config, sample_materials):
        groq = make_client(REPORT_JSON)
        nvidia = make_client("unused")
        provider = GroqRecommendationProvider(config, groq_client=groq, nvidia_client=nvidia)

        assert await provider(sample_materials) == REPORT_JSON
        assert provider.current_model == "groq-llama-3.3-70b-versatile"
        nvidia.chat.completions.create.assert_not_awaited()

        kwargs = groq.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == config.groq_model
        assert kwargs["max_tokens"] == config.ai_max_tokens
        assert kwargs["messages"][0]["role"] == "system"

    @pytest.mark.asyncio
    async def test_nvidia_backs_up_groq(self, config, sample_materials):
        groq = make_client(error=Exception("rate limited"))
        nvidia = make_client(REPORT_JSON)
        provider = GroqRecommendationProvider(config, groq_client=groq, nvidia_client=nvidia)

        assert await provider(sample_materials) == REPORT_JSON
        assert provider.current_model == "nvidia-meta/llama-3.1-70b-instruct"

    @pytest.mark.asyncio
    async def test_all_providers_fail(self, config, sample_materials):
        provider = GroqRecommendationProvider(
            config,
            groq_client=make_client(error=Exception("rate limited")),
            nvidia_client=make_client(error=Exception("unavailable")),
        )
        with pytest.raises(RuntimeError, match="All LLM APIs failed"):
            await provider(sample_materials)


# ============================================================================
# Cache integration
# ============================================================================


class TestCacheIntegration:
    @pytest.mark.asyncio
    async def test_model_reply_becomes_report(self, config, clock, sample_materials):
        provider = GroqRecommendationProvider(config, groq_client=make_client(f"```json\n{REPORT_JSON}\n```"))
        cache = OptimizationRecommendationCache(provider, clock=clock)

        report = await cache.get(sample_materials)

        assert report.source == ReportSource.PROVIDER
        assert report.overall_score == 88
        assert len(report.recommendations) == 2

    @pytest.mark.asyncio
    async def test_failed_chain_falls_back(self, config, clock, sample_materials):
        provider = GroqRecommendationProvider(config, groq_client=make_client(error=Exception("down")))
        cache = OptimizationRecommendationCache(provider, clock=clock)

        report = await cache.get(sample_materials)

        assert report.source == ReportSource.FALLBACK
        assert len(cache) == 0
