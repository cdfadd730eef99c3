import json
import logging
import re
from typing import Any, List, Mapping

from pydantic import ValidationError

from shared.models.exceptions import ProviderMalformedResponseException
from services.lifecycle.models import MaterialInput

from .fallback import basic_recommendations
from .models import OptimizationReport, ReportSource

logger = logging.getLogger(__name__)

JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


def extract_json(response: str) -> Any:
    """Pull a JSON object out of a model reply, tolerating markdown fences and prose"""
    text = response.strip()
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0]
    elif "```" in text:
        text = text.split("```")[1].split("```")[0]

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        match = JSON_OBJECT_PATTERN.search(text)
        if match is None:
            raise ProviderMalformedResponseException("Provider response contains no JSON object")
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError as e:
            logger.debug(f"Response was: {response[:500]}")
            raise ProviderMalformedResponseException(f"Failed to parse JSON from provider response: {e}")


def parse_provider_report(raw: Any, materials: List[MaterialInput]) -> OptimizationReport:
    """
    Normalize whatever a provider returned into an OptimizationReport.

    Accepts a report instance, a mapping, or text holding a JSON object.
    Missing recommendations are filled with the rule-based ones.

    Raises:
        ProviderMalformedResponseException: When the output cannot be read
            as a report.
    """
    if isinstance(raw, OptimizationReport):
        report = raw
    else:
        if isinstance(raw, (str, bytes)):
            raw = extract_json(raw.decode() if isinstance(raw, bytes) else raw)
        if not isinstance(raw, Mapping):
            raise ProviderMalformedResponseException(
                f"Provider returned {type(raw).__name__}, expected a report object"
            )
        try:
            report = OptimizationReport.model_validate(dict(raw))
        except ValidationError as e:
            raise ProviderMalformedResponseException(f"Provider report failed validation: {e}")

    updates = {"source": ReportSource.PROVIDER}
    if not report.recommendations:
        updates["recommendations"] = basic_recommendations(materials)
    if not report.material_analysis.high_impact_materials:
        updates["material_analysis"] = report.material_analysis.model_copy(
            update={"high_impact_materials": [m.name for m in materials[:2]]}
        )
    return report.model_copy(update=updates)
