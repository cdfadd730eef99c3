from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ReportSource(str, Enum):
    PROVIDER = "provider"
    FALLBACK = "fallback"


class CamelModel(BaseModel):
    """Accepts both snake_case and camelCase keys, as returned by LLM providers"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ComplianceStatus(CamelModel):
    ncc: bool = True
    nabers: bool = True


class EstimatedSavings(CamelModel):
    co2: float = 0.0
    cost: float = 0.0


class MaterialAlternative(CamelModel):
    id: str
    name: str
    type: str = "Sustainable alternative"
    carbon_footprint: float = Field(..., description="kg CO2e per unit")
    carbon_reduction: float = Field(30.0, description="Stated reduction in percent")
    cost: float = 1.1
    cost_impact: str = "similar"
    availability: str = "Medium"
    sustainability_score: float = 85.0
    description: str = "Eco-friendly alternative material"
    benefits: List[str] = Field(default_factory=lambda: ["Lower carbon footprint", "Renewable source"])
    tradeoffs: List[str] = Field(default_factory=lambda: ["Slightly higher cost", "Limited availability"])
    considerations: List[str] = Field(default_factory=lambda: ["Verify local availability", "Check cost implications"])
    compliance_status: ComplianceStatus = Field(default_factory=ComplianceStatus)
    estimated_savings: EstimatedSavings = Field(default_factory=EstimatedSavings)


class OptimizationRecommendation(CamelModel):
    material_id: str
    current_material: str
    category: str = "carbon_reduction"
    title: str
    description: str = "Consider sustainable alternatives to reduce environmental impact"
    issue: str = "High carbon footprint detected"
    recommendation: str = "Consider sustainable alternatives"
    impact: str = "Significant carbon reduction potential"
    timeframe: str = "2-4 weeks"
    confidence: float = 85.0
    potential_saving: float = 0.0
    priority: str = "Medium"
    alternatives: List[MaterialAlternative] = Field(default_factory=list)
    implementation_steps: List[str] = Field(
        default_factory=lambda: ["Research alternatives", "Evaluate costs", "Plan implementation"]
    )


class MaterialAnalysis(CamelModel):
    high_impact_materials: List[str] = Field(default_factory=list)
    sustainable_materials: List[str] = Field(default_factory=list)
    improvement_areas: List[str] = Field(
        default_factory=lambda: ["Carbon footprint reduction", "Cost optimization"]
    )


class ComplianceImprovement(CamelModel):
    ncc_gaps: List[str] = Field(default_factory=lambda: ["Review thermal performance requirements"])
    nabers_opportunities: List[str] = Field(default_factory=lambda: ["Improve energy efficiency rating"])


class OptimizationReport(CamelModel):
    """Material optimization report for one set of materials"""
    overall_score: float = 70.0
    potential_co2_reduction: float = Field(15.0, alias="potentialCO2Reduction")
    cost_impact: float = 5.0
    recommendations: List[OptimizationRecommendation] = Field(default_factory=list)
    summary: str = "Analysis completed with general recommendations."
    key_insights: List[str] = Field(
        default_factory=lambda: ["Consider sustainable alternatives", "Monitor compliance requirements"]
    )
    next_steps: List[str] = Field(
        default_factory=lambda: ["Review recommendations", "Assess feasibility", "Implement changes"]
    )
    material_analysis: MaterialAnalysis = Field(default_factory=MaterialAnalysis)
    compliance_improvement: ComplianceImprovement = Field(default_factory=ComplianceImprovement)
    source: ReportSource = ReportSource.PROVIDER
    generated_at: datetime = Field(default_factory=datetime.utcnow)


@dataclass
class OptimizationCacheEntry:
    fingerprint: str
    report: OptimizationReport
    timestamp: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.timestamp >= self.ttl
