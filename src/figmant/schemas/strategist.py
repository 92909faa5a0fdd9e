"""Pydantic models for the UX strategist agent (inputs and output)."""

from __future__ import annotations

from pydantic import BaseModel, field_validator


class VisionSummary(BaseModel):
    """Visual signals extracted from a design by the vision step.

    Every field is optional; a missing signal never triggers an anti-pattern.
    """

    layout_density: str = ""  # "low", "medium", "high"
    cta_positioning: list[str] = []  # e.g. ["below fold"]
    form_complexity: str = ""
    information_density: str = ""  # "overwhelming" triggers form overload
    navigation_complexity: str = ""
    navigation_consistency: str = ""
    color_contrast_score: float | None = None  # contrast ratio, e.g. 4.5
    accessibility_flags: list[str] = []
    mobile_responsive_score: float | None = None  # 0-100
    touch_target_compliance: bool | None = None


class BusinessValue(BaseModel):
    primary: str = ""
    secondary: list[str] = []
    quantified_impact: str = ""


class ExpertRecommendation(BaseModel):
    title: str
    recommendation: str = ""
    confidence: float = 0.0
    expected_impact: str = ""
    business_value: BusinessValue = BusinessValue()
    implementation_effort: str = ""  # "Low", "Medium", "High"
    timeline: str = ""
    reasoning: str = ""
    ux_principles_applied: list[str] = []
    validation_method: str = ""
    success_metrics: list[str] = []
    priority: int = 0  # 1-3
    category: str = ""  # "critical-blocker", "user-experience", "business-impact"

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, v: object) -> object:
        if v is None:
            return 0
        if isinstance(v, str):
            digits = "".join(ch for ch in v if ch.isdigit())
            return int(digits[:1]) if digits else 0
        return v


class StrategistRoadmap(BaseModel):
    quick_wins: list[str] = []
    week_one_actions: list[str] = []
    strategic_initiatives: list[str] = []


class BusinessImpactAssessment(BaseModel):
    estimated_value: str = ""
    confidence: float = 0.0
    implementation_roadmap: StrategistRoadmap = StrategistRoadmap()
    competitive_advantage: str = ""


class ABTestFramework(BaseModel):
    primary_hypothesis: str = ""
    test_variants: list[str] = []
    success_criteria: list[str] = []
    estimated_test_duration: str = ""


class ConfidenceAssessment(BaseModel):
    overall_confidence: float = 0.0
    data_quality_score: float = 0.0
    research_backing: float = 0.0
    implementation_feasibility: float = 0.0
    reasoning: str = ""


class StrategistOutput(BaseModel):
    """Full output from the UX strategist agent."""

    diagnosis: str = ""
    strategic_rationale: str = ""
    expert_recommendations: list[ExpertRecommendation] = []
    business_impact_assessment: BusinessImpactAssessment = BusinessImpactAssessment()
    ab_test_framework: ABTestFramework = ABTestFramework()
    success_metrics: list[str] = []
    confidence_assessment: ConfidenceAssessment = ConfidenceAssessment()
