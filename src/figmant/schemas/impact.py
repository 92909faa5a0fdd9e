"""Pydantic models for business-impact metrics attached to scored issues."""

from __future__ import annotations

from pydantic import BaseModel

from figmant.schemas.issues import Issue


class RevenueImpact(BaseModel):
    """Projected revenue delta.

    Currency values are pre-formatted ``"$1,234"`` strings; the summary
    parses them back with :func:`figmant.scoring.currency.parse_currency`.
    """

    monthly_increase: str
    annual_projection: str
    confidence_level: str  # "high", "medium", "low"
    methodology: str = ""


class UXMetrics(BaseModel):
    time_reduction: str | None = None
    error_reduction: str | None = None
    satisfaction_improvement: str | None = None
    task_completion_improvement: str | None = None


class AccessibilityImpact(BaseModel):
    affected_user_percentage: str = "0%"
    compliance_level: str = "WCAG 2.1 AA Compliant"
    legal_risk_reduction: str = "Low legal risk"


class ConversionMetrics(BaseModel):
    estimated_lift_percentage: float = 0.0
    affected_conversion_points: list[str] = []
    statistical_confidence: int = 0  # 0-100


class ImplementationAnalysis(BaseModel):
    effort_category: str = "standard"  # "quick-win", "standard", "complex"
    time_estimate: str = ""
    resource_requirements: list[str] = []
    technical_debt_impact: str = "neutral"  # "reduces", "neutral", "increases"


class CompetitiveAdvantage(BaseModel):
    benchmark_position: str = "Industry average"
    differentiation_value: str = "Standard improvement"
    market_impact: str = "Maintains competitive position"


class BusinessImpactMetrics(BaseModel):
    """Full business-impact record for one issue."""

    roi_score: float
    priority_level: str  # "critical", "high", "medium", "low"
    revenue_impact: RevenueImpact
    user_experience_metrics: UXMetrics = UXMetrics()
    accessibility_impact: AccessibilityImpact = AccessibilityImpact()
    conversion_metrics: ConversionMetrics = ConversionMetrics()
    implementation_analysis: ImplementationAnalysis = ImplementationAnalysis()
    competitive_advantage: CompetitiveAdvantage = CompetitiveAdvantage()


class ScoredIssue(Issue):
    """An issue with its business impact attached."""

    business_impact: BusinessImpactMetrics
