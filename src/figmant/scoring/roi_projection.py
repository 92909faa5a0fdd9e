"""Annual ROI projection for a detected UX anti-pattern.

Used to give the strategist prompt a dollar range per anti-pattern. Industry
keys here follow the marketing taxonomy (``ecommerce``, ``finance``, ...)
rather than the benchmark table in :mod:`figmant.scoring.tables`.
"""

from __future__ import annotations

from pydantic import BaseModel

from figmant.scoring.currency import round_half_up, round_to

_BASE_CONVERSION_RATES = {
    "ecommerce": 2.86,
    "saas": 3.2,
    "finance": 5.1,
    "healthcare": 4.8,
    "education": 6.2,
    "travel": 2.1,
    "default": 3.5,
}

_AVERAGE_ORDER_VALUES = {
    "ecommerce": 75,
    "saas": 150,
    "finance": 500,
    "healthcare": 300,
    "education": 200,
    "travel": 250,
    "default": 125,
}

_IMPROVEMENT_FACTORS = {
    "hidden_cta": {"critical": 0.35, "important": 0.20, "enhancement": 0.10},
    "form_overload": {"critical": 0.45, "important": 0.25, "enhancement": 0.12},
    "navigation_chaos": {"critical": 0.30, "important": 0.18, "enhancement": 0.08},
    "contrast_violation": {"critical": 0.15, "important": 0.10, "enhancement": 0.05},
    "mobile_neglect": {"critical": 0.40, "important": 0.25, "enhancement": 0.15},
    "default": {"critical": 0.25, "important": 0.15, "enhancement": 0.08},
}

_BASE_CONFIDENCE = {"critical": 0.85, "important": 0.75, "enhancement": 0.65}

_INDUSTRY_CONFIDENCE_MODIFIER = {"ecommerce": 0.1, "saas": 0.05, "finance": -0.05}


class ImplementationCost(BaseModel):
    effort: str  # "Low", "Medium", "High"
    timeline_weeks: int
    resource_requirements: list[str]


_IMPLEMENTATION_COSTS = {
    "hidden_cta": ImplementationCost(
        effort="Low", timeline_weeks=1,
        resource_requirements=["Frontend developer", "UX designer"],
    ),
    "form_overload": ImplementationCost(
        effort="Medium", timeline_weeks=3,
        resource_requirements=["Frontend developer", "UX designer", "Backend developer"],
    ),
    "navigation_chaos": ImplementationCost(
        effort="High", timeline_weeks=6,
        resource_requirements=["Frontend developer", "UX designer", "Product manager", "QA tester"],
    ),
    "contrast_violation": ImplementationCost(
        effort="Low", timeline_weeks=1,
        resource_requirements=["Frontend developer", "UX designer"],
    ),
    "mobile_neglect": ImplementationCost(
        effort="Medium", timeline_weeks=4,
        resource_requirements=["Frontend developer", "UX designer", "Mobile specialist"],
    ),
}

_DEFAULT_IMPLEMENTATION_COST = ImplementationCost(
    effort="Medium", timeline_weeks=2,
    resource_requirements=["Frontend developer", "UX designer"],
)


class RoiEstimate(BaseModel):
    timeframe: str = "6-12 months"
    low_estimate: int
    high_estimate: int
    confidence: float


class ConversionImpact(BaseModel):
    current_rate: float
    projected_rate: float
    improvement_percent: float


class RoiProjection(BaseModel):
    roi_projection: RoiEstimate
    conversion_impact: ConversionImpact
    implementation_cost: ImplementationCost


def _industry_key(industry: str, table: dict) -> str:
    key = (industry or "").lower()
    return key if key in table else "default"


def projection_confidence(severity: str, industry: str) -> float:
    """Severity confidence adjusted by industry, clamped to [0.5, 0.95]."""
    base = _BASE_CONFIDENCE.get(severity, 0.7)
    modifier = _INDUSTRY_CONFIDENCE_MODIFIER.get((industry or "").lower(), 0.0)
    return min(0.95, max(0.5, base + modifier))


def calculate_roi_projection(
    issue_type: str,
    severity: str,
    industry: str,
    user_base: float = 10_000,
) -> RoiProjection:
    """Project the annual revenue lift from fixing one anti-pattern."""
    base_rate = _BASE_CONVERSION_RATES[_industry_key(industry, _BASE_CONVERSION_RATES)]
    order_value = _AVERAGE_ORDER_VALUES[_industry_key(industry, _AVERAGE_ORDER_VALUES)]
    factors = _IMPROVEMENT_FACTORS.get(issue_type, _IMPROVEMENT_FACTORS["default"])
    improvement = factors.get(severity, 0.1)

    projected_rate = base_rate * (1 + improvement)
    improvement_percent = (projected_rate - base_rate) / base_rate * 100

    additional_conversions = user_base * (projected_rate / 100) - user_base * (base_rate / 100)
    annual_lift = additional_conversions * order_value * 12

    return RoiProjection(
        roi_projection=RoiEstimate(
            low_estimate=round_half_up(annual_lift * 0.7),
            high_estimate=round_half_up(annual_lift * 1.3),
            confidence=projection_confidence(severity, industry),
        ),
        conversion_impact=ConversionImpact(
            current_rate=round_to(base_rate, 2),
            projected_rate=round_to(projected_rate, 2),
            improvement_percent=round_to(improvement_percent, 2),
        ),
        implementation_cost=_IMPLEMENTATION_COSTS.get(issue_type, _DEFAULT_IMPLEMENTATION_COST).model_copy(),
    )
