"""ROI / business-impact calculator for individual issues.

``score_issue`` maps one :class:`~figmant.schemas.issues.Issue` plus an
industry benchmark to a :class:`~figmant.schemas.impact.BusinessImpactMetrics`.
It is total: unknown severities, categories, scopes, efforts and industries
resolve to default table values, so callers never need error handling.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from figmant.schemas.impact import (
    AccessibilityImpact,
    BusinessImpactMetrics,
    CompetitiveAdvantage,
    ConversionMetrics,
    ImplementationAnalysis,
    RevenueImpact,
    ScoredIssue,
    UXMetrics,
)
from figmant.schemas.issues import Issue
from figmant.scoring.currency import format_currency, round_half_up, round_to
from figmant.scoring.tables import ScoringTables, load_scoring_tables

logger = logging.getLogger(__name__)

PRIORITY_LEVELS = ("critical", "high", "medium", "low")


def score_issue(
    issue: Issue,
    screen_type: str = "generic",
    industry: str = "default",
    monthly_traffic: float = 10_000,
    current_conversion_rate: float = 3.0,
    *,
    tables: ScoringTables | None = None,
) -> BusinessImpactMetrics:
    """Attach business metrics to a single issue."""
    tables = tables or load_scoring_tables()
    benchmark = tables.benchmark_for(industry)
    base_impact = tables.base_impact_for(issue.severity, issue.category)

    roi_score = calculate_roi_score(issue, base_impact, tables)
    metrics = BusinessImpactMetrics(
        roi_score=roi_score,
        priority_level=determine_priority_level(issue.severity, roi_score),
        revenue_impact=calculate_revenue_impact(
            base_impact,
            monthly_traffic,
            current_conversion_rate,
            benchmark.average_order_value,
            issue.confidence,
        ),
        user_experience_metrics=_ux_metrics(issue, screen_type),
        accessibility_impact=_accessibility_impact(issue),
        conversion_metrics=_conversion_metrics(issue, base_impact),
        implementation_analysis=analyze_implementation_effort(issue.implementation.effort),
        competitive_advantage=_competitive_advantage(issue),
    )
    logger.debug(
        "Scored issue %s (%s-%s): roi=%.1f priority=%s",
        issue.id, issue.severity, issue.category, roi_score, metrics.priority_level,
    )
    return metrics


def attach_business_impact(
    issues: Iterable[Issue],
    screen_type: str = "generic",
    industry: str = "default",
    monthly_traffic: float = 10_000,
    current_conversion_rate: float = 3.0,
    *,
    tables: ScoringTables | None = None,
) -> list[ScoredIssue]:
    """Score every issue and return them with ``business_impact`` attached."""
    tables = tables or load_scoring_tables()
    scored: list[ScoredIssue] = []
    for issue in issues:
        impact = score_issue(
            issue,
            screen_type,
            industry,
            monthly_traffic,
            current_conversion_rate,
            tables=tables,
        )
        scored.append(
            ScoredIssue(**issue.model_dump(exclude={"business_impact"}), business_impact=impact)
        )
    logger.info("Attached business impact to %d issues (industry=%s)", len(scored), industry)
    return scored


def calculate_roi_score(issue: Issue, base_impact: float, tables: ScoringTables) -> float:
    """base × confidence × severity × scope × effort, rounded to one decimal."""
    score = base_impact
    score *= issue.confidence
    score *= tables.severity_multiplier(issue.severity)
    score *= tables.scope_multiplier(issue.impact_scope)
    score *= tables.effort_divisor(issue.implementation.effort)
    return round_to(score, 1)


def determine_priority_level(severity: str, roi_score: float) -> str:
    if severity == "critical" and roi_score >= 15:
        return "critical"
    if roi_score >= 12:
        return "high"
    if roi_score >= 8:
        return "medium"
    return "low"


def confidence_band(confidence: float) -> str:
    if confidence >= 0.8:
        return "high"
    if confidence >= 0.6:
        return "medium"
    return "low"


def calculate_revenue_impact(
    impact_percentage: float,
    monthly_traffic: float,
    conversion_rate: float,
    average_order_value: float,
    confidence: float,
) -> RevenueImpact:
    current_monthly_revenue = monthly_traffic * (conversion_rate / 100) * average_order_value
    adjusted_impact = impact_percentage * confidence
    monthly_increase = current_monthly_revenue * adjusted_impact / 100
    annual_increase = monthly_increase * 12

    return RevenueImpact(
        monthly_increase=format_currency(monthly_increase),
        annual_projection=format_currency(annual_increase),
        confidence_level=confidence_band(confidence),
        methodology=(
            f"Based on {adjusted_impact:.1f}% conversion improvement from "
            f"{impact_percentage:g}% base impact × {round_half_up(confidence * 100)}% confidence"
        ),
    )


def _ux_metrics(issue: Issue, screen_type: str) -> UXMetrics:
    metrics = UXMetrics()
    if screen_type == "checkout" and issue.category == "usability":
        metrics.error_reduction = "15-25%"
        metrics.task_completion_improvement = "8-12%"
    if screen_type == "form" and issue.category == "accessibility":
        metrics.error_reduction = "20-30%"
        metrics.satisfaction_improvement = "10-15%"
    if issue.category == "performance":
        metrics.time_reduction = "20-40%"
        metrics.satisfaction_improvement = "15-25%"
    if issue.category == "visual" and issue.severity == "critical":
        metrics.satisfaction_improvement = "5-10%"
    return metrics


_ACCESSIBILITY_BY_SEVERITY: dict[str, AccessibilityImpact] = {
    "critical": AccessibilityImpact(
        affected_user_percentage="15-20%",
        compliance_level="Non-compliant with WCAG 2.1 AA",
        legal_risk_reduction="High legal risk reduction",
    ),
    "warning": AccessibilityImpact(
        affected_user_percentage="8-12%",
        compliance_level="Partially compliant with WCAG 2.1 AA",
        legal_risk_reduction="Medium legal risk reduction",
    ),
    "improvement": AccessibilityImpact(
        affected_user_percentage="3-5%",
        compliance_level="Enhances WCAG 2.1 AA compliance",
        legal_risk_reduction="Proactive compliance improvement",
    ),
}


def _accessibility_impact(issue: Issue) -> AccessibilityImpact:
    if issue.category != "accessibility":
        return AccessibilityImpact()
    found = _ACCESSIBILITY_BY_SEVERITY.get(issue.severity)
    return found.model_copy() if found else AccessibilityImpact()


def _conversion_metrics(issue: Issue, base_impact: float) -> ConversionMetrics:
    points = ["Primary conversion flow"]
    if issue.impact_scope == "task-completion":
        points = ["Form completion", "Task success rate"]
    elif issue.impact_scope == "user-trust":
        points = ["Trust indicators", "Credibility signals"]

    return ConversionMetrics(
        estimated_lift_percentage=round_to(base_impact * issue.confidence, 1),
        affected_conversion_points=points,
        statistical_confidence=round_half_up(issue.confidence * 100),
    )


_EFFORT_PROFILES: dict[str, tuple[str, str, list[str], str]] = {
    "minutes": ("quick-win", "15-30 minutes", ["Frontend developer"], "reduces"),
    "hours": ("standard", "2-8 hours", ["Frontend developer", "Designer (optional)"], "neutral"),
    "days": ("complex", "1-3 days", ["Frontend developer", "Designer", "QA tester"], "neutral"),
}


def analyze_implementation_effort(effort: str) -> ImplementationAnalysis:
    """Map an effort label to its implementation profile (missing → ``hours``)."""
    profile = _EFFORT_PROFILES.get(effort or "hours")
    if profile is None:
        profile = ("standard", "2-8 hours", ["Frontend developer"], "neutral")
    category, time_estimate, resources, debt = profile
    return ImplementationAnalysis(
        effort_category=category,
        time_estimate=time_estimate,
        resource_requirements=list(resources),
        technical_debt_impact=debt,
    )


def _competitive_advantage(issue: Issue) -> CompetitiveAdvantage:
    advantage = CompetitiveAdvantage()
    if issue.severity == "critical":
        advantage = CompetitiveAdvantage(
            benchmark_position="Below industry standard",
            differentiation_value="Critical for competitive parity",
            market_impact="Prevents competitive disadvantage",
        )
    if issue.confidence >= 0.8 and issue.impact_scope == "conversion":
        advantage = CompetitiveAdvantage(
            benchmark_position="Above industry average potential",
            differentiation_value="Significant competitive advantage",
            market_impact="Creates market differentiation",
        )
    return advantage
