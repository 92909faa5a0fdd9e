"""Screen-level portfolio projections across all issues found in one design."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from figmant.schemas.impact import ScoredIssue
from figmant.schemas.summary import (
    ABTestHypothesis,
    ConversionOptimization,
    PortfolioMetrics,
    PortfolioRoadmap,
    PriorityMatrix,
    ROIBreakdown,
    ROIProjections,
    RoadmapItem,
)
from figmant.scoring.currency import round_half_up, round_to
from figmant.scoring.tables import ScoringTables, load_scoring_tables

logger = logging.getLogger(__name__)

_SEVERITY_WEIGHTS = {"critical": 0.5, "warning": 0.3, "improvement": 0.2}

_SUCCESS_METRICS = {
    "conversion": "Conversion Rate",
    "task-completion": "Task Completion Rate",
    "user-trust": "User Satisfaction Score",
    "readability": "Time on Page",
    "performance": "Page Load Speed",
}

_EXPECTED_LIFT = {"critical": "20-30%", "warning": "10-20%", "improvement": "5-15%"}

_TEST_COMPLEXITY = {"minutes": "Low", "hours": "Medium", "days": "High"}

_SCREEN_OPTIMIZATIONS = {
    "checkout": "Streamline payment flow and reduce form friction",
    "landing": "Optimize CTA placement and value proposition clarity",
    "dashboard": "Improve data visualization and action accessibility",
    "form": "Reduce cognitive load and provide clear validation",
    "feed": "Enhance content discovery and engagement triggers",
}


def _confidence_or(issue: ScoredIssue, fallback: float) -> float:
    # A zero confidence is treated as "not reported".
    return issue.confidence or fallback


def _effort(issue: ScoredIssue) -> str:
    return issue.implementation.effort or "hours"


def project_portfolio(
    issues: Sequence[ScoredIssue],
    screen_type: str = "generic",
    user_volume: float = 10_000,
    conversion_baseline: float = 2.5,
    *,
    tables: ScoringTables | None = None,
) -> PortfolioMetrics:
    """Build ROI projections, a roadmap, a priority matrix and A/B hypotheses."""
    tables = tables or load_scoring_tables()
    multipliers = tables.screen_multipliers_for(screen_type)

    metrics = PortfolioMetrics(
        roi_projections=_roi_projections(issues, multipliers, user_volume, conversion_baseline, tables),
        implementation_roadmap=_roadmap(issues, tables),
        priority_matrix=_priority_matrix(issues),
        ab_test_hypotheses=_ab_test_hypotheses(issues),
        business_impact_score=_overall_business_impact(issues),
        conversion_optimization=_conversion_optimization(issues, screen_type),
    )
    logger.debug(
        "Portfolio for %d issues on %s screen: annual=%d cost=%d",
        len(issues), screen_type,
        metrics.roi_projections.annual_value, metrics.roi_projections.implementation_cost,
    )
    return metrics


def _roi_projections(
    issues: Sequence[ScoredIssue],
    multipliers: dict[str, float],
    user_volume: float,
    conversion_baseline: float,
    tables: ScoringTables,
) -> ROIProjections:
    total_annual = 0.0
    total_cost = 0.0
    for issue in issues:
        share = tables.affected_user_share.get(issue.severity, 0.0)
        base = user_volume * share * (conversion_baseline / 100)
        base *= _confidence_or(issue, 0.7)
        base *= multipliers.get(issue.impact_scope, 1.0)
        total_annual += base * tables.value_per_conversion * 12
        total_cost += tables.implementation_cost(_effort(issue))

    roi = (total_annual - total_cost) / total_cost * 100 if total_cost else 0.0
    payback = total_cost / total_annual * 12 if total_annual else 0.0
    confidence = (
        sum(_confidence_or(i, 0.5) for i in issues) / len(issues) * 100 if issues else 0.0
    )

    return ROIProjections(
        annual_value=round_half_up(total_annual),
        implementation_cost=round_half_up(total_cost),
        roi_percentage=round_half_up(roi),
        payback_months=round_half_up(payback),
        confidence_level=round_half_up(confidence),
        breakdown=ROIBreakdown(
            high_impact=round_half_up(total_annual * 0.4),
            medium_impact=round_half_up(total_annual * 0.35),
            low_impact=round_half_up(total_annual * 0.25),
        ),
    )


def _roadmap(issues: Sequence[ScoredIssue], tables: ScoringTables) -> PortfolioRoadmap:
    ranked = sorted(
        issues,
        key=lambda i: i.business_impact.roi_score * _confidence_or(i, 0.5),
        reverse=True,
    )

    def items(effort: str, label: str, priority: str, limit: int) -> list[RoadmapItem]:
        return [
            RoadmapItem(title=i.description, effort=label, impact=i.impact_scope, priority=priority)
            for i in ranked
            if i.implementation.effort == effort
        ][:limit]

    total_days = sum(tables.effort_days_for(_effort(i)) for i in ranked)
    return PortfolioRoadmap(
        quick_wins=items("minutes", "< 30 minutes", "High", 3),
        week_one=items("hours", "1-2 days", "Medium", 2),
        strategic=items("days", "1-2 weeks", "Strategic", 2),
        estimated_timeline=f"{math.ceil(total_days / 7)} weeks",
    )


def _priority_matrix(issues: Sequence[ScoredIssue]) -> PriorityMatrix:
    matrix = PriorityMatrix()
    for issue in issues:
        high_impact = issue.severity == "critical" or issue.confidence > 0.8
        low_effort = issue.implementation.effort in ("minutes", "hours")
        if high_impact and low_effort:
            matrix.high_impact_low_effort.append(issue.description)
        elif high_impact:
            matrix.high_impact_high_effort.append(issue.description)
        elif low_effort:
            matrix.low_impact_low_effort.append(issue.description)
        else:
            matrix.low_impact_high_effort.append(issue.description)
    return matrix


def _ab_test_hypotheses(issues: Sequence[ScoredIssue]) -> list[ABTestHypothesis]:
    candidates = [i for i in issues if i.confidence >= 0.7][:3]
    return [
        ABTestHypothesis(
            hypothesis=f'Fixing "{i.description}" will improve {i.impact_scope} by 15-25%',
            test_duration="2-3 weeks" if i.severity == "critical" else "3-4 weeks",
            success_metric=_SUCCESS_METRICS.get(i.impact_scope, "Engagement Rate"),
            expected_lift=_EXPECTED_LIFT.get(i.severity, "10-20%"),
            test_complexity=_TEST_COMPLEXITY.get(_effort(i), "Medium"),
        )
        for i in candidates
    ]


def _overall_business_impact(issues: Sequence[ScoredIssue]) -> int:
    total_score = 0.0
    total_weight = 0.0
    for issue in issues:
        weight = _SEVERITY_WEIGHTS.get(issue.severity)
        if weight is None:
            continue
        total_score += weight * _confidence_or(issue, 0.5) * 100
        total_weight += weight
    return round_half_up(total_score / total_weight) if total_weight else 0


def _conversion_optimization(issues: Sequence[ScoredIssue], screen_type: str) -> ConversionOptimization:
    conversion_issues = [i for i in issues if i.impact_scope in ("conversion", "task-completion")]
    return ConversionOptimization(
        potential_lift=round_to(len(conversion_issues) * 0.05, 2),
        critical_barriers=sum(1 for i in conversion_issues if i.severity == "critical"),
        screen_optimization=_SCREEN_OPTIMIZATIONS.get(screen_type, "General UX improvements"),
        recommendations=[i.suggested_fix for i in conversion_issues[:3]],
    )
