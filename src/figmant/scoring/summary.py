"""Aggregate scored issues into a business summary and implementation roadmap."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from figmant.schemas.impact import ScoredIssue
from figmant.schemas.summary import BusinessSummary, ImplementationRoadmap
from figmant.scoring.currency import format_currency, parse_currency, round_to

logger = logging.getLogger(__name__)


def by_roi(issues: Sequence[ScoredIssue]) -> list[ScoredIssue]:
    """Return a copy sorted by ``roi_score``, highest first (stable)."""
    return sorted(issues, key=lambda i: i.business_impact.roi_score, reverse=True)


def summarize(issues: Sequence[ScoredIssue]) -> BusinessSummary:
    """Summarize scored issues for display.

    Monthly revenue strings are parsed back out of their ``"$1,234"`` form
    and summed.
    """
    ranked = by_roi(issues)
    quick_wins = [i for i in ranked if i.business_impact.implementation_analysis.effort_category == "quick-win"]
    critical = [i for i in ranked if i.business_impact.priority_level == "critical"]

    total_monthly = sum(parse_currency(i.business_impact.revenue_impact.monthly_increase) for i in issues)
    total_roi = sum(i.business_impact.roi_score for i in issues)

    roadmap = ImplementationRoadmap(
        immediate=quick_wins[:3],
        short_term=[
            i for i in ranked
            if i.business_impact.implementation_analysis.effort_category == "standard"
            and i.business_impact.priority_level == "high"
        ][:5],
        long_term=[
            i for i in ranked
            if i.business_impact.implementation_analysis.effort_category == "complex"
        ],
    )

    summary = BusinessSummary(
        total_potential_revenue=format_currency(total_monthly),
        quick_wins_available=len(quick_wins),
        critical_issues_count=len(critical),
        average_roi_score=round_to(total_roi / len(issues), 1) if issues else 0.0,
        implementation_roadmap=roadmap,
        top_recommendation=ranked[0].description if ranked else "No issues found",
        quickest_win=quick_wins[0].description if quick_wins else "No quick wins available",
        highest_impact=ranked[0].description if ranked else "No high impact items",
    )
    logger.debug(
        "Summarized %d issues: %s potential, %d quick wins, %d critical",
        len(issues), summary.total_potential_revenue,
        summary.quick_wins_available, summary.critical_issues_count,
    )
    return summary
