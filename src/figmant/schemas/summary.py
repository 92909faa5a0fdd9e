"""Pydantic models for the business summary and portfolio projections."""

from __future__ import annotations

from pydantic import BaseModel

from figmant.schemas.impact import ScoredIssue


class ImplementationRoadmap(BaseModel):
    """Issues bucketed by when they should be tackled."""

    immediate: list[ScoredIssue] = []   # top quick wins
    short_term: list[ScoredIssue] = []  # standard effort, high priority
    long_term: list[ScoredIssue] = []   # complex effort


class BusinessSummary(BaseModel):
    """Aggregate view of a list of scored issues."""

    total_potential_revenue: str = "$0"
    quick_wins_available: int = 0
    critical_issues_count: int = 0
    average_roi_score: float = 0.0
    implementation_roadmap: ImplementationRoadmap = ImplementationRoadmap()
    top_recommendation: str = ""
    quickest_win: str = ""
    highest_impact: str = ""


# ---------------------------------------------------------------------------
# Portfolio projections
# ---------------------------------------------------------------------------


class ROIBreakdown(BaseModel):
    high_impact: int = 0
    medium_impact: int = 0
    low_impact: int = 0


class ROIProjections(BaseModel):
    annual_value: int = 0
    implementation_cost: int = 0
    roi_percentage: int = 0
    payback_months: int = 0
    confidence_level: int = 0  # 0-100
    breakdown: ROIBreakdown = ROIBreakdown()


class RoadmapItem(BaseModel):
    title: str
    effort: str
    impact: str
    priority: str


class PortfolioRoadmap(BaseModel):
    quick_wins: list[RoadmapItem] = []
    week_one: list[RoadmapItem] = []
    strategic: list[RoadmapItem] = []
    estimated_timeline: str = "0 weeks"


class PriorityMatrix(BaseModel):
    """Issue descriptions split into impact/effort quadrants."""

    high_impact_low_effort: list[str] = []
    high_impact_high_effort: list[str] = []
    low_impact_low_effort: list[str] = []
    low_impact_high_effort: list[str] = []


class ABTestHypothesis(BaseModel):
    hypothesis: str
    test_duration: str
    success_metric: str
    expected_lift: str
    test_complexity: str


class ConversionOptimization(BaseModel):
    potential_lift: float = 0.0
    critical_barriers: int = 0
    screen_optimization: str = ""
    recommendations: list[str] = []


class PortfolioMetrics(BaseModel):
    """Screen-level projections across every issue found in one design."""

    roi_projections: ROIProjections = ROIProjections()
    implementation_roadmap: PortfolioRoadmap = PortfolioRoadmap()
    priority_matrix: PriorityMatrix = PriorityMatrix()
    ab_test_hypotheses: list[ABTestHypothesis] = []
    business_impact_score: int = 0
    conversion_optimization: ConversionOptimization = ConversionOptimization()
