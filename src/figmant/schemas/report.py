"""Final report model written to report.json."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from figmant.schemas.config import AnalysisConfig
from figmant.schemas.impact import ScoredIssue
from figmant.schemas.solutions import SolutionResult
from figmant.schemas.strategist import StrategistOutput
from figmant.schemas.summary import BusinessSummary, PortfolioMetrics


class ImpactReport(BaseModel):
    """The complete output of one analysis run."""

    generated_at: str = Field(default_factory=lambda: datetime.now().isoformat())
    config: AnalysisConfig
    issues: list[ScoredIssue] = []
    summary: BusinessSummary = BusinessSummary()
    portfolio: PortfolioMetrics | None = None
    solutions: SolutionResult | None = None
    strategist: StrategistOutput | None = None
