"""Pydantic models for problem-statement matching and solution discovery."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, field_validator


class BusinessContext(BaseModel):
    """Business context extracted from a user's problem statement."""

    urgency: str = "medium"  # "low", "medium", "high"
    stakeholders: list[str] = ["product_team"]
    goals: list[str] = ["improve_user_experience"]
    business_type: str = "general"
    user_segment: str = "general"
    timeline: str = "within_quarter"


class ProblemStatementTemplate(BaseModel):
    """A stored problem statement used as a match candidate."""

    id: str
    statement: str
    category: str = ""  # e.g. "conversion_decline"
    implied_context: dict[str, Any] = {}
    context_refinement_questions: list[str] = []

    @field_validator("implied_context", mode="before")
    @classmethod
    def coerce_none_to_empty(cls, v: object) -> object:
        return {} if v is None else v


class ContextualSolution(BaseModel):
    """A pre-written recommendation tied to one or more templates."""

    id: str
    title: str
    recommendation: str = ""
    problem_statement_ids: list[str] = []
    success_rate: float | None = None  # percent
    expected_impact: dict[str, Any] = {}
    stakeholder_communication: dict[str, str] | None = None

    @field_validator("stakeholder_communication", mode="before")
    @classmethod
    def parse_json_string(cls, v: object) -> object:
        # Rows exported from the database may carry this column as a JSON string.
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
            except json.JSONDecodeError:
                return None
            return parsed if isinstance(parsed, dict) else None
        return v

    @field_validator("expected_impact", mode="before")
    @classmethod
    def coerce_none_to_empty(cls, v: object) -> object:
        return {} if v is None else v


class Solution(BaseModel):
    """A recommendation in display form, from either source."""

    id: str
    title: str
    description: str
    category: str
    implementation_effort: str = "medium"  # "low", "medium", "high"
    business_impact: str = "medium"  # "low", "medium", "high"
    confidence: float = 0.8
    source: str = "traditional"  # "traditional" or "contextual"
    stakeholder_communication: dict[str, str] | None = None


class MatchResult(BaseModel):
    """Outcome of matching a statement against the template library."""

    matched_template: ProblemStatementTemplate | None = None
    confidence: float = 0.1
    extracted_context: BusinessContext = BusinessContext()
    contextual_solutions: list[ContextualSolution] = []


class MatchingDetails(BaseModel):
    matched_template: ProblemStatementTemplate | None = None
    matching_confidence: float = 0.0
    extracted_context: BusinessContext = BusinessContext()


class TestingData(BaseModel):
    """Bookkeeping used to compare the contextual and traditional approaches."""

    traditional_count: int = 0
    contextual_count: int = 0
    user_satisfaction_prompt: str = ""
    matching_details: MatchingDetails | None = None


class SolutionResult(BaseModel):
    approach: str = "traditional"  # "traditional", "problem_statement", "hybrid"
    solutions: list[Solution] = []
    confidence: float = 0.8
    business_context: BusinessContext | None = None
    testing_data: TestingData = TestingData()
