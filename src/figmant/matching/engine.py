"""Hybrid solution engine: contextual solutions plus traditional UX fixes."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from figmant.matching.library import TemplateLibrary
from figmant.matching.matcher import match_problem_statement
from figmant.matching.rules import MatchingRules, load_matching_rules
from figmant.schemas.issues import Issue
from figmant.schemas.solutions import (
    ContextualSolution,
    MatchingDetails,
    MatchResult,
    Solution,
    SolutionResult,
    TestingData,
)

logger = logging.getLogger(__name__)

TRADITIONAL_LIMIT = 5
TRADITIONAL_IN_HYBRID = 2

SATISFACTION_PROMPTS = {
    "problem_statement": "How well did these business-context solutions address your specific challenge? (1-5 stars)",
    "hybrid": "Which solutions were most helpful: the business-context ones or traditional UX analysis? (Rate each 1-5)",
    "traditional": "How relevant were these traditional UX solutions to your business needs? (1-5 stars)",
}

_EFFORT_LEVELS = {"minutes": "low", "hours": "medium", "days": "high"}
_PRIORITY_IMPACT = {"critical": "high", "high": "high", "medium": "medium", "low": "low"}
_SEVERITY_IMPACT = {"critical": "high", "warning": "medium", "improvement": "low"}


def _impact_level(issue: Issue) -> str:
    business_impact = getattr(issue, "business_impact", None)
    if business_impact is not None:
        return _PRIORITY_IMPACT.get(business_impact.priority_level, "medium")
    return _SEVERITY_IMPACT.get(issue.severity, "medium")


def traditional_solution(issue: Issue, index: int) -> Solution:
    """Present an issue's suggested fix as a solution."""
    description = issue.description or issue.suggested_fix
    return Solution(
        id=f"traditional_{index}",
        title=description[:50] if description else "UX Improvement",
        description=description,
        category=issue.category or "ux",
        implementation_effort=_EFFORT_LEVELS.get(issue.implementation.effort, "medium"),
        business_impact=_impact_level(issue),
        confidence=0.8,
        source="traditional",
    )


def contextual_solution(solution: ContextualSolution) -> Solution:
    rate = solution.success_rate or 80
    return Solution(
        id=solution.id,
        title=solution.title,
        description=solution.recommendation,
        category="business_context",
        implementation_effort="medium",
        business_impact="high",
        confidence=rate / 100,
        source="contextual",
        stakeholder_communication=solution.stakeholder_communication,
    )


def find_solutions(
    issues: Sequence[Issue],
    user_problem_statement: str = "",
    library: TemplateLibrary | None = None,
    rules: MatchingRules | None = None,
) -> SolutionResult:
    """Combine problem-statement solutions with fixes for the detected issues.

    Contextual solutions are used only when the match is accepted
    (confidence at or above ``acceptance_threshold``) and the matched
    template has linked solutions; they are followed by the top two
    traditional ones. Otherwise every traditional solution is returned.
    The extracted context of an accepted match is kept either way, and
    matching details are recorded whenever a statement was matched.
    """
    rules = rules or load_matching_rules()
    traditional = [traditional_solution(issue, i) for i, issue in enumerate(issues[:TRADITIONAL_LIMIT])]

    match: MatchResult | None = None
    details: MatchingDetails | None = None
    if user_problem_statement.strip() and library is not None:
        match = match_problem_statement(user_problem_statement, library, rules)
        details = MatchingDetails(
            matched_template=match.matched_template,
            matching_confidence=match.confidence,
            extracted_context=match.extracted_context,
        )

    accepted = (
        match is not None
        and match.matched_template is not None
        and match.confidence >= rules.acceptance_threshold
    )
    contextual = [contextual_solution(s) for s in match.contextual_solutions] if accepted else []

    if contextual:
        approach = "hybrid" if traditional else "problem_statement"
        solutions = contextual + traditional[:TRADITIONAL_IN_HYBRID]
    else:
        approach = "traditional"
        solutions = traditional

    result = SolutionResult(
        approach=approach,
        solutions=solutions,
        confidence=match.confidence if approach == "problem_statement" else 0.8,
        business_context=match.extracted_context if accepted else None,
        testing_data=TestingData(
            traditional_count=len(traditional),
            contextual_count=len(contextual),
            user_satisfaction_prompt=SATISFACTION_PROMPTS[approach],
            matching_details=details,
        ),
    )

    logger.info(
        "Solution engine chose %s approach: %d contextual, %d traditional (match confidence %.2f)",
        result.approach,
        result.testing_data.contextual_count,
        result.testing_data.traditional_count,
        match.confidence if match else 0.0,
    )
    return result
