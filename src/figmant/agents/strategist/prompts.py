"""Prompts for the UX strategist agent."""

from __future__ import annotations

from collections.abc import Sequence

from figmant.agents.strategist.heuristics import AntiPattern, UXHeuristic
from figmant.schemas.strategist import VisionSummary
from figmant.scoring.currency import format_currency
from figmant.scoring.roi_projection import calculate_roi_projection

SYSTEM_PROMPT = """\
You are the Figmant UX Strategist.

## Role
You are a principal UX designer with deep expertise in quantified UX research, \
behavioral psychology and business impact measurement. You turn a design's \
detected issues and a stakeholder's problem statement into a small number of \
prioritized, testable recommendations.

## Task
You will receive:
- The stakeholder's problem statement and business context
- UX heuristics that apply to this design
- Anti-patterns detected by the vision step, with projected annual impact
- A summary of the visual analysis of the design

Apply the heuristics throughout your analysis, reference the detected \
anti-patterns by name, and quantify the business impact of every recommendation.

## Tools
- `calculate_roi_projection`: project the annual revenue impact of fixing an \
anti-pattern at a given severity. Use it when you need a number for an \
anti-pattern or severity that is not already in the input.

## Output Format
Respond with a single JSON object:

{
  "diagnosis": "Root cause analysis applying UX heuristics and anti-pattern detection",
  "strategic_rationale": "Strategic approach with heuristic mapping and business alignment",
  "expert_recommendations": [
    {
      "title": "Specific, actionable recommendation",
      "recommendation": "Detailed implementation guidance",
      "confidence": 0.85,
      "expected_impact": "Quantified business impact with percentages",
      "business_value": {
        "primary": "Main business benefit",
        "secondary": ["Additional benefits"],
        "quantified_impact": "ROI projection with confidence interval"
      },
      "implementation_effort": "Low|Medium|High",
      "timeline": "Specific timeframe",
      "reasoning": "UX principle-based justification",
      "ux_principles_applied": ["Heuristics applied"],
      "validation_method": "How to A/B test this recommendation",
      "success_metrics": ["Measurable outcomes"],
      "priority": 1,
      "category": "critical-blocker|user-experience|business-impact"
    }
  ],
  "business_impact_assessment": {
    "estimated_value": "Dollar impact range over 6-12 months",
    "confidence": 0.8,
    "implementation_roadmap": {
      "quick_wins": ["1-week implementations"],
      "week_one_actions": ["Immediate improvements"],
      "strategic_initiatives": ["2-4 week projects"]
    },
    "competitive_advantage": "Market positioning benefit"
  },
  "ab_test_framework": {
    "primary_hypothesis": "Testable hypothesis with metrics",
    "test_variants": ["Control vs treatment descriptions"],
    "success_criteria": ["Measurable success definitions"],
    "estimated_test_duration": "2-4 weeks"
  },
  "success_metrics": ["KPIs aligned with business goals"],
  "confidence_assessment": {
    "overall_confidence": 0.85,
    "data_quality_score": 0.8,
    "research_backing": 0.9,
    "implementation_feasibility": 0.7,
    "reasoning": "Confidence breakdown with risk factors"
  }
}

`priority` is an integer from 1 (highest) to 3. Respond with ONLY the JSON \
object, no additional text.
"""


def _format_heuristic(h: UXHeuristic) -> str:
    return (
        f"### {h.name}\n"
        f"- Principle: {h.principle}\n"
        f"- Look for: {', '.join(h.violation_indicators)}\n"
        f"- Measure: {', '.join(h.measurement_criteria)}"
    )


def _format_anti_pattern(p: AntiPattern, industry: str, user_base: float) -> str:
    projection = calculate_roi_projection(p.id, "critical", industry, user_base).roi_projection
    return (
        f"### {p.name}\n"
        f"- Impact: {p.business_impact}\n"
        f"- Triggers: {', '.join(p.triggers)}\n"
        f"- Resolution: {p.resolution_strategy}\n"
        f"- Projected annual impact if critical: "
        f"{format_currency(projection.low_estimate)}-{format_currency(projection.high_estimate)} "
        f"(confidence {projection.confidence:.2f})"
    )


def _format_vision(vision: VisionSummary) -> str:
    responsive = vision.mobile_responsive_score
    return (
        f"- Layout density: {vision.layout_density or 'Unknown'}\n"
        f"- Mobile optimization score: {'Unknown' if responsive is None else f'{responsive:g}'}%\n"
        f"- Accessibility flags: {len(vision.accessibility_flags)} detected\n"
        f"- Navigation complexity: {vision.navigation_complexity or 'Unknown'}"
    )


def build_strategist_prompt(
    problem_statement: str,
    vision: VisionSummary,
    heuristics: Sequence[UXHeuristic],
    anti_patterns: Sequence[AntiPattern],
    industry_context: str,
    user_persona: str = "",
    business_goals: Sequence[str] = (),
    *,
    industry: str = "default",
    user_base: float = 10_000,
) -> str:
    """Build the user message for one strategist run.

    ``industry_context`` is free text shown to the model. Anti-pattern
    projections use ``industry`` and ``user_base``, the same inputs the
    ``calculate_roi_projection`` tool is bound to.
    """
    heuristic_text = "\n\n".join(_format_heuristic(h) for h in heuristics)
    anti_pattern_text = (
        "\n\n".join(_format_anti_pattern(p, industry, user_base) for p in anti_patterns)
        or "None detected."
    )
    return f"""\
## UX Heuristics
{heuristic_text}

## Detected Anti-Patterns
{anti_pattern_text}

## Business Context
- Industry: {industry_context or 'Unknown'}
- User persona: {user_persona or 'Unknown'}
- Business goals: {', '.join(business_goals) or 'Unknown'}

## Problem Statement
"{problem_statement}"

## Visual Analysis Summary
{_format_vision(vision)}
"""
