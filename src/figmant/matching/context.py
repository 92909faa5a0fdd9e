"""Business context extraction from a free-text problem statement.

All checks are case-insensitive substring checks against the lowercased
statement, so ``"user"`` also fires on ``"users"`` and ``"team"`` on
``"steam"``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from figmant.matching.rules import ContextRules, MatchingRules, load_matching_rules
from figmant.schemas.solutions import BusinessContext

logger = logging.getLogger(__name__)


def default_business_context() -> BusinessContext:
    """The context used when no template matches."""
    return BusinessContext()


def _mentions(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def _urgency(text: str, rules: ContextRules) -> str:
    if _mentions(text, rules.high_urgency_keywords):
        return "high"
    if _mentions(text, rules.low_urgency_keywords):
        return "low"
    return "medium"


def _stakeholders(text: str, rules: ContextRules) -> list[str]:
    found = [rule.stakeholder for rule in rules.stakeholders if _mentions(text, rule.keywords)]
    return found or [rules.default_stakeholder]


def _timeline(text: str, rules: ContextRules) -> str:
    timeline = rules.default_timeline
    for rule in rules.timelines:
        if _mentions(text, rule.keywords):
            timeline = rule.timeline
    return timeline


def extract_business_context(
    statement: str,
    template_context: Mapping[str, Any] | None = None,
    rules: MatchingRules | None = None,
) -> BusinessContext:
    """Derive urgency, stakeholders and timeline from ``statement``.

    Goals, business type and user segment are read from the matched
    template's implied context.
    """
    rules = rules or load_matching_rules()
    template_context = template_context or {}
    text = (statement or "").lower()

    context = BusinessContext(
        urgency=_urgency(text, rules.context),
        stakeholders=_stakeholders(text, rules.context),
        goals=list(template_context.get("goals") or ["improve_user_experience"]),
        business_type=template_context.get("business_type") or "saas",
        user_segment=template_context.get("user_segment") or "general",
        timeline=_timeline(text, rules.context),
    )
    logger.debug("Extracted context: urgency=%s stakeholders=%s timeline=%s",
                 context.urgency, context.stakeholders, context.timeline)
    return context
