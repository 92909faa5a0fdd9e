"""Keyword scoring of a user problem statement against stored templates.

The score is a cheap heuristic::

    min(1.0, word_overlap * 0.6
             + 0.2 per category keyword present in the statement
             + 0.1 if any urgency keyword is present
             + 0.15 if any business-impact keyword is present)

A best score below ``match_threshold`` is treated as no match and the
default business context is returned instead.

Only the first ``TEMPLATE_LIMIT`` templates of a library are scored.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from figmant.matching.context import default_business_context, extract_business_context
from figmant.matching.library import TemplateLibrary
from figmant.matching.rules import MatchingRules, load_matching_rules
from figmant.schemas.solutions import MatchResult, ProblemStatementTemplate

logger = logging.getLogger(__name__)

TEMPLATE_LIMIT = 10


def _words(text: str, min_length: int) -> list[str]:
    return [w for w in text.lower().split() if len(w) >= min_length]


def word_overlap(user_statement: str, template_statement: str, min_length: int = 3) -> float:
    """Share of user words that substring-match any template word, in either direction.

    The denominator is the longer of the two word lists so a short
    statement cannot fully match a long template.
    """
    user_words = _words(user_statement, min_length)
    template_words = _words(template_statement, min_length)
    if not user_words or not template_words:
        return 0.0
    matched = sum(
        1 for uw in user_words
        if any(uw in tw or tw in uw for tw in template_words)
    )
    return matched / max(len(user_words), len(template_words))


def score_statement(
    user_statement: str,
    template_statement: str,
    category: str,
    rules: MatchingRules | None = None,
) -> float:
    """Score one template against ``user_statement``; always within [0, 1]."""
    rules = rules or load_matching_rules()
    text = (user_statement or "").lower()

    score = word_overlap(text, template_statement or "", rules.min_word_length) * rules.word_weight

    for keyword in rules.category_keywords.get(category, []):
        if keyword in text:
            score += rules.category_boost

    if any(keyword in text for keyword in rules.urgency_keywords):
        score += rules.urgency_boost
    if any(keyword in text for keyword in rules.business_impact_keywords):
        score += rules.business_impact_boost

    return min(1.0, score)


def best_template(
    statement: str,
    templates: Sequence[ProblemStatementTemplate],
    rules: MatchingRules | None = None,
) -> tuple[ProblemStatementTemplate | None, float]:
    """Highest-scoring template and its score. Ties keep the earlier template."""
    rules = rules or load_matching_rules()
    best: ProblemStatementTemplate | None = None
    best_score = 0.0
    for template in templates:
        score = score_statement(statement, template.statement, template.category, rules)
        logger.debug("Template %s scored %.3f", template.id, score)
        if score > best_score:
            best, best_score = template, score
    return best, best_score


def match_problem_statement(
    statement: str,
    library: TemplateLibrary,
    rules: MatchingRules | None = None,
    solution_limit: int = 5,
    template_limit: int = TEMPLATE_LIMIT,
) -> MatchResult:
    """Match ``statement`` against the first ``template_limit`` templates and
    gather the linked solutions."""
    rules = rules or load_matching_rules()
    template, score = best_template(statement, library.templates[:template_limit], rules)

    if template is None or score < rules.match_threshold:
        logger.debug("No template reached %.2f (best %.3f); using default context",
                     rules.match_threshold, score)
        return MatchResult(extracted_context=default_business_context())

    result = MatchResult(
        matched_template=template,
        confidence=score,
        extracted_context=extract_business_context(statement, template.implied_context, rules),
        contextual_solutions=library.solutions_for(template.id, limit=solution_limit),
    )
    logger.debug("Matched template %s with confidence %.3f (%d solutions)",
                 template.id, score, len(result.contextual_solutions))
    return result
