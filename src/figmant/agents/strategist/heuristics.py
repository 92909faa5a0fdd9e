"""UX heuristics and anti-patterns, and the rules that pick them for a design."""

from __future__ import annotations

import logging

from pydantic import BaseModel

from figmant.schemas.strategist import VisionSummary

logger = logging.getLogger(__name__)


class UXHeuristic(BaseModel):
    id: str
    name: str
    principle: str
    application_guidelines: list[str]
    violation_indicators: list[str]
    measurement_criteria: list[str]


class AntiPattern(BaseModel):
    id: str  # key into the ROI projection tables
    name: str
    description: str
    triggers: list[str]
    business_impact: str
    detection_criteria: list[str]
    resolution_strategy: str


UX_HEURISTICS: dict[str, UXHeuristic] = {
    h.id: h
    for h in [
        UXHeuristic(
            id="fitts_law",
            name="Fitts' Law",
            principle="Time to acquire target is function of distance and size",
            application_guidelines=[
                "Place CTAs within optimal thumb zones on mobile",
                "Increase button size for critical actions",
                "Minimize cursor travel distance on desktop",
                "Use edge-based navigation for frequent actions",
            ],
            violation_indicators=[
                "Small touch targets (<44px on mobile)",
                "Critical buttons in hard-to-reach areas",
                "Excessive mouse movement for common tasks",
                "CTAs below fold without scrolling indicators",
            ],
            measurement_criteria=[
                "Touch target size compliance",
                "Distance from natural hand positions",
                "Task completion efficiency metrics",
            ],
        ),
        UXHeuristic(
            id="progressive_disclosure",
            name="Progressive Disclosure",
            principle="Present information in carefully prioritized layers",
            application_guidelines=[
                "Show essential options first, advanced in expandable sections",
                "Use multi-step forms for complex processes",
                "Implement accordion patterns for detailed information",
                "Provide overview before detailed views",
            ],
            violation_indicators=[
                "Information overload on single screens",
                "All form fields visible simultaneously",
                "No clear information hierarchy",
                "Expert-level options mixed with basic controls",
            ],
            measurement_criteria=[
                "Cognitive load assessment",
                "Time to find specific information",
                "User error rates on forms",
            ],
        ),
        UXHeuristic(
            id="cognitive_load",
            name="Cognitive Load Theory",
            principle="Minimize mental effort required to process information",
            application_guidelines=[
                "Limit choices to 7±2 items per decision point",
                "Use familiar patterns and conventions",
                "Provide clear visual hierarchy",
                "Implement chunking for complex information",
            ],
            violation_indicators=[
                "Too many options presented simultaneously",
                "Unclear information structure",
                "Inconsistent interaction patterns",
                "Missing or unclear feedback mechanisms",
            ],
            measurement_criteria=[
                "Decision time analysis",
                "Error rate tracking",
                "User satisfaction scores",
            ],
        ),
        UXHeuristic(
            id="recognition_over_recall",
            name="Recognition over Recall",
            principle="Make objects and actions visible rather than requiring memory",
            application_guidelines=[
                "Use clear, descriptive labels over icons",
                "Provide contextual help and tooltips",
                "Show current state and available actions",
                "Use breadcrumbs for navigation context",
            ],
            violation_indicators=[
                "Unlabeled icons without context",
                "Hidden navigation states",
                "Unclear current page/section indicators",
                "No contextual help for complex features",
            ],
            measurement_criteria=[
                "Task success rates without training",
                "Time to locate specific functions",
                "Support ticket volume",
            ],
        ),
        UXHeuristic(
            id="error_prevention",
            name="Error Prevention",
            principle="Prevent problems from occurring in the first place",
            application_guidelines=[
                "Use constraints and validation in real-time",
                "Provide clear format examples",
                "Implement confirmation dialogs for destructive actions",
                "Use smart defaults and auto-completion",
            ],
            violation_indicators=[
                "No input validation or constraints",
                "Unclear format requirements",
                "Easy to trigger destructive actions accidentally",
                "No recovery options for mistakes",
            ],
            measurement_criteria=[
                "Error occurrence frequency",
                "User recovery success rates",
                "Support burden reduction",
            ],
        ),
    ]
}


ANTI_PATTERNS: dict[str, AntiPattern] = {
    p.id: p
    for p in [
        AntiPattern(
            id="hidden_cta",
            name="Hidden Call-to-Action",
            description="Primary action buttons below fold or poorly positioned",
            triggers=[
                "CTA button positioned below 600px viewport height",
                "Primary action not visually prominent",
                "Multiple competing CTAs of equal weight",
            ],
            business_impact="15-40% reduction in conversion rates",
            detection_criteria=[
                "Button position analysis",
                "Visual hierarchy assessment",
                "Mobile viewport compliance",
            ],
            resolution_strategy=(
                "Reposition primary CTA above fold, increase visual prominence, "
                "implement sticky positioning for mobile"
            ),
        ),
        AntiPattern(
            id="form_overload",
            name="Form Cognitive Overload",
            description="Too many form fields presented simultaneously",
            triggers=[
                "More than 8 form fields visible at once",
                "No logical grouping or sections",
                "All fields marked as required",
            ],
            business_impact="25-60% increase in form abandonment",
            detection_criteria=[
                "Form field count analysis",
                "Required field ratio assessment",
                "Visual grouping evaluation",
            ],
            resolution_strategy=(
                "Implement progressive disclosure, use multi-step forms, "
                "prioritize essential fields only"
            ),
        ),
        AntiPattern(
            id="navigation_chaos",
            name="Navigation Chaos",
            description="Inconsistent or unclear navigation patterns",
            triggers=[
                "Multiple navigation paradigms",
                "Unclear current page indicators",
                "Inconsistent interaction patterns",
            ],
            business_impact="20-35% increase in bounce rates",
            detection_criteria=[
                "Navigation consistency analysis",
                "State indication assessment",
                "User flow complexity evaluation",
            ],
            resolution_strategy=(
                "Standardize navigation patterns, implement clear state indicators, "
                "simplify user flows"
            ),
        ),
        AntiPattern(
            id="contrast_violation",
            name="WCAG Contrast Violations",
            description="Insufficient color contrast affecting readability",
            triggers=[
                "Text contrast ratio below 4.5:1",
                "Interactive elements below 3:1 contrast",
                "Color-only information conveyance",
            ],
            business_impact="10-25% of users affected, legal compliance risk",
            detection_criteria=[
                "Automated contrast ratio analysis",
                "Color dependency assessment",
                "Accessibility compliance audit",
            ],
            resolution_strategy=(
                "Increase contrast ratios, add non-color indicators, "
                "implement dark mode compliance"
            ),
        ),
        AntiPattern(
            id="mobile_neglect",
            name="Mobile Experience Neglect",
            description="Poor mobile optimization affecting user experience",
            triggers=[
                "Touch targets smaller than 44px",
                "Horizontal scrolling required",
                "Text too small on mobile devices",
            ],
            business_impact="30-50% mobile conversion penalty",
            detection_criteria=[
                "Mobile viewport analysis",
                "Touch target size assessment",
                "Responsive behavior evaluation",
            ],
            resolution_strategy=(
                "Implement mobile-first design, optimize touch interactions, "
                "ensure responsive typography"
            ),
        ),
    ]
}


def _below(value: float | None, limit: float) -> bool:
    # A missing signal never counts as a violation.
    return value is not None and value < limit


def detect_anti_patterns(vision: VisionSummary) -> list[AntiPattern]:
    """Anti-patterns signalled by the vision summary, in catalogue order."""
    detected: list[AntiPattern] = []

    if any("below" in pos for pos in vision.cta_positioning) or vision.layout_density == "high":
        detected.append(ANTI_PATTERNS["hidden_cta"])
    if vision.form_complexity == "high" or vision.information_density == "overwhelming":
        detected.append(ANTI_PATTERNS["form_overload"])
    if vision.navigation_complexity == "high" or vision.navigation_consistency == "low":
        detected.append(ANTI_PATTERNS["navigation_chaos"])
    if _below(vision.color_contrast_score, 4.5) or vision.accessibility_flags:
        detected.append(ANTI_PATTERNS["contrast_violation"])
    if _below(vision.mobile_responsive_score, 70) or vision.touch_target_compliance is False:
        detected.append(ANTI_PATTERNS["mobile_neglect"])

    logger.debug("Anti-patterns detected: %s", [p.name for p in detected])
    return detected


def select_heuristics(problem_statement: str, vision: VisionSummary) -> list[UXHeuristic]:
    """Heuristics relevant to the statement and design. Cognitive load is always included."""
    statement = (problem_statement or "").lower()

    def mentions(*words: str) -> bool:
        return any(word in statement for word in words)

    selected = [UX_HEURISTICS["cognitive_load"]]
    if mentions("button", "cta", "mobile") or _below(vision.mobile_responsive_score, 80):
        selected.append(UX_HEURISTICS["fitts_law"])
    if mentions("form", "complex") or vision.layout_density == "high":
        selected.append(UX_HEURISTICS["progressive_disclosure"])
    if mentions("navigation", "confusing") or vision.navigation_consistency == "low":
        selected.append(UX_HEURISTICS["recognition_over_recall"])
    if mentions("error", "form", "checkout"):
        selected.append(UX_HEURISTICS["error_prevention"])

    logger.debug("Heuristics selected: %s", [h.name for h in selected])
    return selected
