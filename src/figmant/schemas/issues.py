"""Pydantic models for design issues produced by the critique pipeline."""

from pydantic import BaseModel, field_validator


class ElementLocation(BaseModel):
    """Bounding box of the annotated element, in pixels and percent of the canvas."""

    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    x_percent: float = 0
    y_percent: float = 0
    width_percent: float = 0
    height_percent: float = 0


class IssueElement(BaseModel):
    type: str = ""  # e.g. "button", "form", "navigation"
    location: ElementLocation = ElementLocation()


class Implementation(BaseModel):
    """How a fix would be built."""

    effort: str = ""  # "minutes", "hours", "days"
    code_snippet: str = ""
    design_guidance: str = ""


class IssueMetrics(BaseModel):
    affects_users: str = ""
    potential_improvement: str = ""


class Issue(BaseModel):
    """A single UX issue found in a design.

    Value fields are plain strings rather than enums so that an issue with an
    unexpected severity or category still scores (with default multipliers).
    """

    id: str
    level: str = ""  # "molecular", "component", "layout", "flow"
    severity: str = ""  # "critical", "warning", "improvement"
    category: str = ""  # "accessibility", "usability", "visual", "content", "performance"
    confidence: float = 0.0  # 0-1
    impact_scope: str = ""  # "user-trust", "task-completion", "conversion", "readability", "performance", "aesthetic"
    element: IssueElement = IssueElement()
    description: str = ""
    impact: str = ""
    suggested_fix: str = ""
    implementation: Implementation = Implementation()
    violated_patterns: list[str] = []
    rationale: list[str] = []
    metrics: IssueMetrics = IssueMetrics()

    @field_validator("confidence", mode="before")
    @classmethod
    def coerce_none_confidence(cls, v: object) -> object:
        return 0.0 if v is None else v

    @field_validator("implementation", "element", "metrics", mode="before")
    @classmethod
    def coerce_none_to_default(cls, v: object) -> object:
        return {} if v is None else v

    @field_validator("violated_patterns", "rationale", mode="before")
    @classmethod
    def coerce_str_to_list(cls, v: object) -> object:
        if v is None:
            return []
        if isinstance(v, str):
            return [v] if v else []
        return v
