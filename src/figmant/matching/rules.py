"""Keyword rules for problem-statement matching, loaded from YAML."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, model_validator

_BUNDLED_RULES = Path(__file__).parent.parent / "data" / "matching_rules.yml"


class StakeholderRule(BaseModel):
    keywords: list[str]
    stakeholder: str


class TimelineRule(BaseModel):
    keywords: list[str]
    timeline: str


class ContextRules(BaseModel):
    high_urgency_keywords: list[str] = []
    low_urgency_keywords: list[str] = []
    stakeholders: list[StakeholderRule] = []
    default_stakeholder: str = "product_team"
    timelines: list[TimelineRule] = []  # later entries override earlier ones
    default_timeline: str = "within_quarter"


class MatchingRules(BaseModel):
    word_weight: float = 0.6
    min_word_length: int = 3

    category_boost: float = 0.2
    category_keywords: dict[str, list[str]] = {}

    urgency_boost: float = 0.1
    urgency_keywords: list[str] = []

    business_impact_boost: float = 0.15
    business_impact_keywords: list[str] = []

    match_threshold: float = 0.3
    acceptance_threshold: float = 0.4

    context: ContextRules = ContextRules()

    @model_validator(mode="after")
    def check_thresholds(self) -> "MatchingRules":
        for name in ("match_threshold", "acceptance_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")
        return self


def _read_rules(path: Path) -> MatchingRules:
    raw = yaml.safe_load(path.read_text())
    if not isinstance(raw, dict):
        raise ValueError(f"Matching rules must be a YAML mapping, got {type(raw).__name__}")
    return MatchingRules(**raw)


@lru_cache(maxsize=1)
def _bundled_rules() -> MatchingRules:
    return _read_rules(_BUNDLED_RULES)


def load_matching_rules(path: str | Path | None = None) -> MatchingRules:
    """Load matching rules from ``path``, or the bundled rules when omitted."""
    if path is None:
        return _bundled_rules()
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Matching rules not found: {path}")
    return _read_rules(path)
