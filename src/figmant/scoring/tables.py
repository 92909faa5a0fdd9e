"""Scoring tables: industry benchmarks and impact multipliers loaded from YAML."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, model_validator

_BUNDLED_TABLES = Path(__file__).parent.parent / "data" / "scoring_tables.yml"

DEFAULT_INDUSTRY = "default"


class IndustryBenchmark(BaseModel):
    average_conversion_rate: float  # percent
    average_order_value: float  # dollars
    accessibility_compliance: float  # percent
    mobile_usage: float  # percent


class ScoringTables(BaseModel):
    """Constant configuration for the business-impact calculator.

    Every accessor is total: unknown keys resolve to the table's default.
    """

    industry_benchmarks: dict[str, IndustryBenchmark]
    base_impact: dict[str, float]
    base_impact_default: float = 5.0
    severity_multipliers: dict[str, float]
    severity_multiplier_default: float = 1.0
    scope_multipliers: dict[str, float]
    scope_multiplier_default: float = 1.0
    effort_divisors: dict[str, float]
    effort_divisor_default: float = 0.8

    screen_multipliers: dict[str, dict[str, float]] = {}
    affected_user_share: dict[str, float] = {}
    value_per_conversion: float = 50
    implementation_costs: dict[str, float] = {}
    effort_days: dict[str, float] = {}

    @model_validator(mode="after")
    def check_has_default_industry(self) -> "ScoringTables":
        if DEFAULT_INDUSTRY not in self.industry_benchmarks:
            raise ValueError("industry_benchmarks must define a 'default' entry")
        return self

    def benchmark_for(self, industry: str | None) -> IndustryBenchmark:
        key = (industry or "").strip().lower()
        return self.industry_benchmarks.get(key) or self.industry_benchmarks[DEFAULT_INDUSTRY]

    def base_impact_for(self, severity: str, category: str) -> float:
        return self.base_impact.get(f"{severity}-{category}", self.base_impact_default)

    def severity_multiplier(self, severity: str) -> float:
        return self.severity_multipliers.get(severity, self.severity_multiplier_default)

    def scope_multiplier(self, impact_scope: str) -> float:
        return self.scope_multipliers.get(impact_scope, self.scope_multiplier_default)

    def effort_divisor(self, effort: str) -> float:
        return self.effort_divisors.get(effort, self.effort_divisor_default)

    def screen_multipliers_for(self, screen_type: str) -> dict[str, float]:
        return self.screen_multipliers.get(screen_type) or self.screen_multipliers.get("generic", {})

    def implementation_cost(self, effort: str) -> float:
        return self.implementation_costs.get(effort, self.implementation_costs.get("hours", 800))

    def effort_days_for(self, effort: str) -> float:
        return self.effort_days.get(effort, 1)


def _read_tables(path: Path) -> ScoringTables:
    raw = yaml.safe_load(path.read_text())
    if not isinstance(raw, dict):
        raise ValueError(f"Scoring tables must be a YAML mapping, got {type(raw).__name__}")
    return ScoringTables(**raw)


@lru_cache(maxsize=1)
def _bundled_tables() -> ScoringTables:
    return _read_tables(_BUNDLED_TABLES)


def load_scoring_tables(path: str | Path | None = None) -> ScoringTables:
    """Load scoring tables from ``path``, or the bundled tables when omitted.

    The bundled tables are parsed once per process.
    """
    if path is None:
        return _bundled_tables()
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Scoring tables not found: {path}")
    return _read_tables(path)
