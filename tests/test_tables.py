"""Tests for the scoring tables loader and lookups."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from figmant.scoring.tables import load_scoring_tables

_MINIMAL_TABLES = """\
industry_benchmarks:
  {industry}:
    average_conversion_rate: 1.0
    average_order_value: 10
    accessibility_compliance: 50
    mobile_usage: 50
base_impact: {{}}
severity_multipliers: {{}}
scope_multipliers: {{}}
effort_divisors: {{}}
"""


class TestBundledTables:
    def test_loaded_once(self) -> None:
        assert load_scoring_tables() is load_scoring_tables()

    def test_known_industry(self) -> None:
        tables = load_scoring_tables()
        assert tables.benchmark_for("saas").average_order_value == 150
        assert tables.benchmark_for("  SaaS ").average_order_value == 150

    @pytest.mark.parametrize("industry", ["ecommerce", "retail", "", None])
    def test_unknown_industry_matches_default(self, industry) -> None:
        tables = load_scoring_tables()
        assert tables.benchmark_for(industry) == tables.benchmark_for("default")

    def test_base_impact(self) -> None:
        tables = load_scoring_tables()
        assert tables.base_impact_for("critical", "performance") == 20.0
        assert tables.base_impact_for("improvement", "content") == 4.0

    @pytest.mark.parametrize(
        "severity,category",
        [("critical", "visual"), ("warning", "content"), ("blocker", "usability"), ("", "")],
    )
    def test_unknown_base_impact_is_five(self, severity: str, category: str) -> None:
        assert load_scoring_tables().base_impact_for(severity, category) == 5.0

    def test_multiplier_defaults(self) -> None:
        tables = load_scoring_tables()
        assert tables.severity_multiplier("blocker") == 1.0
        assert tables.scope_multiplier("delight") == 1.0
        assert tables.effort_divisor("weeks") == 0.8
        assert tables.effort_divisor("days") == 0.5

    def test_screen_multipliers_fall_back_to_generic(self) -> None:
        tables = load_scoring_tables()
        assert tables.screen_multipliers_for("checkout")["conversion"] == 1.8
        assert tables.screen_multipliers_for("kiosk") == tables.screen_multipliers_for("generic")

    def test_implementation_cost_falls_back_to_hours(self) -> None:
        tables = load_scoring_tables()
        assert tables.implementation_cost("minutes") == 100
        assert tables.implementation_cost("") == 800


class TestLoadFromPath:
    def test_custom_file(self, tmp_path: Path) -> None:
        path = tmp_path / "tables.yml"
        path.write_text(_MINIMAL_TABLES.format(industry="default"))
        tables = load_scoring_tables(path)
        assert tables.benchmark_for("saas").average_order_value == 10
        assert tables.base_impact_for("critical", "accessibility") == 5.0

    def test_missing_default_industry(self, tmp_path: Path) -> None:
        path = tmp_path / "tables.yml"
        path.write_text(_MINIMAL_TABLES.format(industry="saas"))
        with pytest.raises(ValidationError, match="default"):
            load_scoring_tables(path)

    def test_file_not_found(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_scoring_tables("/nonexistent/tables.yml")

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "tables.yml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ValueError, match="YAML mapping"):
            load_scoring_tables(path)
