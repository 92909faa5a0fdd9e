"""Tests for business context extraction."""

import pytest

from figmant.matching.context import default_business_context, extract_business_context


class TestUrgency:
    @pytest.mark.parametrize(
        "statement,expected",
        [
            ("Please fix this ASAP", "high"),
            ("We need it immediately", "high"),
            ("Fix this eventually", "low"),
            ("Improve it when possible", "low"),
            ("Urgent, though the rest can wait until eventually", "high"),
            ("The signup page feels heavy", "medium"),
            ("", "medium"),
        ],
    )
    def test_urgency(self, statement: str, expected: str) -> None:
        assert extract_business_context(statement).urgency == expected


class TestStakeholders:
    def test_follow_rule_order(self) -> None:
        ctx = extract_business_context("Marketing says the team keeps hearing from users")
        assert ctx.stakeholders == ["customers", "development_team", "marketing"]

    def test_executives(self) -> None:
        assert extract_business_context("The CEO is unhappy").stakeholders == ["executives"]

    def test_substring_matches_count(self) -> None:
        # "steam" contains "team"
        assert extract_business_context("Sales ran out of steam").stakeholders == ["development_team"]

    def test_default_stakeholder(self) -> None:
        assert extract_business_context("Pages load slowly").stakeholders == ["product_team"]


class TestTimeline:
    @pytest.mark.parametrize(
        "statement,expected",
        [
            ("Ship it this week", "within_month"),
            ("Ship it immediately", "within_month"),
            ("This week or next month", "within_quarter"),
            ("A long term project for next year", "within_year"),
            ("No dates yet", "within_quarter"),
        ],
    )
    def test_later_rules_override(self, statement: str, expected: str) -> None:
        assert extract_business_context(statement).timeline == expected


class TestTemplateContext:
    def test_defaults_without_template(self) -> None:
        ctx = extract_business_context("Anything at all")
        assert ctx.goals == ["improve_user_experience"]
        assert ctx.business_type == "saas"
        assert ctx.user_segment == "general"

    def test_template_values_win(self) -> None:
        ctx = extract_business_context(
            "Anything at all",
            {"goals": ["reduce_checkout_abandonment"], "business_type": "ecommerce", "user_segment": "shoppers"},
        )
        assert ctx.goals == ["reduce_checkout_abandonment"]
        assert ctx.business_type == "ecommerce"
        assert ctx.user_segment == "shoppers"

    def test_empty_template_goals_fall_back(self) -> None:
        assert extract_business_context("x", {"goals": []}).goals == ["improve_user_experience"]


class TestDefaultContext:
    def test_default_business_context(self) -> None:
        ctx = default_business_context()
        assert ctx.urgency == "medium"
        assert ctx.stakeholders == ["product_team"]
        assert ctx.goals == ["improve_user_experience"]
        assert ctx.business_type == "general"
        assert ctx.user_segment == "general"
        assert ctx.timeline == "within_quarter"
