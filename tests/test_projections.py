"""Tests for portfolio projections across a screen's issues."""

import pytest

from figmant.scoring.calculator import attach_business_impact
from figmant.scoring.projections import project_portfolio


@pytest.fixture
def scored(sample_issues):
    return attach_business_impact(sample_issues)


class TestEmptyPortfolio:
    def test_zeros_without_division_errors(self) -> None:
        metrics = project_portfolio([])
        roi = metrics.roi_projections
        assert (roi.annual_value, roi.implementation_cost, roi.roi_percentage) == (0, 0, 0)
        assert roi.payback_months == 0
        assert roi.confidence_level == 0
        assert metrics.business_impact_score == 0
        assert metrics.implementation_roadmap.estimated_timeline == "0 weeks"
        assert metrics.ab_test_hypotheses == []


class TestRoiProjections:
    def test_checkout_screen(self, scored) -> None:
        roi = project_portfolio(scored, "checkout").roi_projections
        # 40,500 (critical, ×1.8 conversion) + 8,400 + 2,700
        assert roi.annual_value == 51_600
        assert roi.implementation_cost == 4_900
        assert roi.roi_percentage == 953
        assert roi.payback_months == 1
        assert roi.confidence_level == 77
        assert roi.breakdown.high_impact == 20_640
        assert roi.breakdown.medium_impact == 18_060
        assert roi.breakdown.low_impact == 12_900

    def test_unknown_screen_uses_generic_multipliers(self, scored) -> None:
        generic = project_portfolio(scored, "generic").roi_projections
        kiosk = project_portfolio(scored, "kiosk").roi_projections
        assert kiosk == generic
        assert generic.annual_value == 22_500 + 8_400 + 2_700


class TestRoadmapAndMatrix:
    def test_roadmap(self, scored) -> None:
        roadmap = project_portfolio(scored).implementation_roadmap
        assert [i.title for i in roadmap.quick_wins] == ["Checkout button text fails contrast"]
        assert roadmap.quick_wins[0].effort == "< 30 minutes"
        assert [i.title for i in roadmap.week_one] == ["Signup form asks for twelve fields"]
        assert [i.title for i in roadmap.strategic] == ["Hero image is low resolution"]
        assert roadmap.estimated_timeline == "1 weeks"

    def test_priority_matrix(self, scored) -> None:
        matrix = project_portfolio(scored).priority_matrix
        assert matrix.high_impact_low_effort == ["Checkout button text fails contrast"]
        assert matrix.low_impact_low_effort == ["Signup form asks for twelve fields"]
        assert matrix.low_impact_high_effort == ["Hero image is low resolution"]
        assert matrix.high_impact_high_effort == []


class TestHypothesesAndScores:
    def test_ab_tests_for_confident_issues(self, scored) -> None:
        hypotheses = project_portfolio(scored).ab_test_hypotheses
        assert len(hypotheses) == 2
        assert hypotheses[0].test_duration == "2-3 weeks"
        assert hypotheses[0].success_metric == "Conversion Rate"
        assert hypotheses[0].test_complexity == "Low"
        assert hypotheses[1].success_metric == "Task Completion Rate"
        assert hypotheses[1].expected_lift == "10-20%"

    def test_business_impact_score(self, scored) -> None:
        # (0.5×100 + 0.3×70 + 0.2×60) / (0.5 + 0.3 + 0.2)
        assert project_portfolio(scored).business_impact_score == 83

    def test_conversion_optimization(self, scored) -> None:
        opt = project_portfolio(scored, "checkout").conversion_optimization
        assert opt.potential_lift == pytest.approx(0.1)
        assert opt.critical_barriers == 1
        assert opt.screen_optimization == "Streamline payment flow and reduce form friction"
        assert len(opt.recommendations) == 2
