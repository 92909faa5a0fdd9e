"""Tests for the business summary aggregator."""

from figmant.scoring.calculator import attach_business_impact
from figmant.scoring.currency import parse_currency
from figmant.scoring.summary import by_roi, summarize


def _scored(make_issue, rows: list[dict]):
    issues = [make_issue(id=f"issue-{i}", description=f"Issue {i}", **fields) for i, fields in enumerate(rows)]
    return attach_business_impact(issues)


class TestByRoi:
    def test_descending_and_stable(self, make_issue) -> None:
        scored = _scored(make_issue, [
            {"severity": "improvement", "category": "visual", "effort": "days"},
            {"severity": "critical", "category": "performance", "effort": "minutes"},
            {"severity": "improvement", "category": "visual", "effort": "days"},
        ])
        ranked = by_roi(scored)
        assert [i.id for i in ranked] == ["issue-1", "issue-0", "issue-2"]


class TestSummarize:
    def test_empty(self) -> None:
        summary = summarize([])
        assert summary.total_potential_revenue == "$0"
        assert summary.quick_wins_available == 0
        assert summary.critical_issues_count == 0
        assert summary.average_roi_score == 0.0
        assert summary.top_recommendation == "No issues found"
        assert summary.quickest_win == "No quick wins available"
        assert summary.highest_impact == "No high impact items"

    def test_counts_and_headlines(self, sample_issues) -> None:
        scored = attach_business_impact(sample_issues)
        summary = summarize(scored)

        assert summary.quick_wins_available == 1
        assert summary.critical_issues_count == 1
        assert summary.top_recommendation == "Checkout button text fails contrast"
        assert summary.quickest_win == "Checkout button text fails contrast"
        assert summary.highest_impact == summary.top_recommendation

    def test_total_revenue_sums_parsed_strings(self, sample_issues) -> None:
        scored = attach_business_impact(sample_issues)
        expected = sum(parse_currency(i.business_impact.revenue_impact.monthly_increase) for i in scored)
        assert parse_currency(summarize(scored).total_potential_revenue) == expected

    def test_average_roi_one_decimal(self, make_issue) -> None:
        # ROI 4.0 and 31.5 average to 17.75, shown as 17.8
        scored = _scored(make_issue, [
            {"severity": "blocker", "category": "magic", "confidence": 1.0, "impact_scope": "delight"},
            {"severity": "critical", "category": "accessibility", "confidence": 1.0, "effort": "minutes"},
        ])
        assert summarize(scored).average_roi_score == 17.8

    def test_roadmap_buckets(self, make_issue) -> None:
        rows = [{"severity": "critical", "category": "performance", "confidence": 1.0, "effort": "minutes"}] * 4
        rows += [{"severity": "critical", "category": "usability", "confidence": 0.7, "effort": "hours"}] * 6
        rows += [{"severity": "improvement", "category": "visual", "effort": "days"}] * 2
        summary = summarize(_scored(make_issue, rows))

        roadmap = summary.implementation_roadmap
        assert summary.quick_wins_available == 4
        assert len(roadmap.immediate) == 3
        assert len(roadmap.short_term) == 5
        assert len(roadmap.long_term) == 2
        assert all(
            i.business_impact.implementation_analysis.effort_category == "complex" for i in roadmap.long_term
        )
