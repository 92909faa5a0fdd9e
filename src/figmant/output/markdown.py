"""Markdown report builder: renders ImpactReport to a structured Markdown document."""

from __future__ import annotations

from figmant.schemas.impact import ScoredIssue
from figmant.schemas.report import ImpactReport
from figmant.scoring.currency import format_currency
from figmant.scoring.summary import by_roi

_PRIORITY_ICONS = {"critical": "🔴", "high": "🟠", "medium": "🟡", "low": "🟢"}


def render_markdown_report(report: ImpactReport) -> str:
    """Render an ImpactReport into a Markdown string."""
    sections: list[str] = []
    cfg = report.config

    sections.append(f"# Business Impact Report: {cfg.site_name or cfg.screen_type + ' screen'}\n")
    sections.append(f"*Generated: {report.generated_at}*\n")

    sections.append("## Analysis Configuration\n")
    sections.append(f"- **Industry:** {cfg.industry}")
    sections.append(f"- **Screen type:** {cfg.screen_type}")
    sections.append(f"- **Monthly traffic:** {cfg.monthly_traffic:,}")
    sections.append(f"- **Current conversion rate:** {cfg.current_conversion_rate:g}%")
    if cfg.problem_statement:
        sections.append(f"- **Problem statement:** \"{cfg.problem_statement}\"")
    sections.append("")

    # Summary
    s = report.summary
    sections.append("## Business Summary\n")
    sections.append("| Metric | Value |")
    sections.append("|--------|-------|")
    sections.append(f"| Potential monthly revenue | {s.total_potential_revenue} |")
    sections.append(f"| Quick wins available | {s.quick_wins_available} |")
    sections.append(f"| Critical issues | {s.critical_issues_count} |")
    sections.append(f"| Average ROI score | {s.average_roi_score:g} |")
    sections.append("")
    sections.append(f"- **Top recommendation:** {s.top_recommendation}")
    sections.append(f"- **Quickest win:** {s.quickest_win}")
    sections.append(f"- **Highest impact:** {s.highest_impact}")
    sections.append("")

    roadmap = s.implementation_roadmap
    if roadmap.immediate or roadmap.short_term or roadmap.long_term:
        sections.append("### Implementation Roadmap\n")
        for label, bucket in (
            ("Immediate", roadmap.immediate),
            ("Short term", roadmap.short_term),
            ("Long term", roadmap.long_term),
        ):
            if not bucket:
                continue
            sections.append(f"**{label}:**")
            for issue in bucket:
                sections.append(f"- {issue.description} (ROI {issue.business_impact.roi_score:g})")
            sections.append("")

    # Issues
    if report.issues:
        sections.append("## Scored Issues\n")
        sections.append("| # | Priority | Issue | ROI | Monthly | Annual | Effort |")
        sections.append("|---|----------|-------|-----|---------|--------|--------|")
        for i, issue in enumerate(by_roi(report.issues), 1):
            sections.append(_issue_row(i, issue))
        sections.append("")

        sections.append("### Issue Details\n")
        for issue in by_roi(report.issues):
            sections.extend(_issue_details(issue))

    # Portfolio
    if report.portfolio:
        p = report.portfolio
        roi = p.roi_projections
        sections.append("## Portfolio Projections\n")
        sections.append(f"- **Annual value:** {format_currency(roi.annual_value)}")
        sections.append(f"- **Implementation cost:** {format_currency(roi.implementation_cost)}")
        sections.append(f"- **ROI:** {roi.roi_percentage}% (payback {roi.payback_months} months)")
        sections.append(f"- **Confidence:** {roi.confidence_level}%")
        sections.append(f"- **Business impact score:** {p.business_impact_score}/100")
        sections.append(f"- **Estimated timeline:** {p.implementation_roadmap.estimated_timeline}")
        sections.append("")

        if p.ab_test_hypotheses:
            sections.append("### A/B Test Hypotheses\n")
            for h in p.ab_test_hypotheses:
                sections.append(f"- {h.hypothesis}")
                sections.append(
                    f"  - Metric: {h.success_metric} | Expected lift: {h.expected_lift} "
                    f"| Duration: {h.test_duration} | Complexity: {h.test_complexity}"
                )
            sections.append("")

        opt = p.conversion_optimization
        sections.append("### Conversion Optimization\n")
        sections.append(f"- **Focus:** {opt.screen_optimization}")
        sections.append(f"- **Critical barriers:** {opt.critical_barriers}")
        for rec in opt.recommendations:
            sections.append(f"- {rec}")
        sections.append("")

    # Solutions
    if report.solutions and report.solutions.solutions:
        sol = report.solutions
        sections.append("## Recommended Solutions\n")
        sections.append(f"*Approach: {sol.approach} (confidence {sol.confidence:.0%})*\n")
        if sol.business_context:
            ctx = sol.business_context
            sections.append(
                f"Business context: urgency **{ctx.urgency}**, timeline **{ctx.timeline}**, "
                f"stakeholders {', '.join(ctx.stakeholders)}\n"
            )
        for solution in sol.solutions:
            tag = "Business context" if solution.source == "contextual" else "UX analysis"
            sections.append(f"#### {solution.title}\n")
            sections.append(
                f"*{tag}* | Effort: {solution.implementation_effort} "
                f"| Impact: {solution.business_impact} | Confidence: {solution.confidence:.0%}\n"
            )
            sections.append(f"{solution.description}\n")
            if solution.stakeholder_communication:
                sections.append("**Stakeholder communication:**")
                for audience, message in solution.stakeholder_communication.items():
                    sections.append(f"- *{audience.replace('_', ' ')}*: {message}")
                sections.append("")
        if sol.testing_data.user_satisfaction_prompt:
            sections.append(f"> {sol.testing_data.user_satisfaction_prompt}\n")

    # Strategist
    if report.strategist:
        st = report.strategist
        sections.append("## UX Strategy\n")
        if st.diagnosis:
            sections.append(f"**Diagnosis:** {st.diagnosis}\n")
        if st.strategic_rationale:
            sections.append(f"**Rationale:** {st.strategic_rationale}\n")
        for rec in sorted(st.expert_recommendations, key=lambda r: r.priority or 99):
            sections.append(f"#### P{rec.priority}: {rec.title}\n")
            sections.append(f"{rec.recommendation}\n")
            if rec.expected_impact:
                sections.append(f"- **Expected impact:** {rec.expected_impact}")
            if rec.implementation_effort:
                sections.append(f"- **Effort:** {rec.implementation_effort} ({rec.timeline or 'timeline n/a'})")
            if rec.ux_principles_applied:
                sections.append(f"- **Principles:** {', '.join(rec.ux_principles_applied)}")
            if rec.validation_method:
                sections.append(f"- **Validation:** {rec.validation_method}")
            sections.append("")
        ab = st.ab_test_framework
        if ab.primary_hypothesis:
            sections.append(f"**Primary hypothesis:** {ab.primary_hypothesis} ({ab.estimated_test_duration})\n")

    return "\n".join(sections)


def _issue_row(rank: int, issue: ScoredIssue) -> str:
    bi = issue.business_impact
    icon = _PRIORITY_ICONS.get(bi.priority_level, "⚪")
    return (
        f"| {rank} | {icon} {bi.priority_level} | {issue.description} | {bi.roi_score:g} "
        f"| {bi.revenue_impact.monthly_increase} | {bi.revenue_impact.annual_projection} "
        f"| {bi.implementation_analysis.effort_category} |"
    )


def _issue_details(issue: ScoredIssue) -> list[str]:
    bi = issue.business_impact
    lines = [f"#### {issue.description} (`{issue.id}`)\n"]
    lines.append(f"**{issue.severity} / {issue.category}** | Scope: {issue.impact_scope or 'n/a'}\n")
    if issue.suggested_fix:
        lines.append(f"**Fix:** {issue.suggested_fix}\n")
    lines.append(f"- Revenue: {bi.revenue_impact.methodology} ({bi.revenue_impact.confidence_level} confidence)")
    lines.append(
        f"- Implementation: {bi.implementation_analysis.time_estimate} "
        f"({', '.join(bi.implementation_analysis.resource_requirements)})"
    )
    if issue.category == "accessibility":
        acc = bi.accessibility_impact
        lines.append(f"- Accessibility: {acc.affected_user_percentage} of users, {acc.compliance_level}")
    lines.append("")
    return lines
