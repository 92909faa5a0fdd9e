"""Analysis pipeline: score issues, match the problem statement, run the strategist."""

from __future__ import annotations

import logging
from pathlib import Path

from figmant.agents.strategist.agent import StrategistAgent
from figmant.config import load_issues
from figmant.matching.engine import find_solutions
from figmant.matching.library import load_template_library
from figmant.output.markdown import render_markdown_report
from figmant.schemas.config import AnalysisConfig
from figmant.schemas.report import ImpactReport
from figmant.scoring.calculator import attach_business_impact
from figmant.scoring.projections import project_portfolio
from figmant.scoring.summary import by_roi, summarize
from figmant.shared.llm_client import DryRunClient, LLMClient
from figmant.shared.progress import PipelineProgress, console

logger = logging.getLogger(__name__)

REPORT_JSON = "report.json"
REPORT_MARKDOWN = "impact-report.md"


class ImpactPipeline:
    """Runs one analysis end to end.

    Pipeline flow:
        load issues → score → summarize + portfolio → solutions → strategist
    """

    def __init__(self, config: AnalysisConfig, client: LLMClient | DryRunClient | None = None) -> None:
        self.config = config
        self.client = client

    async def run(self, *, write: bool = True) -> ImpactReport:
        cfg = self.config
        report = ImpactReport(config=cfg)

        with PipelineProgress() as progress:
            progress.print_phase("Business Impact Scoring")
            progress.start_stage("Scoring")
            scored = attach_business_impact(
                load_issues(cfg.issues_path),
                cfg.screen_type,
                cfg.industry,
                cfg.monthly_traffic,
                cfg.current_conversion_rate,
            )
            report.issues = by_roi(scored)
            report.summary = summarize(report.issues)
            report.portfolio = project_portfolio(
                report.issues,
                cfg.screen_type,
                user_volume=cfg.monthly_traffic,
                conversion_baseline=cfg.current_conversion_rate,
            )
            progress.finish_stage("Scoring", f"{len(report.issues)} issues")

            progress.start_stage("Solutions")
            library = load_template_library(cfg.templates_path or None)
            report.solutions = find_solutions(scored, cfg.problem_statement, library)
            details = report.solutions.testing_data.matching_details
            if details and details.matched_template:
                progress.log_event(
                    "Solutions",
                    f"matched {details.matched_template.id} (confidence {details.matching_confidence:.2f})",
                )
            progress.finish_stage("Solutions", report.solutions.approach)

            if cfg.strategist.enabled and self.client is not None:
                progress.print_phase("UX Strategist")
                progress.start_stage("Strategist")
                agent = StrategistAgent(self.client, industry=cfg.industry, user_base=cfg.monthly_traffic)

                def on_progress(msg: str) -> None:
                    progress.update_stage("Strategist", msg)

                try:
                    report.strategist = await agent.run_strategy(
                        cfg.problem_statement, cfg.strategist, on_progress=on_progress,
                    )
                    progress.finish_stage("Strategist")
                except Exception as exc:
                    logger.exception("Strategist failed")
                    progress.fail_stage("Strategist", str(exc))

        if write:
            self.write_outputs(report)
        return report

    def write_outputs(self, report: ImpactReport) -> Path:
        out_dir = Path(self.config.output_directory)
        out_dir.mkdir(parents=True, exist_ok=True)

        json_path = out_dir / REPORT_JSON
        json_path.write_text(report.model_dump_json(indent=2))
        md_path = out_dir / REPORT_MARKDOWN
        md_path.write_text(render_markdown_report(report))

        console.print(f"[green]Markdown report written to:[/] {md_path}")
        console.print(f"[green]Report data saved to:[/] {json_path}  (use [bold]figmant render[/] to re-render)")
        return out_dir
