"""Typer CLI: ``figmant score``, ``match``, ``analyze``, ``render`` and ``validate``."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from figmant.config import load_config, load_issues

# Load .env file from project root (if it exists)
load_dotenv()

app = typer.Typer(
    name="figmant",
    help="Figmant: business-impact scoring and solution matching for design critiques.",
    no_args_is_help=True,
)
console = Console()

_PRIORITY_STYLES = {"critical": "red", "high": "orange1", "medium": "yellow", "low": "green"}


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )
    # httpx logs every HTTP request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


@app.command()
def validate(
    config: Path = typer.Option(..., "--config", "-c", help="Path to figmant-config.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate a configuration file without running the analysis."""
    _setup_logging(verbose)

    try:
        cfg = load_config(config)
        issues = load_issues(cfg.issues_path)
    except Exception as exc:
        console.print(f"[red]Config validation failed:[/] {exc}")
        raise typer.Exit(code=1)

    console.print("[green]Config is valid![/]\n")
    console.print(f"  Issues:       {cfg.issues_path} ({len(issues)} issues)")
    console.print(f"  Industry:     {cfg.industry}")
    console.print(f"  Screen type:  {cfg.screen_type}")
    console.print(f"  Traffic:      {cfg.monthly_traffic:,} visitors/month at {cfg.current_conversion_rate:g}%")
    console.print(f"  Templates:    {cfg.templates_path or '(bundled)'}")
    console.print(f"  Strategist:   {'enabled' if cfg.strategist.enabled else 'disabled'}")
    console.print(f"  Output dir:   {cfg.output_directory}")


@app.command()
def score(
    issues: Path = typer.Option(..., "--issues", "-i", help="JSON or YAML file of issues."),
    industry: str = typer.Option("default", "--industry", help="e-commerce, saas, fintech, healthcare or default."),
    screen_type: str = typer.Option("generic", "--screen-type", "-s"),
    traffic: int = typer.Option(10_000, "--traffic", help="Monthly visitors."),
    conversion_rate: float = typer.Option(3.0, "--conversion-rate", help="Current conversion rate in percent."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Score issues and print their business impact, highest ROI first."""
    from figmant.scoring.calculator import attach_business_impact
    from figmant.scoring.summary import by_roi, summarize

    _setup_logging(verbose)

    try:
        loaded = load_issues(issues)
    except Exception as exc:
        console.print(f"[red]Could not load issues:[/] {exc}")
        raise typer.Exit(code=1)

    scored = by_roi(attach_business_impact(
        loaded, screen_type.lower(), industry.lower(), traffic, conversion_rate,
    ))

    table = Table(title="Scored issues")
    table.add_column("Priority")
    table.add_column("Issue")
    table.add_column("ROI", justify="right")
    table.add_column("Monthly", justify="right")
    table.add_column("Effort")
    for issue in scored:
        bi = issue.business_impact
        style = _PRIORITY_STYLES.get(bi.priority_level, "white")
        table.add_row(
            f"[{style}]{bi.priority_level}[/]",
            issue.description,
            f"{bi.roi_score:g}",
            bi.revenue_impact.monthly_increase,
            bi.implementation_analysis.effort_category,
        )
    console.print(table)

    summary = summarize(scored)
    console.print(f"\n[bold]Potential monthly revenue:[/] {summary.total_potential_revenue}")
    console.print(f"[bold]Quick wins:[/] {summary.quick_wins_available}  "
                  f"[bold]Critical:[/] {summary.critical_issues_count}  "
                  f"[bold]Average ROI:[/] {summary.average_roi_score:g}")


@app.command()
def match(
    statement: str = typer.Argument(..., help="Problem statement in your own words."),
    templates: Path = typer.Option(None, "--templates", "-t", help="Template library YAML (default: bundled)."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Match a problem statement against the template library."""
    from figmant.matching.library import load_template_library
    from figmant.matching.matcher import match_problem_statement

    _setup_logging(verbose)

    try:
        library = load_template_library(templates)
    except Exception as exc:
        console.print(f"[red]Could not load templates:[/] {exc}")
        raise typer.Exit(code=1)

    result = match_problem_statement(statement, library)
    ctx = result.extracted_context

    if result.matched_template is None:
        console.print(f"[yellow]No template matched[/] (confidence {result.confidence:.2f}); using default context.")
    else:
        console.print(f"[green]Matched:[/] {result.matched_template.id} "
                      f"({result.matched_template.category}), confidence {result.confidence:.2f}")
    console.print(f"  Urgency:      {ctx.urgency}")
    console.print(f"  Stakeholders: {', '.join(ctx.stakeholders)}")
    console.print(f"  Timeline:     {ctx.timeline}")
    console.print(f"  Business:     {ctx.business_type} / {ctx.user_segment}")
    for solution in result.contextual_solutions:
        rate = f"{solution.success_rate:g}%" if solution.success_rate is not None else "n/a"
        console.print(f"  - {solution.title} (success rate {rate})")


@app.command()
def analyze(
    config: Path = typer.Option(..., "--config", "-c", help="Path to figmant-config.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Use canned strategist output (no API calls)."),
) -> None:
    """Run the full analysis and write report.json and impact-report.md."""
    _setup_logging(verbose)

    try:
        cfg = load_config(config)
    except Exception as exc:
        console.print(f"[red]Config validation failed:[/] {exc}")
        raise typer.Exit(code=1)

    if dry_run:
        console.print("[yellow]DRY-RUN mode: no API calls will be made.[/]\n")

    console.print(f"[bold]Starting analysis for:[/] {cfg.site_name or cfg.issues_path}\n")
    try:
        asyncio.run(_run_pipeline(cfg, dry_run=dry_run))
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]Analysis failed:[/] {exc}")
        raise typer.Exit(code=1)


async def _run_pipeline(cfg: "AnalysisConfig", *, dry_run: bool = False) -> None:  # noqa: F821
    from figmant.pipeline import ImpactPipeline

    client = None
    if cfg.strategist.enabled:
        if dry_run:
            from figmant.shared.llm_client import DryRunClient
            client = DryRunClient()
        else:
            from figmant.shared.llm_client import LLMClient
            client = LLMClient()

    await ImpactPipeline(cfg, client=client).run()


@app.command()
def render(
    output: Path = typer.Option(..., "--output", "-o", help="Output directory from a previous run (must contain report.json)."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Re-render the Markdown report from a saved report.json.

    Example:

        figmant render --output ./output
    """
    from figmant.output.markdown import render_markdown_report
    from figmant.pipeline import REPORT_JSON, REPORT_MARKDOWN
    from figmant.schemas.report import ImpactReport

    _setup_logging(verbose)

    report_path = output / REPORT_JSON
    if not report_path.exists():
        console.print(f"[red]No report.json found in {output}[/]")
        console.print("Run [bold]figmant analyze[/] first; it saves report.json at the end.")
        raise typer.Exit(code=1)

    console.print(f"[bold]Loading report from:[/] {report_path}")
    try:
        report = ImpactReport.model_validate_json(report_path.read_text())
    except ValueError as exc:
        # pydantic.ValidationError is a ValueError
        console.print(f"[red]Could not load report:[/] {exc}")
        raise typer.Exit(code=1)

    md_path = output / REPORT_MARKDOWN
    md_path.write_text(render_markdown_report(report))
    console.print(f"[green]Markdown report written to:[/] {md_path}")
