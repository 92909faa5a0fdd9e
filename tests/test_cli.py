"""Tests for the Typer CLI."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from figmant.cli import app

runner = CliRunner()

CHECKOUT_CEO = "Our checkout conversion is dropping and the CEO wants this fixed immediately"


def _flat(output: str) -> str:
    """Collapse rich's line wrapping so assertions don't depend on terminal width."""
    return " ".join(output.split())


class TestValidate:
    def test_valid_config(self, tmp_config: Path) -> None:
        result = runner.invoke(app, ["validate", "--config", str(tmp_config)])
        assert result.exit_code == 0, result.output
        assert "Config is valid!" in _flat(result.output)
        assert "(3 issues)" in _flat(result.output)

    def test_missing_config(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["validate", "-c", str(tmp_path / "missing.yml")])
        assert result.exit_code == 1
        assert "Config validation failed" in _flat(result.output)


class TestScore:
    def test_scores_issue_file(self, issues_file: Path) -> None:
        result = runner.invoke(app, ["score", "-i", str(issues_file), "--industry", "SaaS"])
        assert result.exit_code == 0, result.output
        assert "Scored issues" in _flat(result.output)
        assert "Potential monthly revenue" in _flat(result.output)
        assert "Critical: 1" in _flat(result.output)

    def test_bad_issue_file(self, tmp_path: Path) -> None:
        path = tmp_path / "issues.json"
        path.write_text(json.dumps({"issues": {"id": "x"}}))
        result = runner.invoke(app, ["score", "-i", str(path)])
        assert result.exit_code == 1
        assert "Could not load issues" in _flat(result.output)


class TestMatch:
    def test_matched(self) -> None:
        result = runner.invoke(app, ["match", CHECKOUT_CEO])
        assert result.exit_code == 0, result.output
        assert "Matched: ps_trial_signup_decline" in _flat(result.output)
        assert "Urgency: high" in _flat(result.output)
        assert "executives" in _flat(result.output)

    def test_no_match(self) -> None:
        result = runner.invoke(app, ["match", "hello world"])
        assert result.exit_code == 0, result.output
        assert "No template matched" in _flat(result.output)
        assert "product_team" in _flat(result.output)

    def test_missing_library(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["match", "anything", "-t", str(tmp_path / "missing.yml")])
        assert result.exit_code == 1
        assert "Could not load templates" in _flat(result.output)


class TestAnalyzeAndRender:
    def test_analyze_writes_reports(self, tmp_config: Path, tmp_path: Path) -> None:
        result = runner.invoke(app, ["analyze", "--config", str(tmp_config)])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "output" / "report.json").exists()
        assert (tmp_path / "output" / "impact-report.md").exists()

    def test_analyze_dry_run_with_strategist(self, tmp_config: Path, tmp_path: Path) -> None:
        tmp_config.write_text(tmp_config.read_text() + "strategist:\n  enabled: true\n")
        result = runner.invoke(app, ["analyze", "--config", str(tmp_config), "--dry-run"])
        assert result.exit_code == 0, result.output
        assert "DRY-RUN mode" in _flat(result.output)

        saved = json.loads((tmp_path / "output" / "report.json").read_text())
        assert saved["strategist"]["diagnosis"]

    def test_analyze_invalid_config(self, tmp_path: Path) -> None:
        cfg = tmp_path / "config.yml"
        cfg.write_text("issues_path: /nonexistent/issues.json\n")
        result = runner.invoke(app, ["analyze", "--config", str(cfg)])
        assert result.exit_code == 1
        assert "Config validation failed" in _flat(result.output)

    def test_render_from_saved_report(self, tmp_config: Path, tmp_path: Path) -> None:
        out_dir = tmp_path / "output"
        assert runner.invoke(app, ["analyze", "--config", str(tmp_config)]).exit_code == 0
        (out_dir / "impact-report.md").unlink()

        result = runner.invoke(app, ["render", "--output", str(out_dir)])
        assert result.exit_code == 0, result.output
        assert (out_dir / "impact-report.md").read_text().startswith("# Business Impact Report")

    def test_render_without_report(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["render", "-o", str(tmp_path)])
        assert result.exit_code == 1
        assert "No report.json found" in _flat(result.output)

    def test_render_invalid_report(self, tmp_path: Path) -> None:
        (tmp_path / "report.json").write_text('{"issues": "not a list"}')
        result = runner.invoke(app, ["render", "-o", str(tmp_path)])
        assert result.exit_code == 1
        assert "Could not load report" in _flat(result.output)

    def test_render_after_issues_file_removed(self, tmp_config: Path, tmp_path: Path, issues_file: Path) -> None:
        out_dir = tmp_path / "output"
        assert runner.invoke(app, ["analyze", "--config", str(tmp_config)]).exit_code == 0
        issues_file.unlink()

        result = runner.invoke(app, ["render", "--output", str(out_dir)])
        assert result.exit_code == 0, result.output
        assert "Markdown report written to" in _flat(result.output)
