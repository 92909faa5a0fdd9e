"""Tests for the end-to-end analysis pipeline."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from figmant.config import load_config
from figmant.pipeline import REPORT_JSON, REPORT_MARKDOWN, ImpactPipeline
from figmant.schemas.config import StrategistSettings
from figmant.schemas.report import ImpactReport
from figmant.shared.llm_client import DryRunClient


def _with_strategist(tmp_config: Path):
    cfg = load_config(tmp_config)
    return cfg.model_copy(update={"strategist": StrategistSettings(enabled=True, industry_context="SaaS")})


class TestImpactPipeline:
    @pytest.mark.asyncio
    async def test_scores_and_writes_outputs(self, tmp_config: Path) -> None:
        cfg = load_config(tmp_config)
        report = await ImpactPipeline(cfg).run()

        rois = [i.business_impact.roi_score for i in report.issues]
        assert rois == sorted(rois, reverse=True)
        assert report.summary.critical_issues_count == 1
        assert report.portfolio is not None
        assert report.solutions is not None
        assert report.solutions.approach == "hybrid"
        assert report.strategist is None

        out_dir = Path(cfg.output_directory)
        assert (out_dir / REPORT_MARKDOWN).read_text().startswith("# Business Impact Report")
        saved = ImpactReport.model_validate_json((out_dir / REPORT_JSON).read_text())
        assert [i.id for i in saved.issues] == [i.id for i in report.issues]

    @pytest.mark.asyncio
    async def test_no_write(self, tmp_config: Path) -> None:
        cfg = load_config(tmp_config)
        await ImpactPipeline(cfg).run(write=False)
        assert not Path(cfg.output_directory).exists()

    @pytest.mark.asyncio
    async def test_traffic_feeds_revenue(self, tmp_config: Path) -> None:
        cfg = load_config(tmp_config)
        doubled = cfg.model_copy(update={"monthly_traffic": cfg.monthly_traffic * 2})
        base = await ImpactPipeline(cfg).run(write=False)
        more = await ImpactPipeline(doubled).run(write=False)
        assert more.portfolio.roi_projections.annual_value > base.portfolio.roi_projections.annual_value

    @pytest.mark.asyncio
    async def test_strategist_with_dry_run_client(self, tmp_config: Path) -> None:
        report = await ImpactPipeline(_with_strategist(tmp_config), client=DryRunClient()).run(write=False)
        assert report.strategist is not None
        assert report.strategist.expert_recommendations[0].title == "Move the primary CTA above the fold"

    @pytest.mark.asyncio
    async def test_strategist_skipped_without_client(self, tmp_config: Path) -> None:
        report = await ImpactPipeline(_with_strategist(tmp_config)).run(write=False)
        assert report.strategist is None

    @pytest.mark.asyncio
    async def test_strategist_failure_does_not_abort(self, tmp_config: Path) -> None:
        client = AsyncMock()
        client.run_agent_loop.side_effect = RuntimeError("API down")

        report = await ImpactPipeline(_with_strategist(tmp_config), client=client).run(write=False)
        assert report.strategist is None
        assert report.summary.critical_issues_count == 1

    @pytest.mark.asyncio
    async def test_empty_custom_library(self, tmp_config: Path, tmp_path: Path) -> None:
        library = tmp_path / "library.yml"
        library.write_text("templates: []\nsolutions: []\n")
        cfg = load_config(tmp_config).model_copy(update={"templates_path": str(library)})
        report = await ImpactPipeline(cfg).run(write=False)
        assert report.solutions.approach == "traditional"
