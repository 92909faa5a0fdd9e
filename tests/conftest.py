"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from figmant.schemas.issues import Issue
from figmant.shared.llm_client import LLMClient


def _make_issue(**overrides) -> Issue:
    """Build an Issue with sensible defaults; keyword overrides win."""
    data = {
        "id": "issue-1",
        "level": "component",
        "severity": "warning",
        "category": "usability",
        "confidence": 0.8,
        "impact_scope": "conversion",
        "description": "Primary button has low visual weight",
        "suggested_fix": "Use the brand color for the primary button",
        "implementation": {"effort": "hours"},
    }
    effort = overrides.pop("effort", None)
    data.update(overrides)
    if effort is not None:
        data["implementation"] = {"effort": effort}
    return Issue(**data)


@pytest.fixture
def make_issue():
    """Factory fixture: `make_issue(severity="critical", effort="minutes")`."""
    return _make_issue


SAMPLE_ISSUES = [
    {
        "id": "a11y-contrast",
        "level": "molecular",
        "severity": "critical",
        "category": "accessibility",
        "confidence": 1.0,
        "impact_scope": "conversion",
        "description": "Checkout button text fails contrast",
        "suggested_fix": "Darken the button background to reach 4.5:1",
        "implementation": {"effort": "minutes"},
    },
    {
        "id": "form-length",
        "level": "layout",
        "severity": "warning",
        "category": "usability",
        "confidence": 0.7,
        "impact_scope": "task-completion",
        "description": "Signup form asks for twelve fields",
        "suggested_fix": "Split the form into two steps",
        "implementation": {"effort": "hours"},
    },
    {
        "id": "hero-image",
        "level": "component",
        "severity": "improvement",
        "category": "visual",
        "confidence": 0.6,
        "impact_scope": "aesthetic",
        "description": "Hero image is low resolution",
        "suggested_fix": "Export the hero at 2x",
        "implementation": {"effort": "days"},
    },
]


@pytest.fixture
def sample_issues() -> list[Issue]:
    return [Issue(**item) for item in SAMPLE_ISSUES]


@pytest.fixture
def issues_file(tmp_path: Path) -> Path:
    """Write the sample issues as a critique-style JSON file and return its path."""
    path = tmp_path / "issues.json"
    path.write_text(json.dumps({"issues": SAMPLE_ISSUES}))
    return path


@pytest.fixture
def tmp_config(tmp_path: Path, issues_file: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    cfg = tmp_path / "config.yml"
    cfg.write_text(
        """\
issues_path: "{issues}"
industry: SaaS
screen_type: checkout
monthly_traffic: 20000
problem_statement: "Our checkout conversion is dropping and the CEO wants this fixed immediately"
output_directory: "{out}"
""".format(issues=str(issues_file), out=str(tmp_path / "output"))
    )
    return cfg


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Return an LLMClient with a mocked OpenAI SDK underneath."""
    client = LLMClient.__new__(LLMClient)
    client._client = AsyncMock()
    client.model = "gpt-4o"
    return client
