"""Tests for the template library and matching-rule loaders."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from figmant.matching.library import TemplateLibrary, load_template_library
from figmant.matching.rules import MatchingRules, load_matching_rules


class TestBundledLibrary:
    def test_loads(self) -> None:
        library = load_template_library()
        assert len(library.templates) == 5
        assert len(library.solutions) == 5

    def test_empty_path_means_bundled(self) -> None:
        assert load_template_library("") is load_template_library()

    def test_every_solution_links_to_a_template(self) -> None:
        library = load_template_library()
        ids = {t.id for t in library.templates}
        for solution in library.solutions:
            assert set(solution.problem_statement_ids) <= ids

    def test_optional_fields(self) -> None:
        solutions = {s.id: s for s in load_template_library().solutions}
        assert solutions["cs_budget_homepage"].success_rate is None
        assert solutions["cs_phased_launch"].expected_impact == {}


class TestSolutionsFor:
    def test_links_and_limit(self) -> None:
        library = TemplateLibrary(
            templates=[{"id": "t1", "statement": "checkout is slow"}],
            solutions=[
                {"id": f"s{i}", "title": f"S{i}", "problem_statement_ids": ["t1"]} for i in range(7)
            ] + [{"id": "other", "title": "Other", "problem_statement_ids": ["t2"]}],
        )
        assert [s.id for s in library.solutions_for("t1")] == ["s0", "s1", "s2", "s3", "s4"]
        assert [s.id for s in library.solutions_for("t1", limit=2)] == ["s0", "s1"]
        assert library.solutions_for("missing") == []

    def test_none_sections(self) -> None:
        library = TemplateLibrary(templates=None, solutions=None)
        assert library.templates == []
        assert library.solutions == []

    def test_stakeholder_communication_json_string(self) -> None:
        library = TemplateLibrary(
            solutions=[
                {"id": "a", "title": "A", "stakeholder_communication": '{"ceo_update": "Done"}'},
                {"id": "b", "title": "B", "stakeholder_communication": "not json"},
            ],
        )
        assert library.solutions[0].stakeholder_communication == {"ceo_update": "Done"}
        assert library.solutions[1].stakeholder_communication is None


class TestLoadLibraryFromFile:
    def test_custom_file(self, tmp_path: Path) -> None:
        path = tmp_path / "library.yml"
        path.write_text(
            """\
templates:
  - id: ps_custom
    statement: Our pricing page confuses visitors
    category: user_confusion
solutions: []
"""
        )
        library = load_template_library(path)
        assert [t.id for t in library.templates] == ["ps_custom"]
        assert library.templates[0].implied_context == {}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Template library not found"):
            load_template_library(tmp_path / "nope.yml")

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "library.yml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ValueError, match="must be a YAML mapping"):
            load_template_library(path)


class TestMatchingRules:
    def test_bundled_rules(self) -> None:
        rules = load_matching_rules()
        assert rules.word_weight == 0.6
        assert rules.min_word_length == 3
        assert rules.match_threshold == 0.3
        assert rules.acceptance_threshold == 0.4
        assert "checkout" in rules.category_keywords["conversion_decline"]
        assert [r.stakeholder for r in rules.context.stakeholders] == [
            "executives", "customers", "development_team", "marketing",
        ]

    def test_custom_rules_file(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yml"
        path.write_text("word_weight: 0.5\nacceptance_threshold: 0.7\n")
        rules = load_matching_rules(path)
        assert rules.word_weight == 0.5
        assert rules.acceptance_threshold == 0.7
        assert rules.context.default_stakeholder == "product_team"

    def test_threshold_out_of_range(self) -> None:
        with pytest.raises(ValidationError, match="acceptance_threshold"):
            MatchingRules(acceptance_threshold=1.5)

    def test_missing_rules_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_matching_rules(tmp_path / "rules.yml")

    def test_rules_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yml"
        path.write_text("just a string\n")
        with pytest.raises(ValueError, match="Matching rules must be a YAML mapping"):
            load_matching_rules(path)
