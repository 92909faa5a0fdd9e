"""Problem-statement templates and contextual solutions, loaded from YAML."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, field_validator

from figmant.schemas.solutions import ContextualSolution, ProblemStatementTemplate

logger = logging.getLogger(__name__)

_BUNDLED_LIBRARY = Path(__file__).parent.parent / "data" / "problem_statements.yml"


class TemplateLibrary(BaseModel):
    templates: list[ProblemStatementTemplate] = []
    solutions: list[ContextualSolution] = []

    @field_validator("templates", "solutions", mode="before")
    @classmethod
    def coerce_none_to_list(cls, v: object) -> object:
        return [] if v is None else v

    def solutions_for(self, template_id: str, limit: int = 5) -> list[ContextualSolution]:
        """Solutions linked to ``template_id``, in library order."""
        linked = [s for s in self.solutions if template_id in s.problem_statement_ids]
        return linked[:limit]


def _read_library(path: Path) -> TemplateLibrary:
    raw = yaml.safe_load(path.read_text())
    if not isinstance(raw, dict):
        raise ValueError(f"Template library must be a YAML mapping, got {type(raw).__name__}")
    library = TemplateLibrary(**raw)
    logger.debug("Loaded %d templates and %d solutions from %s",
                 len(library.templates), len(library.solutions), path)
    return library


@lru_cache(maxsize=1)
def _bundled_library() -> TemplateLibrary:
    return _read_library(_BUNDLED_LIBRARY)


def load_template_library(path: str | Path | None = None) -> TemplateLibrary:
    """Load a template library from ``path``, or the bundled one when omitted."""
    if path is None or path == "":
        return _bundled_library()
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Template library not found: {path}")
    return _read_library(path)
