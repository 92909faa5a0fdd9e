"""YAML and JSON loaders for figmant-config.yml and issue files."""

import json
from pathlib import Path

import yaml

from figmant.schemas.config import AnalysisConfig
from figmant.schemas.issues import Issue


def load_config(path: str | Path) -> AnalysisConfig:
    """Load and validate an analysis config file.

    Raises ``FileNotFoundError`` if the config file, its ``issues_path`` or
    its ``templates_path`` doesn't exist, and ``pydantic.ValidationError``
    if the YAML content is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    raw = yaml.safe_load(path.read_text())
    if not isinstance(raw, dict):
        raise ValueError(f"Config file must be a YAML mapping, got {type(raw).__name__}")

    # Relative data paths are resolved against the config file's directory.
    for key in ("issues_path", "templates_path"):
        value = raw.get(key)
        if value and not Path(value).is_absolute():
            raw[key] = str(path.parent / value)
        if value and not Path(raw[key]).exists():
            raise FileNotFoundError(f"{key} does not exist: {raw[key]}")

    strategist = raw.get("strategist")
    if isinstance(strategist, dict):
        # A list with only commented-out items loads as None.
        if strategist.get("business_goals") is None:
            strategist.pop("business_goals", None)
        elif isinstance(strategist["business_goals"], list):
            strategist["business_goals"] = [g for g in strategist["business_goals"] if g]
        vision = strategist.get("vision_summary")
        if isinstance(vision, dict):
            for key in ("cta_positioning", "accessibility_flags"):
                if key in vision and vision[key] is None:
                    vision[key] = []

    return AnalysisConfig(**raw)


def load_issues(path: str | Path) -> list[Issue]:
    """Load issues from a JSON or YAML file.

    The file may hold a bare list of issues or a mapping with an ``issues``
    key (the shape the critique step returns).
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Issues file not found: {path}")

    text = path.read_text()
    raw = json.loads(text) if path.suffix.lower() == ".json" else yaml.safe_load(text)

    if isinstance(raw, dict):
        raw = raw.get("issues")
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError(f"Issues file must hold a list of issues, got {type(raw).__name__}")
    return [Issue(**item) for item in raw]
