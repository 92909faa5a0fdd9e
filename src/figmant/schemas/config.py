"""Configuration schema for figmant-config.yml."""

from pydantic import BaseModel, Field, field_validator

from figmant.schemas.strategist import VisionSummary


class StrategistSettings(BaseModel):
    """Inputs for the optional UX strategist pass."""

    enabled: bool = False
    industry_context: str = ""
    user_persona: str = ""
    business_goals: list[str] = []
    vision_summary: VisionSummary = VisionSummary()


class AnalysisConfig(BaseModel):
    """Top-level configuration loaded from figmant-config.yml.

    ``issues_path`` points at the JSON or YAML file holding the issues found
    by the critique step. Its existence is checked by
    :func:`figmant.config.load_config`, not here, so a saved report still
    loads after the issues file has moved.
    """

    issues_path: str

    # Optional metadata
    site_name: str = ""
    screen_type: str = "generic"  # "checkout", "landing", "dashboard", "form", ...

    # Business inputs
    industry: str = "default"
    monthly_traffic: int = Field(default=10_000, ge=0)
    current_conversion_rate: float = Field(default=3.0, ge=0)  # percent

    # Problem-statement matching. Empty templates_path uses the bundled library.
    problem_statement: str = ""
    templates_path: str = ""

    # Output
    output_directory: str = "./output"

    strategist: StrategistSettings = StrategistSettings()

    @field_validator("industry", "screen_type", mode="before")
    @classmethod
    def normalize_key(cls, v: object) -> object:
        if v is None:
            return None
        return str(v).strip().lower()
