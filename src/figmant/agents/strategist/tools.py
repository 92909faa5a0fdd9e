"""Tool definitions and handler for the UX strategist agent."""

from __future__ import annotations

from typing import Any

from figmant.scoring.roi_projection import calculate_roi_projection

TOOLS: list[dict[str, Any]] = [
    {
        "name": "calculate_roi_projection",
        "description": (
            "Project the annual revenue impact of fixing a UX anti-pattern, "
            "with conversion rates and implementation cost."
        ),
        "input_schema": {
            "type": "object",
            "properties": {
                "issue_type": {
                    "type": "string",
                    "description": (
                        "Anti-pattern id: hidden_cta, form_overload, navigation_chaos, "
                        "contrast_violation or mobile_neglect."
                    ),
                },
                "severity": {
                    "type": "string",
                    "enum": ["critical", "important", "enhancement"],
                },
            },
            "required": ["issue_type", "severity"],
        },
    },
]


def make_tool_handler(industry: str, user_base: float = 10_000):
    """Create an async tool handler bound to the run's industry and traffic."""

    async def handle_tool(name: str, input: dict[str, Any]) -> str:
        match name:
            case "calculate_roi_projection":
                projection = calculate_roi_projection(
                    input.get("issue_type", ""),
                    input.get("severity", ""),
                    industry,
                    user_base,
                )
                return projection.model_dump_json(indent=2)
            case _:
                return f"Unknown tool: {name}"

    return handle_tool
