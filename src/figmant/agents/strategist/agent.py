"""UX Strategist agent: heuristic-driven recommendations for a design."""

from __future__ import annotations

import logging
from typing import Any

from figmant.agents.base import BaseAgent, extract_json
from figmant.agents.strategist.heuristics import detect_anti_patterns, select_heuristics
from figmant.agents.strategist.prompts import SYSTEM_PROMPT, build_strategist_prompt
from figmant.agents.strategist.tools import TOOLS, make_tool_handler
from figmant.schemas.config import StrategistSettings
from figmant.schemas.strategist import StrategistOutput
from figmant.shared.llm_client import DryRunClient, LLMClient, ToolHandler

logger = logging.getLogger(__name__)


class StrategistAgent(BaseAgent):
    """Turns a problem statement and vision summary into expert recommendations.

    The only tool is ``calculate_roi_projection``, bound to the run's
    industry and monthly traffic.
    """

    def __init__(
        self,
        client: LLMClient | DryRunClient,
        industry: str = "default",
        user_base: float = 10_000,
    ) -> None:
        super().__init__(client)
        self._industry = industry
        self._user_base = user_base
        self._tool_handler = make_tool_handler(industry, user_base)

    @property
    def name(self) -> str:
        return "UX Strategist"

    def get_system_prompt(self) -> str:
        return SYSTEM_PROMPT

    def get_tools(self) -> list[dict[str, Any]]:
        return TOOLS

    def get_tool_handler(self) -> ToolHandler:
        return self._tool_handler

    def parse_output(self, raw_text: str) -> StrategistOutput:
        data = extract_json(raw_text)
        return StrategistOutput(**data)

    async def run_strategy(
        self,
        problem_statement: str,
        settings: StrategistSettings,
        *,
        on_progress: Any | None = None,
    ) -> StrategistOutput:
        """Select heuristics, detect anti-patterns and ask the model for a strategy."""
        vision = settings.vision_summary
        heuristics = select_heuristics(problem_statement, vision)
        anti_patterns = detect_anti_patterns(vision)
        logger.info(
            "Strategist using %d heuristics and %d anti-patterns",
            len(heuristics), len(anti_patterns),
        )

        user_message = build_strategist_prompt(
            problem_statement,
            vision,
            heuristics,
            anti_patterns,
            industry_context=settings.industry_context or self._industry,
            user_persona=settings.user_persona,
            business_goals=settings.business_goals,
            industry=self._industry,
            user_base=self._user_base,
        )
        return await self.run(user_message, on_progress=on_progress)
