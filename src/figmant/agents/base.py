"""Base agent ABC and JSON extraction shared by all LLM-backed agents."""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel

from figmant.shared.llm_client import DryRunClient, LLMClient, ToolHandler

logger = logging.getLogger(__name__)

JSON_RETRY_MSG = (
    "I need the output as a single JSON object (no markdown, no explanation, "
    "just raw JSON) matching the schema described in your instructions. "
    "Please re-format your response now."
)


class BaseAgent(ABC):
    """Abstract base class for agents.

    Subclasses implement ``name``, ``get_system_prompt()`` and
    ``parse_output(raw_text)``. Agents with tools also override
    ``get_tools()`` and ``get_tool_handler()``.
    """

    def __init__(self, client: LLMClient | DryRunClient) -> None:
        self.client = client

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for progress display."""

    @abstractmethod
    def get_system_prompt(self) -> str:
        """Return the system prompt for this agent."""

    @abstractmethod
    def parse_output(self, raw_text: str) -> BaseModel:
        """Parse the model's final text response into a Pydantic model."""

    def get_tools(self) -> list[dict[str, Any]]:
        return []

    def get_tool_handler(self) -> ToolHandler:
        async def noop(name: str, input: dict[str, Any]) -> str:
            return f"Unknown tool: {name}"
        return noop

    async def run(self, user_message: str, *, on_progress: Any | None = None) -> BaseModel:
        """Run the agent loop and parse the result, re-asking once for JSON."""
        messages: list[dict[str, Any]] = [{"role": "user", "content": user_message}]
        raw = await self.client.run_agent_loop(
            system=self.get_system_prompt(),
            messages=messages,
            tools=self.get_tools(),
            tool_handler=self.get_tool_handler(),
            on_progress=on_progress,
        )
        logger.debug("Agent %s raw output:\n%s", self.name, raw[:500])
        return await self._parse_with_retry(raw, messages, on_progress=on_progress)

    async def _parse_with_retry(
        self,
        raw: str,
        messages: list[dict[str, Any]],
        *,
        on_progress: Any | None = None,
    ) -> BaseModel:
        try:
            return self.parse_output(raw)
        except (ValueError, json.JSONDecodeError, KeyError) as err:
            logger.warning(
                "Agent %s output was not valid JSON, requesting re-format. Error: %s",
                self.name, err,
            )

        if on_progress:
            on_progress("Re-formatting output as JSON…")
        messages.append({"role": "assistant", "content": raw})
        messages.append({"role": "user", "content": JSON_RETRY_MSG})

        raw_retry = await self.client.run_agent_loop(
            system=self.get_system_prompt(),
            messages=messages,
            tools=[],
            tool_handler=self.get_tool_handler(),
            on_progress=on_progress,
        )
        logger.debug("Agent %s retry output:\n%s", self.name, raw_retry[:500])
        return self.parse_output(raw_retry)


def extract_json(text: str) -> dict[str, Any]:
    """Extract a JSON object from text that may contain markdown fences."""
    text = text.strip()

    if text.startswith("{"):
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            # trailing text after the object
            try:
                obj, _ = json.JSONDecoder().raw_decode(text)
                return obj
            except json.JSONDecodeError:
                pass

    match = re.search(r"```(?:json)?\s*\n?(.*?)\n?```", text, re.DOTALL)
    if match:
        return json.loads(match.group(1).strip())

    try:
        start = text.index("{")
        obj, _ = json.JSONDecoder().raw_decode(text, idx=start)
        return obj
    except (ValueError, json.JSONDecodeError):
        pass

    raise ValueError(
        f"Could not extract JSON from model response (length={len(text)}). "
        f"First 300 chars: {text[:300]!r}"
    )
