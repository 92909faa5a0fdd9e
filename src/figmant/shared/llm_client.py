"""Async OpenAI API wrapper with a tool-use loop, plus an offline dry-run client."""

from __future__ import annotations

import asyncio
import json
import logging
import random
import re
from typing import Any, Awaitable, Callable

from openai import APIConnectionError, APITimeoutError, AsyncOpenAI, RateLimitError

logger = logging.getLogger(__name__)

MODEL = "gpt-4o"
MAX_TOKENS = 8_192

# Retry settings for rate-limit (429) and connection errors
_MAX_RETRIES = 6
_BASE_DELAY = 5  # seconds, floor for exponential backoff


def _parse_retry_after(exc: RateLimitError) -> float | None:
    """Suggested retry delay in seconds from a rate limit error, if any.

    Reads the ``Retry-After`` header first, then the "try again in Xs / Xms"
    text of the error message.
    """
    try:
        headers = exc.response.headers  # type: ignore[union-attr]
        if retry_after := headers.get("retry-after"):
            return float(retry_after)
    except (AttributeError, TypeError, ValueError):
        pass

    m = re.search(r"try again in (\d+(?:\.\d+)?)\s*(ms|s)\b", str(exc), re.IGNORECASE)
    if m:
        value = float(m.group(1))
        return value / 1000 if m.group(2).lower() == "ms" else value
    return None


ToolHandler = Callable[[str, dict[str, Any]], Awaitable[str]]
"""Signature: async (tool_name, tool_input) -> result text."""

ProgressCallback = Callable[[str], None]
"""Called with a short status message on each loop iteration."""


def to_openai_tools(tools: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Convert ``{"name", "description", "input_schema"}`` tool definitions to
    OpenAI function-calling format."""
    return [
        {
            "type": "function",
            "function": {
                "name": tool["name"],
                "description": tool.get("description", ""),
                "parameters": tool.get("input_schema", {"type": "object", "properties": {}}),
            },
        }
        for tool in tools
    ]


class LLMClient:
    """Thin async wrapper around the OpenAI SDK.

    ``run_agent_loop`` sends a conversation, executes tool calls, feeds the
    results back and repeats until the model answers without tools.
    """

    def __init__(self, api_key: str | None = None, model: str = MODEL) -> None:
        self._client = AsyncOpenAI(api_key=api_key)
        self.model = model

    async def _call_with_retry(self, **kwargs: Any) -> Any:
        """Call chat.completions.create with exponential backoff and ±25% jitter.

        Requests that exceed the context window fail immediately.
        """
        for attempt in range(_MAX_RETRIES):
            try:
                return await self._client.chat.completions.create(**kwargs)
            except RateLimitError as exc:
                msg = str(exc).lower()
                if "request too large" in msg or "context_length_exceeded" in msg:
                    logger.error("Request exceeds token limit (not retryable): %s", exc)
                    raise
                if attempt == _MAX_RETRIES - 1:
                    raise

                backoff = _BASE_DELAY * (2 ** attempt)
                suggested = _parse_retry_after(exc)
                base_delay = max(suggested or 0.0, backoff)
                delay = max(1.0, base_delay + random.uniform(-0.25 * base_delay, 0.25 * base_delay))
                logger.warning(
                    "Rate limited (429), retrying in %.1fs (attempt %d/%d): %s",
                    delay, attempt + 1, _MAX_RETRIES, exc,
                )
                await asyncio.sleep(delay)
            except (APIConnectionError, APITimeoutError) as exc:
                if attempt == _MAX_RETRIES - 1:
                    raise
                # capped at ~40s
                backoff = _BASE_DELAY * (2 ** min(attempt, 3))
                delay = max(2.0, backoff + random.uniform(-0.25 * backoff, 0.25 * backoff))
                logger.warning(
                    "Connection error, retrying in %.1fs (attempt %d/%d): %s",
                    delay, attempt + 1, _MAX_RETRIES, exc,
                )
                await asyncio.sleep(delay)

    async def run_agent_loop(
        self,
        *,
        system: str,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]],
        tool_handler: ToolHandler,
        max_iterations: int = 10,
        on_progress: ProgressCallback | None = None,
    ) -> str:
        """Run the tool-use loop and return the model's final text."""
        openai_tools = to_openai_tools(tools) if tools else []
        oai_messages: list[dict[str, Any]] = [{"role": "system", "content": system}, *messages]

        for iteration in range(1, max_iterations + 1):
            if on_progress:
                on_progress(f"Thinking… (step {iteration})")

            kwargs: dict[str, Any] = {
                "model": self.model,
                "max_tokens": MAX_TOKENS,
                "messages": oai_messages,
            }
            if openai_tools:
                kwargs["tools"] = openai_tools
            else:
                # JSON mode conflicts with tool calls, so only use it without tools.
                kwargs["response_format"] = {"type": "json_object"}

            response = await self._call_with_retry(**kwargs)
            message = response.choices[0].message

            if not message.tool_calls:
                return message.content or ""

            oai_messages.append(message.model_dump())
            for tool_call in message.tool_calls:
                name = tool_call.function.name
                try:
                    tool_input = json.loads(tool_call.function.arguments)
                except json.JSONDecodeError:
                    tool_input = {}
                logger.info("Tool call: %s(%s)", name, tool_call.function.arguments[:200])
                if on_progress:
                    on_progress(f"Running tool: {name}")
                try:
                    result = await tool_handler(name, tool_input)
                except Exception as exc:
                    logger.warning("Tool %s failed: %s", name, exc)
                    result = f"Error: {exc}"
                oai_messages.append({"role": "tool", "tool_call_id": tool_call.id, "content": result})

        raise RuntimeError(f"Agent loop did not complete within {max_iterations} iterations")


# ======================================================================
# Dry-run mock client, zero API calls
# ======================================================================

_DRY_RUN_TOOL_SCRIPT: list[tuple[str, dict[str, Any]]] = [
    ("calculate_roi_projection", {"issue_type": "hidden_cta", "severity": "critical"}),
]

DRY_RUN_STRATEGIST_JSON = json.dumps({
    "diagnosis": "The primary call to action sits below the fold and competes with secondary links.",
    "strategic_rationale": "Reduce cognitive load on the decision screen before adding new features.",
    "expert_recommendations": [
        {
            "title": "Move the primary CTA above the fold",
            "recommendation": "Place the signup button in the hero section and make it sticky on mobile.",
            "confidence": 0.85,
            "expected_impact": "15-25% increase in signup conversion",
            "business_value": {
                "primary": "More trial signups",
                "secondary": ["Lower bounce rate"],
                "quantified_impact": "$20,000-$40,000 annual lift",
            },
            "implementation_effort": "Low",
            "timeline": "1 week",
            "reasoning": "Fitts' Law: larger, closer targets are acquired faster.",
            "ux_principles_applied": ["Fitts' Law", "Cognitive Load Theory"],
            "validation_method": "A/B test hero CTA placement against the current layout",
            "success_metrics": ["Signup conversion rate"],
            "priority": 1,
            "category": "critical-blocker",
        }
    ],
    "business_impact_assessment": {
        "estimated_value": "$20,000-$40,000",
        "confidence": 0.8,
        "implementation_roadmap": {
            "quick_wins": ["Move CTA above the fold"],
            "week_one_actions": ["Add sticky mobile CTA"],
            "strategic_initiatives": ["Simplify the signup form"],
        },
        "competitive_advantage": "Matches the onboarding speed of leading competitors",
    },
    "ab_test_framework": {
        "primary_hypothesis": "An above-the-fold CTA increases signups by at least 15%",
        "test_variants": ["Control: current layout", "Treatment: hero CTA"],
        "success_criteria": ["Signup rate lift with p < 0.05"],
        "estimated_test_duration": "2-3 weeks",
    },
    "success_metrics": ["Signup conversion rate", "Bounce rate"],
    "confidence_assessment": {
        "overall_confidence": 0.82,
        "data_quality_score": 0.75,
        "research_backing": 0.9,
        "implementation_feasibility": 0.85,
        "reasoning": "Dry-run output; no model was called.",
    },
})


class DryRunClient:
    """Drop-in replacement for LLMClient that makes zero API calls.

    Runs one scripted tool call so tool handlers are exercised, then returns
    canned strategist JSON.
    """

    async def run_agent_loop(
        self,
        *,
        system: str,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]],
        tool_handler: ToolHandler,
        max_iterations: int = 10,
        on_progress: ProgressCallback | None = None,
    ) -> str:
        available = {tool["name"] for tool in tools}
        for tool_name, tool_input in _DRY_RUN_TOOL_SCRIPT:
            if tool_name not in available:
                continue
            logger.info("[dry-run] Tool call: %s(%s)", tool_name, json.dumps(tool_input))
            if on_progress:
                on_progress(f"Running tool: {tool_name}")
            try:
                await tool_handler(tool_name, tool_input)
            except Exception as exc:
                logger.warning("[dry-run] Tool %s failed: %s", tool_name, exc)
        return DRY_RUN_STRATEGIST_JSON
