"""
Structured generation (quiz, roadmap) through a forced tool call. The first tool
call's arguments are parsed and returned as-is.
"""

import json
from typing import Any

import httpx

from api.errors import GenerationError
from api.prompt_builders import (
    QUIZ_TOOL,
    QUIZ_TOOL_NAME,
    ROADMAP_TOOL,
    ROADMAP_TOOL_NAME,
    build_quiz_messages,
    build_roadmap_messages,
)
from api.services.upstream import translate_gateway_error
from api.utils.logger import configure_logging, log_request
from infra.llm.gateway import GatewayClient, GatewayStatusError, first_tool_call

logger = configure_logging()

RATE_LIMIT_MESSAGE = "Rate limit exceeded."
USAGE_LIMIT_MESSAGE = "AI usage limit reached."


class GenerationService:
    def __init__(self, gateway: GatewayClient):
        self.gateway = gateway

    async def generate_quiz(self, interest: str, level: str) -> dict[str, Any]:
        return await self._run_tool(
            "quiz",
            build_quiz_messages(interest=interest, level=level),
            QUIZ_TOOL,
            QUIZ_TOOL_NAME,
        )

    async def generate_roadmap(self, interest: str, level: str) -> dict[str, Any]:
        return await self._run_tool(
            "roadmap",
            build_roadmap_messages(interest=interest, level=level),
            ROADMAP_TOOL,
            ROADMAP_TOOL_NAME,
        )

    async def _run_tool(self, kind: str, messages: list[dict], tool: dict, tool_name: str) -> dict[str, Any]:
        try:
            with log_request(logger, f"gateway {kind}"):
                completion = await self.gateway.complete(
                    messages,
                    tools=[tool],
                    tool_choice={"type": "function", "function": {"name": tool_name}},
                )
        except (GatewayStatusError, httpx.HTTPError) as exc:
            raise translate_gateway_error(
                exc,
                rate_limit_message=RATE_LIMIT_MESSAGE,
                usage_limit_message=USAGE_LIMIT_MESSAGE,
            ) from exc
        except ValueError as exc:
            logger.error("AI gateway returned non-JSON %s completion", kind)
            raise GenerationError("AI service error") from exc

        tool_call = first_tool_call(completion)
        if tool_call is None:
            logger.warning("no tool call in %s completion", kind)
            raise GenerationError(f"No {kind} generated")

        try:
            result = json.loads(tool_call["function"]["arguments"])
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("malformed %s tool arguments: %r", kind, exc)
            raise GenerationError(f"Malformed {kind} generated") from exc
        return result
