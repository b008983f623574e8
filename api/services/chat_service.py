"""
Chat proxy service: builds the mentor prompt and relays the gateway's event
stream to the caller unchanged.
"""

import httpx
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from api.prompt_builders import build_chat_system_prompt
from api.schemas.chat_schemas import ChatRequest
from api.services.upstream import translate_gateway_error
from api.utils.logger import configure_logging, log_request
from infra.llm.gateway import GatewayClient, GatewayStatusError

logger = configure_logging()

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again in a moment."
USAGE_LIMIT_MESSAGE = "AI usage limit reached. Please add credits."

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


class ChatService:
    """Streaming chat against the gateway for one subject and level."""

    def __init__(self, gateway: GatewayClient):
        self.gateway = gateway

    def build_messages(self, req: ChatRequest) -> list[dict]:
        system_prompt = build_chat_system_prompt(
            interest=req.interest,
            level=req.level,
            temperature=req.temperature,
            max_tokens=req.max_tokens,
        )
        return [{"role": "system", "content": system_prompt}, *[m.model_dump() for m in req.messages]]

    async def stream(self, req: ChatRequest) -> StreamingResponse:
        messages = self.build_messages(req)
        try:
            with log_request(logger, f"gateway chat interest={req.interest!r} turns={len(req.messages)}"):
                upstream = await self.gateway.open_stream(
                    messages,
                    temperature=req.temperature,
                    max_tokens=req.max_tokens,
                )
        except (GatewayStatusError, httpx.HTTPError) as exc:
            raise translate_gateway_error(
                exc,
                rate_limit_message=RATE_LIMIT_MESSAGE,
                usage_limit_message=USAGE_LIMIT_MESSAGE,
            ) from exc

        return StreamingResponse(
            # Decoded body: the gateway may compress, the relay never re-encodes.
            upstream.aiter_bytes(),
            media_type="text/event-stream",
            headers=SSE_HEADERS,
            background=BackgroundTask(upstream.aclose),
        )
