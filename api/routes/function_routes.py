"""
AI proxy endpoints: chat (event-stream passthrough), quiz and roadmap (tool-call JSON).
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, StreamingResponse

from api.schemas.chat_schemas import ChatRequest
from api.schemas.generation_schemas import ErrorResponse, GenerationRequest
from api.services.chat_service import ChatService
from api.services.generation_service import GenerationService
from api.utils.gateway import get_gateway
from infra.llm.gateway import GatewayClient

function_routes = APIRouter()

ERROR_RESPONSES = {
    402: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@function_routes.post("/chat", responses=ERROR_RESPONSES)
async def chat(
    req: ChatRequest,
    gateway: GatewayClient = Depends(get_gateway),
) -> StreamingResponse:
    """Stream a mentor reply for the conversation as text/event-stream."""
    return await ChatService(gateway).stream(req)


@function_routes.post("/quiz", responses=ERROR_RESPONSES)
async def quiz(
    req: GenerationRequest,
    gateway: GatewayClient = Depends(get_gateway),
) -> JSONResponse:
    """Generate a multiple-choice quiz: {topic, questions: [{question, options, correct, explanation}]}."""
    result = await GenerationService(gateway).generate_quiz(req.interest, req.level)
    return JSONResponse(content=result)


@function_routes.post("/roadmap", responses=ERROR_RESPONSES)
async def roadmap(
    req: GenerationRequest,
    gateway: GatewayClient = Depends(get_gateway),
) -> JSONResponse:
    """Generate a learning roadmap: {roadmap: [{title, description, resources}]}."""
    result = await GenerationService(gateway).generate_roadmap(req.interest, req.level)
    return JSONResponse(content=result)
