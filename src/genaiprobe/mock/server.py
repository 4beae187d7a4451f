"""
OpenAI-compatible mock server.

Answers every chat completion with the same canned response so collector
integration tests can assert on exact span attributes (response id, model,
token usage, finish reason) without a real OpenAI account.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, FastAPI, Request

from .. import __version__
from ..core.config import MockServerSettings, get_settings
from ..core.constants import ASSISTANT_ROLE
from ..core.structured_logger import configure_logging
from .schemas import (
    ChatCompletionChoice,
    ChatCompletionResponse,
    ChatMessage,
    CompletionUsage,
    HealthResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def build_completion(settings: MockServerSettings) -> ChatCompletionResponse:
    """The canned completion described by the mock server settings."""
    return ChatCompletionResponse(
        id=settings.response_id,
        created=settings.response_created,
        model=settings.model,
        choices=[
            ChatCompletionChoice(
                index=0,
                message=ChatMessage(role=ASSISTANT_ROLE, content=settings.response_content),
                finish_reason="stop",
            )
        ],
        usage=CompletionUsage(
            prompt_tokens=settings.prompt_tokens,
            completion_tokens=settings.completion_tokens,
            total_tokens=settings.prompt_tokens + settings.completion_tokens,
        ),
    )


@router.post("/v1/chat/completions", response_model=ChatCompletionResponse)
async def create_chat_completion(request: Request, payload: Dict[str, Any] = Body(...)):
    """
    Record the request body and return the canned completion.

    The body is not validated beyond being a JSON object.
    """
    request.app.state.requests.append(payload)
    logger.info(
        f"Mock chat completion: model={payload.get('model')} "
        f"messages={len(payload.get('messages') or [])}"
    )
    return build_completion(request.app.state.settings)


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", service="genaiprobe-mock-openai", version=__version__)


def create_app(settings: Optional[MockServerSettings] = None) -> FastAPI:
    """Create and configure the mock server application."""
    app = FastAPI(
        title="genaiprobe mock OpenAI",
        description="OpenAI-compatible chat completion endpoint with a fixed response",
        version=__version__,
    )
    app.state.settings = settings or MockServerSettings()
    app.state.requests = []
    app.include_router(router)
    return app


def serve() -> None:
    """Console entry point: run the mock server with uvicorn."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings.logging.level, settings.logging.format)
    app = create_app(settings.mock_server)
    logger.info(f"Starting mock OpenAI server on {settings.mock_server.host}:{settings.mock_server.port}")
    uvicorn.run(app, host=settings.mock_server.host, port=settings.mock_server.port, log_config=None)


if __name__ == "__main__":
    serve()
