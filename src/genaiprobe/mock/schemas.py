"""
Chat completion schemas served by the mock OpenAI server.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """A single chat message."""

    role: str = Field(..., description="Message author role")
    content: Optional[str] = Field(None, description="Message text")


class ChatCompletionChoice(BaseModel):
    """One candidate completion."""

    index: int = Field(..., description="Position in the choices list")
    message: ChatMessage = Field(..., description="Assistant message")
    finish_reason: str = Field("stop", description="Why generation stopped")


class CompletionUsage(BaseModel):
    """Token accounting for a completion."""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class ChatCompletionResponse(BaseModel):
    """Response schema for POST /v1/chat/completions."""

    id: str = Field(..., description="Completion id")
    object: str = Field("chat.completion", description="Object type")
    created: int = Field(..., description="Unix timestamp of creation")
    model: str = Field(..., description="Model that produced the completion")
    choices: List[ChatCompletionChoice] = Field(default_factory=list)
    usage: CompletionUsage


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str
