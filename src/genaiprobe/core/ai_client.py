"""
OpenAI chat-completion client helpers.

Design goals:
- Ambient credentials only: AsyncOpenAI resolves OPENAI_API_KEY and
  OPENAI_BASE_URL itself, nothing is passed explicitly by the probe
- No retries, timeouts or error translation beyond what the SDK does
- Tolerant reads of the response: missing choice, message or content
  never raise
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from .constants import POEM_PROMPT, USER_ROLE
from .structured_logger import get_logger

logger = get_logger(__name__)


def create_client(**overrides: Any) -> AsyncOpenAI:
    """
    Create the async OpenAI client used by the probe.

    The probe calls this without arguments so that credentials and the
    endpoint are discovered from the environment. Tests pass `http_client`,
    `base_url`, `api_key` or `max_retries` through `overrides`.
    """
    client = AsyncOpenAI(**overrides)
    logger.debug("OpenAI client created", base_url=str(client.base_url))
    return client


def build_messages(prompt: str = POEM_PROMPT) -> List[Dict[str, str]]:
    """Return the single user message sent with the completion request."""
    return [{"role": USER_ROLE, "content": prompt}]


def _field(obj: Any, name: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def first_choice_content(response: Any) -> Optional[str]:
    """
    Text of the first choice's message, or None.

    Works on SDK response objects and on plain dicts. An empty or missing
    `choices` sequence, a choice without `message`, and a message without
    `content` all give None.
    """
    choices = _field(response, "choices") or []
    if not choices:
        return None
    message = _field(choices[0], "message")
    return _field(message, "content")


__all__ = ["create_client", "build_messages", "first_choice_content"]
