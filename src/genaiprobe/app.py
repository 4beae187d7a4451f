"""
The probe: one chat completion, first choice printed to stdout.

Failures of the completion call are not handled here. They propagate out of
`run()`, the interpreter prints the traceback and exits non-zero.
"""

import asyncio
import sys
from typing import Any, Optional, TextIO

from openai import AsyncOpenAI

from .core.ai_client import build_messages, create_client, first_choice_content
from .core.config import get_settings
from .core.constants import CHAT_MODEL, EMPTY_CONTENT
from .core.structured_logger import configure_logging, get_logger
from .observability import setup_telemetry

logger = get_logger(__name__)


async def generate_poem(client: AsyncOpenAI) -> Any:
    """Send the poem request and wait for the completion."""
    logger.info("Sending chat completion request", model=CHAT_MODEL)
    response = await client.chat.completions.create(
        model=CHAT_MODEL,
        messages=build_messages(),
    )
    logger.info(
        "Chat completion received",
        response_id=getattr(response, "id", None),
        choices=len(getattr(response, "choices", None) or []),
    )
    return response


async def main(client: Optional[AsyncOpenAI] = None, out: Optional[TextIO] = None) -> None:
    client = client or create_client()
    response = await generate_poem(client)

    content = first_choice_content(response)
    print(EMPTY_CONTENT if content is None else content, file=out or sys.stdout)


def run() -> None:
    """Console entry point."""
    settings = get_settings()
    configure_logging(settings.logging.level, settings.logging.format)

    telemetry = setup_telemetry(settings.telemetry)
    try:
        asyncio.run(main())
    finally:
        telemetry.shutdown()


if __name__ == "__main__":
    run()
