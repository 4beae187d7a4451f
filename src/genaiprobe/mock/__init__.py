"""OpenAI-compatible mock server used by collector integration tests."""

from .server import build_completion, create_app, serve

__all__ = ["build_completion", "create_app", "serve"]
