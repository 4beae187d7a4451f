"""
genaiprobe: an instrumented OpenAI chat-completion probe

Sends a single chat completion under OpenTelemetry instrumentation so that a
collector can observe the GenAI client span and its events, and ships the
OpenAI-compatible mock server collector tests point it at.
"""

__version__ = "0.1.0"
__description__ = "Instrumented OpenAI chat-completion probe"
