"""
Shared constants for genaiprobe.
"""

# Chat model requested by the probe
CHAT_MODEL = "gpt-4o-mini"

# The single user prompt sent on every run
POEM_PROMPT = "Write a short poem on OpenTelemetry."

USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"

# Printed when the response has no first choice, message or content
EMPTY_CONTENT = ""
