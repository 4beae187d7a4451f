"""
Configuration management for genaiprobe.

This module provides centralized configuration using Pydantic Settings
for environment-based configuration management.

Telemetry settings use the standard OpenTelemetry variable names
(OTEL_SERVICE_NAME, OTEL_EXPORTER_OTLP_ENDPOINT, ...) so the probe is
driven the same way as any SDK-instrumented process.
"""

from typing import Optional

import os
from pathlib import Path

from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_VALID_EXPORTERS = ["otlp", "console", "none"]


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(default="json", description="Log format (json or text)")

    @validator("level")
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @validator("format")
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        if v.lower() not in ["json", "text"]:
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()


class TelemetrySettings(BaseSettings):
    """OpenTelemetry configuration settings."""

    model_config = SettingsConfigDict(env_prefix="OTEL_")

    sdk_disabled: bool = Field(default=False, description="Disable all telemetry")
    service_name: str = Field(
        default="opentelemetry-python-openai", description="service.name resource attribute"
    )
    exporter_otlp_endpoint: Optional[str] = Field(
        default=None,
        description="OTLP/HTTP base URL; signal paths are appended (exporter defaults when unset)",
    )
    traces_exporter: str = Field(default="otlp", description="Span exporter (otlp, console, none)")
    logs_exporter: str = Field(default="otlp", description="Log/event exporter (otlp, console, none)")
    metrics_exporter: str = Field(default="otlp", description="Metric exporter (otlp, console, none)")
    instrumentation_genai_capture_message_content: bool = Field(
        default=False,
        description="Whether GenAI events carry prompt and completion text (read by the instrumentation)",
    )

    @validator("traces_exporter", "logs_exporter", "metrics_exporter")
    def validate_exporter(cls, v: str) -> str:
        """Validate exporter name."""
        if v.lower() not in _VALID_EXPORTERS:
            raise ValueError(f"Exporter must be one of: {_VALID_EXPORTERS}")
        return v.lower()

    @validator("exporter_otlp_endpoint")
    def validate_endpoint(cls, v: Optional[str]) -> Optional[str]:
        """Validate OTLP endpoint format."""
        if not v:
            return None
        if not v.startswith(("http://", "https://")):
            raise ValueError("OTLP endpoint must start with 'http://' or 'https://'")
        return v

    def signal_endpoint(self, signal: str) -> Optional[str]:
        """Full OTLP/HTTP URL for a signal ("traces", "logs" or "metrics")."""
        if not self.exporter_otlp_endpoint:
            return None
        # Base URL may or may not carry a trailing slash
        return f"{self.exporter_otlp_endpoint.rstrip('/')}/v1/{signal}"


class MockServerSettings(BaseSettings):
    """OpenAI-compatible mock server configuration settings."""

    model_config = SettingsConfigDict(env_prefix="MOCK_OPENAI_")

    host: str = Field(default="127.0.0.1", description="Bind host")
    port: int = Field(default=8080, description="Bind port")
    model: str = Field(default="gpt-4o-mini", description="Model reported in responses")
    response_id: str = Field(default="chatcmpl-1234", description="Completion id")
    response_created: int = Field(default=1677652281, description="Completion creation timestamp")
    response_content: str = Field(
        default="This is a mock response from the server.", description="Assistant message text"
    )
    prompt_tokens: int = Field(default=5, description="Reported prompt tokens")
    completion_tokens: int = Field(default=7, description="Reported completion tokens")

    @validator("port")
    def validate_port(cls, v: int) -> int:
        """Validate port number."""
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    app_name: str = Field(default="genaiprobe", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    app_env: str = Field(default="development", description="Application environment")

    # Sub-settings
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)
    mock_server: MockServerSettings = Field(default_factory=MockServerSettings)

    @validator("app_env")
    def validate_app_env(cls, v: str) -> str:
        """Validate application environment."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"App environment must be one of: {valid_envs}")
        return v.lower()

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.app_env == "testing"


# Global settings instance (loaded after attempting to read .env)
_settings: Optional[Settings] = None


def _load_env_file_if_available() -> None:
    """Best-effort load of .env by searching current and parent directories.

    Already-set environment variables win over values from the file.
    """
    from dotenv import load_dotenv

    cwd = Path(os.getcwd()).resolve()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / ".env"
        if candidate.exists():
            load_dotenv(dotenv_path=str(candidate), override=False)
            break


def get_settings() -> Settings:
    """Get application settings instance (lazy-init with .env discovery)."""
    global _settings
    if _settings is None:
        _load_env_file_if_available()
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
