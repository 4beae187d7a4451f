"""
Settings loading: environment variables, validation and .env discovery.
"""

import pytest
from pydantic import ValidationError

from genaiprobe.core.config import (
    LoggingSettings,
    MockServerSettings,
    Settings,
    TelemetrySettings,
    get_settings,
    reset_settings,
)


def test_defaults():
    settings = Settings()

    assert settings.app_name == "genaiprobe"
    assert settings.logging.level == "INFO"
    assert settings.logging.format == "json"
    assert settings.telemetry.sdk_disabled is False
    assert settings.telemetry.service_name == "opentelemetry-python-openai"
    assert settings.telemetry.exporter_otlp_endpoint is None
    assert settings.telemetry.traces_exporter == "otlp"
    assert settings.mock_server.port == 8080


def test_standard_otel_variables(monkeypatch):
    monkeypatch.setenv("OTEL_SDK_DISABLED", "true")
    monkeypatch.setenv("OTEL_SERVICE_NAME", "poem-probe")
    monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://zipkin:9411")
    monkeypatch.setenv("OTEL_TRACES_EXPORTER", "Console")
    monkeypatch.setenv("OTEL_INSTRUMENTATION_GENAI_CAPTURE_MESSAGE_CONTENT", "true")

    telemetry = TelemetrySettings()

    assert telemetry.sdk_disabled is True
    assert telemetry.service_name == "poem-probe"
    assert telemetry.exporter_otlp_endpoint == "http://zipkin:9411"
    assert telemetry.traces_exporter == "console"
    assert telemetry.instrumentation_genai_capture_message_content is True


def test_signal_endpoint():
    assert TelemetrySettings().signal_endpoint("traces") is None
    settings = TelemetrySettings(exporter_otlp_endpoint="http://zipkin:9411/")
    assert settings.signal_endpoint("traces") == "http://zipkin:9411/v1/traces"
    assert settings.signal_endpoint("logs") == "http://zipkin:9411/v1/logs"
    assert settings.signal_endpoint("metrics") == "http://zipkin:9411/v1/metrics"


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        TelemetrySettings(traces_exporter="jaeger")
    with pytest.raises(ValidationError):
        TelemetrySettings(exporter_otlp_endpoint="zipkin:9411")
    with pytest.raises(ValidationError):
        LoggingSettings(level="chatty")
    with pytest.raises(ValidationError):
        LoggingSettings(format="xml")
    with pytest.raises(ValidationError):
        MockServerSettings(port=70000)
    with pytest.raises(ValidationError):
        Settings(app_env="moon")


def test_log_level_is_normalised():
    assert LoggingSettings(level="debug").level == "DEBUG"


def test_get_settings_is_cached(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("OTEL_SERVICE_NAME", "changed")

    assert get_settings() is first

    reset_settings()
    assert get_settings().telemetry.service_name == "changed"


def test_env_file_discovered_in_parent_directory(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text("OTEL_SERVICE_NAME=from-dotenv\nLOG_LEVEL=warning\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)
    # load_dotenv writes straight into os.environ; register the keys for cleanup
    monkeypatch.setenv("OTEL_SERVICE_NAME", "placeholder")
    monkeypatch.setenv("LOG_LEVEL", "placeholder")
    monkeypatch.delenv("OTEL_SERVICE_NAME")
    monkeypatch.delenv("LOG_LEVEL")

    settings = get_settings()

    assert settings.telemetry.service_name == "from-dotenv"
    assert settings.logging.level == "WARNING"


def test_env_file_does_not_override_environment(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text("OTEL_SERVICE_NAME=from-dotenv\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OTEL_SERVICE_NAME", "already-set")

    assert get_settings().telemetry.service_name == "already-set"
