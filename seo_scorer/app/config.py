"""Application configuration management."""

import logging
from functools import lru_cache
from typing import Any

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings managed via Pydantic BaseSettings.

    Attributes:
        API_VERSION: The version of the API.
        OTEL_ENABLED: Whether OpenTelemetry instrumentation is enabled.
        OTEL_SERVICE_NAME: The service name for OpenTelemetry.
        OTEL_EXPORTER_OTLP_ENDPOINT: The OTLP endpoint for OpenTelemetry.
        OTEL_TRACES_SAMPLER_ARG: The sampling rate for traces.
        OTEL_PYTHON_FASTAPI_EXCLUDED_URLS: URLs to exclude from tracing.
        OTLP_SECURE: Whether to use a secure connection for OTLP.
        PROMETHEUS_MONITORED_PATHS: Comma-separated route suffixes to collect
            HTTP metrics for.
        REQUESTS_PER_MINUTE: Allowed requests per minute for rate limiting.
        BURST_LIMIT: Burst limit for rate limiting.
        BLOCK_DURATION: Duration in seconds to block IPs exceeding limits.
        LOG_LEVEL: The logging level for the application.
        SERVER_HOST: The host address for the server.
        SERVER_PORT: The port number for the server.
        SERVER_RELOAD: Whether uvicorn restarts on code changes.
        MAX_TEXT_LENGTH: Maximum allowed text length for analysis.
        ALLOWED_ORIGINS: Comma-separated string of allowed CORS origins.
        TWINWORD_API_KEY: Credential for the Twinword topic tagging API.
        TWINWORD_API_URL: Endpoint of the Twinword topic tagging API.
        EXTRACTION_TIMEOUT: Timeout in seconds for the extraction call.
    """

    # API Version
    API_VERSION: str = "v1"

    # OpenTelemetry Configuration
    OTEL_ENABLED: bool = True
    OTEL_SERVICE_NAME: str = "seo-scorer"
    OTEL_EXPORTER_OTLP_ENDPOINT: str = "http://localhost:4317"
    OTEL_TRACES_SAMPLER_ARG: float = 1.0
    OTEL_PYTHON_FASTAPI_EXCLUDED_URLS: str = "health,metrics"
    OTLP_SECURE: bool = False

    # Prometheus Configuration
    PROMETHEUS_MONITORED_PATHS: str = "analyze,health"

    # Rate Limiting Settings
    REQUESTS_PER_MINUTE: int = 60
    BURST_LIMIT: int = 100
    BLOCK_DURATION: int = 300

    # Logging Configuration
    LOG_LEVEL: str = "INFO"

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000
    SERVER_RELOAD: bool = False
    MAX_TEXT_LENGTH: int = 102400
    ALLOWED_ORIGINS: str = ""

    # Keyword Extraction Service
    TWINWORD_API_KEY: str | None = None
    TWINWORD_API_URL: str = "https://api.twinword.com/api/v7/topic/generate/"
    EXTRACTION_TIMEOUT: float = 10.0

    @model_validator(mode="before")
    @classmethod
    def _strip_inline_comments(cls, data: Any) -> Any:
        if isinstance(data, dict):
            cleaned_data = {}
            for key, value in data.items():
                if isinstance(value, str):
                    cleaned_data[key] = value.split("#")[0].strip()
                else:
                    cleaned_data[key] = value
            return cleaned_data
        return data

    @property
    def cors_origins(self) -> list[str]:
        """Get the list of allowed CORS origins.

        Returns:
            A list of allowed CORS origins split from the ALLOWED_ORIGINS setting.
            If no origins are configured, returns an empty list.
        """
        return [
            origin.strip()
            for origin in self.ALLOWED_ORIGINS.split(",")
            if origin.strip()
        ]

    @property
    def monitored_paths(self) -> list[str]:
        """Full paths of the routes whose HTTP traffic is exported to Prometheus."""
        return [
            f"/api/{self.API_VERSION}/{suffix.strip()}"
            for suffix in self.PROMETHEUS_MONITORED_PATHS.split(",")
            if suffix.strip()
        ]

    @property
    def log_level(self) -> int:
        """Convert the string log level from settings to a logging constant.

        Returns:
            The integer value of the logging level (e.g., logging.INFO,
            logging.DEBUG). Defaults to logging.INFO if the configured
            LOG_LEVEL is invalid.
        """
        return getattr(logging, self.LOG_LEVEL.upper(), logging.INFO)

    class Config:
        """Pydantic configuration class for Settings.

        Attributes:
            env_file (str): The name of the environment file to load (e.g., ".env").
            case_sensitive (bool): Whether environment variable names are case-sensitive.
        """

        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Create and cache a Settings instance.

    Returns:
        A cached instance of the Settings class.
    """
    return Settings()


settings = get_settings()
