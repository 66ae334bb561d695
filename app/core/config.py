"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Settings are read once at startup into an immutable object and handed
to the handler explicitly; nothing below the API layer reads os.environ.
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from app.core.errors import ConfigurationError

# Inbound
DEFAULT_QUESTION: str = "Tell me about your portfolio"

# Knowledge base query endpoint (Azure AI Language, custom question answering)
QUERY_PATH: str = "/language/:query-knowledgebases"
DEPLOYMENT_NAME: str = "production"
API_VERSION: str = "2023-04-01"
TOP_ANSWERS: int = 1

# Managed identity token scope for Cognitive Services
TOKEN_SCOPE: str = "https://cognitiveservices.azure.com/.default"

# Timeouts (seconds) and transport retry hint
TOKEN_TIMEOUT: float = 10.0
REQUEST_TIMEOUT: float = 15.0
REQUEST_RETRIES: int = 1

# Env variable names
ENV_INSTANCE_ID: str = "WEBSITE_INSTANCE_ID"
ENV_SERVICE_KEY: str = "LANGUAGE_SERVICE_KEY"
ENV_IDENTITY_CLIENT_ID: str = "MANAGED_IDENTITY_CLIENT_ID"
ENV_ENDPOINT: str = "LANGUAGE_SERVICE_ENDPOINT"
ENV_PROJECT: str = "QA_KNOWLEDGE_BASE_ID"
ENV_LOG_LEVEL: str = "LOG_LEVEL"

DEFAULT_LOG_LEVEL: str = "INFO"


def log_level_from_env() -> str:
    """LOG_LEVEL from env/.env as a level name; unknown values fall back to INFO."""
    load_dotenv()
    name = os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        return DEFAULT_LOG_LEVEL
    return name


def _env(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value or None


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings. Missing required values surface at call time."""

    instance_id: str | None = None
    service_key: str | None = None
    identity_client_id: str | None = None
    endpoint: str | None = None
    project_name: str | None = None
    token_timeout: float = TOKEN_TIMEOUT
    request_timeout: float = REQUEST_TIMEOUT
    request_retries: int = REQUEST_RETRIES

    @property
    def is_hosted(self) -> bool:
        """True when the platform assigned an instance id (hosted mode)."""
        return bool(self.instance_id)

    def require_service_key(self) -> str:
        if not self.service_key:
            raise ConfigurationError(
                f"{ENV_SERVICE_KEY} environment variable is required for local development"
            )
        return self.service_key

    def require_endpoint(self) -> str:
        if not self.endpoint:
            raise ConfigurationError(f"{ENV_ENDPOINT} environment variable is not defined")
        return self.endpoint.rstrip("/")

    def require_project_name(self) -> str:
        if not self.project_name:
            raise ConfigurationError(f"{ENV_PROJECT} environment variable is not defined")
        return self.project_name


def load_settings() -> Settings:
    """Read settings from the process environment (and .env when present)."""
    load_dotenv()
    return Settings(
        instance_id=_env(ENV_INSTANCE_ID),
        service_key=_env(ENV_SERVICE_KEY),
        identity_client_id=_env(ENV_IDENTITY_CLIENT_ID),
        endpoint=_env(ENV_ENDPOINT),
        project_name=_env(ENV_PROJECT),
    )
