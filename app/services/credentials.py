"""
Credentials: pick how to authenticate against the knowledge-base API.

Responsibility: Produce one Credential per invocation. Local development (no
platform instance id) uses the pre-shared subscription key; hosted runs use a
managed identity bearer token, bounded by a fixed timeout. No HTTP here.
"""

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from azure.identity.aio import DefaultAzureCredential

from app.core.config import TOKEN_SCOPE, Settings
from app.core.errors import AuthenticationError
from app.core.race import with_deadline

logger = logging.getLogger(__name__)

# scope -> access token string
TokenProvider = Callable[[str], Awaitable[str]]


@dataclass(frozen=True)
class ApiKey:
    """Pre-shared subscription key (local development)."""

    key: str = field(repr=False)
    scheme: str = field(default="subscription-key", init=False)


@dataclass(frozen=True)
class BearerToken:
    """Managed identity access token (hosted)."""

    token: str = field(repr=False)
    scheme: str = field(default="bearer", init=False)


Credential = ApiKey | BearerToken


def auth_headers(credential: Credential) -> dict[str, str]:
    """Map a credential to the single auth header the knowledge-base API expects."""
    if isinstance(credential, ApiKey):
        return {"Ocp-Apim-Subscription-Key": credential.key}
    if isinstance(credential, BearerToken):
        return {"Authorization": f"Bearer {credential.token}"}
    raise TypeError(f"Unsupported credential type: {type(credential).__name__}")


class ManagedIdentityTokenProvider:
    """Fetch tokens with azure-identity; client_id selects a user-assigned identity."""

    def __init__(self, client_id: str | None = None) -> None:
        self.client_id = client_id

    async def __call__(self, scope: str) -> str:
        async with DefaultAzureCredential(managed_identity_client_id=self.client_id) as credential:
            access_token = await credential.get_token(scope)
        return access_token.token


async def acquire_credential(settings: Settings, token_provider: TokenProvider | None = None) -> Credential:
    """
    Return the credential for this invocation.

    Local mode: ApiKey from settings, ConfigurationError if the key is unset.
    Hosted mode: BearerToken from token_provider (managed identity by default),
    raced against settings.token_timeout. Any failure, the timeout included,
    is re-raised as AuthenticationError("Failed to authenticate: ...").
    """
    if not settings.is_hosted:
        logger.info("[credentials:acquire] local development detected, using API key")
        return ApiKey(settings.require_service_key())

    logger.info("[credentials:acquire] hosted environment detected, using managed identity")
    provider = token_provider or ManagedIdentityTokenProvider(settings.identity_client_id)
    try:
        token = await with_deadline(
            provider(TOKEN_SCOPE),
            settings.token_timeout,
            "Token acquisition timed out",
        )
    except Exception as e:
        logger.error("[credentials:acquire] authentication error: %s", e)
        raise AuthenticationError(f"Failed to authenticate: {e}") from e
    logger.info("[credentials:acquire] token acquired")
    return BearerToken(token)
