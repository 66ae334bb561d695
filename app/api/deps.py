"""
FastAPI dependencies: settings, token provider and outbound HTTP client.

Tests override these with app.dependency_overrides to inject fakes.
"""

from typing import AsyncIterator

import httpx
from fastapi import Depends, Request

from app.core.config import Settings
from app.services.credentials import ManagedIdentityTokenProvider, TokenProvider
from app.services.knowledge_base import new_http_client


def get_settings(request: Request) -> Settings:
    """Settings loaded once in create_app()."""
    return request.app.state.settings


def get_token_provider(settings: Settings = Depends(get_settings)) -> TokenProvider:
    return ManagedIdentityTokenProvider(settings.identity_client_id)


async def get_http_client(settings: Settings = Depends(get_settings)) -> AsyncIterator[httpx.AsyncClient]:
    """One client per invocation, closed when the response is sent."""
    async with new_http_client(settings) as client:
        yield client
