"""
API route aggregator: register endpoints and delegate to handlers; no logic here.
"""

import logging

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.api.deps import get_http_client, get_settings, get_token_provider
from app.api.handlers import handle_query
from app.core.config import Settings
from app.schemas.query import ErrorResponse
from app.services.credentials import TokenProvider

logger = logging.getLogger(__name__)
router = APIRouter()


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "Question relay running"}


@router.get("/health", tags=["system"])
def health(settings: Settings = Depends(get_settings)):
    return {"ok": True, "mode": "hosted" if settings.is_hosted else "local"}


# --- Query ---

@router.api_route(
    "/api/QueryChatbot",
    methods=["GET", "POST"],
    tags=["query"],
    summary="Ask the portfolio knowledge base",
    description=(
        "Body (optional): {\"question\": string}. Relays the question to the knowledge-base API "
        "and returns its JSON payload verbatim. 400 on malformed body, downstream status relayed "
        "on non-2xx, 504 on downstream timeout, 500 otherwise."
    ),
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 504: {"model": ErrorResponse}},
)
async def query_chatbot(
    request: Request,
    settings: Settings = Depends(get_settings),
    token_provider: TokenProvider = Depends(get_token_provider),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> JSONResponse:
    return await handle_query(request, settings, token_provider, client)
