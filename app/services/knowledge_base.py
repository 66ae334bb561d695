"""
Knowledge base client: one query against the hosted question-answering API.

Responsibility: Build the query URL/body/headers and issue exactly one POST.
Transport failures and non-2xx answers are raised as Downstream* errors; the
API layer decides the HTTP status. The success payload is returned untouched.
"""

import logging
from typing import Any

import httpx

from app.core.config import API_VERSION, DEPLOYMENT_NAME, QUERY_PATH, Settings
from app.core.errors import DownstreamStatusError, DownstreamTimeoutError, DownstreamUnavailableError
from app.core.race import RaceTimeoutError, with_deadline
from app.schemas.query import KnowledgeBaseQuery
from app.services.credentials import Credential, auth_headers

logger = logging.getLogger(__name__)


def build_query_url(settings: Settings) -> str:
    """Endpoint base + query path. ConfigurationError if the endpoint is unset."""
    return f"{settings.require_endpoint()}{QUERY_PATH}"


def build_query_params(settings: Settings) -> dict[str, str]:
    return {
        "projectName": settings.require_project_name(),
        "deploymentName": DEPLOYMENT_NAME,
        "api-version": API_VERSION,
    }


def new_http_client(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """
    AsyncClient with settings.request_timeout as the per-phase (connect/read/write/pool)
    limit; the whole call is bounded in query_knowledge_base. Redirects are followed.
    The default transport retries connection establishment settings.request_retries
    times; requests are never resent.
    """
    if transport is None:
        transport = httpx.AsyncHTTPTransport(retries=settings.request_retries)
    return httpx.AsyncClient(transport=transport, timeout=settings.request_timeout, follow_redirects=True)


async def query_knowledge_base(
    client: httpx.AsyncClient,
    settings: Settings,
    question: str,
    credential: Credential,
) -> Any:
    """
    POST the question and return the decoded JSON answer payload. The whole call,
    body download included, must finish within settings.request_timeout.
    """
    url = build_query_url(settings)
    params = build_query_params(settings)
    headers = {"Content-Type": "application/json", **auth_headers(credential)}
    body = KnowledgeBaseQuery(question=question).model_dump()

    logger.info("[knowledge_base:query] IN  url=%s project=%s scheme=%s", url, params["projectName"], credential.scheme)
    try:
        response = await with_deadline(
            client.post(url, params=params, json=body, headers=headers),
            settings.request_timeout,
            "Knowledge base request timed out",
        )
    except (httpx.TimeoutException, RaceTimeoutError) as e:
        logger.error("[knowledge_base:query] timed out after %.1fs: %s", settings.request_timeout, e)
        raise DownstreamTimeoutError(f"No response within {settings.request_timeout:g} seconds") from e
    except httpx.TransportError as e:
        logger.error("[knowledge_base:query] no response: %s", e)
        raise DownstreamUnavailableError(str(e) or type(e).__name__) from e

    if not response.is_success:
        logger.error("[knowledge_base:query] API error: %s - %s", response.status_code, response.text[:500])
        raise DownstreamStatusError(response.status_code, response.text)

    result = response.json()
    logger.info("[knowledge_base:query] OUT status=%s", response.status_code)
    return result
