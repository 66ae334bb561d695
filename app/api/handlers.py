"""
API handlers: read request data, call services, map results/errors to HTTP.

Responsibility: Bridge HTTP types and services. Body parsing and
exception-to-HTTP mapping live here so services stay free of FastAPI types.
Every failure is answered with a JSON body carrying at least "error".
"""

import json
import logging

import httpx
from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.config import Settings
from app.core.errors import DownstreamStatusError, DownstreamTimeoutError, DownstreamUnavailableError
from app.schemas.query import ErrorResponse, QuestionRequest
from app.services.credentials import TokenProvider, acquire_credential
from app.services.knowledge_base import query_knowledge_base

logger = logging.getLogger(__name__)


def error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def parse_question_request(request: Request) -> QuestionRequest:
    """
    Parse the body as a QuestionRequest. An empty body (e.g. GET) counts as {}.
    Raises ValueError for invalid JSON, non-object JSON or a non-string question.
    """
    raw = await request.body()
    data = json.loads(raw) if raw.strip() else {}
    return QuestionRequest.model_validate(data)


async def handle_query(
    request: Request,
    settings: Settings,
    token_provider: TokenProvider,
    client: httpx.AsyncClient,
) -> JSONResponse:
    """parse -> authenticate -> call -> respond."""
    logger.info("[api:query_chatbot] triggered method=%s", request.method)
    try:
        try:
            payload = await parse_question_request(request)
        except ValueError as e:
            logger.error("[api:query_chatbot] error parsing request: %s", e)
            return error_response(400, "Invalid request format")

        question = payload.resolved_question()
        logger.info("[api:query_chatbot] IN  question=%r", question)

        credential = await acquire_credential(settings, token_provider)
        result = await query_knowledge_base(client, settings, question, credential)
    except DownstreamStatusError as e:
        return error_response(e.status_code, e.message)
    except DownstreamTimeoutError as e:
        return error_response(504, "Language service request timed out", e.message)
    except DownstreamUnavailableError as e:
        return error_response(500, "Unable to reach the language service", e.message)
    except Exception as e:
        logger.exception("[api:query_chatbot] function error")
        return error_response(500, "An error occurred processing your request", str(e))

    logger.info("[api:query_chatbot] OUT answer relayed")
    return JSONResponse(status_code=200, content=result)
