"""
Unit tests for the knowledge-base client (URL building and error mapping).
"""

import asyncio

import httpx
import pytest

from app.core.config import Settings
from app.core.errors import (
    ConfigurationError,
    DownstreamStatusError,
    DownstreamTimeoutError,
    DownstreamUnavailableError,
)
from app.services.credentials import ApiKey
from app.services.knowledge_base import (
    build_query_params,
    build_query_url,
    new_http_client,
    query_knowledge_base,
)

SETTINGS = Settings(service_key="k", endpoint="https://kb.example.com/", project_name="proj")


def _query(handler) -> object:
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await query_knowledge_base(client, SETTINGS, "What is this?", ApiKey("k"))

    return asyncio.run(run())


class TestBuildRequest:
    """Tests for build_query_url() / build_query_params()."""

    def test_url_strips_trailing_slash(self) -> None:
        assert build_query_url(SETTINGS) == "https://kb.example.com/language/:query-knowledgebases"

    def test_params(self) -> None:
        assert build_query_params(SETTINGS) == {
            "projectName": "proj",
            "deploymentName": "production",
            "api-version": "2023-04-01",
        }

    def test_missing_endpoint(self) -> None:
        with pytest.raises(ConfigurationError, match="LANGUAGE_SERVICE_ENDPOINT"):
            build_query_url(Settings(project_name="proj"))

    def test_missing_project(self) -> None:
        with pytest.raises(ConfigurationError, match="QA_KNOWLEDGE_BASE_ID"):
            build_query_params(Settings(endpoint="https://kb.example.com"))


class TestQueryKnowledgeBase:
    """Tests for query_knowledge_base()."""

    def test_returns_payload(self) -> None:
        payload = {"answers": [{"answer": "yes", "confidenceScore": 1.0}]}
        assert _query(lambda req: httpx.Response(200, json=payload)) == payload

    def test_non_2xx_raises_status_error(self) -> None:
        with pytest.raises(DownstreamStatusError) as exc_info:
            _query(lambda req: httpx.Response(404, text="project not found"))
        assert exc_info.value.status_code == 404
        assert exc_info.value.body == "project not found"
        assert "404" in exc_info.value.message

    def test_timeout_raises_timeout_error(self) -> None:
        def handler(req):
            raise httpx.ConnectTimeout("slow", request=req)

        with pytest.raises(DownstreamTimeoutError):
            _query(handler)

    def test_transport_error_raises_unavailable(self) -> None:
        def handler(req):
            raise httpx.ConnectError("dns failure", request=req)

        with pytest.raises(DownstreamUnavailableError, match="dns failure"):
            _query(handler)


def test_new_http_client_uses_request_timeout() -> None:
    async def run():
        async with new_http_client(Settings(request_timeout=15.0)) as client:
            return client.timeout

    timeout = asyncio.run(run())
    assert timeout.read == 15.0
    assert timeout.connect == 15.0


class TestWholeCallDeadline:
    """The request timeout bounds the whole call, not each connect/read step."""

    @staticmethod
    def _trickle_handler(delay: float):
        async def trickle():
            for byte in b'{"answers": []}':
                await asyncio.sleep(delay)
                yield bytes([byte])

        def handler(req):
            return httpx.Response(200, headers={"Content-Type": "application/json"}, content=trickle())

        return handler

    @staticmethod
    def _run(handler, settings: Settings):
        async def run():
            async with new_http_client(settings, transport=httpx.MockTransport(handler)) as client:
                return await query_knowledge_base(client, settings, "What is this?", ApiKey("k"))

        return asyncio.run(run())

    def test_trickling_body_hits_deadline(self) -> None:
        settings = Settings(service_key="k", endpoint="https://kb.example.com", project_name="proj", request_timeout=0.2)
        with pytest.raises(DownstreamTimeoutError):
            self._run(self._trickle_handler(0.05), settings)

    def test_slow_response_hits_deadline(self) -> None:
        async def handler(req):
            await asyncio.sleep(5)
            return httpx.Response(200, json={"answers": []})

        settings = Settings(service_key="k", endpoint="https://kb.example.com", project_name="proj", request_timeout=0.05)
        with pytest.raises(DownstreamTimeoutError):
            self._run(handler, settings)

    def test_fast_trickle_within_deadline(self) -> None:
        settings = Settings(service_key="k", endpoint="https://kb.example.com", project_name="proj", request_timeout=5.0)
        assert self._run(self._trickle_handler(0.001), settings) == {"answers": []}


def test_redirect_is_followed() -> None:
    seen: list[str] = []

    def handler(req):
        seen.append(req.url.path)
        if req.url.host == "kb.example.com":
            return httpx.Response(307, headers={"Location": "https://kb2.example.com/language/:query-knowledgebases"})
        return httpx.Response(200, json={"answers": [{"answer": "moved"}]})

    async def run():
        async with new_http_client(SETTINGS, transport=httpx.MockTransport(handler)) as client:
            return await query_knowledge_base(client, SETTINGS, "What is this?", ApiKey("k"))

    assert asyncio.run(run()) == {"answers": [{"answer": "moved"}]}
    assert len(seen) == 2
