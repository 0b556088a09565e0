"""Axiom 로깅 미들웨어 테스트.

Axiom logging middleware tests — event shape, sensitive field masking,
error detail extraction, skipped paths, and ingest failures.
"""

from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.middleware.axiom_logging import AxiomLoggingMiddleware, mask_sensitive
from app.utils.exceptions import NotFoundError


class FakeAxiomClient:
    """ingest_events 호출을 기록하는 가짜 클라이언트."""

    def __init__(self, fail: bool = False) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []
        self.fail = fail

    def ingest_events(self, dataset: str, events: list[dict[str, Any]]) -> None:
        if self.fail:
            raise RuntimeError("axiom unavailable")
        self.events.extend((dataset, e) for e in events)


def build_app(client: FakeAxiomClient) -> FastAPI:
    test_app = FastAPI()
    test_app.add_middleware(AxiomLoggingMiddleware, client=client, dataset="user-query")

    @test_app.post("/echo")
    async def echo(payload: dict[str, Any]) -> dict[str, Any]:
        return payload

    @test_app.get("/missing")
    async def missing() -> None:
        raise NotFoundError("User not found")

    @test_app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return test_app


@pytest.fixture
def fake_client() -> FakeAxiomClient:
    return FakeAxiomClient()


async def _request(test_app: FastAPI, method: str, path: str, **kwargs: Any):
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        return await ac.request(method, path, **kwargs)


async def test_logs_request_with_masked_body(fake_client: FakeAxiomClient):
    res = await _request(build_app(fake_client), "POST", "/echo", json={"name": "lisi", "password": "x"})

    assert res.status_code == 200
    assert res.json() == {"name": "lisi", "password": "x"}
    [(dataset, event)] = fake_client.events
    assert dataset == "user-query"
    assert event["method"] == "POST"
    assert event["path"] == "/echo"
    assert event["status_code"] == 200
    assert event["request_body"] == {"name": "lisi", "password": "***"}
    assert "error" not in event


async def test_logs_error_detail_and_keeps_response(fake_client: FakeAxiomClient):
    res = await _request(build_app(fake_client), "GET", "/missing", params={"token": "abc", "q": "1"})

    assert res.status_code == 404
    assert res.json() == {"detail": "User not found"}
    [(_, event)] = fake_client.events
    assert event["error"] == "User not found"
    assert event["query_params"] == {"token": "***", "q": "1"}


async def test_skips_health(fake_client: FakeAxiomClient):
    res = await _request(build_app(fake_client), "GET", "/health")
    assert res.status_code == 200
    assert fake_client.events == []


async def test_ingest_failure_does_not_break_request():
    res = await _request(build_app(FakeAxiomClient(fail=True)), "POST", "/echo", json={"a": 1})
    assert res.status_code == 200


def test_mask_sensitive_nested():
    data = {"user": {"api_key": "k", "items": [{"secret": 1, "ok": 2}]}, "name": "n"}
    assert mask_sensitive(data) == {"user": {"api_key": "***", "items": [{"secret": "***", "ok": 2}]}, "name": "n"}
