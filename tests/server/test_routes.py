"""Tests for the FastAPI surface (POST /ask, GET /health)."""

import pytest
from fastapi.testclient import TestClient

from webai.app import WebAI
from webai.config import AppConfig
from webai.server.app import create_api, set_app
from webai.tools.builtin import math_tool
from webai.tools.models import Tool, ToolOutput
from webai.tools.registry import ToolRegistry


@pytest.fixture
def client(clock, echo_backend, pro_provider):
    set_app(WebAI(
        AppConfig(),
        backend=echo_backend,
        providers=[pro_provider],
        registry=ToolRegistry([math_tool()]),
        clock=clock,
    ))
    yield TestClient(create_api())
    set_app(None)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ask_success(client, echo_backend):
    response = client.post("/ask", json={
        "prompt": "What is 2 + 2?",
        "userId": "u1",
        "history": [{"role": "user", "content": "hello"}],
    })

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["data"]["usedTools"] == ["math"]
    assert body["data"]["answer"] == "Echo: What is 2 + 2?"
    assert body["data"]["version"] == 2
    assert echo_backend.calls[0]["token_budget"] == 8000


def test_ask_snake_case_fields(client):
    response = client.post("/ask", json={"prompt": "hi", "user_id": "u1"})
    assert response.json()["ok"] is True


def test_ask_missing_prompt_is_failure_result(client):
    response = client.post("/ask", json={"prompt": "  ", "userId": "u1"})

    assert response.status_code == 200
    assert response.json() == {"ok": False, "error": "Missing prompt.", "code": "BAD_REQUEST"}


def test_ask_without_user_requires_subscription(client):
    response = client.post("/ask", json={"prompt": "hi"})
    assert response.json()["code"] == "SUBSCRIPTION_REQUIRED"


def test_ask_invalid_history_role_rejected(client):
    response = client.post("/ask", json={
        "prompt": "hi", "history": [{"role": "system", "content": "x"}],
    })
    assert response.status_code == 422


def test_ask_history_reaches_tools(clock, echo_backend, pro_provider):
    seen = []

    async def capture(tool_input):
        seen.append(tool_input)
        return ToolOutput(text="")

    set_app(WebAI(
        AppConfig(),
        backend=echo_backend,
        providers=[pro_provider],
        registry=ToolRegistry([Tool(id="math", name="Math", description="", run=capture)]),
        clock=clock,
    ))
    try:
        response = TestClient(create_api()).post("/ask", json={
            "prompt": "  hi  ",
            "userId": "u1",
            "sessionId": "s1",
            "history": [
                {"role": "user", "content": "first", "ts": 1},
                {"role": "assistant", "content": "second"},
            ],
        })
    finally:
        set_app(None)

    assert response.json()["ok"] is True
    assert seen[0].prompt == "hi"
    assert seen[0].condensed_history == ["first", "second"]
