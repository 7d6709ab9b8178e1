"""Tests for the AI chat proxy."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from shelfsync.services.chat import (
    CREDITS_EXHAUSTED_REPLY,
    GENERIC_REPLY,
    RATE_LIMITED_REPLY,
    build_messages,
    complete_chat,
)

MESSAGES = [{"role": "user", "content": "What should I read next?"}]


def _mock_response(status_code, json_data=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = json_data or {}
    resp.text = str(json_data)
    return resp


def _mock_client(response=None, error=None):
    mock_client = AsyncMock()
    if error is not None:
        mock_client.post = AsyncMock(side_effect=error)
    else:
        mock_client.post = AsyncMock(return_value=response)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


@pytest.fixture(autouse=True)
def api_key(monkeypatch):
    monkeypatch.setenv("SHELFSYNC_AI_API_KEY", "test-key")


def test_build_messages_prepends_system_prompt():
    msgs = build_messages([{"role": "user", "content": "hi", "extra": 1}], "Be brief")
    assert msgs == [
        {"role": "system", "content": "Be brief"},
        {"role": "user", "content": "hi"},
    ]


async def test_complete_chat_success():
    mock_client = _mock_client(_mock_response(200, {
        "choices": [{"message": {"content": "Try The Earthsea Cycle."}}],
    }))
    with patch("shelfsync.services.chat.httpx.AsyncClient", return_value=mock_client):
        reply = await complete_chat(MESSAGES, "You are a librarian")

    assert reply.status_code == 200
    assert reply.response == "Try The Earthsea Cycle."
    kwargs = mock_client.post.call_args.kwargs
    assert kwargs["headers"]["Authorization"] == "Bearer test-key"
    assert kwargs["json"]["messages"][0] == {"role": "system", "content": "You are a librarian"}


async def test_complete_chat_empty_choices():
    mock_client = _mock_client(_mock_response(200, {"choices": []}))
    with patch("shelfsync.services.chat.httpx.AsyncClient", return_value=mock_client):
        reply = await complete_chat(MESSAGES, "prompt")
    assert reply.response == "No response generated"


async def test_complete_chat_rate_limited():
    mock_client = _mock_client(_mock_response(429))
    with patch("shelfsync.services.chat.httpx.AsyncClient", return_value=mock_client):
        reply = await complete_chat(MESSAGES, "prompt")
    assert reply.status_code == 429
    assert reply.response == RATE_LIMITED_REPLY


async def test_complete_chat_credits_exhausted():
    mock_client = _mock_client(_mock_response(402))
    with patch("shelfsync.services.chat.httpx.AsyncClient", return_value=mock_client):
        reply = await complete_chat(MESSAGES, "prompt")
    assert reply.status_code == 402
    assert reply.response == CREDITS_EXHAUSTED_REPLY
    assert reply.error == "AI credits exhausted."


async def test_complete_chat_gateway_error():
    mock_client = _mock_client(_mock_response(503))
    with patch("shelfsync.services.chat.httpx.AsyncClient", return_value=mock_client):
        reply = await complete_chat(MESSAGES, "prompt")
    assert reply.status_code == 500
    assert reply.error == "AI gateway error: 503"
    assert reply.response == GENERIC_REPLY


async def test_complete_chat_non_json_body():
    resp = _mock_response(200)
    resp.json.side_effect = json.JSONDecodeError("Expecting value", "<html>", 0)
    resp.text = "<html>Bad gateway</html>"
    with patch("shelfsync.services.chat.httpx.AsyncClient", return_value=_mock_client(resp)):
        reply = await complete_chat(MESSAGES, "prompt")
    assert reply.status_code == 500
    assert reply.response == GENERIC_REPLY
    assert reply.error == "AI gateway returned an invalid response"


async def test_complete_chat_network_error():
    mock_client = _mock_client(error=httpx.ConnectError("Connection refused"))
    with patch("shelfsync.services.chat.httpx.AsyncClient", return_value=mock_client):
        reply = await complete_chat(MESSAGES, "prompt")
    assert reply.status_code == 500
    assert "Connection refused" in reply.error


async def test_complete_chat_missing_key(monkeypatch):
    monkeypatch.delenv("SHELFSYNC_AI_API_KEY")
    with patch("shelfsync.services.chat.httpx.AsyncClient") as client_cls:
        reply = await complete_chat(MESSAGES, "prompt")
    client_cls.assert_not_called()
    assert reply.status_code == 500
    assert reply.error == "AI service is not configured"


# --- endpoint ---

async def test_chat_endpoint(client):
    mock_client = _mock_client(_mock_response(200, {
        "choices": [{"message": {"content": "Hello, reader."}}],
    }))
    with patch("shelfsync.services.chat.httpx.AsyncClient", return_value=mock_client):
        resp = await client.post("/api/chat", json={
            "messages": MESSAGES,
            "systemPrompt": "Be kind",
            "mode": "recommend",
        })
    assert resp.status_code == 200
    assert resp.json() == {"response": "Hello, reader."}


async def test_chat_endpoint_rate_limited(client):
    mock_client = _mock_client(_mock_response(429))
    with patch("shelfsync.services.chat.httpx.AsyncClient", return_value=mock_client):
        resp = await client.post("/api/chat", json={"messages": MESSAGES})
    assert resp.status_code == 429
    data = resp.json()
    assert data["error"] == "Rate limit exceeded. Please try again in a moment."
    assert data["response"] == RATE_LIMITED_REPLY


async def test_chat_endpoint_requires_messages(client):
    resp = await client.post("/api/chat", json={"messages": []})
    assert resp.status_code == 422


async def test_chat_endpoint_non_json_reply(client):
    reply = _mock_response(200)
    reply.json.side_effect = json.JSONDecodeError("Expecting value", "<html>", 0)
    reply.text = "<html>Bad gateway</html>"
    with patch("shelfsync.services.chat.httpx.AsyncClient", return_value=_mock_client(reply)):
        resp = await client.post("/api/chat", json={"messages": MESSAGES})
    assert resp.status_code == 500
    assert resp.json() == {
        "error": "AI gateway returned an invalid response",
        "response": GENERIC_REPLY,
    }
