import httpx
import pytest
from fastapi.testclient import TestClient

from app.dev_server import create_dev_app


@pytest.fixture
def client(settings, upstream):
    return TestClient(create_dev_app(settings, transport=upstream.transport))


def test_body_is_forwarded_unchanged(client, upstream, chat_payload):
    chat_payload["temperature"] = 0.2

    resp = client.post("/api/chat", json=chat_payload)

    assert resp.status_code == 200
    assert upstream.last_body() == chat_payload


def test_no_prompt_caching_header(client, upstream, chat_payload):
    client.post("/api/chat", json=chat_payload)

    headers = upstream.calls[-1].headers
    assert "anthropic-beta" not in headers
    assert headers["anthropic-version"] == "2023-06-01"
    assert headers["x-api-key"] == "sk-test-key"


def test_upstream_status_is_relayed(client, upstream, chat_payload):
    upstream.respond(400, {"type": "error", "error": {"type": "invalid_request_error"}})

    resp = client.post("/api/chat", json=chat_payload)

    assert resp.status_code == 400
    assert resp.json()["error"] == {"type": "invalid_request_error"}


def test_missing_key_message_points_at_env_file(settings, upstream, chat_payload):
    settings.anthropic_api_key = None
    client = TestClient(create_dev_app(settings, transport=upstream.transport))

    resp = client.post("/api/chat", json=chat_payload)

    assert resp.status_code == 500
    assert resp.json() == {"error": "ANTHROPIC_API_KEY not set in .env.local"}
    assert upstream.calls == []


def test_transport_failure(client, upstream, chat_payload):
    upstream.fail(httpx.ReadTimeout("timed out"))

    resp = client.post("/api/chat", json=chat_payload)

    assert resp.status_code == 500
    assert resp.json() == {"error": "Proxy failed"}
