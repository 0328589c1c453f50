"""
API tests for `api/health.py` and the metrics mount using FastAPI's TestClient.

Covers:
- GET /: static liveness string
- GET /status: presence flags and probe outcome, always 200
- GET /metrics: Prometheus exposition
"""

from core.errors import TransportFailureError


def test_root_returns_liveness_string(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    assert "gateway" in resp.text.lower()


def test_status_reports_connection(client, kb_client):
    resp = client.get("/status")
    assert resp.status_code == 200
    assert resp.json() == {
        "OPENAI_API_KEY": True,
        "OPENAI_ASSISTANT_ID": True,
        "OPENAI_VECTOR_STORE_ID": True,
        "openaiConnection": True,
    }
    assert kb_client.calls["probe"] == 1


def test_status_reports_probe_failure_as_false(client, kb_client):
    kb_client.fail_on["probe"] = TransportFailureError()
    resp = client.get("/status")
    assert resp.status_code == 200
    assert resp.json()["openaiConnection"] is False
    assert resp.json()["OPENAI_API_KEY"] is True


def test_status_reprobes_on_every_call_by_default(client, kb_client):
    client.get("/status")
    client.get("/status")
    assert kb_client.calls["probe"] == 2


def test_metrics_endpoint(client):
    client.get("/files")
    resp = client.get("/metrics/")
    assert resp.status_code == 200
    assert "kb_upstream_errors" in resp.text
