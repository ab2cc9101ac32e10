from fastapi.testclient import TestClient

from weatherbot.main import app


client = TestClient(app, raise_server_exceptions=False)


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_metrics_shape():
    response = client.get("/metrics")
    assert response.status_code == 200
    payload = response.json()
    assert set(payload) == {"total_turns", "turn_outcomes", "weather_outcomes"}


def test_openapi_contains_expected_paths():
    response = client.get("/openapi.json")
    assert response.status_code == 200
    paths = response.json().get("paths", {})

    for path in ["/api/message", "/api/weather", "/health", "/metrics"]:
        assert path in paths, f"Missing {path} from OpenAPI paths"

    assert "post" in paths["/api/message"]
    assert "post" in paths["/api/weather"]


def test_unexpected_error_returns_internal_error(monkeypatch):
    from weatherbot import main

    async def broken_augment(entities):
        raise RuntimeError("bug")

    monkeypatch.setattr(main.orchestrator, "augment_entities", broken_augment)

    response = client.post(
        "/api/weather",
        json={"entities": [{"entity": "sys-location", "value": "Paris", "confidence": 0.9}]},
    )

    assert response.status_code == 500
    payload = response.json()
    assert payload["error"] == "internal_error"
    assert payload["message"] == "Something unexpected happened. Please try again later."
