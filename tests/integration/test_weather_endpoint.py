from fastapi.testclient import TestClient

from weatherbot.core.errors import WeatherLookupFailed
from weatherbot.main import app

from ..fakes import paris_report


client = TestClient(app)


def test_empty_entities_rejected_before_lookup(monkeypatch):
    from weatherbot import main

    lookups = []

    async def fake_lookup(location):
        lookups.append(location)
        return paris_report()

    monkeypatch.setattr(main.weather_client, "lookup", fake_lookup)

    response = client.post("/api/weather", json={"entities": []})

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_input"
    assert lookups == []


def test_location_only_returns_report_without_messages(monkeypatch):
    from weatherbot import main

    async def fake_lookup(location):
        return paris_report()

    monkeypatch.setattr(main.weather_client, "lookup", fake_lookup)

    response = client.post(
        "/api/weather",
        json={"entities": [{"entity": "sys-location", "value": "Paris", "confidence": 0.9}]},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["messages"] == []
    assert payload["weather_report"]["city_name"] == "Paris"
    assert payload["weather_report"]["forecast_days"][0] == {"date": "2026-10-19", "high": 61, "low": 48}
    assert payload["narrative"][0].startswith("It is currently 58 ºF")


def test_time_and_location_adds_advisory(monkeypatch):
    from weatherbot import main

    async def fake_lookup(location):
        return paris_report()

    monkeypatch.setattr(main.weather_client, "lookup", fake_lookup)

    response = client.post(
        "/api/weather",
        json={
            "entities": [
                {"entity": "Time", "value": "tomorrow", "confidence": 0.9},
                {"entity": "sys-location", "value": "Paris", "confidence": 0.9},
            ]
        },
    )

    assert response.status_code == 200
    assert response.json()["messages"] == [
        "Sorry, I don't know how to work with time yet. But, here's the weather for Paris!"
    ]


def test_time_only_returns_nothing(monkeypatch):
    from weatherbot import main

    lookups = []

    async def fake_lookup(location):
        lookups.append(location)
        return paris_report()

    monkeypatch.setattr(main.weather_client, "lookup", fake_lookup)

    response = client.post(
        "/api/weather",
        json={"entities": [{"entity": "Time", "value": "tomorrow", "confidence": 0.9}]},
    )

    assert response.status_code == 200
    assert response.json() == {"messages": [], "weather_report": None, "narrative": []}
    assert lookups == []


def test_lookup_failure_returns_apology(monkeypatch):
    from weatherbot import main

    async def failing_lookup(location):
        raise WeatherLookupFailed("unknown location")

    monkeypatch.setattr(main.weather_client, "lookup", failing_lookup)

    response = client.post(
        "/api/weather",
        json={"entities": [{"entity": "sys-location", "value": "Atlantis", "confidence": 0.9}]},
    )

    assert response.status_code == 500
    assert response.json() == {
        "messages": ["Sorry, but I couldn't get the weather. Could you try again?"],
        "weather_report": None,
        "narrative": [],
    }


def test_unreadable_confidence_skips_entity(monkeypatch):
    from weatherbot import main

    lookups = []

    async def fake_lookup(location):
        lookups.append(location)
        return paris_report()

    monkeypatch.setattr(main.weather_client, "lookup", fake_lookup)

    response = client.post(
        "/api/weather",
        json={"entities": [{"entity": "sys-location", "value": "Paris", "confidence": "high"}]},
    )

    assert response.status_code == 200
    assert response.json() == {"messages": [], "weather_report": None, "narrative": []}
    assert lookups == []
