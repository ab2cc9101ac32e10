from __future__ import annotations

import json
from pathlib import Path

import pytest

from weatherbot.core.errors import DialogueUnavailable, WeatherLookupFailed

from .fakes import FakeDialogue, FakeWeather


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def watson_paris_payload(fixtures_dir: Path) -> dict:
    return json.loads((fixtures_dir / "watson_paris_tomorrow.json").read_text(encoding="utf-8"))


@pytest.fixture
def geocode_paris_payload(fixtures_dir: Path) -> dict:
    return json.loads((fixtures_dir / "open_meteo_geocode_paris.json").read_text(encoding="utf-8"))


@pytest.fixture
def forecast_paris_payload(fixtures_dir: Path) -> dict:
    return json.loads((fixtures_dir / "open_meteo_forecast_paris.json").read_text(encoding="utf-8"))


@pytest.fixture
def fake_weather() -> FakeWeather:
    return FakeWeather()


@pytest.fixture
def failing_weather() -> FakeWeather:
    return FakeWeather(error=WeatherLookupFailed("unknown location: 'Atlantis'"))


@pytest.fixture
def failing_dialogue() -> FakeDialogue:
    return FakeDialogue(error=DialogueUnavailable("connection refused"))
