"""Open-Meteo backed weather lookups (geocoding + forecast)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from weatherbot.conversation.models import ForecastDay, WeatherReport
from weatherbot.core.errors import WeatherLookupFailed
from weatherbot.weather.base import WeatherService

# WMO weather interpretation codes as documented by Open-Meteo.
WMO_CONDITIONS = {
    0: "Clear",
    1: "Mostly Clear",
    2: "Partly Cloudy",
    3: "Cloudy",
    45: "Foggy",
    48: "Freezing Fog",
    51: "Light Drizzle",
    53: "Drizzle",
    55: "Heavy Drizzle",
    56: "Freezing Drizzle",
    57: "Freezing Drizzle",
    61: "Light Rain",
    63: "Rain",
    65: "Heavy Rain",
    66: "Freezing Rain",
    67: "Freezing Rain",
    71: "Light Snow",
    73: "Snow",
    75: "Heavy Snow",
    77: "Snow Grains",
    80: "Rain Showers",
    81: "Rain Showers",
    82: "Violent Rain Showers",
    85: "Snow Showers",
    86: "Heavy Snow Showers",
    95: "Thunderstorms",
    96: "Thunderstorms With Hail",
    99: "Thunderstorms With Hail",
}

_UNITS = {"C": "celsius", "F": "fahrenheit"}


def describe_weather_code(code: Any) -> str:
    try:
        return WMO_CONDITIONS.get(int(code), "Unknown")
    except (TypeError, ValueError):
        return "Unknown"


class OpenMeteoWeatherClient(WeatherService):
    """Resolve a place name and fetch current conditions with a daily forecast."""

    provider_name = "Open-Meteo"

    def __init__(
        self,
        *,
        geocoding_url: str = "https://geocoding-api.open-meteo.com/v1/search",
        forecast_url: str = "https://api.open-meteo.com/v1/forecast",
        temperature_unit: str = "F",
        forecast_days: int = 3,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        unit = temperature_unit.upper()
        if unit not in _UNITS:
            raise ValueError(f"Unsupported temperature unit: {temperature_unit}")
        self.geocoding_url = geocoding_url
        self.forecast_url = forecast_url
        self.temperature_unit = unit
        self.forecast_days = forecast_days
        self._timeout = timeout
        self._transport = transport
        self._logger = logging.getLogger("weatherbot.weather")

    async def lookup(self, location: str) -> WeatherReport:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                place = await self._geocode(client, location)
                forecast = await self._forecast(client, place)
        except httpx.HTTPError as exc:
            raise WeatherLookupFailed(f"weather request for {location!r} failed: {exc}") from exc

        return self._build_report(place, forecast, location)

    async def _geocode(self, client: httpx.AsyncClient, location: str) -> dict[str, Any]:
        response = await client.get(
            self.geocoding_url,
            params={"name": location, "count": 1, "language": "en", "format": "json"},
        )
        response.raise_for_status()
        results = _json(response).get("results") or []
        if not results:
            raise WeatherLookupFailed(f"unknown location: {location!r}")
        place = results[0]
        if "latitude" not in place or "longitude" not in place:
            raise WeatherLookupFailed(f"geocoding result for {location!r} has no coordinates")
        self._logger.debug("Resolved %s to %s", location, place.get("name"))
        return place

    async def _forecast(self, client: httpx.AsyncClient, place: dict[str, Any]) -> dict[str, Any]:
        response = await client.get(
            self.forecast_url,
            params={
                "latitude": place["latitude"],
                "longitude": place["longitude"],
                "current": "temperature_2m,weather_code",
                "daily": "temperature_2m_max,temperature_2m_min",
                "temperature_unit": _UNITS[self.temperature_unit],
                "forecast_days": self.forecast_days,
                "timezone": "auto",
            },
        )
        response.raise_for_status()
        return _json(response)

    def _build_report(self, place: dict[str, Any], forecast: dict[str, Any], location: str) -> WeatherReport:
        current = forecast.get("current") or {}
        daily = forecast.get("daily") or {}
        highs = daily.get("temperature_2m_max") or []
        lows = daily.get("temperature_2m_min") or []
        dates = daily.get("time") or []

        days = [
            ForecastDay(high=high, low=low, date=dates[i] if i < len(dates) else None)
            for i, (high, low) in enumerate(zip(highs, lows))
            if high is not None and low is not None
        ]
        temperature = current.get("temperature_2m")
        if temperature is None or not days:
            raise WeatherLookupFailed(f"incomplete forecast for {location!r}")

        return WeatherReport(
            current_temperature=temperature,
            temperature_unit=self.temperature_unit,
            condition_text=describe_weather_code(current.get("weather_code")),
            city_name=place.get("name") or location,
            forecast_days=days,
        )


def _json(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as exc:
        raise WeatherLookupFailed("weather service returned invalid JSON") from exc
    if not isinstance(data, dict):
        raise WeatherLookupFailed("weather service returned an unexpected payload")
    return data
