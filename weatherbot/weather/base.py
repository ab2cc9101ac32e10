"""Weather service interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from weatherbot.conversation.models import WeatherReport


class WeatherService(ABC):
    """Looks up current conditions and a short forecast for a place name."""

    provider_name: str

    @abstractmethod
    async def lookup(self, location: str) -> WeatherReport:
        """Return the report for ``location`` or raise ``WeatherLookupFailed``."""
