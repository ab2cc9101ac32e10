"""Weather service package exports."""

from .base import WeatherService
from .open_meteo import OpenMeteoWeatherClient

__all__ = ["WeatherService", "OpenMeteoWeatherClient"]
