"""Application settings and configuration helpers."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, List

from pydantic import AliasChoices, AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("weatherbot.config")


class Settings(BaseSettings):
    """Strongly-typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="Weatherbot", description="Human-readable service name.")
    environment: str = Field(default="local", description="Deployment environment identifier.")
    log_level: str = Field(default="INFO", description="Application log level.")
    port: int = Field(
        default=3000,
        validation_alias=AliasChoices("port", "vcap_app_port"),
        description="HTTP port (PORT, then VCAP_APP_PORT).",
    )

    dialogue_url: str = Field(
        default="https://gateway.watsonplatform.net/assistant/api",
        description="Base URL of the Watson Assistant service instance.",
    )
    dialogue_workspace_id: str | None = Field(default=None, description="Assistant workspace (skill) id.")
    dialogue_version: str = Field(default="2021-06-14", description="Assistant API version date.")
    dialogue_api_key: str | None = Field(default=None, description="IAM API key for the assistant.")
    dialogue_username: str | None = Field(default=None, description="Legacy basic-auth username.")
    dialogue_password: str | None = Field(default=None, description="Legacy basic-auth password.")
    dialogue_service_name: str | None = Field(
        default=None,
        description="Name of a bound Cloud Foundry service holding assistant credentials.",
    )
    dialogue_timeout_seconds: float = Field(default=15.0, gt=0, description="Assistant request timeout.")
    vcap_services: str | None = Field(default=None, description="Raw VCAP_SERVICES JSON.")

    weather_geocoding_url: str = Field(
        default="https://geocoding-api.open-meteo.com/v1/search",
        description="Open-Meteo geocoding endpoint.",
    )
    weather_forecast_url: str = Field(
        default="https://api.open-meteo.com/v1/forecast",
        description="Open-Meteo forecast endpoint.",
    )
    weather_temperature_unit: str = Field(default="F", pattern="^[CFcf]$", description="C or F.")
    weather_forecast_days: int = Field(default=3, ge=1, le=16, description="Days of forecast to request.")
    weather_timeout_seconds: float = Field(default=10.0, gt=0, description="Weather request timeout.")

    entity_min_confidence: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Entities must score above this to be used. 0 accepts any recognized entity.",
    )

    context_db_path: Path | None = Field(
        default=None,
        description="SQLite file for conversation contexts. In-memory when omitted.",
    )
    context_cache_size: int = Field(
        default=1024,
        ge=1,
        description="Most in-memory conversations kept before the least recently used is dropped.",
    )
    static_dir: Path = Field(default=Path("public"), description="Directory served at '/'.")

    frontend_origin: AnyHttpUrl | None = Field(
        default=None,
        description="Allowed frontend origin (CORS). If omitted, defaults to localhost dev server.",
    )
    additional_origins: List[AnyHttpUrl] = Field(
        default_factory=list,
        description="Additional allowed CORS origins for multi-client deployments.",
    )

    @property
    def cors_origins(self) -> list[str]:
        """Return the full list of allowed CORS origins."""

        origins: list[str] = []
        if self.frontend_origin:
            origins.append(str(self.frontend_origin).rstrip("/"))
        else:
            origins.extend([f"http://localhost:{self.port}", f"http://127.0.0.1:{self.port}"])

        for origin in self.additional_origins:
            origins.append(str(origin).rstrip("/"))

        seen: set[str] = set()
        unique: list[str] = []
        for origin in origins:
            if origin not in seen:
                seen.add(origin)
                unique.append(origin)
        return unique

    def dialogue_credentials(self) -> dict[str, Any]:
        """Return assistant credentials, preferring a bound VCAP service when present."""

        credentials: dict[str, Any] = {
            "url": self.dialogue_url,
            "apikey": self.dialogue_api_key,
            "username": self.dialogue_username,
            "password": self.dialogue_password,
        }
        if not self.dialogue_service_name or not self.vcap_services:
            return credentials

        try:
            services = json.loads(self.vcap_services)
        except ValueError:
            logger.warning("VCAP_SERVICES is not valid JSON; using explicit credentials")
            return credentials

        for instances in services.values() if isinstance(services, dict) else []:
            for instance in instances or []:
                if instance.get("name") == self.dialogue_service_name:
                    bound = instance.get("credentials") or {}
                    credentials.update({k: v for k, v in bound.items() if k in credentials and v})
                    return credentials

        logger.warning("Bound service %s not found in VCAP_SERVICES", self.dialogue_service_name)
        return credentials


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()
