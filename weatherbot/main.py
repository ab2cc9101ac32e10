"""FastAPI application entry point for the weather chat service."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from weatherbot.api.conversation import create_conversation_router
from weatherbot.conversation.augmenter import WeatherAugmenter
from weatherbot.conversation.orchestrator import TurnOrchestrator
from weatherbot.conversation.selector import EntitySelector
from weatherbot.conversation.store import ContextStoreProvider
from weatherbot.core.config import get_settings
from weatherbot.core.errors import InvalidInput, invalid_input_handler, unhandled_exception_handler
from weatherbot.core.logging import configure_logging, request_id_middleware
from weatherbot.core.metrics import MetricsCollector
from weatherbot.dialogue.watson import WatsonAssistantClient
from weatherbot.weather.open_meteo import OpenMeteoWeatherClient

settings = get_settings()
logger = logging.getLogger("weatherbot.app")

credentials = settings.dialogue_credentials()
dialogue_client = WatsonAssistantClient(
    url=credentials["url"],
    workspace_id=settings.dialogue_workspace_id,
    version=settings.dialogue_version,
    api_key=credentials["apikey"],
    username=credentials["username"],
    password=credentials["password"],
    timeout=settings.dialogue_timeout_seconds,
)
weather_client = OpenMeteoWeatherClient(
    geocoding_url=settings.weather_geocoding_url,
    forecast_url=settings.weather_forecast_url,
    temperature_unit=settings.weather_temperature_unit,
    forecast_days=settings.weather_forecast_days,
    timeout=settings.weather_timeout_seconds,
)
metrics = MetricsCollector()
augmenter = WeatherAugmenter(weather_client, EntitySelector(settings.entity_min_confidence))
orchestrator = TurnOrchestrator(dialogue_client, augmenter, metrics)
context_stores = ContextStoreProvider(settings.context_db_path, settings.context_cache_size)

app = FastAPI(title=settings.app_name, version="0.1.0", docs_url="/docs")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(request_id_middleware)

app.include_router(
    create_conversation_router(orchestrator, context_stores, weather_client.provider_name)
)


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Return basic service status for monitoring."""

    return {"status": "ok"}


@app.get("/metrics", tags=["metrics"])
async def metrics_endpoint() -> dict:
    snapshot = metrics.snapshot()
    return {
        "total_turns": snapshot.total_turns,
        "turn_outcomes": snapshot.turn_outcomes,
        "weather_outcomes": snapshot.weather_outcomes,
    }


@app.on_event("startup")
async def startup_logging() -> None:
    level = configure_logging(settings.log_level)
    logger.info("Logging configured at %s level for %s environment", logging.getLevelName(level), settings.environment)
    if not settings.dialogue_workspace_id:
        logger.warning("No dialogue workspace configured; every turn will apologise")


app.add_exception_handler(InvalidInput, invalid_input_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# Mounted last so the API routes above take precedence over "/".
if settings.static_dir.is_dir():
    app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
else:
    logger.info("Static directory %s not found; serving API only", settings.static_dir)
