"""API routes for dialogue turns and weather augmentation."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from weatherbot.conversation.models import Entity, TurnResult
from weatherbot.conversation.orchestrator import TurnOrchestrator
from weatherbot.conversation.store import DEFAULT_CONVERSATION_ID, ContextStoreProvider
from weatherbot.core.errors import InvalidInput
from weatherbot.weather.narrative import compose_reply, describe_report


def create_conversation_router(
    orchestrator: TurnOrchestrator,
    stores: ContextStoreProvider,
    provider_name: str,
) -> APIRouter:
    router = APIRouter(prefix="/api", tags=["conversation"])

    @router.post("/message")
    async def message_endpoint(payload: dict) -> Any:
        text = payload.get("text") or ""
        if not isinstance(text, str):
            raise InvalidInput("text must be a string")
        conversation_id = str(payload.get("conversation_id") or DEFAULT_CONVERSATION_ID)
        store = stores.for_conversation(conversation_id)

        supplied = payload.get("context")

        if not text.strip() and supplied is None:
            result = await orchestrator.bootstrap(store)
        else:
            prior = supplied if supplied is not None else store.get()
            result = await orchestrator.run_turn(text, prior, store)

        body = _turn_payload(result, conversation_id, provider_name)
        if not result.ok:
            return JSONResponse(status_code=500, content=body)
        return body

    @router.post("/weather")
    async def weather_endpoint(payload: dict) -> Any:
        raw = payload.get("entities") or []
        if not isinstance(raw, list):
            raise InvalidInput("entities must be a list")
        entities = [Entity.from_payload(item) for item in raw if isinstance(item, dict)]

        augmentation = await orchestrator.augment_entities(entities)
        body = {
            "messages": augmentation.messages,
            "weather_report": augmentation.report.to_payload() if augmentation.report else None,
            "narrative": describe_report(augmentation.report, provider_name),
        }
        if not augmentation.ok:
            return JSONResponse(status_code=500, content=body)
        return body

    return router


def _turn_payload(result: TurnResult, conversation_id: str, provider_name: str) -> dict[str, Any]:
    return {
        "conversation_id": conversation_id,
        "output": {"text": result.reply_messages},
        "context": result.context,
        "entities": [entity.to_payload() for entity in result.entities],
        "weather_messages": result.weather_messages,
        "weather_report": result.weather_report.to_payload() if result.weather_report else None,
        "messages": compose_reply(result, provider_name),
    }
