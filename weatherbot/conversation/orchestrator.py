"""Drive one conversational turn through the dialogue and weather services."""

from __future__ import annotations

import logging
from typing import Sequence

from weatherbot.conversation.augmenter import WeatherAugmenter
from weatherbot.conversation.models import (
    DIALOGUE_APOLOGY,
    WEATHER_APOLOGY,
    Augmentation,
    ConversationContext,
    Entity,
    TurnResult,
)
from weatherbot.conversation.store import ContextStore
from weatherbot.core.errors import InvalidInput
from weatherbot.core.metrics import MetricsCollector
from weatherbot.dialogue.base import DialogueService


class TurnOrchestrator:
    """Send text with the prior context, store the new context, add weather."""

    def __init__(
        self,
        dialogue: DialogueService,
        augmenter: WeatherAugmenter,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.dialogue = dialogue
        self.augmenter = augmenter
        self.metrics = metrics or MetricsCollector()
        self._logger = logging.getLogger("weatherbot.turns")

    async def bootstrap(self, store: ContextStore) -> TurnResult:
        """Empty first turn that makes the dialogue service send its welcome."""

        return await self.run_turn("", None, store, bootstrap=True)

    async def run_turn(
        self,
        user_text: str,
        prior_context: ConversationContext | None,
        store: ContextStore,
        *,
        bootstrap: bool = False,
    ) -> TurnResult:
        text = (user_text or "").strip()
        if not text and not bootstrap:
            raise InvalidInput("text is required")

        try:
            reply = await self.dialogue.send_message(text, prior_context)
        except Exception:  # noqa: BLE001
            self._logger.exception("Dialogue call failed")
            self.metrics.record_turn("dialogue_failed")
            return TurnResult(reply_messages=[DIALOGUE_APOLOGY], context=prior_context, ok=False)

        store.set(reply.context)
        result = TurnResult(
            reply_messages=[message for message in reply.reply_texts if message],
            context=reply.context,
            entities=list(reply.entities),
        )

        if result.entities:
            augmentation = await self._safe_augment(result.entities)
            result.weather_messages.extend(augmentation.messages)
            result.weather_report = augmentation.report

        self.metrics.record_turn("bootstrap" if bootstrap else "ok")
        return result

    async def augment_entities(self, entities: Sequence[Entity]) -> Augmentation:
        """Weather augmentation for entities submitted directly by a client."""

        if not entities:
            raise InvalidInput("entities are required")
        return await self._safe_augment(entities)

    async def _safe_augment(self, entities: Sequence[Entity]) -> Augmentation:
        try:
            augmentation = await self.augmenter.augment_entities(entities)
        except Exception:  # noqa: BLE001
            self._logger.exception("Weather augmentation failed")
            self.metrics.record_weather("failed")
            return Augmentation(messages=[WEATHER_APOLOGY], report=None, ok=False)

        self.metrics.record_weather("report" if augmentation.report else "skipped")
        return augmentation
