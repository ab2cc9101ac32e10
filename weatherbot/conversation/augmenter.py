"""Weather augmentation rules applied to selected entities."""

from __future__ import annotations

import logging
from typing import Iterable

from weatherbot.conversation.models import TIME_ADVISORY, Augmentation, Entity
from weatherbot.conversation.selector import EntitySelector
from weatherbot.weather.base import WeatherService

logger = logging.getLogger("weatherbot.augmenter")


class WeatherAugmenter:
    """Decide whether a weather lookup happens and which notes accompany it."""

    def __init__(self, weather: WeatherService, selector: EntitySelector | None = None) -> None:
        self.weather = weather
        self.selector = selector or EntitySelector()

    async def augment(self, location: str | None, time: str | None) -> Augmentation:
        """Return advisory messages and a report for ``location``.

        Time on its own is never acted upon. ``WeatherLookupFailed`` from the
        weather service propagates to the caller.
        """

        result = Augmentation()
        if location and time:
            result.messages.append(TIME_ADVISORY.format(location=location))
        if location:
            logger.debug("Looking up weather for %s", location)
            result.report = await self.weather.lookup(location)
        return result

    async def augment_entities(self, entities: Iterable[Entity]) -> Augmentation:
        selection = self.selector.select(entities)
        return await self.augment(selection.location, selection.time)
