"""Pick the location and time entities a turn should act on."""

from __future__ import annotations

import logging
import math
from typing import Iterable

from weatherbot.conversation.models import Entity, EntityKind, EntitySelection

logger = logging.getLogger("weatherbot.selector")


class EntitySelector:
    """Last-wins selection of Location and Time entities.

    Entities may be re-emitted later in the list with refined confidence, so the
    last accepted occurrence of each kind is treated as the most specific one.
    A ``min_confidence`` of 0 accepts every recognised entity; anything higher
    requires a strictly greater confidence.
    """

    def __init__(self, min_confidence: float = 0.0) -> None:
        self.min_confidence = min_confidence

    def select(self, entities: Iterable[Entity] | None) -> EntitySelection:
        selection = EntitySelection()
        for entity in entities or ():
            if not self._accepts(entity):
                continue
            if entity.kind is EntityKind.LOCATION:
                selection.location = entity.value
            elif entity.kind is EntityKind.TIME:
                selection.time = entity.value
        return selection

    def _accepts(self, entity: object) -> bool:
        value = getattr(entity, "value", None)
        if not isinstance(value, str) or not value.strip():
            return False
        try:
            confidence = float(getattr(entity, "confidence", 0.0))
        except (TypeError, ValueError):
            logger.debug("Skipping entity with unreadable confidence: %r", entity)
            return False
        if not math.isfinite(confidence):
            return False
        if self.min_confidence <= 0.0:
            return True
        return confidence > self.min_confidence
