"""Dataclasses describing entities, weather reports and turn results."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

# Opaque token owned by the dialogue service; never inspected here.
ConversationContext = Any

DIALOGUE_APOLOGY = "Sorry, but something went wrong. Could you try again?"
WEATHER_APOLOGY = "Sorry, but I couldn't get the weather. Could you try again?"
TIME_ADVISORY = "Sorry, I don't know how to work with time yet. But, here's the weather for {location}!"


class EntityKind(str, Enum):
    """Entity categories the core acts upon."""

    LOCATION = "Location"
    TIME = "Time"
    OTHER = "Other"

    @classmethod
    def from_label(cls, label: str | None) -> "EntityKind":
        """Map a dialogue-service entity label onto a kind."""

        normalized = (label or "").strip().lower()
        if normalized in LOCATION_LABELS:
            return cls.LOCATION
        if normalized in TIME_LABELS:
            return cls.TIME
        return cls.OTHER


LOCATION_LABELS = frozenset({"sys-location", "location"})
TIME_LABELS = frozenset({"time", "sys-time", "sys-date"})


@dataclass(slots=True)
class Entity:
    """A fact recognised by the dialogue service in the user's text."""

    kind: EntityKind
    value: str
    confidence: float = 1.0
    label: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Entity":
        """Build an entity from a raw ``{entity, value, confidence}`` mapping."""

        label = payload.get("entity")
        raw = payload.get("confidence", 1.0)
        try:
            confidence = float(raw)
        except (TypeError, ValueError):
            confidence = None
        if confidence is None or not math.isfinite(confidence):
            # Left unparsed so the selector skips it.
            confidence = str(raw) if isinstance(raw, float) else raw
        return cls(
            kind=EntityKind.from_label(label),
            value=str(payload.get("value") or ""),
            confidence=confidence,
            label=label,
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "entity": self.label or self.kind.value,
            "kind": self.kind.value,
            "value": self.value,
            "confidence": self.confidence,
        }


@dataclass(slots=True)
class EntitySelection:
    location: str | None = None
    time: str | None = None


@dataclass(slots=True)
class DialogueReply:
    """Structured output of one dialogue-service call."""

    reply_texts: list[str]
    entities: list[Entity]
    context: ConversationContext | None


@dataclass(slots=True)
class ForecastDay:
    high: float
    low: float
    date: str | None = None


@dataclass(slots=True)
class WeatherReport:
    """Current conditions plus a short daily forecast for one place."""

    current_temperature: float
    temperature_unit: str
    condition_text: str
    city_name: str
    forecast_days: list[ForecastDay]

    def to_payload(self) -> dict[str, Any]:
        return {
            "current_temperature": self.current_temperature,
            "temperature_unit": self.temperature_unit,
            "condition_text": self.condition_text,
            "city_name": self.city_name,
            "forecast_days": [
                {"date": day.date, "high": day.high, "low": day.low} for day in self.forecast_days
            ],
        }


@dataclass(slots=True)
class Augmentation:
    """Messages and optional report produced by the weather augmenter."""

    messages: list[str] = field(default_factory=list)
    report: WeatherReport | None = None
    ok: bool = True


@dataclass(slots=True)
class TurnResult:
    """Everything one turn hands to the presentation layer."""

    reply_messages: list[str] = field(default_factory=list)
    weather_messages: list[str] = field(default_factory=list)
    weather_report: WeatherReport | None = None
    context: ConversationContext | None = None
    entities: list[Entity] = field(default_factory=list)
    ok: bool = True
