"""Lightweight in-memory metrics collector."""

from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass
from typing import Dict


@dataclass
class MetricSnapshot:
    total_turns: int
    turn_outcomes: Dict[str, int]
    weather_outcomes: Dict[str, int]


class MetricsCollector:
    """Thread-safe counter storage for basic service metrics."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._total_turns = 0
        self._turn_outcomes: Counter[str] = Counter()
        self._weather_outcomes: Counter[str] = Counter()

    def record_turn(self, outcome: str) -> None:
        with self._lock:
            self._total_turns += 1
            self._turn_outcomes[outcome] += 1

    def record_weather(self, outcome: str) -> None:
        with self._lock:
            self._weather_outcomes[outcome] += 1

    def snapshot(self) -> MetricSnapshot:
        with self._lock:
            return MetricSnapshot(
                total_turns=self._total_turns,
                turn_outcomes=dict(self._turn_outcomes),
                weather_outcomes=dict(self._weather_outcomes),
            )
