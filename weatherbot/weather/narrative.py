"""Render weather reports and compose the final reply."""

from __future__ import annotations

from weatherbot.conversation.models import TurnResult, WeatherReport

NARRATIVE = (
    "It is currently {temperature} º{unit} and {condition} in {city}, "
    "with a high of {high} and a low of {low}."
)
DISCLAIMER = "This weather report courtesy of {provider} and IBM Watson."


def _fmt(value: float) -> str:
    number = float(value)
    return str(int(number)) if number.is_integer() else f"{number:g}"


def describe_report(report: WeatherReport | None, provider: str = "Open-Meteo") -> list[str]:
    """Return the narrative sentence and attribution for ``report``, or nothing."""

    if report is None or not report.forecast_days:
        return []
    today = report.forecast_days[0]
    sentence = NARRATIVE.format(
        temperature=_fmt(report.current_temperature),
        unit=report.temperature_unit,
        condition=report.condition_text,
        city=report.city_name,
        high=_fmt(today.high),
        low=_fmt(today.low),
    )
    return [sentence, DISCLAIMER.format(provider=provider)]


def compose_reply(result: TurnResult, provider: str = "Open-Meteo") -> list[str]:
    """Dialogue text, then augmentation notes, then the weather narrative."""

    return [
        *result.reply_messages,
        *result.weather_messages,
        *describe_report(result.weather_report, provider),
    ]
