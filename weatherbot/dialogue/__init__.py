"""Dialogue service package exports."""

from .base import DialogueService
from .watson import WatsonAssistantClient

__all__ = ["DialogueService", "WatsonAssistantClient"]
