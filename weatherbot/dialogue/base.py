"""Dialogue service interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from weatherbot.conversation.models import ConversationContext, DialogueReply


class DialogueService(ABC):
    """Sends user text to a hosted dialogue-understanding service."""

    @abstractmethod
    async def send_message(self, text: str, context: ConversationContext | None) -> DialogueReply:
        """Return the reply for ``text`` or raise ``DialogueUnavailable``."""
