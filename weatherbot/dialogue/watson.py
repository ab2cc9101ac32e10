"""Watson Assistant v1 message API client."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from weatherbot.conversation.models import ConversationContext, DialogueReply, Entity
from weatherbot.core.errors import DialogueUnavailable
from weatherbot.dialogue.base import DialogueService


class WatsonAssistantClient(DialogueService):
    """Relay user text to a Watson Assistant workspace and parse its reply."""

    def __init__(
        self,
        url: str,
        workspace_id: str | None,
        *,
        version: str = "2021-06-14",
        api_key: str | None = None,
        username: str | None = None,
        password: str | None = None,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.workspace_id = workspace_id
        self.version = version
        self._auth = self._build_auth(api_key, username, password)
        self._timeout = timeout
        self._transport = transport
        self._logger = logging.getLogger("weatherbot.dialogue")

    @staticmethod
    def _build_auth(api_key: str | None, username: str | None, password: str | None) -> httpx.BasicAuth | None:
        if api_key:
            return httpx.BasicAuth("apikey", api_key)
        if username and password:
            return httpx.BasicAuth(username, password)
        return None

    async def send_message(self, text: str, context: ConversationContext | None) -> DialogueReply:
        if not self.workspace_id:
            raise DialogueUnavailable("dialogue workspace id is not configured")

        payload: dict[str, Any] = {"input": {"text": text}}
        if context is not None:
            payload["context"] = context

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{self.url}/v1/workspaces/{self.workspace_id}/message",
                    params={"version": self.version},
                    json=payload,
                    auth=self._auth,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            raise DialogueUnavailable(
                f"dialogue service returned HTTP {exc.response.status_code}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise DialogueUnavailable(f"dialogue service request failed: {exc}") from exc

        return self._parse(data)

    def _parse(self, data: Any) -> DialogueReply:
        if not isinstance(data, dict):
            raise DialogueUnavailable("dialogue service returned an unexpected payload")

        output = data.get("output") or {}
        texts = output.get("text") or []
        if isinstance(texts, str):
            texts = [texts]

        entities = [
            Entity.from_payload(item) for item in data.get("entities") or [] if isinstance(item, dict)
        ]
        self._logger.debug("Dialogue reply with %d texts and %d entities", len(texts), len(entities))

        return DialogueReply(
            reply_texts=[str(text) for text in texts if text],
            entities=entities,
            context=data.get("context"),
        )
