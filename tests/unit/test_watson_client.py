import asyncio
import json

import httpx
import pytest

from weatherbot.conversation.models import EntityKind
from weatherbot.core.errors import DialogueUnavailable
from weatherbot.dialogue.watson import WatsonAssistantClient


def client_for(handler, **kwargs):
    return WatsonAssistantClient(
        "https://assistant.example.com/api/",
        "ws-123",
        api_key="secret",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def test_send_message_posts_text_and_context(watson_paris_payload):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(200, json=watson_paris_payload)

    prior = {"conversation_id": "6b2c7c4e", "system": {"dialog_turn_counter": 1}}
    reply = asyncio.run(client_for(handler).send_message("weather in Paris tomorrow?", prior))

    assert seen["url"] == (
        "https://assistant.example.com/api/v1/workspaces/ws-123/message?version=2021-06-14"
    )
    assert seen["body"] == {"input": {"text": "weather in Paris tomorrow?"}, "context": prior}
    assert seen["auth"].startswith("Basic ")
    assert reply.reply_texts == ["Let me check the weather."]
    assert [entity.kind for entity in reply.entities] == [EntityKind.TIME, EntityKind.LOCATION]
    assert reply.entities[1].value == "Paris"
    assert reply.context == watson_paris_payload["context"]


def test_first_turn_omits_context(watson_paris_payload):
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json=watson_paris_payload)

    asyncio.run(client_for(handler).send_message("", None))

    assert bodies == [{"input": {"text": ""}}]


def test_http_error_raises_dialogue_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": "Unauthorized"})

    with pytest.raises(DialogueUnavailable, match="HTTP 401"):
        asyncio.run(client_for(handler).send_message("hi", None))


def test_network_error_raises_dialogue_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(DialogueUnavailable):
        asyncio.run(client_for(handler).send_message("hi", None))


def test_invalid_json_raises_dialogue_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>")

    with pytest.raises(DialogueUnavailable):
        asyncio.run(client_for(handler).send_message("hi", None))


def test_missing_workspace_raises_without_request():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    client = WatsonAssistantClient("https://assistant.example.com", None, transport=httpx.MockTransport(handler))

    with pytest.raises(DialogueUnavailable):
        asyncio.run(client.send_message("hi", None))
    assert calls == []


def test_non_mapping_context_is_sent_unchanged(watson_paris_payload):
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json=watson_paris_payload)

    asyncio.run(client_for(handler).send_message("hi", "opaque-token"))

    assert bodies == [{"input": {"text": "hi"}, "context": "opaque-token"}]
