import pytest

from domains.assistant_hub import AssistantRequest, AssistantService, parse_image_payload
from domains.core import ConfigurationError

from conftest import FakeLLMClient


def test_parse_data_url():
    image = parse_image_payload("data:image/jpeg;base64,/9j/4AAQ")
    assert image.mime_type == "image/jpeg"
    assert image.data == "/9j/4AAQ"


def test_parse_bare_base64_defaults_to_png():
    image = parse_image_payload("iVBORw0KGgo")
    assert image.mime_type == "image/png"
    assert image.data == "iVBORw0KGgo"


def test_parse_without_semicolon_keeps_default_mime():
    image = parse_image_payload("data:image/webp,base64,AAAA")
    assert image.mime_type == "image/png"
    assert image.data == "AAAA"


def test_context_is_prefixed_to_message():
    request = AssistantRequest(message="What is due?", context="2 reminders open")
    assert request.build_user_text() == (
        "[CURRENT APP STATE CONTEXT]:\n2 reminders open\n\n[USER REQUEST]:\nWhat is due?"
    )


def test_ignite_wraps_context_message():
    request = AssistantRequest(message="Plan my week", context="ctx", is_ignite=True)
    text = request.build_user_text()
    assert text.startswith("[SUPER AGENT MODE: IGNITE ACTIVATED]")
    assert text.endswith("[CURRENT APP STATE CONTEXT]:\nctx\n\n[USER REQUEST]:\nPlan my week")


def test_image_becomes_multimodal_content():
    request = AssistantRequest(message="Rate this", image_base64="data:image/gif;base64,R0lG", user_memory="Likes serif fonts")
    system, user = request.build_messages()

    assert system["role"] == "system"
    assert "Likes serif fonts" in system["content"]
    assert user["content"] == [
        {"type": "text", "text": "Rate this"},
        {"type": "image_url", "image_url": {"url": "data:image/gif;base64,R0lG"}},
    ]


def test_plain_message_has_no_system_prompt():
    messages = AssistantRequest(message="hi").build_messages()
    assert messages == [{"role": "user", "content": "hi"}]


@pytest.mark.asyncio
async def test_reply_passes_model_text_through():
    llm = FakeLLMClient(text="Sure")
    reply = await AssistantService(llm).reply(AssistantRequest(message="hi"))
    assert reply.text == "Sure"
    assert len(llm.calls) == 1


@pytest.mark.asyncio
async def test_function_callback_skips_model():
    llm = FakeLLMClient()
    reply = await AssistantService(llm).reply(AssistantRequest(function_calls=[{"name": "createTask"}]))
    assert reply.text == "Function processed"
    assert llm.calls == []


@pytest.mark.asyncio
async def test_empty_model_text_fallbacks():
    service = AssistantService(FakeLLMClient(text=""))
    assert (await service.reply(AssistantRequest(message="hi"))).text == "No response generated."

    calls = [{"name": "createTask", "args": {}, "id": "c1"}]
    service = AssistantService(FakeLLMClient(text="", tool_calls=calls))
    reply = await service.reply(AssistantRequest(message="add a task"))
    assert reply.text == "One moment, processing changes..."
    assert reply.function_calls == calls


@pytest.mark.asyncio
async def test_missing_api_key():
    llm = FakeLLMClient()
    llm.is_configured = False
    with pytest.raises(ConfigurationError):
        await AssistantService(llm).reply(AssistantRequest(message="hi"))
