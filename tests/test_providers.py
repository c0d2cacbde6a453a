"""Vendor adapter translation: request shape in, plain text out."""

import asyncio

import pytest

from ai_gateway.exceptions import UnsupportedProviderError
from ai_gateway.providers.llm import GenerationRequest, ProviderKind
from ai_gateway.providers.llm.anthropic_impl import MAX_OUTPUT_TOKENS, AnthropicTextGenerator
from ai_gateway.providers.llm.catalog import list_models
from ai_gateway.providers.llm.gemini_impl import GeminiTextGenerator
from ai_gateway.providers.llm.openai_impl import OpenAITextGenerator

from conftest import (
    anthropic_response,
    gemini_response,
    make_anthropic,
    make_gemini,
    make_openai,
    make_registry,
    openai_response,
    text_block,
    tool_use_block,
)


def request(system_instruction=None, model="some-model"):
    return GenerationRequest(
        prompt="Draft a follow-up email",
        model=model,
        api_key="sk-test-key",
        system_instruction=system_instruction,
    )


# =============================================================================
# Provider kinds and registry
# =============================================================================

@pytest.mark.parametrize(
    "value,expected",
    [
        ("gemini", ProviderKind.GEMINI),
        ("google", ProviderKind.GEMINI),
        (" OpenAI ", ProviderKind.OPENAI),
        ("anthropic", ProviderKind.ANTHROPIC),
        ("mistral", None),
        ("", None),
        (None, None),
        (123, None),
        ({"name": "openai"}, None),
    ],
)
def test_provider_kind_parse(value, expected):
    assert ProviderKind.parse(value) is expected


def test_registry_rejects_unknown_provider():
    registry = make_registry()
    with pytest.raises(UnsupportedProviderError) as exc_info:
        registry.get("mistral")
    assert exc_info.value.message == "Unsupported provider: mistral"
    assert exc_info.value.status_code == 400


def test_registry_selects_adapter_by_kind():
    registry = make_registry()
    assert isinstance(registry.get("google"), GeminiTextGenerator)
    assert isinstance(registry.get(ProviderKind.OPENAI), OpenAITextGenerator)
    assert isinstance(registry.get("anthropic"), AnthropicTextGenerator)


def test_generation_request_repr_hides_key():
    assert "sk-test-key" not in repr(request())


# =============================================================================
# Gemini
# =============================================================================

def test_gemini_without_system_instruction_sends_no_config():
    vendor = make_gemini()
    adapter = GeminiTextGenerator(client_factory=vendor.factory)

    text = asyncio.run(adapter.invoke(request()))

    assert text == "gemini says hi"
    assert vendor.keys == ["sk-test-key"]
    call = vendor.create.calls[0]
    assert call["model"] == "some-model"
    assert call["contents"] == "Draft a follow-up email"
    assert "config" not in call


def test_gemini_system_instruction_goes_in_config():
    vendor = make_gemini()
    adapter = GeminiTextGenerator(client_factory=vendor.factory)

    asyncio.run(adapter.invoke(request(system_instruction="Be brief.")))

    assert vendor.create.calls[0]["config"].system_instruction == "Be brief."


def test_gemini_missing_text_returns_empty_string():
    vendor = make_gemini(result=gemini_response(None))
    adapter = GeminiTextGenerator(client_factory=vendor.factory)

    assert asyncio.run(adapter.invoke(request())) == ""


def test_gemini_probe_requests_one_token():
    vendor = make_gemini()
    adapter = GeminiTextGenerator(client_factory=vendor.factory)

    asyncio.run(adapter.probe("gemini-2.5-flash", "AIza-test"))

    call = vendor.create.calls[0]
    assert call["model"] == "gemini-2.5-flash"
    assert call["config"].max_output_tokens == 1


# =============================================================================
# OpenAI
# =============================================================================

def test_openai_without_system_instruction_sends_only_user_message():
    vendor = make_openai()
    adapter = OpenAITextGenerator(client_factory=vendor.factory)

    text = asyncio.run(adapter.invoke(request()))

    assert text == "openai says hi"
    assert vendor.create.calls[0]["messages"] == [
        {"role": "user", "content": "Draft a follow-up email"},
    ]


def test_openai_system_instruction_is_first_message():
    vendor = make_openai()
    adapter = OpenAITextGenerator(client_factory=vendor.factory)

    asyncio.run(adapter.invoke(request(system_instruction="Be brief.")))

    assert vendor.create.calls[0]["messages"] == [
        {"role": "system", "content": "Be brief."},
        {"role": "user", "content": "Draft a follow-up email"},
    ]


@pytest.mark.parametrize("response", [openai_response(), openai_response(None)])
def test_openai_no_content_returns_empty_string(response):
    vendor = make_openai(result=response)
    adapter = OpenAITextGenerator(client_factory=vendor.factory)

    assert asyncio.run(adapter.invoke(request())) == ""


def test_openai_closes_client_after_failure():
    vendor = make_openai(error=RuntimeError("Incorrect API key provided"))
    adapter = OpenAITextGenerator(client_factory=vendor.factory)

    with pytest.raises(RuntimeError, match="Incorrect API key provided"):
        asyncio.run(adapter.invoke(request()))
    assert len(vendor.client.close.calls) == 1


def test_openai_probe_lists_models():
    vendor = make_openai()
    adapter = OpenAITextGenerator(client_factory=vendor.factory)

    asyncio.run(adapter.probe("gpt-5-mini", "sk-probe"))

    assert len(vendor.client.models.list.calls) == 1
    assert vendor.create.calls == []
    assert vendor.keys == ["sk-probe"]


# =============================================================================
# Anthropic
# =============================================================================

def test_anthropic_without_system_instruction_omits_system_field():
    vendor = make_anthropic()
    adapter = AnthropicTextGenerator(client_factory=vendor.factory)

    text = asyncio.run(adapter.invoke(request()))

    assert text == "anthropic says hi"
    call = vendor.create.calls[0]
    assert "system" not in call
    assert call["max_tokens"] == MAX_OUTPUT_TOKENS
    assert call["messages"] == [{"role": "user", "content": "Draft a follow-up email"}]


def test_anthropic_system_instruction_uses_system_field():
    vendor = make_anthropic()
    adapter = AnthropicTextGenerator(client_factory=vendor.factory)

    asyncio.run(adapter.invoke(request(system_instruction="Be brief.")))

    call = vendor.create.calls[0]
    assert call["system"] == "Be brief."
    assert all(message["role"] == "user" for message in call["messages"])


def test_anthropic_skips_non_text_blocks():
    vendor = make_anthropic(result=anthropic_response(tool_use_block(), text_block("second")))
    adapter = AnthropicTextGenerator(client_factory=vendor.factory)

    assert asyncio.run(adapter.invoke(request())) == "second"


def test_anthropic_without_text_block_returns_empty_string():
    vendor = make_anthropic(result=anthropic_response(tool_use_block()))
    adapter = AnthropicTextGenerator(client_factory=vendor.factory)

    assert asyncio.run(adapter.invoke(request())) == ""
    assert len(vendor.client.close.calls) == 1


def test_anthropic_probe_requests_one_token():
    vendor = make_anthropic()
    adapter = AnthropicTextGenerator(client_factory=vendor.factory)

    asyncio.run(adapter.probe("claude-haiku-4.5", "sk-ant-probe"))

    call = vendor.create.calls[0]
    assert call["model"] == "claude-haiku-4.5"
    assert call["max_tokens"] == 1


# =============================================================================
# Model catalog
# =============================================================================

def test_catalog_filters_by_provider():
    models = list_models(ProviderKind.ANTHROPIC)
    assert models
    assert {model.provider for model in models} == {ProviderKind.ANTHROPIC}


def test_catalog_has_one_recommended_model_per_provider():
    for kind in ProviderKind:
        recommended = [model for model in list_models(kind) if model.recommended]
        assert len(recommended) == 1
