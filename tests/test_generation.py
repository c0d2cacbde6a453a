"""Generation gateway orchestration."""

import asyncio

import pytest

from ai_gateway.config import settings
from ai_gateway.exceptions import (
    InvalidRequestError,
    NoCredentialConfiguredError,
    ProviderInvocationError,
    UnsupportedProviderError,
)
from ai_gateway.services.credentials import CredentialResolver
from ai_gateway.services.generation import GenerationGateway, GenerationResult

from conftest import (
    TENANT_ID,
    TENANT_KEY,
    make_anthropic,
    make_gemini,
    make_openai,
    make_registry,
    make_store,
    openai_response,
    tenant_record,
)


def build_gateway(records, **vendors):
    return GenerationGateway(CredentialResolver(make_store(records)), make_registry(**vendors))


def test_generate_dispatches_to_tenant_provider():
    openai = make_openai()
    gemini = make_gemini()
    gateway = build_gateway({TENANT_ID: tenant_record()}, openai=openai, gemini=gemini)

    result = asyncio.run(gateway.generate(TENANT_ID, "Summarize this lead"))

    assert result == GenerationResult(text="openai says hi")
    assert openai.keys == [TENANT_KEY]
    assert openai.create.calls[0]["model"] == "gpt-5-mini"
    assert gemini.create.calls == []


def test_generate_uses_google_alias_for_gemini():
    gemini = make_gemini()
    records = {TENANT_ID: tenant_record(provider="google", model="gemini-2.5-flash")}
    gateway = build_gateway(records, gemini=gemini)

    result = asyncio.run(gateway.generate(TENANT_ID, "Hello"))

    assert result.text == "gemini says hi"
    assert gemini.create.calls[0]["model"] == "gemini-2.5-flash"


def test_tenants_are_isolated():
    anthropic = make_anthropic()
    openai = make_openai()
    records = {
        "tenant-a": tenant_record(user_id="tenant-a", api_key="sk-a"),
        "tenant-b": tenant_record(
            user_id="tenant-b", provider="anthropic", model="claude-haiku-4.5", api_key="sk-b"
        ),
    }
    gateway = build_gateway(records, openai=openai, anthropic=anthropic)

    asyncio.run(gateway.generate("tenant-a", "one"))
    asyncio.run(gateway.generate("tenant-b", "two"))

    assert openai.keys == ["sk-a"]
    assert anthropic.keys == ["sk-b"]


@pytest.mark.parametrize("tenant_id", [None, "", "   "])
def test_generate_requires_tenant_id(tenant_id):
    gateway = build_gateway({})
    with pytest.raises(InvalidRequestError) as exc_info:
        asyncio.run(gateway.generate(tenant_id, "Hello"))
    assert exc_info.value.message == "userId is required"


@pytest.mark.parametrize("prompt", [None, "", "  \n"])
def test_generate_requires_prompt(prompt):
    gateway = build_gateway({TENANT_ID: tenant_record()})
    with pytest.raises(InvalidRequestError) as exc_info:
        asyncio.run(gateway.generate(TENANT_ID, prompt))
    assert exc_info.value.message == "prompt is required"


def test_missing_settings_reported_before_prompt_check():
    gateway = build_gateway({})
    with pytest.raises(NoCredentialConfiguredError):
        asyncio.run(gateway.generate(TENANT_ID, ""))


def test_generate_rejects_oversized_prompt():
    openai = make_openai()
    gateway = build_gateway({TENANT_ID: tenant_record()}, openai=openai)

    with pytest.raises(InvalidRequestError):
        asyncio.run(gateway.generate(TENANT_ID, "x" * (settings.MAX_PROMPT_LENGTH + 1)))
    assert openai.create.calls == []


def test_generate_without_settings_raises_no_credential():
    gateway = build_gateway({})
    with pytest.raises(NoCredentialConfiguredError) as exc_info:
        asyncio.run(gateway.generate(TENANT_ID, "Hello"))
    assert exc_info.value.message == "Nenhuma credencial configurada."
    assert exc_info.value.status_code == 400


def test_generate_with_unknown_stored_provider():
    gateway = build_gateway({TENANT_ID: tenant_record(provider="mistral")})
    with pytest.raises(UnsupportedProviderError) as exc_info:
        asyncio.run(gateway.generate(TENANT_ID, "Hello"))
    assert exc_info.value.message == "Unsupported provider: mistral"


def test_vendor_failure_message_is_carried_verbatim():
    openai = make_openai(error=RuntimeError("Error code: 401 - Incorrect API key provided"))
    gateway = build_gateway({TENANT_ID: tenant_record()}, openai=openai)

    with pytest.raises(ProviderInvocationError) as exc_info:
        asyncio.run(gateway.generate(TENANT_ID, "Hello"))
    assert exc_info.value.message == "Error code: 401 - Incorrect API key provided"
    assert exc_info.value.status_code == 500


def test_vendor_failure_without_message_uses_default():
    openai = make_openai(error=RuntimeError())
    gateway = build_gateway({TENANT_ID: tenant_record()}, openai=openai)

    with pytest.raises(ProviderInvocationError) as exc_info:
        asyncio.run(gateway.generate(TENANT_ID, "Hello"))
    assert exc_info.value.message == ProviderInvocationError.default_message


def test_blank_system_instruction_is_treated_as_absent():
    openai = make_openai()
    gateway = build_gateway({TENANT_ID: tenant_record()}, openai=openai)

    asyncio.run(gateway.generate(TENANT_ID, "Hello", system_instruction="   "))

    assert [m["role"] for m in openai.create.calls[0]["messages"]] == ["user"]


def test_empty_vendor_text_is_a_success():
    openai = make_openai(result=openai_response(None))
    gateway = build_gateway({TENANT_ID: tenant_record()}, openai=openai)

    assert asyncio.run(gateway.generate(TENANT_ID, "Hello")).to_dict() == {"text": ""}
