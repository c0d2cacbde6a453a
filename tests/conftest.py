"""Shared fixtures: fake vendor SDK clients and an in-memory tenant store."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
from fastapi.testclient import TestClient

from ai_gateway.main import create_app
from ai_gateway.providers.llm import ProviderKind, ProviderRegistry
from ai_gateway.providers.llm.anthropic_impl import AnthropicTextGenerator
from ai_gateway.providers.llm.gemini_impl import GeminiTextGenerator
from ai_gateway.providers.llm.openai_impl import OpenAITextGenerator
from ai_gateway.providers.settings_store.interface import AISettingsRecord
from ai_gateway.providers.settings_store.memory_impl import InMemorySettingsStore
from ai_gateway.state import AppState

TENANT_ID = "tenant-acme"
TENANT_KEY = "sk-tenant-acme-0001"


class AsyncRecorder:
    """Awaitable stand-in for an SDK method: records kwargs, returns or raises."""

    def __init__(self, result: Any = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.result


class FakeVendor:
    """A fake SDK client plus the factory the adapters call with the tenant key."""

    def __init__(self, client: Any, create: AsyncRecorder) -> None:
        self.client = client
        self.create = create
        self.keys: list[str] = []

    def factory(self, api_key: str) -> Any:
        self.keys.append(api_key)
        return self.client


def gemini_response(text: str | None) -> SimpleNamespace:
    return SimpleNamespace(text=text)


def openai_response(*contents: str | None) -> SimpleNamespace:
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=c)) for c in contents]
    )


def anthropic_response(*blocks: SimpleNamespace) -> SimpleNamespace:
    return SimpleNamespace(content=list(blocks))


def text_block(text: str) -> SimpleNamespace:
    return SimpleNamespace(type="text", text=text)


def tool_use_block() -> SimpleNamespace:
    return SimpleNamespace(type="tool_use", id="toolu_01", name="lookup_lead", input={})


def make_gemini(result: Any = None, error: Exception | None = None) -> FakeVendor:
    create = AsyncRecorder(result if result is not None else gemini_response("gemini says hi"), error)
    client = SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=create)))
    return FakeVendor(client, create)


def make_openai(result: Any = None, error: Exception | None = None) -> FakeVendor:
    create = AsyncRecorder(result if result is not None else openai_response("openai says hi"), error)
    client = SimpleNamespace(
        chat=SimpleNamespace(completions=SimpleNamespace(create=create)),
        models=SimpleNamespace(list=AsyncRecorder(result=[], error=error)),
        close=AsyncRecorder(),
    )
    return FakeVendor(client, create)


def make_anthropic(result: Any = None, error: Exception | None = None) -> FakeVendor:
    default = anthropic_response(text_block("anthropic says hi"))
    create = AsyncRecorder(result if result is not None else default, error)
    client = SimpleNamespace(
        messages=SimpleNamespace(create=create),
        close=AsyncRecorder(),
    )
    return FakeVendor(client, create)


def make_registry(
    gemini: FakeVendor | None = None,
    openai: FakeVendor | None = None,
    anthropic: FakeVendor | None = None,
) -> ProviderRegistry:
    gemini = gemini or make_gemini()
    openai = openai or make_openai()
    anthropic = anthropic or make_anthropic()
    return ProviderRegistry({
        ProviderKind.GEMINI: GeminiTextGenerator(client_factory=gemini.factory),
        ProviderKind.OPENAI: OpenAITextGenerator(client_factory=openai.factory),
        ProviderKind.ANTHROPIC: AnthropicTextGenerator(client_factory=anthropic.factory),
    })


def make_store(records: dict[str, AISettingsRecord] | None = None) -> InMemorySettingsStore:
    return InMemorySettingsStore(records)


def tenant_record(
    provider: str | None = "openai",
    model: str | None = "gpt-5-mini",
    api_key: str | None = TENANT_KEY,
    user_id: str = TENANT_ID,
) -> AISettingsRecord:
    return AISettingsRecord(user_id=user_id, ai_provider=provider, ai_api_key=api_key, model=model)


@pytest.fixture
def vendors() -> dict[str, FakeVendor]:
    return {
        "gemini": make_gemini(),
        "openai": make_openai(),
        "anthropic": make_anthropic(),
    }


@pytest.fixture
def store() -> InMemorySettingsStore:
    return make_store({TENANT_ID: tenant_record()})


@pytest.fixture
def app_state(store: InMemorySettingsStore, vendors: dict[str, FakeVendor]) -> AppState:
    return AppState.build(store, make_registry(**vendors))


@pytest.fixture
def client(app_state: AppState) -> TestClient:
    return TestClient(create_app(app_state=app_state))
