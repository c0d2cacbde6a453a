"""Static catalog of the models the CRM offers per provider."""
from __future__ import annotations

from dataclasses import asdict, dataclass

from .interface import ProviderKind


@dataclass(frozen=True)
class ModelInfo:
    id: str
    provider: ProviderKind
    name: str
    recommended: bool = False

    def to_dict(self) -> dict:
        data = asdict(self)
        data["provider"] = self.provider.value
        return data


MODELS_CATALOG: tuple[ModelInfo, ...] = (
    # OpenAI
    ModelInfo("gpt-5-mini", ProviderKind.OPENAI, "GPT-5 Mini", recommended=True),
    ModelInfo("gpt-5-nano", ProviderKind.OPENAI, "GPT-5 Nano"),
    ModelInfo("gpt-4o", ProviderKind.OPENAI, "GPT-4o"),
    ModelInfo("gpt-4o-mini", ProviderKind.OPENAI, "GPT-4o Mini"),
    # Gemini
    ModelInfo("gemini-2.5-flash", ProviderKind.GEMINI, "Gemini 2.5 Flash", recommended=True),
    ModelInfo("gemini-2.5-flash-lite", ProviderKind.GEMINI, "Gemini 2.5 Flash Lite"),
    ModelInfo("gemini-2.5-pro", ProviderKind.GEMINI, "Gemini 2.5 Pro"),
    ModelInfo("gemini-3-pro-preview", ProviderKind.GEMINI, "Gemini 3 Pro (Preview)"),
    # Anthropic
    ModelInfo("claude-sonnet-4.5", ProviderKind.ANTHROPIC, "Claude Sonnet 4.5", recommended=True),
    ModelInfo("claude-haiku-4.5", ProviderKind.ANTHROPIC, "Claude Haiku 4.5"),
    ModelInfo("claude-opus-4.5", ProviderKind.ANTHROPIC, "Claude Opus 4.5"),
)


def list_models(provider: ProviderKind | None = None) -> list[ModelInfo]:
    """List catalog models, optionally for one provider only."""
    if provider is None:
        return list(MODELS_CATALOG)
    return [m for m in MODELS_CATALOG if m.provider is provider]
