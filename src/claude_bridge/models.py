"""Model names understood by the bridge."""

from __future__ import annotations

from typing import Final

__all__ = [
    "DEFAULT_GEMINI_MODEL",
    "DEFAULT_GEMINI_FLASH_MODEL",
    "DEFAULT_GEMINI_FLASH_LITE_MODEL",
    "DEFAULT_GEMINI_EMBEDDING_MODEL",
    "CLAUDE_MODELS",
    "DEFAULT_CLAUDE_MODEL",
    "is_claude_model",
    "resolve_claude_model",
]

DEFAULT_GEMINI_MODEL: Final = "gemini-2.5-pro"
DEFAULT_GEMINI_FLASH_MODEL: Final = "gemini-2.5-flash"
DEFAULT_GEMINI_FLASH_LITE_MODEL: Final = "gemini-2.5-flash-lite"

DEFAULT_GEMINI_EMBEDDING_MODEL: Final = "gemini-embedding-001"

# Claude models available on Vertex AI, keyed by the short alias users type
CLAUDE_MODELS: Final[dict[str, str]] = {
    # Claude 4
    "claude-opus-4-1": "claude-opus-4-1",
    "claude-opus-4": "claude-opus-4",
    "claude-sonnet-4": "claude-sonnet-4",
    # Claude 3.7, extended thinking
    "claude-3-7-sonnet": "claude-3-7-sonnet",
    # Claude 3.5
    "claude-3-5-sonnet-v2": "claude-3-5-sonnet-v2",
    "claude-3-5-sonnet": "claude-3-5-sonnet",
    "claude-3-5-haiku": "claude-3-5-haiku",
    # Claude 3 (legacy), Vertex only serves the dated ids
    "claude-3-opus": "claude-3-opus@20240229",
    "claude-3-sonnet": "claude-3-sonnet@20240229",
    "claude-3-haiku": "claude-3-haiku@20240307",
}

DEFAULT_CLAUDE_MODEL: Final = CLAUDE_MODELS["claude-3-7-sonnet"]


def is_claude_model(model: str | None) -> bool:
    """Return True when *model* names a Claude model."""
    return bool(model) and "claude" in model


def resolve_claude_model(model: str) -> str:
    """Map a short alias to its Vertex model id; unknown names pass through."""
    return CLAUDE_MODELS.get(model, model)
