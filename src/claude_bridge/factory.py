from __future__ import annotations

import logging
from typing import Callable

from claude_bridge.auth import AuthType
from claude_bridge.config import ContentGeneratorConfig
from claude_bridge.generators import ClaudeContentGenerator, GeminiContentGenerator
from claude_bridge.types import ContentGenerator

# map AuthType to the generator serving it
_GENERATOR_REGISTRY: dict[AuthType, Callable[..., ContentGenerator]] = {
    AuthType.USE_CLAUDE: ClaudeContentGenerator,
    AuthType.USE_GEMINI: GeminiContentGenerator,
    AuthType.USE_VERTEX_AI: GeminiContentGenerator,
}


def create_content_generator(
    config: ContentGeneratorConfig,
    *,
    logger: logging.Logger | None = None,
) -> ContentGenerator:
    """
    Factory for the content generator matching ``config.auth_type``.

    Args:
        config: Generator configuration, usually from
            ``create_content_generator_config``.
        logger: Optional custom logger.

    Raises:
        ValueError: The auth type has no generator here (e.g. Google login).
    """
    try:
        generator_cls = _GENERATOR_REGISTRY[config.auth_type]
    except KeyError as exc:
        raise ValueError(
            f"Unsupported authType: {config.auth_type}"
        ) from exc

    return generator_cls(config, logger=logger)
