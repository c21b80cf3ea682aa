"""Runtime configuration for the content generators, read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Final, Optional, Self

from ._exceptions import ConfigError
from .auth import AuthType, load_environment
from .models import DEFAULT_CLAUDE_MODEL, DEFAULT_GEMINI_MODEL

__all__ = [
    "DEFAULT_CLOUD_ML_REGION",
    "ClaudeVertexConfig",
    "ContentGeneratorConfig",
    "create_content_generator_config",
]

_logger = logging.getLogger(__name__)

DEFAULT_CLOUD_ML_REGION: Final = "us-central1"


@dataclass(frozen=True, slots=True)
class ClaudeVertexConfig:
    """Where Claude is served from on Vertex AI."""

    region: str
    project_id: str

    @classmethod
    def from_env(cls) -> Self:
        """Read ``CLOUD_ML_REGION`` and ``ANTHROPIC_VERTEX_PROJECT_ID`` (``.env`` honoured)."""
        load_environment()
        region = os.environ.get("CLOUD_ML_REGION") or DEFAULT_CLOUD_ML_REGION
        project_id = os.environ.get("ANTHROPIC_VERTEX_PROJECT_ID")
        if not project_id:
            raise ConfigError(
                "ANTHROPIC_VERTEX_PROJECT_ID environment variable is required for Claude models"
            )
        return cls(region=region, project_id=project_id)


@dataclass(slots=True)
class ContentGeneratorConfig:
    """Everything a content generator needs to reach its backend."""

    model: str
    auth_type: Optional[AuthType] = None
    api_key: Optional[str] = None
    vertexai: Optional[bool] = None
    project: Optional[str] = None
    location: Optional[str] = None


def create_content_generator_config(
    model: str | None,
    auth_type: AuthType | None,
) -> ContentGeneratorConfig:
    """Build a ContentGeneratorConfig for *auth_type* from the environment."""
    load_environment()

    if not model:
        model = DEFAULT_CLAUDE_MODEL if auth_type == AuthType.USE_CLAUDE else DEFAULT_GEMINI_MODEL

    config = ContentGeneratorConfig(model=model, auth_type=auth_type)

    if auth_type == AuthType.USE_GEMINI:
        config.api_key = os.environ.get("GEMINI_API_KEY") or None
        config.vertexai = False
    elif auth_type == AuthType.USE_VERTEX_AI:
        config.api_key = os.environ.get("GOOGLE_API_KEY") or None
        config.project = os.environ.get("GOOGLE_CLOUD_PROJECT") or None
        config.location = os.environ.get("GOOGLE_CLOUD_LOCATION") or None
        config.vertexai = True

    _logger.debug("Content generator config: model=%s auth_type=%s", config.model, auth_type)
    return config
