"""
Claude Bridge - Claude on Vertex AI behind a Gemini-style content generator.
"""

from .auth import (
    AuthType,
    get_auth_type_from_env,
    load_environment,
    resolve_non_interactive_auth,
    validate_auth_method,
)
from .client import ClaudeAdapter
from .config import (
    ClaudeVertexConfig,
    ContentGeneratorConfig,
    create_content_generator_config,
)
from .factory import create_content_generator
from .generators import ClaudeContentGenerator, GeminiContentGenerator
from .models import (
    CLAUDE_MODELS,
    DEFAULT_CLAUDE_MODEL,
    DEFAULT_GEMINI_MODEL,
    is_claude_model,
    resolve_claude_model,
)
from .types import (
    ContentGenerator,
    CountTokensParameters,
    GenerateContentParameters,
    UserTierId,
)
from ._exceptions import (
    AuthConfigError,
    ClaudeBridgeError,
    ConfigError,
    UnsupportedOperationError,
)

__version__ = "0.1.0"

__all__ = [
    "AuthType",
    "get_auth_type_from_env",
    "load_environment",
    "resolve_non_interactive_auth",
    "validate_auth_method",
    "ClaudeAdapter",
    "ClaudeVertexConfig",
    "ContentGeneratorConfig",
    "create_content_generator_config",
    "create_content_generator",
    "ClaudeContentGenerator",
    "GeminiContentGenerator",
    "CLAUDE_MODELS",
    "DEFAULT_CLAUDE_MODEL",
    "DEFAULT_GEMINI_MODEL",
    "is_claude_model",
    "resolve_claude_model",
    "ContentGenerator",
    "CountTokensParameters",
    "GenerateContentParameters",
    "UserTierId",
    "AuthConfigError",
    "ClaudeBridgeError",
    "ConfigError",
    "UnsupportedOperationError",
]
