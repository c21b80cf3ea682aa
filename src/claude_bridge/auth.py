"""Pick and validate the authentication method from settings and environment."""

from __future__ import annotations

import logging
import os
from enum import StrEnum
from typing import Final, Optional

from dotenv import find_dotenv, load_dotenv

from ._exceptions import AuthConfigError
from .models import is_claude_model

__all__ = [
    "AuthType",
    "USER_SETTINGS_PATH",
    "get_auth_type_from_env",
    "validate_auth_method",
    "resolve_non_interactive_auth",
    "load_environment",
]

_logger = logging.getLogger(__name__)


class AuthType(StrEnum):
    LOGIN_WITH_GOOGLE = "oauth-personal"
    USE_GEMINI = "gemini-api-key"
    USE_VERTEX_AI = "vertex-ai"
    CLOUD_SHELL = "cloud-shell"
    USE_CLAUDE = "claude-vertex"


USER_SETTINGS_PATH: Final = os.path.join("~", ".gemini", "settings.json")

_AUTH_ENV_VARS: Final[tuple[str, ...]] = (
    "GEMINI_API_KEY",
    "GOOGLE_GENAI_USE_VERTEXAI",
    "GOOGLE_GENAI_USE_GCA",
    "ANTHROPIC_VERTEX_PROJECT_ID",
)


def load_environment() -> bool:
    """Load a `.env` file found from the working directory upwards.

    Variables already set in the process environment win.
    """
    return load_dotenv(find_dotenv(usecwd=True))


def get_auth_type_from_env() -> AuthType | None:
    """Infer the auth method from environment variables, or None."""
    if os.environ.get("GOOGLE_GENAI_USE_GCA") == "true":
        return AuthType.LOGIN_WITH_GOOGLE
    if os.environ.get("GOOGLE_GENAI_USE_VERTEXAI") == "true":
        return AuthType.USE_VERTEX_AI
    if os.environ.get("ANTHROPIC_VERTEX_PROJECT_ID"):
        return AuthType.USE_CLAUDE
    if os.environ.get("GEMINI_API_KEY"):
        return AuthType.USE_GEMINI
    return None


def validate_auth_method(auth_type: AuthType | str) -> str | None:
    """Return an error message if *auth_type* cannot be used, else None."""
    load_environment()
    if auth_type in (AuthType.LOGIN_WITH_GOOGLE, AuthType.CLOUD_SHELL):
        return None

    if auth_type == AuthType.USE_GEMINI:
        if not os.environ.get("GEMINI_API_KEY"):
            return (
                "GEMINI_API_KEY environment variable not found. Add that to your "
                "environment and try again (no reload needed if using .env)!"
            )
        return None

    if auth_type == AuthType.USE_VERTEX_AI:
        has_project_location = bool(
            os.environ.get("GOOGLE_CLOUD_PROJECT")
            and os.environ.get("GOOGLE_CLOUD_LOCATION")
        )
        has_api_key = bool(os.environ.get("GOOGLE_API_KEY"))
        if not (has_project_location or has_api_key):
            return (
                "When using Vertex AI, you must specify either:\n"
                "• GOOGLE_CLOUD_PROJECT and GOOGLE_CLOUD_LOCATION environment variables.\n"
                "• GOOGLE_API_KEY environment variable (if using express mode).\n"
                "Update your environment and try again (no reload needed if using .env)!"
            )
        return None

    if auth_type == AuthType.USE_CLAUDE:
        if not os.environ.get("ANTHROPIC_VERTEX_PROJECT_ID"):
            return (
                "ANTHROPIC_VERTEX_PROJECT_ID environment variable not found. Add that "
                "to your environment and try again (no reload needed if using .env)!"
            )
        return None

    return "Invalid auth method selected."


def resolve_non_interactive_auth(
    configured_auth_type: AuthType | None,
    model: str,
    *,
    use_external_auth: bool = False,
    logger: Optional[logging.Logger] = None,
) -> AuthType:
    """
    Decide which auth method a non-interactive session should use.

    Claude models always use ``AuthType.USE_CLAUDE`` when a Vertex project for
    Anthropic is configured, whatever the settings say.

    Args:
        configured_auth_type: Auth method from the user's settings, if any.
        model: The model the session will talk to.
        use_external_auth: Skip validation when credentials are managed elsewhere.
        logger: Optional logger for the decision trail.

    Returns:
        The effective auth method.

    Raises:
        AuthConfigError: No method could be determined, or it failed validation.
    """
    load_environment()
    log = logger or _logger
    env_auth_type = get_auth_type_from_env()
    claude = is_claude_model(model)

    effective = configured_auth_type or env_auth_type
    if claude and os.environ.get("ANTHROPIC_VERTEX_PROJECT_ID"):
        effective = AuthType.USE_CLAUDE

    log.debug("configured_auth_type=%s", configured_auth_type)
    log.debug("auth_type_from_env=%s", env_auth_type)
    log.debug("model=%s is_claude_model=%s", model, claude)
    log.debug("effective_auth_type=%s", effective)

    if effective is None:
        raise AuthConfigError(
            f"Please set an Auth method in your {USER_SETTINGS_PATH} or specify one "
            "of the following environment variables before running: "
            + ", ".join(_AUTH_ENV_VARS)
        )

    if not use_external_auth:
        err = validate_auth_method(effective)
        if err is not None:
            raise AuthConfigError(err)

    return effective
