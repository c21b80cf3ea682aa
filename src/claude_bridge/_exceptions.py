"""
Translate provider failures into a single `ClaudeBridgeError`, while
preserving the original exception for full tracebacks.
"""

from __future__ import annotations

import logging
from typing import Optional

from anthropic import APIStatusError

__all__: tuple[str, ...] = (
    "ClaudeBridgeError",
    "UnsupportedOperationError",
    "ConfigError",
    "AuthConfigError",
    "wrap_error",
)


class ClaudeBridgeError(RuntimeError):
    """Public bridge-level exception.

    Attributes:
        original_exc: The underlying provider exception, if any.
        status_code: HTTP status reported by the provider, if any.
    """

    original_exc: Optional[Exception]
    status_code: Optional[int]

    def __init__(
        self,
        message: str,
        original_exc: Optional[Exception] = None,
        *,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.original_exc = original_exc
        self.status_code = status_code
        self.__cause__ = original_exc


class UnsupportedOperationError(ClaudeBridgeError):
    """Raised for operations Claude models cannot serve (e.g. embeddings)."""


class ConfigError(ValueError):
    """Raised when required configuration is missing or inconsistent."""


class AuthConfigError(ConfigError):
    """Raised when no usable authentication method can be determined."""


def wrap_error(
    prefix: str,
    exc: Exception,
    logger: Optional[logging.Logger] = None,
) -> ClaudeBridgeError:
    """Wrap *exc* in a ClaudeBridgeError whose message starts with *prefix*."""
    log = logger or logging.getLogger("claude_bridge.exceptions")

    status_code = exc.status_code if isinstance(exc, APIStatusError) else None
    log.warning("%s: wrapping %s", prefix, type(exc).__name__, extra={"exc": exc})
    return ClaudeBridgeError(f"{prefix}: {exc}", exc, status_code=status_code)
