"""Pure transformation adapters between Gemini and Claude formats."""

from .claude import ClaudeRequestAdapter, DEFAULT_MAX_TOKENS
from .gemini import (
    coerce_request,
    extract_text,
    normalize_contents,
    system_instruction_text,
)

__all__ = [
    "ClaudeRequestAdapter",
    "DEFAULT_MAX_TOKENS",
    "coerce_request",
    "extract_text",
    "normalize_contents",
    "system_instruction_text",
]
