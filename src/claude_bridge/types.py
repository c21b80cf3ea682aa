"""
Core types for claude-bridge.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, AsyncIterator, Optional, Protocol, Union

from google.genai import types
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

__all__ = [
    "UserTierId",
    "ContentGenerator",
    "GenerateContentParameters",
    "CountTokensParameters",
    "GenerateContentRequest",
    "CountTokensRequest",
    "EmbedContentRequest",
]


class UserTierId(StrEnum):
    FREE = "free-tier"
    LEGACY = "legacy-tier"
    STANDARD = "standard-tier"


class _RequestModel(BaseModel):
    # camelCase and snake_case keys, like the google-genai models
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        extra="forbid",
    )


class GenerateContentParameters(_RequestModel):
    """Arguments of a ``generate_content`` call, bundled as one request."""

    model: Optional[str] = None
    contents: Optional[types.ContentListUnion] = None
    config: Optional[types.GenerateContentConfig] = None


class CountTokensParameters(_RequestModel):
    """Arguments of a ``count_tokens`` call, bundled as one request."""

    model: Optional[str] = None
    contents: Optional[types.ContentListUnion] = None
    config: Optional[types.CountTokensConfig] = None


# Plain dicts are validated into the request models.
GenerateContentRequest = Union[GenerateContentParameters, dict[str, Any]]
CountTokensRequest = Union[CountTokensParameters, dict[str, Any]]
EmbedContentRequest = Union[types.EmbedContentParameters, dict[str, Any]]


class ContentGenerator(Protocol):
    """What the agent framework expects from a model backend."""

    user_tier: Optional[UserTierId]

    async def generate_content(
        self, request: GenerateContentRequest, user_prompt_id: str
    ) -> types.GenerateContentResponse:
        ...

    async def generate_content_stream(
        self, request: GenerateContentRequest, user_prompt_id: str
    ) -> AsyncIterator[types.GenerateContentResponse]:
        """Return an async iterator of partial responses (await it first)."""
        ...

    async def count_tokens(
        self, request: CountTokensRequest
    ) -> types.CountTokensResponse:
        ...

    async def embed_content(
        self, request: EmbedContentRequest
    ) -> types.EmbedContentResponse:
        ...
