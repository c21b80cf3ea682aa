"""
Claude client speaking the Gemini request/response format.
"""

from __future__ import annotations

import logging
import math
from typing import Any, AsyncGenerator, Optional, Self

from anthropic import AsyncAnthropicVertex
from anthropic.types import Message
from google.genai import types

from claude_bridge._exceptions import UnsupportedOperationError, wrap_error
from claude_bridge.adapters import (
    ClaudeRequestAdapter,
    coerce_request,
    extract_text,
    normalize_contents,
)
from claude_bridge.config import ClaudeVertexConfig
from claude_bridge.models import DEFAULT_CLAUDE_MODEL, resolve_claude_model
from claude_bridge.types import (
    CountTokensParameters,
    CountTokensRequest,
    EmbedContentRequest,
    GenerateContentParameters,
    GenerateContentRequest,
)

__all__ = ["ClaudeAdapter", "CHARS_PER_TOKEN"]

# Rough estimate used for token counting: 1 token ~ 4 characters
CHARS_PER_TOKEN = 4


class ClaudeAdapter:
    """
    Claude on Vertex AI behind Gemini-shaped calls (async-only).

    Use ``ClaudeAdapter.from_client`` when you already have an
    ``AsyncAnthropicVertex`` instance.
    """

    def __init__(
        self,
        config: ClaudeVertexConfig,
        *,
        timeout: float = 60.0,
        max_retries: int = 2,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.name = name if name is not None else self.__class__.__name__
        self.region = config.region
        self.project_id = config.project_id
        self._log(
            f"Claude adapter config - region: {self.region}, projectId: {self.project_id}",
            logging.DEBUG,
        )
        self._client = AsyncAnthropicVertex(
            region=config.region,
            project_id=config.project_id,
            timeout=timeout,
            max_retries=max_retries,
        )
        self._adapter = ClaudeRequestAdapter()

    # Alternate constructor
    @classmethod
    def from_client(
        cls,
        client: AsyncAnthropicVertex,
        *,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> Self:
        """
        Wrap an existing ``AsyncAnthropicVertex`` client.
        """
        if not isinstance(client, AsyncAnthropicVertex):
            raise TypeError(
                f"ClaudeAdapter.from_client expects AsyncAnthropicVertex; got {type(client).__name__}"
            )

        self = cls.__new__(cls)  # bypass __init__
        self.logger = logger or logging.getLogger(__name__)
        self.name = name if name is not None else cls.__name__
        self.region = client.region
        self.project_id = client.project_id
        self._client = client
        self._adapter = ClaudeRequestAdapter()
        return self

    @property
    def adapter(self) -> ClaudeRequestAdapter:
        """Request adapter used for format conversion."""
        return self._adapter

    def _build_args(self, request: GenerateContentParameters) -> dict[str, Any]:
        return {
            "model": resolve_claude_model(request.model or DEFAULT_CLAUDE_MODEL),
            **self._adapter.to_provider(request),
        }

    async def generate_content(
        self, request: GenerateContentRequest
    ) -> types.GenerateContentResponse:
        """Send a single request and convert Claude's reply."""
        request = coerce_request(request, GenerateContentParameters)
        args = self._build_args(request)

        self._log(f"Sending request to Claude model {args['model']} (Stream: False)")
        response: Message = await self._client.messages.create(**args)
        return self._adapter.from_provider(response)

    async def generate_content_stream(
        self, request: GenerateContentRequest
    ) -> AsyncGenerator[types.GenerateContentResponse, None]:
        """Yield one partial response per text delta Claude streams back."""
        try:
            request = coerce_request(request, GenerateContentParameters)
            args = self._build_args(request)

            self._log(f"Sending request to Claude model {args['model']} (Stream: True)")
            async with self._client.messages.stream(**args) as stream:
                async for event in stream:
                    chunk = self._adapter.stream_chunk(event)
                    if chunk is not None:
                        yield chunk
        except Exception as exc:
            raise wrap_error("Claude streaming error", exc, self.logger) from exc

    async def count_tokens(
        self, request: CountTokensRequest
    ) -> types.CountTokensResponse:
        """
        Approximate the prompt's token count.

        Claude on Vertex has no token counting endpoint, so this estimates
        from text length and never touches the network.
        """
        request = coerce_request(request, CountTokensParameters)
        text = extract_text(normalize_contents(request.contents))
        return types.CountTokensResponse(
            total_tokens=math.ceil(len(text) / CHARS_PER_TOKEN)
        )

    async def embed_content(
        self, request: EmbedContentRequest
    ) -> types.EmbedContentResponse:
        raise UnsupportedOperationError(
            "Embedding not supported for Claude models. Use Gemini embedding models instead."
        )

    def _log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, f"[{self.name}] {message}")

    # --- lifecycle ---------------------------------------------------------
    async def aclose(self) -> None:
        """
        Close the underlying HTTP client. Safe to call multiple times.
        """
        await self._client.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
