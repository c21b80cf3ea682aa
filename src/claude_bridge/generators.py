"""Content generators: the objects the agent framework calls into."""

from __future__ import annotations

import logging
from typing import Any, AsyncGenerator, AsyncIterator, Optional

from google import genai
from google.genai import types

from claude_bridge._exceptions import (
    ClaudeBridgeError,
    UnsupportedOperationError,
    wrap_error,
)
from claude_bridge.adapters import coerce_request
from claude_bridge.client import ClaudeAdapter
from claude_bridge.config import ClaudeVertexConfig, ContentGeneratorConfig
from claude_bridge.types import (
    CountTokensParameters,
    CountTokensRequest,
    EmbedContentRequest,
    GenerateContentParameters,
    GenerateContentRequest,
    UserTierId,
)

__all__ = ["ClaudeContentGenerator", "GeminiContentGenerator"]


class ClaudeContentGenerator:
    """
    Content generator backed by Claude on Vertex AI.

    Every failure surfaces as a ``ClaudeBridgeError`` whose message names the
    operation that failed.
    """

    def __init__(
        self,
        config: ContentGeneratorConfig,
        *,
        adapter: Optional[ClaudeAdapter] = None,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.name = name if name is not None else self.__class__.__name__
        self.model = config.model
        if adapter is None:
            adapter = ClaudeAdapter(ClaudeVertexConfig.from_env(), logger=self.logger)
        self._adapter = adapter
        # Claude users have no Code Assist tier
        self.user_tier: Optional[UserTierId] = UserTierId.FREE

    async def generate_content(
        self,
        request: GenerateContentRequest,
        user_prompt_id: str,
    ) -> types.GenerateContentResponse:
        self._log(f"generate_content prompt_id={user_prompt_id}", logging.DEBUG)
        try:
            request = self._with_model(request, GenerateContentParameters)
            return await self._adapter.generate_content(request)
        except ClaudeBridgeError:
            raise
        except Exception as exc:
            raise wrap_error("Claude API error", exc, self.logger) from exc

    async def generate_content_stream(
        self,
        request: GenerateContentRequest,
        user_prompt_id: str,
    ) -> AsyncIterator[types.GenerateContentResponse]:
        """Return the adapter's stream; await this, then iterate the result."""
        self._log(f"generate_content_stream prompt_id={user_prompt_id}", logging.DEBUG)
        return self._pass_through(request)

    async def _pass_through(
        self, request: GenerateContentRequest
    ) -> AsyncGenerator[types.GenerateContentResponse, None]:
        try:
            request = self._with_model(request, GenerateContentParameters)
            async for chunk in self._adapter.generate_content_stream(request):
                yield chunk
        except ClaudeBridgeError:
            raise
        except Exception as exc:
            raise wrap_error("Claude streaming API error", exc, self.logger) from exc

    async def count_tokens(
        self, request: CountTokensRequest
    ) -> types.CountTokensResponse:
        try:
            request = self._with_model(request, CountTokensParameters)
            return await self._adapter.count_tokens(request)
        except ClaudeBridgeError:
            raise
        except Exception as exc:
            raise wrap_error("Claude token counting error", exc, self.logger) from exc

    def _with_model(self, request: Any, model_cls: type) -> Any:
        """Coerce the request and fill a missing model from the generator config."""
        request = coerce_request(request, model_cls)
        if request.model is None and self.model:
            request = request.model_copy(update={"model": self.model})
        return request

    async def embed_content(
        self, request: EmbedContentRequest
    ) -> types.EmbedContentResponse:
        raise UnsupportedOperationError(
            "Embedding not supported for Claude models. Please use Gemini embedding models instead."
        )

    def _log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, f"[{self.name}] {message}")

    async def aclose(self) -> None:
        await self._adapter.aclose()


class GeminiContentGenerator:
    """
    Content generator backed by the google-genai SDK (Gemini API or Vertex AI).

    Requests and responses are already in Gemini format, so calls pass straight
    through to ``client.aio.models``.
    """

    def __init__(
        self,
        config: ContentGeneratorConfig,
        *,
        client: Any = None,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.name = name if name is not None else self.__class__.__name__
        self.model = config.model
        if client is None:
            if config.api_key:
                # project/location and API key are mutually exclusive (express mode)
                client = genai.Client(api_key=config.api_key, vertexai=config.vertexai)
            else:
                client = genai.Client(
                    vertexai=config.vertexai,
                    project=config.project,
                    location=config.location,
                )
        self._client = client
        self._models = client.aio.models
        self.user_tier: Optional[UserTierId] = None

    async def generate_content(
        self,
        request: GenerateContentRequest,
        user_prompt_id: str,
    ) -> types.GenerateContentResponse:
        request = coerce_request(request, GenerateContentParameters)
        model = request.model or self.model
        self._log(f"Sending request to Gemini model {model} (Stream: False)")
        return await self._models.generate_content(
            model=model,
            contents=request.contents,
            config=request.config,
        )

    async def generate_content_stream(
        self,
        request: GenerateContentRequest,
        user_prompt_id: str,
    ) -> AsyncIterator[types.GenerateContentResponse]:
        request = coerce_request(request, GenerateContentParameters)
        model = request.model or self.model
        self._log(f"Sending request to Gemini model {model} (Stream: True)")
        return await self._models.generate_content_stream(
            model=model,
            contents=request.contents,
            config=request.config,
        )

    async def count_tokens(
        self, request: CountTokensRequest
    ) -> types.CountTokensResponse:
        request = coerce_request(request, CountTokensParameters)
        return await self._models.count_tokens(
            model=request.model or self.model,
            contents=request.contents,
            config=request.config,
        )

    async def embed_content(
        self, request: EmbedContentRequest
    ) -> types.EmbedContentResponse:
        request = coerce_request(request, types.EmbedContentParameters)
        return await self._models.embed_content(
            model=request.model or self.model,
            contents=request.contents,
            config=request.config,
        )

    def _log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, f"[{self.name}] {message}")

    async def aclose(self) -> None:
        close = getattr(self._client.aio, "aclose", None)
        if close:
            await close()
