"""Tests for content generators and the generator factory."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from anthropic import RateLimitError
from google.genai import types

from claude_bridge import (
    AuthType,
    ClaudeBridgeError,
    ClaudeContentGenerator,
    ConfigError,
    ContentGeneratorConfig,
    CountTokensParameters,
    GeminiContentGenerator,
    GenerateContentParameters,
    UnsupportedOperationError,
    UserTierId,
    create_content_generator,
)
from claude_bridge.client import ClaudeAdapter

MODEL = "claude-3-5-sonnet-v2@20241022"


def make_response(text):
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(role="model", parts=[types.Part(text=text)]),
                finish_reason=types.FinishReason.STOP,
                index=0,
                safety_ratings=[],
            )
        ],
        prompt_feedback=types.GenerateContentResponsePromptFeedback(safety_ratings=[]),
    )


def make_request():
    return GenerateContentParameters(
        model=MODEL,
        contents=[types.Content(role="user", parts=[types.Part(text="Hello Claude!")])],
    )


@pytest.fixture
def claude_config():
    return ContentGeneratorConfig(model=MODEL, auth_type=AuthType.USE_CLAUDE)


@pytest.fixture
def mock_adapter():
    adapter = MagicMock(spec=ClaudeAdapter)
    adapter.generate_content = AsyncMock()
    adapter.count_tokens = AsyncMock()
    adapter.aclose = AsyncMock()
    return adapter


@pytest.fixture
def generator(claude_config, mock_adapter):
    return ClaudeContentGenerator(claude_config, adapter=mock_adapter)


class TestClaudeContentGenerator:
    """Test delegation and error wrapping in ClaudeContentGenerator."""

    def test_builds_adapter_from_env(self, claude_env, claude_config):
        generator = ClaudeContentGenerator(claude_config)

        assert isinstance(generator._adapter, ClaudeAdapter)
        assert generator._adapter.project_id == "test-project"
        assert generator._adapter.region == "us-central1"
        assert generator.user_tier == UserTierId.FREE

    def test_region_defaults_to_us_central1(self, monkeypatch, claude_config):
        monkeypatch.setenv("ANTHROPIC_VERTEX_PROJECT_ID", "test-project")

        generator = ClaudeContentGenerator(claude_config)

        assert generator._adapter.region == "us-central1"

    def test_requires_project_id(self, claude_config):
        with pytest.raises(
            ConfigError, match="ANTHROPIC_VERTEX_PROJECT_ID environment variable is required"
        ):
            ClaudeContentGenerator(claude_config)

    @pytest.mark.asyncio
    async def test_generate_content_delegates(self, generator, mock_adapter):
        response = make_response("Hello from Claude!")
        mock_adapter.generate_content.return_value = response
        request = make_request()

        result = await generator.generate_content(request, "test-prompt-id")

        mock_adapter.generate_content.assert_awaited_once_with(request)
        assert result is response

    @pytest.mark.asyncio
    async def test_missing_model_comes_from_config(self, generator, mock_adapter):
        """Requests without a model go to the model the generator was built for."""
        mock_adapter.generate_content.return_value = make_response("ok")
        mock_adapter.count_tokens.return_value = types.CountTokensResponse(total_tokens=1)

        await generator.generate_content({"contents": "Hello"}, "test-prompt-id")
        await generator.count_tokens(CountTokensParameters(contents="Hello"))

        sent = mock_adapter.generate_content.await_args.args[0]
        assert isinstance(sent, GenerateContentParameters)
        assert sent.model == MODEL
        assert mock_adapter.count_tokens.await_args.args[0].model == MODEL

    @pytest.mark.asyncio
    async def test_explicit_model_is_kept(self, generator, mock_adapter):
        mock_adapter.generate_content.return_value = make_response("ok")

        await generator.generate_content(
            GenerateContentParameters(model="claude-3-haiku", contents="Hello"), "test-prompt-id"
        )

        assert mock_adapter.generate_content.await_args.args[0].model == "claude-3-haiku"

    @pytest.mark.asyncio
    async def test_stream_fills_missing_model(self, generator, mock_adapter):
        seen = []

        async def stream(request):
            seen.append(request)
            yield make_response("Hello")

        mock_adapter.generate_content_stream = stream

        chunks = await generator.generate_content_stream({"contents": "Hello"}, "test-prompt-id")
        assert [chunk.text async for chunk in chunks] == ["Hello"]
        assert seen[0].model == MODEL

    @pytest.mark.asyncio
    async def test_generate_content_wraps_errors(self, generator, mock_adapter):
        mock_adapter.generate_content.side_effect = ValueError("bad request")

        with pytest.raises(ClaudeBridgeError, match="^Claude API error: bad request$") as info:
            await generator.generate_content(make_request(), "test-prompt-id")

        assert isinstance(info.value.__cause__, ValueError)

    @pytest.mark.asyncio
    async def test_generate_content_keeps_status_code(self, generator, mock_adapter):
        response = httpx.Response(429, request=httpx.Request("POST", "https://example.com"))
        mock_adapter.generate_content.side_effect = RateLimitError(
            "rate limited", response=response, body=None
        )

        with pytest.raises(ClaudeBridgeError, match="Claude API error") as info:
            await generator.generate_content(make_request(), "test-prompt-id")

        assert info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_generate_content_stream_passes_through(self, generator, mock_adapter):
        responses = [make_response("Hello"), make_response(" from Claude!")]

        async def stream(request):
            for response in responses:
                yield response

        mock_adapter.generate_content_stream = stream
        request = make_request()

        chunks = await generator.generate_content_stream(request, "test-prompt-id")
        results = [chunk async for chunk in chunks]

        assert results == responses

    @pytest.mark.asyncio
    async def test_generate_content_stream_wraps_errors(self, generator, mock_adapter):
        async def stream(request):
            yield make_response("Hello")
            raise OSError("socket closed")

        mock_adapter.generate_content_stream = stream

        chunks = await generator.generate_content_stream(make_request(), "test-prompt-id")
        with pytest.raises(ClaudeBridgeError, match="Claude streaming API error: socket closed"):
            async for _ in chunks:
                pass

    @pytest.mark.asyncio
    async def test_stream_errors_from_adapter_are_not_rewrapped(self, generator, mock_adapter):
        async def stream(request):
            raise ClaudeBridgeError("Claude streaming error: boom")
            yield  # pragma: no cover

        mock_adapter.generate_content_stream = stream

        chunks = await generator.generate_content_stream(make_request(), "test-prompt-id")
        with pytest.raises(ClaudeBridgeError, match="^Claude streaming error: boom$"):
            async for _ in chunks:
                pass

    @pytest.mark.asyncio
    async def test_count_tokens_delegates(self, generator, mock_adapter):
        mock_adapter.count_tokens.return_value = types.CountTokensResponse(total_tokens=42)
        request = CountTokensParameters(model=MODEL, contents="Test message")

        result = await generator.count_tokens(request)

        mock_adapter.count_tokens.assert_awaited_once_with(request)
        assert result.total_tokens == 42

    @pytest.mark.asyncio
    async def test_count_tokens_wraps_errors(self, generator, mock_adapter):
        mock_adapter.count_tokens.side_effect = TypeError("bad contents")

        with pytest.raises(ClaudeBridgeError, match="Claude token counting error: bad contents"):
            await generator.count_tokens({"model": MODEL, "contents": "x"})

    @pytest.mark.asyncio
    async def test_embed_content_unsupported(self, generator):
        request = types.EmbedContentParameters(model="text-embedding-ada-002", contents="test text")

        with pytest.raises(UnsupportedOperationError, match="Embedding not supported"):
            await generator.embed_content(request)


class TestGeminiContentGenerator:
    """Test pass-through to the google-genai async models API."""

    @pytest.fixture
    def models(self):
        return SimpleNamespace(
            generate_content=AsyncMock(return_value=make_response("hi")),
            generate_content_stream=AsyncMock(),
            count_tokens=AsyncMock(return_value=types.CountTokensResponse(total_tokens=3)),
            embed_content=AsyncMock(),
        )

    @pytest.fixture
    def generator(self, models):
        client = SimpleNamespace(aio=SimpleNamespace(models=models))
        config = ContentGeneratorConfig(model="gemini-2.5-pro", auth_type=AuthType.USE_GEMINI)
        return GeminiContentGenerator(config, client=client)

    @pytest.mark.asyncio
    async def test_generate_content(self, generator, models):
        config = types.GenerateContentConfig(temperature=0.2)
        request = GenerateContentParameters(
            model="gemini-2.5-flash", contents="Hello", config=config
        )

        result = await generator.generate_content(request, "prompt-1")

        models.generate_content.assert_awaited_once_with(
            model="gemini-2.5-flash", contents="Hello", config=config
        )
        assert result.text == "hi"

    @pytest.mark.asyncio
    async def test_count_tokens_uses_default_model(self, generator, models):
        result = await generator.count_tokens({"contents": "Hello"})

        assert models.count_tokens.await_args.kwargs["model"] == "gemini-2.5-pro"
        assert result.total_tokens == 3

    @pytest.mark.asyncio
    async def test_generate_content_stream(self, generator, models):
        """The SDK's async iterator is handed back unchanged."""
        responses = [make_response("Hel"), make_response("lo")]

        async def chunks():
            for response in responses:
                yield response

        stream = chunks()
        models.generate_content_stream.return_value = stream

        result = await generator.generate_content_stream({"contents": "Hello"}, "prompt-1")

        assert result is stream
        assert [chunk.text async for chunk in result] == ["Hel", "lo"]
        models.generate_content_stream.assert_awaited_once_with(
            model="gemini-2.5-pro", contents="Hello", config=None
        )

    @pytest.mark.asyncio
    async def test_embed_content(self, generator, models):
        embedding = types.EmbedContentResponse(
            embeddings=[types.ContentEmbedding(values=[0.1, 0.2])]
        )
        models.embed_content.return_value = embedding
        request = types.EmbedContentParameters(model="text-embedding-004", contents="hi")

        result = await generator.embed_content(request)

        assert result is embedding
        kwargs = models.embed_content.await_args.kwargs
        assert kwargs["model"] == "text-embedding-004"
        assert kwargs["contents"] == "hi"
        assert kwargs["config"] is None

    @pytest.mark.asyncio
    async def test_embed_content_uses_default_model(self, generator, models):
        await generator.embed_content({"contents": "hi"})

        assert models.embed_content.await_args.kwargs["model"] == "gemini-2.5-pro"

    @pytest.mark.asyncio
    async def test_aclose(self, models):
        aio = SimpleNamespace(models=models, aclose=AsyncMock())
        config = ContentGeneratorConfig(model="gemini-2.5-pro", auth_type=AuthType.USE_GEMINI)
        generator = GeminiContentGenerator(config, client=SimpleNamespace(aio=aio))

        await generator.aclose()

        aio.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_aclose_without_client_support(self, generator):
        await generator.aclose()

    def test_client_from_api_key(self, monkeypatch):
        client_cls = MagicMock()
        monkeypatch.setattr("claude_bridge.generators.genai.Client", client_cls)
        config = ContentGeneratorConfig(
            model="gemini-2.5-pro", auth_type=AuthType.USE_GEMINI, api_key="key", vertexai=False
        )

        generator = GeminiContentGenerator(config)

        client_cls.assert_called_once_with(api_key="key", vertexai=False)
        assert generator._models is client_cls.return_value.aio.models
        assert generator.user_tier is None

    def test_client_from_vertex_project(self, monkeypatch):
        client_cls = MagicMock()
        monkeypatch.setattr("claude_bridge.generators.genai.Client", client_cls)
        config = ContentGeneratorConfig(
            model="gemini-2.5-pro",
            auth_type=AuthType.USE_VERTEX_AI,
            vertexai=True,
            project="proj",
            location="us-central1",
        )

        GeminiContentGenerator(config)

        client_cls.assert_called_once_with(vertexai=True, project="proj", location="us-central1")


class TestCreateContentGenerator:
    """Test generator selection by auth type."""

    def test_claude(self, claude_env, claude_config):
        assert isinstance(create_content_generator(claude_config), ClaudeContentGenerator)

    def test_gemini(self):
        config = ContentGeneratorConfig(
            model="gemini-2.5-pro", auth_type=AuthType.USE_GEMINI, api_key="key", vertexai=False
        )
        assert isinstance(create_content_generator(config), GeminiContentGenerator)

    @pytest.mark.parametrize("auth_type", [AuthType.LOGIN_WITH_GOOGLE, None])
    def test_unsupported(self, auth_type):
        config = ContentGeneratorConfig(model="gemini-2.5-pro", auth_type=auth_type)

        with pytest.raises(ValueError, match="Unsupported authType"):
            create_content_generator(config)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
