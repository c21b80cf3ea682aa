"""Claude adapter for pure request/response transformations."""

from __future__ import annotations

import json
import logging
import uuid
from collections import defaultdict, deque
from typing import Any, Optional, Sequence

from anthropic.types import Message
from google.genai import types

from ..types import GenerateContentParameters
from .gemini import coerce_request, normalize_contents, system_instruction_text

__all__ = ["ClaudeRequestAdapter", "DEFAULT_MAX_TOKENS"]

_logger = logging.getLogger(__name__)

# Claude requires max_tokens; used when the request leaves it unset
DEFAULT_MAX_TOKENS = 4096

_ROLE_MAP = {
    "user": "user",
    "model": "assistant",
}

_FINISH_REASONS = {
    "end_turn": types.FinishReason.STOP,
    "max_tokens": types.FinishReason.MAX_TOKENS,
    "tool_use": types.FinishReason.STOP,
}


def _new_tool_id() -> str:
    return f"toolu_{uuid.uuid4().hex[:24]}"


class _ToolIdTracker:
    """Pairs tool results with earlier tool calls when Gemini ids are missing or stale."""

    def __init__(self) -> None:
        self._open: defaultdict[str, deque[str]] = defaultdict(deque)

    def call_id(self, call: types.FunctionCall) -> str:
        tool_id = call.id or _new_tool_id()
        self._open[call.name or ""].append(tool_id)
        return tool_id

    def result_id(self, response: types.FunctionResponse) -> str:
        pending = self._open[response.name or ""]
        if response.id and response.id in pending:
            pending.remove(response.id)
            return response.id
        # Unknown or missing id: answer the oldest open call of that name
        if pending:
            return pending.popleft()
        if response.id:
            return response.id
        return _new_tool_id()


def _schema_to_json(schema: types.Schema) -> dict[str, Any]:
    """Dump a Gemini Schema as a JSON schema Claude accepts."""
    return _clean_schema(
        schema.model_dump(mode="json", by_alias=True, exclude_none=True)
    )


def _clean_schema(node: Any) -> Any:
    if isinstance(node, list):
        return [_clean_schema(item) for item in node]
    if not isinstance(node, dict):
        return node

    cleaned: dict[str, Any] = {}
    for key, value in node.items():
        if key == "propertyOrdering":
            continue
        if key == "type" and isinstance(value, str):
            if value == "TYPE_UNSPECIFIED":
                continue
            cleaned[key] = value.lower()
        elif key == "properties" and isinstance(value, dict):
            cleaned[key] = {name: _clean_schema(sub) for name, sub in value.items()}
        else:
            cleaned[key] = _clean_schema(value)
    return cleaned


class ClaudeRequestAdapter:
    """Adapter for converting between Gemini format and Claude Messages format."""

    def to_provider(
        self, request: GenerateContentParameters | dict[str, Any]
    ) -> dict[str, Any]:
        """Convert a Gemini generate_content request to Claude request arguments.

        The model is not included; the caller resolves it.
        """
        request = coerce_request(request, GenerateContentParameters)
        config = request.config or types.GenerateContentConfig()

        tracker = _ToolIdTracker()
        messages: list[dict[str, Any]] = []
        for content in normalize_contents(request.contents):
            role = _ROLE_MAP.get(content.role or "")
            if role is None:
                _logger.debug("Dropping content with role %r", content.role)
                continue
            blocks = self.build_content(content.parts or [], tracker)
            if not blocks:
                # The Messages API rejects messages with empty content
                continue
            messages.append({"role": role, "content": blocks})

        claude_request: dict[str, Any] = {
            "messages": messages,
            "max_tokens": config.max_output_tokens or DEFAULT_MAX_TOKENS,
        }

        system_prompt = system_instruction_text(config.system_instruction)
        if system_prompt:
            claude_request["system"] = system_prompt

        if config.temperature is not None:
            claude_request["temperature"] = config.temperature
        if config.top_p is not None:
            claude_request["top_p"] = config.top_p
        if config.top_k is not None:
            claude_request["top_k"] = int(config.top_k)
        if config.stop_sequences:
            claude_request["stop_sequences"] = list(config.stop_sequences)

        if config.tools:
            claude_tools = self.build_tools(config.tools)
            if claude_tools:
                claude_request["tools"] = claude_tools

        return claude_request

    def build_content(
        self,
        parts: Sequence[types.Part],
        tracker: Optional[_ToolIdTracker] = None,
    ) -> list[dict[str, Any]]:
        """Convert Gemini parts to Claude content blocks."""
        tracker = tracker or _ToolIdTracker()
        blocks: list[dict[str, Any]] = []

        for part in parts:
            if part.text:
                blocks.append({"type": "text", "text": part.text})
            elif part.function_call:
                call = part.function_call
                blocks.append(
                    {
                        "type": "tool_use",
                        "id": tracker.call_id(call),
                        "name": call.name,
                        "input": call.args or {},
                    }
                )
            elif part.function_response:
                response = part.function_response
                blocks.append(
                    {
                        "type": "tool_result",
                        "tool_use_id": tracker.result_id(response),
                        "content": json.dumps(
                            response.response if response.response is not None else {}
                        ),
                    }
                )

        return blocks

    def build_tools(self, tools: Sequence[Any]) -> list[dict[str, Any]]:
        """Flatten Gemini function declarations into Claude tool definitions."""
        claude_tools: list[dict[str, Any]] = []

        for tool in tools:
            for func in getattr(tool, "function_declarations", None) or []:
                claude_tools.append(
                    {
                        "name": func.name,
                        "description": func.description,
                        "input_schema": self._input_schema(func),
                    }
                )

        return claude_tools

    def _input_schema(self, func: types.FunctionDeclaration) -> dict[str, Any]:
        json_schema = getattr(func, "parameters_json_schema", None)
        if json_schema is not None:
            return json_schema
        if func.parameters is not None:
            return _schema_to_json(func.parameters)
        return {}

    def from_provider(self, raw: Message) -> types.GenerateContentResponse:
        """Convert a Claude message to a Gemini GenerateContentResponse."""
        parts: list[types.Part] = []

        for block in raw.content or []:
            block_type = getattr(block, "type", None)
            if block_type == "text":
                parts.append(types.Part(text=block.text))
            elif block_type == "tool_use":
                parts.append(
                    types.Part(
                        function_call=types.FunctionCall(
                            id=block.id,
                            name=block.name,
                            args=dict(block.input) if hasattr(block.input, "items") else {},
                        )
                    )
                )

        usage_metadata = None
        usage = getattr(raw, "usage", None)
        if usage is not None:
            usage_metadata = types.GenerateContentResponseUsageMetadata(
                prompt_token_count=usage.input_tokens,
                candidates_token_count=usage.output_tokens,
                total_token_count=usage.input_tokens + usage.output_tokens,
            )

        return types.GenerateContentResponse(
            candidates=[
                types.Candidate(
                    content=types.Content(role="model", parts=parts),
                    finish_reason=self.map_finish_reason(raw.stop_reason),
                    index=0,
                    safety_ratings=[],
                )
            ],
            prompt_feedback=types.GenerateContentResponsePromptFeedback(safety_ratings=[]),
            usage_metadata=usage_metadata,
            model_version=getattr(raw, "model", None),
        )

    def stream_chunk(self, raw_chunk: Any) -> Optional[types.GenerateContentResponse]:
        """Convert a streaming text delta to a partial response; None for other events."""
        if getattr(raw_chunk, "type", None) != "content_block_delta":
            return None
        delta = getattr(raw_chunk, "delta", None)
        if getattr(delta, "type", None) != "text_delta":
            return None

        return types.GenerateContentResponse(
            candidates=[
                types.Candidate(
                    content=types.Content(role="model", parts=[types.Part(text=delta.text)]),
                    finish_reason=types.FinishReason.STOP,
                    index=0,
                    safety_ratings=[],
                )
            ],
            prompt_feedback=types.GenerateContentResponsePromptFeedback(safety_ratings=[]),
        )

    @staticmethod
    def map_finish_reason(stop_reason: Optional[str]) -> types.FinishReason:
        """Map a Claude stop_reason to a Gemini FinishReason."""
        return _FINISH_REASONS.get(stop_reason or "", types.FinishReason.STOP)
