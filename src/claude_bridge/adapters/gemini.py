"""Helpers for reading Gemini-format requests.

google-genai accepts loose shapes for ``contents`` and ``system_instruction``
(strings, bare parts, lists of either). These helpers flatten them into the
``Content``/``Part`` objects the Claude adapter works with.
"""

from __future__ import annotations

from typing import Any, Iterable, TypeVar

from google.genai import types
from pydantic import BaseModel

__all__ = [
    "coerce_request",
    "normalize_contents",
    "system_instruction_text",
    "extract_text",
]

M = TypeVar("M", bound=BaseModel)


def coerce_request(request: M | dict[str, Any], model_cls: type[M]) -> M:
    """Validate a dict request into *model_cls*; model instances pass through."""
    if isinstance(request, model_cls):
        return request
    if isinstance(request, dict):
        return model_cls.model_validate(request)
    raise TypeError(
        f"Expected {model_cls.__name__} or dict; got {type(request).__name__}"
    )


def _as_part(item: Any) -> types.Part:
    if isinstance(item, types.Part):
        return item
    if isinstance(item, str):
        return types.Part(text=item)
    raise TypeError(f"Unsupported part type: {type(item).__name__}")


def normalize_contents(contents: Any) -> list[types.Content]:
    """
    Flatten the loose ``contents`` union into a list of Content.

    Strings and bare parts become user turns; consecutive bare items are
    grouped into one turn.
    """
    if contents is None:
        return []
    if isinstance(contents, types.Content):
        return [contents]
    if isinstance(contents, (str, types.Part)):
        return [types.Content(role="user", parts=[_as_part(contents)])]

    result: list[types.Content] = []
    pending: list[types.Part] = []

    def flush() -> None:
        if pending:
            result.append(types.Content(role="user", parts=list(pending)))
            pending.clear()

    for item in contents:
        if isinstance(item, types.Content):
            flush()
            result.append(item)
        elif isinstance(item, list):
            flush()
            result.append(types.Content(role="user", parts=[_as_part(p) for p in item]))
        else:
            pending.append(_as_part(item))
    flush()
    return result


def _iter_parts(value: Any) -> Iterable[types.Part]:
    if value is None:
        return
    if isinstance(value, types.Content):
        yield from value.parts or []
    elif isinstance(value, (str, types.Part)):
        yield _as_part(value)
    else:
        for item in value:
            yield from _iter_parts(item)


def system_instruction_text(instruction: Any) -> str:
    """Return the plain text of a system instruction."""
    if instruction is None:
        return ""
    if isinstance(instruction, str):
        return instruction

    text = ""
    for part in _iter_parts(instruction):
        if part.text:
            text += part.text + " "
    return text.strip()


def extract_text(contents: Iterable[types.Content]) -> str:
    """Concatenate every text part in *contents*, space separated."""
    text = ""
    for content in contents:
        for part in content.parts or []:
            if part.text:
                text += part.text + " "
    return text.strip()
