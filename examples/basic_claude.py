"""Basic Claude-on-Vertex example using Gemini-format requests."""

import asyncio
import logging

from google.genai import types

from claude_bridge import (
    GenerateContentParameters,
    create_content_generator,
    create_content_generator_config,
    resolve_non_interactive_auth,
)

MODEL = "claude-3-7-sonnet"


async def basic_claude_example():
    """Simple request/response round trip."""
    print("=== Basic Claude Example ===")

    # Needs ANTHROPIC_VERTEX_PROJECT_ID (and optionally CLOUD_ML_REGION)
    auth_type = resolve_non_interactive_auth(None, MODEL)
    generator = create_content_generator(create_content_generator_config(MODEL, auth_type))

    request = GenerateContentParameters(
        model=MODEL,
        contents=[types.Content(role="user", parts=[types.Part(text="What is the capital of Italy?")])],
        config=types.GenerateContentConfig(
            system_instruction="You are a helpful assistant.",
            max_output_tokens=150,
            temperature=0.7,
        ),
    )

    response = await generator.generate_content(request, "example-1")
    print(f"🤖 Claude Response: {response.text}")
    print(f"📊 Usage: {response.usage_metadata}")

    tokens = await generator.count_tokens({"model": MODEL, "contents": "What is the capital of Italy?"})
    print(f"🔢 Approximate prompt tokens: {tokens.total_tokens}")


async def tool_claude_example():
    """Let Claude call a function declared in Gemini format."""
    print("\n=== Claude Tool Example ===")

    auth_type = resolve_non_interactive_auth(None, MODEL)
    generator = create_content_generator(create_content_generator_config(MODEL, auth_type))

    weather = types.FunctionDeclaration(
        name="get_weather",
        description="Get weather information",
        parameters=types.Schema(
            type=types.Type.OBJECT,
            properties={"location": types.Schema(type=types.Type.STRING)},
            required=["location"],
        ),
    )
    request = GenerateContentParameters(
        model=MODEL,
        contents="What is the weather in San Francisco?",
        config=types.GenerateContentConfig(tools=[types.Tool(function_declarations=[weather])]),
    )

    response = await generator.generate_content(request, "example-2")
    for call in response.function_calls or []:
        print(f"🔧 {call.name}({call.args})")


async def streaming_claude_example():
    """Stream a reply chunk by chunk."""
    print("\n=== Streaming Claude Example ===")

    auth_type = resolve_non_interactive_auth(None, MODEL)
    generator = create_content_generator(create_content_generator_config(MODEL, auth_type))

    request = GenerateContentParameters(
        model=MODEL,
        contents="Write a short poem about coding.",
        config=types.GenerateContentConfig(temperature=0.8),
    )

    print("🎵 Streaming poem: ", end="")
    async for chunk in await generator.generate_content_stream(request, "example-3"):
        print(chunk.text, end="", flush=True)
    print()


async def main():
    """Run all examples in sequence."""
    await basic_claude_example()
    await tool_claude_example()
    await streaming_claude_example()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
