"""
Example: Streaming with File Uploads

This example streams a chatflow response while attaching a file. How the
file reaches Flowise (inline, RAG or full-text extraction) depends on the
chatflow's upload settings. Set FLOWISE_BASE_URL, FLOWISE_API_KEY and
FLOWISE_CHATFLOW_ID before running.
"""

import asyncio
import logging
import os

from flowise_ai_sdk import (
    ConversationTurn,
    StructuredLogger,
    create_flowise_provider,
    file_part,
)


CHATFLOW_ID = os.getenv("FLOWISE_CHATFLOW_ID", "your-chatflow-id")


async def example_streaming_with_file():
    """Stream a response about an attached text file."""
    print("=== Streaming with a File ===\n")

    provider = create_flowise_provider(logger=StructuredLogger("example"))
    model = provider(CHATFLOW_ID)

    result = await model.stream([
        ConversationTurn.user(
            "Summarize this file in one sentence",
            file_part(b"Flowise is a low-code tool for building LLM apps.",
                      media_type="text/plain", filename="notes.txt"),
        )
    ])

    for warning in result.warnings:
        print(f"Warning: {warning.message}")

    async for part in result:
        if part.type == "text-delta":
            print(part.delta, end='', flush=True)
        elif part.type == "finish":
            print("\n\nUsage information (estimated):")
            print(f"  Input tokens: {part.usage.input_tokens}")
            print(f"  Output tokens: {part.usage.output_tokens}")
            print(f"  Total tokens: {part.usage.total_tokens}")

    print(f"\nChat id: {result.chat_id}")
    await provider.aclose()


async def example_multi_turn():
    """Keep a session going by reusing the chat id."""
    print("\n=== Multi-turn Session ===\n")

    provider = create_flowise_provider()
    model = provider(CHATFLOW_ID)

    first = await model.generate([ConversationTurn.user("Remember the number 7")])
    print(f"First answer: {first.text}")

    second = await model.generate(
        [ConversationTurn.user("Which number did I ask you to remember?")],
        chat_id=first.chat_id,
    )
    print(f"Second answer: {second.text}")
    await provider.aclose()


async def main():
    logging.basicConfig(level=logging.DEBUG)
    await example_streaming_with_file()
    await example_multi_turn()


if __name__ == "__main__":
    asyncio.run(main())
