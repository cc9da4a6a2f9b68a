"""CLI entry point for Flowise AI SDK."""

import argparse
import asyncio
import json
import mimetypes
from pathlib import Path
from typing import List, Optional

from .config.constants import DEFAULT_MEDIA_TYPE
from .converters.attachments import file_part
from .models.conversation_types import ConversationTurn
from .providers.base import ProviderError
from .providers.flowise import create_flowise_provider


def _build_turn(prompt: str, files: List[str]) -> ConversationTurn:
    content = [prompt]
    for path in files:
        media_type = mimetypes.guess_type(path)[0] or DEFAULT_MEDIA_TYPE
        content.append(file_part(Path(path).read_bytes(), media_type=media_type, filename=Path(path).name))
    return ConversationTurn.user(*content)


async def chat(chatflow_id: str, prompt: str, files: Optional[List[str]] = None,
               chat_id: Optional[str] = None, stream: bool = False,
               base_url: Optional[str] = None, api_key: Optional[str] = None):
    """Send a prompt (and optional files) to a chatflow."""
    provider = create_flowise_provider(base_url=base_url, api_key=api_key)
    model = provider.chat(chatflow_id)
    turns = [_build_turn(prompt, files or [])]

    try:
        if stream:
            result = await model.stream(turns, chat_id=chat_id)
            print(f"Streaming response from {chatflow_id} (chat {result.chat_id or '-'}):\n")
            async for part in result:
                if part.type == "text-delta":
                    print(part.delta, end='', flush=True)
                elif part.type == "finish":
                    print()
                    print(f"\nTokens used (estimated): {part.usage.to_wire()}")
            warnings = result.warnings
        else:
            result = await model.generate(turns, chat_id=chat_id)
            print(f"Response from {chatflow_id} (chat {result.chat_id or '-'}):\n")
            print(result.text)
            print(f"\nTokens used (estimated): {result.usage.to_wire()}")
            warnings = result.warnings
        for warning in warnings:
            print(f"Warning: {warning.message}")
    except ProviderError as e:
        print(f"Error: {e}")
    finally:
        await provider.aclose()


async def show_upload_config(chatflow_id: str, base_url: Optional[str] = None,
                             api_key: Optional[str] = None):
    """Print the upload config resolved for a chatflow."""
    provider = create_flowise_provider(base_url=base_url, api_key=api_key)
    try:
        config = await provider.chat(chatflow_id).config_resolver.resolve(chatflow_id)
        print(json.dumps(config.model_dump(mode="json"), indent=2))
    finally:
        await provider.aclose()


def main():
    """Main CLI function."""
    parser = argparse.ArgumentParser(description="Flowise AI SDK CLI")
    parser.add_argument('--base-url', help='Flowise base URL (default: $FLOWISE_BASE_URL)')
    parser.add_argument('--api-key', help='Flowise API key (default: $FLOWISE_API_KEY)')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Chat command
    chat_parser = subparsers.add_parser('chat', help='Send a prompt to a chatflow')
    chat_parser.add_argument('chatflow_id', help='Chatflow ID')
    chat_parser.add_argument('prompt', help='Text prompt')
    chat_parser.add_argument('--file', action='append', default=[], dest='files',
                             help='Attach a file (repeatable)')
    chat_parser.add_argument('--chat-id', help='Continue an existing chat session')
    chat_parser.add_argument('--stream', action='store_true', help='Stream the response')

    # Upload config command
    config_parser = subparsers.add_parser('upload-config', help='Show the resolved upload config')
    config_parser.add_argument('chatflow_id', help='Chatflow ID')

    args = parser.parse_args()

    if args.command == 'chat':
        asyncio.run(chat(
            args.chatflow_id,
            args.prompt,
            args.files,
            args.chat_id,
            args.stream,
            args.base_url,
            args.api_key,
        ))
    elif args.command == 'upload-config':
        asyncio.run(show_upload_config(args.chatflow_id, args.base_url, args.api_key))
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
