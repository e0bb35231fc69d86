#!/usr/bin/env python3
"""Simple CLI for trying payment commands locally"""

import argparse
import asyncio
import json
import uuid
from typing import Optional

from paybot.container import build_container
from paybot.core.payments.amounts import format_units
from paybot.core.payments.models import Recipient
from paybot.core.payments.trigger import should_handle_payment_message
from paybot.logging_config import setup_logging


def print_request(request) -> None:
    """Pretty print an interaction request"""
    content = request.content
    print(f"\n✅ {request.title}")
    print("=" * 50)
    print(f"Request ID: {request.id}")
    print(f"Chain:      {content.chain_id}")
    print(f"To:         {content.to}")
    print(f"Value:      {content.value} wei ({format_units(int(content.value), 18)} ETH)")
    print(f"Data:       {content.data}")


async def cli_preview(message: str, recipient: str, name: Optional[str], event_id: str, as_json: bool):
    """Build the interaction request for a chat message"""
    container = build_container()
    try:
        result = await container.builder.build(
            message=message,
            event_id=event_id,
            recipient=Recipient(user_id=recipient, address=recipient, display_name=name),
        )
    finally:
        await container.aclose()

    if not result.ok:
        print(f"❌ [{result.kind.value}] {result.message}")
        return

    if as_json:
        print(json.dumps(result.value.to_dict(), indent=2))
    else:
        print_request(result.value)


async def cli_token(symbol: str):
    """Look up a symbol in the token list"""
    container = build_container()
    print(f"🔍 Looking up {symbol.upper()} in {container.settings.token_list_url}...")
    result = await container.registry.lookup(symbol)
    if not result.ok:
        print(f"❌ {result.message}")
    elif result.value is None:
        print(f"❌ {symbol.upper()} is not in the token list")
    else:
        token = result.value
        print(f"{token.symbol}: {token.address} (decimals={token.decimals})")


def cli_trigger(message: str, is_dm: bool, mentioned: bool, keyword: Optional[str]):
    """Show whether a message would be routed into payment handling"""
    handled = should_handle_payment_message(
        is_direct=is_dm,
        is_mentioned=mentioned,
        message=message,
        keyword=keyword,
    )
    print("✅ handled" if handled else "⏭️  ignored")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Paybot CLI")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command")

    preview_parser = subparsers.add_parser("preview", help="Build a payment request from a message")
    preview_parser.add_argument("message", help="Chat message, e.g. 'send 0.0001 ETH to @Cris'")
    preview_parser.add_argument("--recipient", required=True, help="Recipient smart account address")
    preview_parser.add_argument("--name", help="Recipient display name")
    preview_parser.add_argument("--event-id", default=None, help="Event id (default: random)")
    preview_parser.add_argument("--json", action="store_true", help="Print the raw request JSON")

    token_parser = subparsers.add_parser("token", help="Look up a token symbol in the token list")
    token_parser.add_argument("symbol", help="Token symbol, e.g. USDC")

    trigger_parser = subparsers.add_parser("trigger", help="Check the channel trigger policy")
    trigger_parser.add_argument("message", help="Chat message")
    trigger_parser.add_argument("--dm", action="store_true", help="Message is a DM / group DM")
    trigger_parser.add_argument("--mentioned", action="store_true", help="Bot is mentioned")
    trigger_parser.add_argument("--keyword", default=None, help="Override BOT_NAME")

    return parser


async def main():
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    setup_logging(args.log_level)
    command = args.command.lower()

    if command == "preview":
        await cli_preview(
            args.message,
            args.recipient,
            args.name,
            args.event_id or f"cli-{uuid.uuid4().hex[:8]}",
            args.json,
        )
    elif command == "token":
        await cli_token(args.symbol)
    elif command == "trigger":
        cli_trigger(args.message, args.dm, args.mentioned, args.keyword)


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
