"""
Chat event handlers.

Wires inbound chat events to the payment pipeline:

1) Trigger policy decides whether a message is for us
2) Recipient comes from the message mentions (never from the text)
3) Recipient's smart account is looked up through the identity resolver
4) The Interaction Builder produces the request, signed by the message author
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

import structlog
from eth_utils import decode_hex

from .transport import (
    ChatTransport,
    IdentityResolver,
    Mention,
    MessageEvent,
    ReactionEvent,
    SlashCommandEvent,
)
from ..core.payments.interaction_builder import InteractionBuilder
from ..core.payments.models import Recipient
from ..core.payments.result import PaymentErrorKind
from ..core.payments.trigger import should_handle_payment_message
from ..services.address import is_valid_evm_address, same_address

logger = structlog.stdlib.get_logger(__name__)

WAVE = "👋"

HELP_TEXT = (
    "**Available Commands:**\n\n"
    "• `/help` - Show this help message\n"
    "• `/time` - Get the current time\n\n"
    "**Payments:**\n\n"
    "• `send 0.0001 ETH to @Cris` - Send ETH to a mentioned user\n"
    "• `pay 5 USDC to @Cris` - Send a token by symbol\n"
    "• `send 10 0xToken... to @Cris` - Send a token by contract address\n\n"
    "In channels, mention me or include my name so I know the message is for me.\n"
    f"• React with {WAVE} - I'll wave back\n"
)

MISSING_RECIPIENT_TEXT = "To send funds, mention a recipient (e.g. `send 0.0001 ETH to @Cris`)."
UNRESOLVED_ACCOUNT_TEXT = "I could not resolve that user's smart account on Base."
INVALID_SENDER_TEXT = "I can only prepare payments for senders with an account address."


class PaymentBot:
    """Transport-agnostic bot behaviour."""

    def __init__(
        self,
        *,
        bot_id: str,
        transport: ChatTransport,
        identity: IdentityResolver,
        builder: InteractionBuilder,
        keyword: Optional[str] = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.bot_id = bot_id
        self._transport = transport
        self._identity = identity
        self._builder = builder
        self._keyword = keyword
        self._now = now

    def pick_recipient_mention(self, event: MessageEvent) -> Optional[Mention]:
        """First mentioned user that is an account and not the bot itself."""
        for mention in event.mentions:
            if is_valid_evm_address(mention.user_id) and not same_address(mention.user_id, self.bot_id):
                return mention
        return None

    async def on_message(self, event: MessageEvent) -> None:
        if not should_handle_payment_message(
            is_direct=event.is_dm,
            is_mentioned=event.is_mentioned,
            message=event.message,
            keyword=self._keyword,
        ):
            return

        log = logger.bind(event_id=event.event_id, channel_id=event.channel_id)

        # The author signs the request, so their id must be an address.
        if not is_valid_evm_address(event.user_id):
            log.warning("payment_sender_invalid", sender=event.user_id)
            await self._transport.send_message(event.channel_id, INVALID_SENDER_TEXT)
            return

        mention = self.pick_recipient_mention(event)
        if mention is None:
            log.info("payment_rejected", kind=PaymentErrorKind.RECIPIENT_NOT_FOUND.value)
            await self._transport.send_message(event.channel_id, MISSING_RECIPIENT_TEXT)
            return

        smart_account = await self._identity.get_smart_account(mention.user_id)
        if not smart_account:
            log.info(
                "payment_rejected",
                kind=PaymentErrorKind.RECIPIENT_NOT_FOUND.value,
                recipient=mention.user_id,
            )
            await self._transport.send_message(event.channel_id, UNRESOLVED_ACCOUNT_TEXT)
            return

        result = await self._builder.build(
            message=event.message,
            event_id=event.event_id,
            recipient=Recipient(
                user_id=mention.user_id,
                address=smart_account,
                display_name=mention.display_name,
            ),
        )

        if not result.ok:
            log.info("payment_rejected", kind=result.kind.value)
            await self._transport.send_message(event.channel_id, result.message)
            return

        log.info("payment_request_sent", request_id=result.value.id, title=result.value.title)
        await self._transport.send_interaction_request(
            event.channel_id,
            result.value,
            decode_hex(event.user_id),
        )

    async def on_slash_command(self, event: SlashCommandEvent) -> None:
        command = event.command.lower().lstrip("/")
        if command == "help":
            await self._transport.send_message(event.channel_id, HELP_TEXT)
        elif command == "time":
            current_time = self._now().strftime("%Y-%m-%d %H:%M:%S")
            await self._transport.send_message(event.channel_id, f"Current time: {current_time} ⏰")
        else:
            logger.debug("unknown_slash_command", command=event.command)

    async def on_reaction(self, event: ReactionEvent) -> None:
        if event.reaction == WAVE:
            await self._transport.send_message(event.channel_id, f"I saw your wave! {WAVE}")


__all__ = [
    "HELP_TEXT",
    "INVALID_SENDER_TEXT",
    "MISSING_RECIPIENT_TEXT",
    "UNRESOLVED_ACCOUNT_TEXT",
    "WAVE",
    "PaymentBot",
]
