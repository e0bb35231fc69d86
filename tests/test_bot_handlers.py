"""
Tests for the chat event handlers.
"""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from eth_utils import decode_hex

from paybot.bot import (
    Mention,
    MessageEvent,
    PaymentBot,
    ReactionEvent,
    SlashCommandEvent,
)
from paybot.bot.handlers import (
    HELP_TEXT,
    INVALID_SENDER_TEXT,
    MISSING_RECIPIENT_TEXT,
    UNRESOLVED_ACCOUNT_TEXT,
)
from payment_fixtures import BOT_ADDRESS, RECIPIENT_ADDRESS, SENDER_ADDRESS

SMART_ACCOUNT = "0x5555555555555555555555555555555555555555"


@pytest.fixture
def transport():
    chat = MagicMock()
    chat.send_message = AsyncMock()
    chat.send_interaction_request = AsyncMock()
    return chat


@pytest.fixture
def identity():
    resolver = MagicMock()
    resolver.get_smart_account = AsyncMock(return_value=SMART_ACCOUNT)
    return resolver


@pytest.fixture
def bot(transport, identity, builder):
    return PaymentBot(
        bot_id=BOT_ADDRESS,
        transport=transport,
        identity=identity,
        builder=builder,
        keyword="speedrun",
        now=lambda: datetime(2024, 5, 1, 12, 30, 45),
    )


def message_event(message: str, mentions=None, **overrides) -> MessageEvent:
    fields = {
        "channel_id": "channel-1",
        "message": message,
        "user_id": SENDER_ADDRESS,
        "event_id": "evt-1",
        "mentions": mentions if mentions is not None else [Mention(RECIPIENT_ADDRESS, "Cris")],
        "is_dm": False,
        "is_mentioned": True,
    }
    fields.update(overrides)
    return MessageEvent(**fields)


class TestOnMessage:

    @pytest.mark.asyncio
    async def test_sends_interaction_request_signed_by_author(self, bot, transport, identity):
        await bot.on_message(message_event("send 0.0001 ETH to @Cris"))

        identity.get_smart_account.assert_awaited_once_with(RECIPIENT_ADDRESS)
        transport.send_message.assert_not_awaited()
        transport.send_interaction_request.assert_awaited_once()

        channel_id, request, signer = transport.send_interaction_request.await_args.args
        assert channel_id == "channel-1"
        assert request.id == "payment-evt-1"
        assert request.title == "Send 0.0001 ETH to Cris"
        assert request.content.to == SMART_ACCOUNT
        assert request.content.value == "100000000000000"
        assert signer == decode_hex(SENDER_ADDRESS)

    @pytest.mark.asyncio
    async def test_ignores_untriggered_channel_message(self, bot, transport, identity):
        await bot.on_message(message_event("send 1 ETH to @Cris", is_mentioned=False))

        identity.get_smart_account.assert_not_awaited()
        transport.send_message.assert_not_awaited()
        transport.send_interaction_request.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_keyword_triggers_channel_message(self, bot, transport):
        await bot.on_message(message_event("speedrun send 1 ETH to @Cris", is_mentioned=False))
        transport.send_interaction_request.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_dm_needs_no_mention_of_bot(self, bot, transport):
        await bot.on_message(message_event("pay 5 USDC to @Cris", is_dm=True, is_mentioned=False))
        transport.send_interaction_request.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_bot_mention_is_not_the_recipient(self, bot, identity):
        mentions = [Mention(BOT_ADDRESS, "speedrun"), Mention(RECIPIENT_ADDRESS, "Cris")]

        await bot.on_message(message_event("@speedrun send 1 ETH to @Cris", mentions=mentions))

        identity.get_smart_account.assert_awaited_once_with(RECIPIENT_ADDRESS)

    @pytest.mark.asyncio
    async def test_missing_recipient(self, bot, transport):
        await bot.on_message(message_event("send 1 ETH", mentions=[Mention(BOT_ADDRESS)]))

        transport.send_message.assert_awaited_once_with("channel-1", MISSING_RECIPIENT_TEXT)
        transport.send_interaction_request.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_sender_without_account_address(self, bot, transport, identity):
        await bot.on_message(message_event("send 1 ETH to @Cris", user_id="user-42"))

        transport.send_message.assert_awaited_once_with("channel-1", INVALID_SENDER_TEXT)
        transport.send_interaction_request.assert_not_awaited()
        identity.get_smart_account.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unresolved_smart_account(self, bot, transport, identity):
        identity.get_smart_account.return_value = None

        await bot.on_message(message_event("send 1 ETH to @Cris"))

        transport.send_message.assert_awaited_once_with("channel-1", UNRESOLVED_ACCOUNT_TEXT)

    @pytest.mark.asyncio
    async def test_build_failure_is_reported(self, bot, transport):
        await bot.on_message(message_event("send 1 TOWNS to @Cris"))

        transport.send_interaction_request.assert_not_awaited()
        channel_id, text = transport.send_message.await_args.args
        assert channel_id == "channel-1"
        assert text.startswith("I couldn't find token symbol `TOWNS`")

    @pytest.mark.asyncio
    async def test_non_payment_message_gets_usage(self, bot, transport):
        await bot.on_message(message_event("what's up?"))

        text = transport.send_message.await_args.args[1]
        assert "send 0.0001 ETH to @Cris" in text


class TestPickRecipient:

    def test_skips_non_account_mentions(self, bot):
        event = message_event("x", mentions=[Mention("not-an-address"), Mention(RECIPIENT_ADDRESS)])
        assert bot.pick_recipient_mention(event).user_id == RECIPIENT_ADDRESS


class TestCommands:

    @pytest.mark.asyncio
    async def test_help(self, bot, transport):
        await bot.on_slash_command(SlashCommandEvent("channel-1", "help"))
        transport.send_message.assert_awaited_once_with("channel-1", HELP_TEXT)

    @pytest.mark.asyncio
    async def test_time(self, bot, transport):
        await bot.on_slash_command(SlashCommandEvent("channel-1", "/time"))
        transport.send_message.assert_awaited_once_with("channel-1", "Current time: 2024-05-01 12:30:45 ⏰")

    @pytest.mark.asyncio
    async def test_unknown_command_is_ignored(self, bot, transport):
        await bot.on_slash_command(SlashCommandEvent("channel-1", "balance"))
        transport.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wave_back(self, bot, transport):
        await bot.on_reaction(ReactionEvent("channel-1", "👋"))
        transport.send_message.assert_awaited_once_with("channel-1", "I saw your wave! 👋")

    @pytest.mark.asyncio
    async def test_other_reactions_ignored(self, bot, transport):
        await bot.on_reaction(ReactionEvent("channel-1", "🔥"))
        transport.send_message.assert_not_awaited()
