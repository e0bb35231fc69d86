"""
Tests for natural-language payment command parsing.
"""

import pytest

from paybot.core.payments.intent_parser import USAGE_TEXT, parse_payment_request
from paybot.core.payments.models import PaymentVerb
from paybot.core.payments.result import PaymentErrorKind


class TestParsePaymentRequest:

    def test_pay_symbol(self):
        result = parse_payment_request("pay 5 USDC to @X")
        assert result.ok
        assert result.value.verb == PaymentVerb.PAY
        assert result.value.amount_raw == "5"
        assert result.value.token_raw == "USDC"

    @pytest.mark.parametrize(
        "amount, expected",
        [
            ("0.0001", "0.0001"),
            ("1", "1"),
            ("12.5", "12.5"),
            (".5", "0.5"),
            (".0001", "0.0001"),
        ],
    )
    def test_send_eth_amount_normalization(self, amount, expected):
        result = parse_payment_request(f"send {amount} ETH to @Cris")
        assert result.ok
        assert result.value.verb == PaymentVerb.SEND
        assert result.value.amount_raw == expected
        assert result.value.token_raw == "ETH"

    def test_verb_is_case_insensitive(self):
        result = parse_payment_request("SEND 1 usdc to @Cris")
        assert result.ok
        assert result.value.verb == PaymentVerb.SEND
        assert result.value.token_raw == "usdc"

    def test_optional_me_filler(self):
        result = parse_payment_request("hey bot, send me 2 DEGEN please")
        assert result.ok
        assert result.value.amount_raw == "2"
        assert result.value.token_raw == "DEGEN"

    def test_token_address(self):
        address = "0x4ed4e862860bed51a9570b96d89af5e1b0efefed"
        result = parse_payment_request(f"send 123 {address} to @Cris")
        assert result.ok
        assert result.value.token_raw == address

    def test_first_match_wins(self):
        result = parse_payment_request("send 1 ETH to @A and pay 2 USDC to @B")
        assert result.ok
        assert result.value.verb == PaymentVerb.SEND
        assert result.value.token_raw == "ETH"

    def test_recipient_mention_is_ignored(self):
        result = parse_payment_request("@speedrun send 0.0001 ETH to @Cris")
        assert result.ok
        assert result.value.amount_raw == "0.0001"

    def test_missing_verb_fails_with_usage(self):
        result = parse_payment_request(".5 ETH")
        assert not result.ok
        assert result.kind == PaymentErrorKind.PARSE
        assert result.message == USAGE_TEXT
        assert "send 0.0001 ETH to @Cris" in result.message

    def test_negative_amount_not_matched(self):
        result = parse_payment_request("send -1 ETH to @X")
        assert not result.ok
        assert result.kind == PaymentErrorKind.PARSE
        assert result.message == USAGE_TEXT

    @pytest.mark.parametrize("amount", ["0", "0.0", "00.000", ".0"])
    def test_zero_amount_rejected_and_echoed(self, amount):
        result = parse_payment_request(f"send {amount} ETH to @X")
        assert not result.ok
        assert result.kind == PaymentErrorKind.INVALID_AMOUNT
        assert result.message == f"Invalid amount: `{amount}`."

    def test_verb_must_be_whole_word(self):
        assert not parse_payment_request("resend 1 ETH").ok
        assert not parse_payment_request("payday 1 ETH").ok

    def test_thousands_separator_not_supported(self):
        result = parse_payment_request("send 1,000 USDC to @X")
        assert not result.ok
        assert result.kind == PaymentErrorKind.PARSE

    def test_token_must_start_with_letter(self):
        assert not parse_payment_request("send 1 9LIVES to @X").ok

    def test_token_longer_than_32_chars_not_matched(self):
        assert not parse_payment_request("send 1 " + "A" * 33).ok

    def test_non_ascii_digits_not_matched(self):
        assert not parse_payment_request("send ٥ ETH to @X").ok

    def test_empty_message(self):
        assert parse_payment_request("").kind == PaymentErrorKind.PARSE
