"""
Natural-language payment command parsing.

Supported:
- send 0.0001 ETH to @Cris
- pay 5 USDC to @Cris
- send me .5 USDC
- send 123 0xTokenAddress... to @Cris

Only the first command in a message is used. The recipient is not parsed
here; it comes from the message's mention metadata.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from .amounts import normalize_amount
from .models import PaymentIntent, PaymentVerb
from .result import Ok, PaymentErrorKind, Result, err

PAYMENT_COMMAND_RE = re.compile(
    r"\b(?P<verb>send|pay)\b\s+(?:me\s+)?"
    r"(?P<amount>\d+(?:\.\d+)?|\.\d+)\s+"
    r"(?P<token>0x[a-fA-F0-9]{40}|[A-Za-z][A-Za-z0-9]{0,31})\b",
    re.IGNORECASE | re.ASCII,
)

USAGE_TEXT = (
    "I can help with sends like `send 0.0001 ETH to @Cris` or `pay 5 USDC to @Cris` "
    "(mention the recipient)."
)


def _is_positive_number(amount: str) -> bool:
    try:
        value = Decimal(amount)
    except InvalidOperation:
        return False
    return value.is_finite() and value > 0


def parse_payment_request(message: str) -> Result[PaymentIntent]:
    """Extract verb, amount and token reference from a chat message."""
    match = PAYMENT_COMMAND_RE.search(message or "")
    if not match:
        return err(PaymentErrorKind.PARSE, USAGE_TEXT)

    amount_text = match.group("amount")
    amount_raw = normalize_amount(amount_text)
    if not _is_positive_number(amount_raw):
        return err(PaymentErrorKind.INVALID_AMOUNT, f"Invalid amount: `{amount_text}`.")

    return Ok(
        PaymentIntent(
            verb=PaymentVerb(match.group("verb").lower()),
            amount_raw=amount_raw,
            token_raw=match.group("token"),
        )
    )


__all__ = ["PAYMENT_COMMAND_RE", "USAGE_TEXT", "parse_payment_request"]
