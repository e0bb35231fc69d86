"""
Interaction Builder.

Turns a chat message plus an already-resolved recipient into a transaction
request the user signs:

- native ETH: ``to`` = recipient, ``value`` = wei, ``data`` = ``0x``
- ERC-20: ``to`` = token, ``value`` = 0, ``data`` = ``transfer(recipient, amount)``

Usage:
    builder = InteractionBuilder(resolver)
    result = await builder.build(
        message="pay 5 USDC to @Cris",
        event_id=event.event_id,
        recipient=Recipient(user_id="0x...", address="0x...", display_name="Cris"),
    )
    if result.ok:
        await transport.send_interaction_request(channel_id, result.value, signer)
"""

from __future__ import annotations

import logging
from typing import Optional

from .amounts import MAX_UINT256, parse_ether, parse_units
from .intent_parser import parse_payment_request
from .models import (
    InteractionRequest,
    NativeCurrency,
    PaymentIntent,
    Recipient,
    TokenMetadata,
    TransactionPayload,
)
from .result import Ok, PaymentErrorKind, Result, err
from ..execution.abi import ERC20_ABI, AbiError, encode_function_data
from ...config import settings
from ...services.address import is_valid_evm_address
from ...services.token_resolution import TokenResolver

logger = logging.getLogger(__name__)

EMPTY_CALLDATA = "0x"


def payment_request_id(event_id: str) -> str:
    """Stable per triggering event, so redelivered events map to the same request."""
    return f"payment-{event_id}"


def payment_title(intent: PaymentIntent, token_label: str, recipient: Recipient) -> str:
    return f"{intent.verb.label} {intent.amount_raw} {token_label} to {recipient.label}"


class InteractionBuilder:
    """Builds payment interaction requests from chat messages."""

    def __init__(self, resolver: TokenResolver, chain_id: Optional[int] = None) -> None:
        self._resolver = resolver
        self._chain_id = chain_id or settings.chain_id

    async def build(
        self,
        message: str,
        event_id: str,
        recipient: Recipient,
    ) -> Result[InteractionRequest]:
        parsed = parse_payment_request(message)
        if not parsed.ok:
            return parsed
        intent = parsed.value

        if not is_valid_evm_address(recipient.address):
            return err(
                PaymentErrorKind.INVALID_RECIPIENT,
                f"Recipient address `{recipient.address}` is not a valid account address.",
            )

        token = await self._resolver.resolve(intent.token_raw)
        if not token.ok:
            logger.info(
                "Token resolution failed for %r: %s", intent.token_raw, token.kind.value,
            )
            return token

        resolved = token.value
        if isinstance(resolved, NativeCurrency):
            return self._build_native(intent, event_id, recipient, resolved)
        if isinstance(resolved, TokenMetadata):
            return self._build_erc20(intent, event_id, recipient, resolved)
        raise TypeError(f"Unhandled token variant: {type(resolved).__name__}")

    def _build_native(
        self,
        intent: PaymentIntent,
        event_id: str,
        recipient: Recipient,
        native: NativeCurrency,
    ) -> Result[InteractionRequest]:
        value_wei = parse_ether(intent.amount_raw)
        if not value_wei.ok:
            return value_wei
        if value_wei.value > MAX_UINT256:
            return err(
                PaymentErrorKind.INVALID_AMOUNT,
                f"Amount `{intent.amount_raw}` is too large for an ETH transfer.",
            )

        return Ok(
            InteractionRequest(
                id=payment_request_id(event_id),
                title=payment_title(intent, native.symbol, recipient),
                content=TransactionPayload(
                    chain_id=self._chain_id,
                    to=recipient.address,
                    value=str(value_wei.value),
                    data=EMPTY_CALLDATA,
                ),
            )
        )

    def _build_erc20(
        self,
        intent: PaymentIntent,
        event_id: str,
        recipient: Recipient,
        token: TokenMetadata,
    ) -> Result[InteractionRequest]:
        amount_units = parse_units(intent.amount_raw, token.decimals)
        if not amount_units.ok:
            return amount_units

        try:
            data = encode_function_data(
                ERC20_ABI,
                "transfer",
                [recipient.address, amount_units.value],
            )
        except AbiError:
            return err(
                PaymentErrorKind.INVALID_AMOUNT,
                f"Amount `{intent.amount_raw}` is too large for a token transfer.",
            )

        return Ok(
            InteractionRequest(
                id=payment_request_id(event_id),
                title=payment_title(intent, token.symbol or intent.token_raw.upper(), recipient),
                content=TransactionPayload(
                    chain_id=self._chain_id,
                    to=token.address,
                    value="0",
                    data=data,
                ),
            )
        )


__all__ = [
    "EMPTY_CALLDATA",
    "InteractionBuilder",
    "payment_request_id",
    "payment_title",
]
