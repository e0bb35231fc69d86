"""
Payment data models.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

NATIVE_SYMBOL = "ETH"
NATIVE_DECIMALS = 18
MAX_DECIMALS = 255


class PaymentVerb(str, Enum):
    """Command verbs accepted in chat."""
    SEND = "send"
    PAY = "pay"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class PaymentIntent:
    """What the user asked for, before any resolution."""
    verb: PaymentVerb
    amount_raw: str                             # Normalized decimal string ("0.5", never ".5")
    token_raw: str                              # Symbol or 0x address as typed


@dataclass(frozen=True)
class Recipient:
    """A mentioned user together with their smart account."""
    user_id: str
    address: str
    display_name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.display_name or "recipient"


@dataclass(frozen=True)
class TokenMetadata:
    """An ERC-20 token on the payment chain."""
    address: str
    decimals: int
    symbol: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.decimals, bool) or not isinstance(self.decimals, int):
            raise TypeError(f"decimals must be an int, got {self.decimals!r}")
        if not 0 <= self.decimals <= MAX_DECIMALS:
            raise ValueError(f"decimals out of range: {self.decimals}")


@dataclass(frozen=True)
class NativeCurrency:
    """The chain's native currency. Has no contract address."""
    symbol: str = NATIVE_SYMBOL
    decimals: int = NATIVE_DECIMALS


ResolvedToken = Union[NativeCurrency, TokenMetadata]


@dataclass(frozen=True)
class TransactionPayload:
    """EVM call the user is asked to sign."""
    chain_id: int
    to: str
    value: str                                  # Base units as a decimal string
    data: str                                   # Hex call data, "0x" for plain transfers

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chainId": str(self.chain_id),
            "to": self.to,
            "value": self.value,
            "data": self.data,
        }


@dataclass(frozen=True)
class InteractionRequest:
    """A titled, user-reviewable transaction request."""
    id: str
    title: str
    content: TransactionPayload

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content.to_dict(),
        }


__all__ = [
    "NATIVE_SYMBOL",
    "NATIVE_DECIMALS",
    "MAX_DECIMALS",
    "PaymentVerb",
    "PaymentIntent",
    "Recipient",
    "TokenMetadata",
    "NativeCurrency",
    "ResolvedToken",
    "TransactionPayload",
    "InteractionRequest",
]
