"""
Result types for the payment pipeline.

Every step of the pipeline (parse, resolve, convert, build) returns either
``Ok(value)`` or ``Err(error)``. Expected failures such as malformed input, an
unknown token or a failed registry fetch never raise; the error carries a
machine-checkable kind plus the message shown to the user.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class PaymentErrorKind(str, Enum):
    """Categories of payment failures."""

    # Parse errors
    PARSE = "parse"                              # Message did not match the command grammar
    INVALID_AMOUNT = "invalid_amount"            # Zero, negative or unrepresentable amount

    # Resolution errors
    INVALID_RECIPIENT = "invalid_recipient"      # Recipient address is not a valid account
    RECIPIENT_NOT_FOUND = "recipient_not_found"  # No usable mention / smart account
    INVALID_ADDRESS = "invalid_address"          # Token address failed checksum validation
    UNKNOWN_TOKEN = "unknown_token"              # Symbol absent from the token list
    ONCHAIN_READ = "onchain_read"                # Required contract read failed

    # Infrastructure errors
    REGISTRY_UNAVAILABLE = "registry_unavailable"  # Token list HTTP/network failure
    REGISTRY_FORMAT = "registry_format"            # Token list body had an unexpected shape

    @property
    def is_parse_error(self) -> bool:
        return self in (PaymentErrorKind.PARSE, PaymentErrorKind.INVALID_AMOUNT)

    @property
    def is_infrastructure_error(self) -> bool:
        return self in (PaymentErrorKind.REGISTRY_UNAVAILABLE, PaymentErrorKind.REGISTRY_FORMAT)


@dataclass(frozen=True)
class PaymentError:
    """A user-facing failure with its category."""

    kind: PaymentErrorKind
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    ok = True


@dataclass(frozen=True)
class Err:
    error: PaymentError

    ok = False

    @property
    def kind(self) -> PaymentErrorKind:
        return self.error.kind

    @property
    def message(self) -> str:
        return self.error.message


Result = Union[Ok[T], Err]


def err(kind: PaymentErrorKind, message: str) -> Err:
    """Shorthand for building a failed result."""
    return Err(PaymentError(kind=kind, message=message))


__all__ = [
    "PaymentErrorKind",
    "PaymentError",
    "Ok",
    "Err",
    "Result",
    "err",
]
