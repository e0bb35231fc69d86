"""
Payment command pipeline: parse -> resolve -> convert -> build.

The Interaction Builder lives in ``paybot.core.payments.interaction_builder``
and is imported from there directly, since it depends on the service layer.
"""

from .amounts import format_units, normalize_amount, parse_ether, parse_units
from .intent_parser import USAGE_TEXT, parse_payment_request
from .models import (
    InteractionRequest,
    NativeCurrency,
    PaymentIntent,
    PaymentVerb,
    Recipient,
    ResolvedToken,
    TokenMetadata,
    TransactionPayload,
)
from .result import Err, Ok, PaymentError, PaymentErrorKind, Result, err
from .trigger import should_handle_payment_message

__all__ = [
    "format_units",
    "normalize_amount",
    "parse_ether",
    "parse_units",
    "USAGE_TEXT",
    "parse_payment_request",
    "InteractionRequest",
    "NativeCurrency",
    "PaymentIntent",
    "PaymentVerb",
    "Recipient",
    "ResolvedToken",
    "TokenMetadata",
    "TransactionPayload",
    "Err",
    "Ok",
    "PaymentError",
    "PaymentErrorKind",
    "Result",
    "err",
    "should_handle_payment_message",
]
