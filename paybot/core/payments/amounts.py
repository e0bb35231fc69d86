"""
Decimal amount parsing.

Converts human amounts ("1.5") into integer base units using exact integer
arithmetic. Nothing is routed through float, and a value that cannot be
represented at the requested precision is rejected instead of rounded.
"""

from __future__ import annotations

import re

from .models import MAX_DECIMALS, NATIVE_DECIMALS, NATIVE_SYMBOL
from .result import Ok, PaymentErrorKind, Result, err

_DECIMAL_RE = re.compile(r"(?P<whole>[0-9]+)(?:\.(?P<frac>[0-9]+))?|\.(?P<lead_frac>[0-9]+)")

# Any base-unit amount carried by an EVM transaction fits in uint256.
MAX_UINT256 = 2**256 - 1
MAX_WHOLE_DIGITS = len(str(MAX_UINT256))


def normalize_amount(amount: str) -> str:
    """Trim and give leading-dot amounts a leading zero (".5" -> "0.5")."""
    text = amount.strip()
    return f"0{text}" if text.startswith(".") else text


def _to_base_units(amount: str, decimals: int) -> int | None:
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        return None
    if not 0 <= decimals <= MAX_DECIMALS:
        return None

    match = _DECIMAL_RE.fullmatch(amount.strip())
    if not match:
        return None

    whole = (match.group("whole") or "0").lstrip("0") or "0"
    if len(whole) > MAX_WHOLE_DIGITS:
        return None
    frac = match.group("frac") or match.group("lead_frac") or ""

    # Digits past the precision are only allowed when they carry no value.
    kept, dropped = frac[:decimals], frac[decimals:]
    if dropped.strip("0"):
        return None

    return int(whole + kept.ljust(decimals, "0"))


def parse_units(amount: str, decimals: int) -> Result[int]:
    """Convert a decimal string to base units at the given precision.

    Examples:
        >>> parse_units("1.5", 6)
        Ok(value=1500000)
        >>> parse_units("0.0000001", 6).ok
        False
    """
    value = _to_base_units(amount, decimals)
    if value is None:
        return err(
            PaymentErrorKind.INVALID_AMOUNT,
            f"Could not parse token amount: `{amount}` (decimals={decimals}).",
        )
    return Ok(value)


def parse_ether(amount: str) -> Result[int]:
    """Convert a decimal ETH amount to wei."""
    value = _to_base_units(amount, NATIVE_DECIMALS)
    if value is None:
        return err(
            PaymentErrorKind.INVALID_AMOUNT,
            f"Could not parse {NATIVE_SYMBOL} amount: `{amount}`.",
        )
    return Ok(value)


def format_units(value: int, decimals: int) -> str:
    """Render base units as a decimal string without trailing zeros."""
    if value < 0:
        return "-" + format_units(-value, decimals)
    if decimals == 0:
        return str(value)
    digits = str(value).rjust(decimals + 1, "0")
    whole, frac = digits[:-decimals], digits[-decimals:].rstrip("0")
    return f"{whole}.{frac}" if frac else whole


__all__ = ["MAX_UINT256", "normalize_amount", "parse_units", "parse_ether", "format_units"]
