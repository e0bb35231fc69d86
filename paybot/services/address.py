"""Helpers for validating EVM account addresses."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any

from eth_utils import is_checksum_address

_EVM_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")


def looks_like_evm_address(value: Any) -> bool:
    """True for any ``0x`` + 40 hex string, checksum ignored."""
    return isinstance(value, str) and bool(_EVM_ADDRESS_RE.fullmatch(value))


@lru_cache(maxsize=1024)
def _passes_checksum(address: str) -> bool:
    hex_part = address[2:]
    if hex_part == hex_part.lower() or hex_part == hex_part.upper():
        return True
    return bool(is_checksum_address(address))


def is_valid_evm_address(value: Any) -> bool:
    """Syntactically valid account address.

    All-lowercase and all-uppercase hex are accepted as-is; mixed case must be
    a correct EIP-55 checksum.
    """
    if not looks_like_evm_address(value):
        return False
    return _passes_checksum(value)


def same_address(a: str, b: str) -> bool:
    return a.lower() == b.lower()


__all__ = [
    "looks_like_evm_address",
    "is_valid_evm_address",
    "same_address",
]
