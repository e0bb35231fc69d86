"""
Token resolution for payment commands.

Turns the token reference from a chat message into either the native currency
or ERC-20 metadata:

- ``ETH`` (any case) -> native currency, no lookup
- ``0x`` address -> ``decimals()`` read on-chain (required) plus a best-effort
  ``symbol()`` read
- anything else -> symbol lookup in the cached 0x token list
"""

from __future__ import annotations

import logging
from typing import Optional

from .address import is_valid_evm_address, looks_like_evm_address
from ..core.execution.abi import ERC20_ABI
from ..core.payments.models import (
    MAX_DECIMALS,
    NATIVE_SYMBOL,
    NativeCurrency,
    ResolvedToken,
    TokenMetadata,
)
from ..core.payments.result import Ok, PaymentErrorKind, Result, err
from ..providers.base import ContractReader
from ..providers.rpc import RpcError
from ..providers.token_list import TokenRegistryCache

logger = logging.getLogger(__name__)

NATIVE = NativeCurrency()


def is_native_token(token_raw: str) -> bool:
    return token_raw.strip().upper() == NATIVE_SYMBOL


class TokenResolver:
    """Resolves token references on the payment chain."""

    def __init__(
        self,
        contract_reader: ContractReader,
        registry: TokenRegistryCache,
    ) -> None:
        self._reader = contract_reader
        self._registry = registry

    async def resolve(self, token_raw: str) -> Result[ResolvedToken]:
        if is_native_token(token_raw):
            return Ok(NATIVE)
        return await self.resolve_erc20(token_raw)

    async def resolve_erc20(self, token_raw: str) -> Result[TokenMetadata]:
        trimmed = token_raw.strip()

        if is_valid_evm_address(trimmed):
            return await self._resolve_address(trimmed)

        if looks_like_evm_address(trimmed):
            return err(
                PaymentErrorKind.INVALID_ADDRESS,
                f"`{trimmed}` is not a valid token address (checksum mismatch). "
                "Paste the address exactly as shown on the explorer, or use all lowercase.",
            )

        return await self._resolve_symbol(trimmed.upper())

    async def _resolve_address(self, address: str) -> Result[TokenMetadata]:
        try:
            raw_decimals = await self._reader.read_contract(address, ERC20_ABI, "decimals")
        except RpcError as exc:
            logger.warning("decimals() read failed for %s: %s", address, exc)
            return err(
                PaymentErrorKind.ONCHAIN_READ,
                f"Could not read `decimals()` from token `{address}` on Base. "
                "Is it an ERC-20 contract?",
            )

        decimals = int(raw_decimals)
        if not 0 <= decimals <= MAX_DECIMALS:
            return err(
                PaymentErrorKind.ONCHAIN_READ,
                f"Token `{address}` reported unsupported decimals ({decimals}).",
            )

        return Ok(
            TokenMetadata(
                address=address,
                decimals=decimals,
                symbol=await self._read_symbol(address),
            )
        )

    async def _read_symbol(self, address: str) -> Optional[str]:
        # Optional: only used for the interaction title.
        try:
            symbol = await self._reader.read_contract(address, ERC20_ABI, "symbol")
        except Exception as exc:  # noqa: BLE001
            logger.debug("symbol() read failed for %s: %s", address, exc)
            return None
        if not isinstance(symbol, str) or not symbol.strip():
            return None
        return symbol.strip()

    async def _resolve_symbol(self, symbol: str) -> Result[TokenMetadata]:
        registry = await self._registry.get_registry()
        if not registry.ok:
            return registry

        info = registry.value.get(symbol)
        if info is None:
            return err(
                PaymentErrorKind.UNKNOWN_TOKEN,
                f"I couldn't find token symbol `{symbol}` on Base via the 0x token list. "
                "Try using the token address (0x...).",
            )
        return Ok(info)


__all__ = ["NATIVE", "TokenResolver", "is_native_token"]
