"""
Token registry backed by the 0x Base token list.

The list is fetched lazily and held in memory for a fixed TTL. An expired
snapshot is refetched on the next lookup; if that refetch fails the stale
snapshot is dropped and the failure is returned, never the expired data.

Concurrent refreshes are not deduplicated. Whichever finishes last wins, which
is fine because every fetch reads the same idempotent source.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Mapping, Optional

import httpx

from .base import Provider
from ..config import settings
from ..core.payments.models import MAX_DECIMALS, TokenMetadata
from ..core.payments.result import Ok, PaymentErrorKind, Result, err
from ..services.address import is_valid_evm_address

logger = logging.getLogger(__name__)

# Provider responses have used both field names for the token array.
TOKEN_ARRAY_FIELDS = ("records", "tokens")

TokenMap = Dict[str, TokenMetadata]


@dataclass
class RegistrySnapshot:
    fetched_at: float
    entries: TokenMap


def extract_token_array(payload: Any) -> Optional[List[Any]]:
    """Return the token records from a token-list response, or None."""
    if not isinstance(payload, Mapping):
        return None
    for field_name in TOKEN_ARRAY_FIELDS:
        records = payload.get(field_name)
        if isinstance(records, list):
            return records
    return None


def _coerce_decimals(raw: Any) -> Optional[int]:
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if not math.isfinite(raw) or not raw.is_integer():
            return None
        value = int(raw)
    elif isinstance(raw, str):
        try:
            number = Decimal(raw.strip())
        except InvalidOperation:
            return None
        if not number.is_finite() or not 0 <= number <= MAX_DECIMALS:
            return None
        if number != number.to_integral_value():
            return None
        value = int(number)
    else:
        return None
    return value if 0 <= value <= MAX_DECIMALS else None


def parse_token_record(record: Any) -> Optional[TokenMetadata]:
    """Build metadata from one list entry; malformed entries yield None."""
    if not isinstance(record, Mapping):
        return None

    symbol = record.get("symbol")
    symbol = symbol.strip().upper() if isinstance(symbol, str) else ""
    address = record.get("address")
    decimals = _coerce_decimals(record.get("decimals"))

    if not symbol or not is_valid_evm_address(address) or decimals is None:
        return None
    return TokenMetadata(address=address, decimals=decimals, symbol=symbol)


def build_token_map(records: List[Any]) -> TokenMap:
    tokens: TokenMap = {}
    skipped = 0
    for record in records:
        token = parse_token_record(record)
        if token is None:
            skipped += 1
            continue
        tokens[token.symbol] = token
    if skipped:
        logger.debug("Skipped %d malformed token list records", skipped)
    return tokens


class TokenRegistryCache(Provider):
    """
    In-memory, TTL-bounded symbol -> token metadata map.

    One instance is owned by the application container and shared by every
    resolver; tests build their own with a fake clock and HTTP transport.
    """

    name = "token_list"

    def __init__(
        self,
        url: Optional[str] = None,
        *,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
        timeout_s: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = url or settings.token_list_url
        self._ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.token_list_cache_ttl_seconds
        self._clock = clock
        self.timeout_s = timeout_s or settings.request_timeout_seconds
        self._transport = transport
        self._snapshot: Optional[RegistrySnapshot] = None

    @property
    def snapshot(self) -> Optional[RegistrySnapshot]:
        return self._snapshot

    def is_fresh(self) -> bool:
        if self._snapshot is None:
            return False
        return (self._clock() - self._snapshot.fetched_at) < self._ttl_seconds

    def invalidate(self) -> None:
        self._snapshot = None

    async def ready(self) -> bool:
        return bool(self._url)

    async def health_check(self) -> Dict[str, Any]:
        if self._snapshot is None:
            return {"status": "unavailable", "reason": "Token list not loaded yet"}
        return {
            "status": "healthy" if self.is_fresh() else "stale",
            "cached_tokens": len(self._snapshot.entries),
            "age_seconds": round(self._clock() - self._snapshot.fetched_at, 1),
        }

    async def get_registry(self) -> Result[TokenMap]:
        """Return the cached map, refreshing it when missing or expired."""
        if self.is_fresh():
            return Ok(self._snapshot.entries)

        result = await self._fetch()
        if not result.ok:
            if self._snapshot is not None:
                logger.warning("Evicting stale token list after failed refresh: %s", result.message)
            self._snapshot = None
            return result

        self._snapshot = RegistrySnapshot(fetched_at=self._clock(), entries=result.value)
        logger.info("Token list refreshed", extra={"tokens": len(result.value)})
        return Ok(self._snapshot.entries)

    async def lookup(self, symbol: str) -> Result[Optional[TokenMetadata]]:
        registry = await self.get_registry()
        if not registry.ok:
            return registry
        return Ok(registry.value.get(symbol.strip().upper()))

    async def _fetch(self) -> Result[TokenMap]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport) as client:
                resp = await client.get(self._url, headers={"accept": "application/json"})
        except httpx.HTTPError as exc:
            logger.warning("Token list fetch error: %s", exc)
            return err(PaymentErrorKind.REGISTRY_UNAVAILABLE, f"Token list fetch error: {str(exc) or type(exc).__name__}")

        if not resp.is_success:
            return err(PaymentErrorKind.REGISTRY_UNAVAILABLE, f"Token list fetch failed ({resp.status_code}).")

        try:
            payload = resp.json()
        except ValueError:
            payload = None

        records = extract_token_array(payload)
        if records is None:
            return err(
                PaymentErrorKind.REGISTRY_FORMAT,
                "Token list fetch succeeded but response format was unexpected.",
            )
        return Ok(build_token_map(records))


__all__ = [
    "TOKEN_ARRAY_FIELDS",
    "RegistrySnapshot",
    "TokenRegistryCache",
    "build_token_map",
    "extract_token_array",
    "parse_token_record",
]
