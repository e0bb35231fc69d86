"""
Composition root.

Owns the single token registry cache and contract reader for the process and
hands them to the resolver and builder. Nothing else holds shared state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import Settings, settings as default_settings
from .core.payments.interaction_builder import InteractionBuilder
from .providers.rpc import JsonRpcContractReader
from .providers.token_list import TokenRegistryCache
from .services.token_resolution import TokenResolver


@dataclass
class Container:
    settings: Settings
    registry: TokenRegistryCache
    contract_reader: JsonRpcContractReader
    resolver: TokenResolver
    builder: InteractionBuilder

    async def aclose(self) -> None:
        await self.contract_reader.aclose()


def build_container(config: Optional[Settings] = None) -> Container:
    config = config or default_settings
    registry = TokenRegistryCache(
        config.token_list_url,
        ttl_seconds=config.token_list_cache_ttl_seconds,
        timeout_s=config.request_timeout_seconds,
    )
    reader = JsonRpcContractReader(config.base_rpc_url, timeout_s=config.request_timeout_seconds)
    resolver = TokenResolver(reader, registry)
    return Container(
        settings=config,
        registry=registry,
        contract_reader=reader,
        resolver=resolver,
        builder=InteractionBuilder(resolver, chain_id=config.chain_id),
    )


_container: Optional[Container] = None


def get_container() -> Container:
    global _container
    if _container is None:
        _container = build_container()
    return _container


__all__ = ["Container", "build_container", "get_container"]
