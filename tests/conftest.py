"""Shared fixtures for the payment pipeline tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from paybot.core.payments.interaction_builder import InteractionBuilder
from paybot.core.payments.models import Recipient
from paybot.providers.token_list import TokenRegistryCache
from paybot.services.token_resolution import TokenResolver

from payment_fixtures import (
    RECIPIENT_ADDRESS,
    TOKEN_LIST_URL,
    FakeClock,
    TokenListServer,
)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def token_server() -> TokenListServer:
    return TokenListServer()


@pytest.fixture
def registry(token_server: TokenListServer, clock: FakeClock) -> TokenRegistryCache:
    return TokenRegistryCache(
        TOKEN_LIST_URL,
        ttl_seconds=600,
        clock=clock,
        transport=token_server.transport,
    )


@pytest.fixture
def contract_reader() -> MagicMock:
    reader = MagicMock()
    reader.read_contract = AsyncMock()
    return reader


@pytest.fixture
def resolver(contract_reader: MagicMock, registry: TokenRegistryCache) -> TokenResolver:
    return TokenResolver(contract_reader, registry)


@pytest.fixture
def builder(resolver: TokenResolver) -> InteractionBuilder:
    return InteractionBuilder(resolver, chain_id=8453)


@pytest.fixture
def recipient() -> Recipient:
    return Recipient(user_id=RECIPIENT_ADDRESS, address=RECIPIENT_ADDRESS, display_name="Cris")
