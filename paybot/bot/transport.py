"""
Chat transport boundary.

The chat SDK delivers events and sends replies; this module only describes the
shapes the bot relies on so handlers stay transport-agnostic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from ..core.payments.models import InteractionRequest


@dataclass(frozen=True)
class Mention:
    user_id: str
    display_name: Optional[str] = None


@dataclass(frozen=True)
class MessageEvent:
    """An inbound chat message."""
    channel_id: str
    message: str
    user_id: str                                # Sender; also the signer of any request
    event_id: str
    mentions: List[Mention] = field(default_factory=list)
    is_dm: bool = False                         # DM or group DM
    is_mentioned: bool = False                  # Bot explicitly mentioned


@dataclass(frozen=True)
class ReactionEvent:
    channel_id: str
    reaction: str
    user_id: Optional[str] = None


@dataclass(frozen=True)
class SlashCommandEvent:
    channel_id: str
    command: str
    user_id: Optional[str] = None
    args: List[str] = field(default_factory=list)


class ChatTransport(Protocol):
    """Outbound side of the chat connection."""

    async def send_message(self, channel_id: str, text: str) -> None:
        ...

    async def send_interaction_request(
        self,
        channel_id: str,
        request: InteractionRequest,
        signer: bytes,
    ) -> None:
        ...


class IdentityResolver(Protocol):
    """Maps a chat identity to its on-chain smart account."""

    async def get_smart_account(self, user_id: str) -> Optional[str]:
        """Return the smart account address, or None when the user has none."""
        ...


__all__ = [
    "Mention",
    "MessageEvent",
    "ReactionEvent",
    "SlashCommandEvent",
    "ChatTransport",
    "IdentityResolver",
]
