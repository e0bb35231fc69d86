"""Chat-facing bot handlers"""

from .handlers import PaymentBot
from .transport import (
    ChatTransport,
    IdentityResolver,
    Mention,
    MessageEvent,
    ReactionEvent,
    SlashCommandEvent,
)

__all__ = [
    "PaymentBot",
    "ChatTransport",
    "IdentityResolver",
    "Mention",
    "MessageEvent",
    "ReactionEvent",
    "SlashCommandEvent",
]
