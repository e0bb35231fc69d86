"""Decides which inbound messages enter payment handling."""

from __future__ import annotations

from typing import Optional

from ...config import settings


def should_handle_payment_message(
    *,
    is_direct: bool,
    is_mentioned: bool,
    message: str,
    keyword: Optional[str] = None,
) -> bool:
    """Trigger rules.

    - DM/GDM: always allow
    - Channels: only when the bot is mentioned OR the message contains the
      bot-name keyword (case-insensitive substring).
    """
    if is_direct:
        return True
    if is_mentioned:
        return True

    bot_name = (settings.bot_name if keyword is None else keyword).strip().lower()
    if bot_name and bot_name in (message or "").lower():
        return True

    return False


__all__ = ["should_handle_payment_message"]
