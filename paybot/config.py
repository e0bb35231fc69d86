from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]

BASE_CHAIN_ID = 8453
TOKEN_LIST_URL = "https://base.api.0x.org/swap/v1/tokens"
TOKEN_LIST_CACHE_TTL_SECONDS = 10 * 60


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def model_post_init(self, __context: Any) -> None:
        """Normalize the trigger keyword once so every caller compares the same value."""

        super().model_post_init(__context)
        object.__setattr__(self, "bot_name", (self.bot_name or "").strip().lower())

    # Server Settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")

    # Bot credentials (consumed by the chat transport)
    app_private_data: str = Field(default="", description="Bot app private data blob")
    jwt_secret: str = Field(default="", description="Webhook JWT secret")

    # Trigger policy
    bot_name: str = Field(
        default="speedrun",
        description="Keyword that routes channel messages into payment handling",
        validation_alias=AliasChoices("bot_name", "BOT_NAME", "bot_keyword"),
    )

    # Chain
    chain_id: int = Field(default=BASE_CHAIN_ID, description="Fixed EVM chain id for payment requests")
    base_rpc_url: str = Field(
        default="https://mainnet.base.org",
        description="JSON-RPC endpoint used for ERC-20 metadata reads",
    )

    # Token registry
    token_list_url: str = Field(default=TOKEN_LIST_URL, description="Remote token list endpoint")
    token_list_cache_ttl_seconds: int = Field(
        default=TOKEN_LIST_CACHE_TTL_SECONDS,
        ge=1,
        description="TTL for the in-memory token list cache (default: 10 minutes)",
    )

    request_timeout_seconds: int = Field(default=15, ge=1, description="Outbound HTTP timeout")

    @property
    def has_bot_credentials(self) -> bool:
        return bool(self.app_private_data and self.jwt_secret)


# Global settings instance
settings = Settings()
