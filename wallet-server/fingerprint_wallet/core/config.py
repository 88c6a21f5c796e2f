"""Wallet server settings, read from the environment and `.env`."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./wallet.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    # seconds; driver connect/busy timeout and pool checkout timeout
    timeout: float = 5.0


class SecuritySettings(BaseModel):
    secret_key: str = Field(default="change-me", min_length=8)
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24


class WebAuthnSettings(BaseModel):
    rp_name: str = "Fingerprint Wallet"
    rp_id: Optional[str] = None
    timeout_ms: int = 60_000
    challenge_bytes: int = Field(default=32, ge=32)
    # 0 disables server-side expiry
    challenge_ttl_seconds: int = Field(default=300, ge=0)


class WalletSettings(BaseModel):
    starting_balance: int = Field(default=10_000, ge=0)
    history_limit: int = 50


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Fingerprint Wallet API"
    api_prefix: str = "/api"
    cors_origins: list[str] = ["*"]

    log_level: str = "INFO"
    log_format: Literal["plain", "json"] = "plain"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    webauthn: WebAuthnSettings = WebAuthnSettings()
    wallet: WalletSettings = WalletSettings()

    static_dir: Path = Path("frontend")

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def secret_key(self) -> str:
        return self.security.secret_key

    @property
    def algorithm(self) -> str:
        return self.security.algorithm

    @property
    def access_token_expire_minutes(self) -> int:
        return self.security.access_token_expire_minutes

    @property
    def starting_balance(self) -> int:
        return self.wallet.starting_balance


@lru_cache()
def get_settings() -> Settings:
    return Settings()
