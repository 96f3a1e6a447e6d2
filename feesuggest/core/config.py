# /feesuggest/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import SecretStr


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FEESUGGEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # RPC endpoint used by the web3 transport
    RPC_URL: SecretStr | None = None
    RPC_TIMEOUT_SECONDS: float = 10.0
    # 1 means a failed call is surfaced immediately
    RPC_RETRY_ATTEMPTS: int = 1

    # Chain defaults for callers that don't build ChainParameters themselves
    CHAIN_CLASS: str = "L1"
    NETWORK_BLOCK_TIME: float = 12.0

    # Operational Settings
    LOG_LEVEL: str = "INFO"
    SENTRY_DSN: SecretStr | None = None

    @property
    def rpc_url(self) -> str | None:
        """Plain-text RPC URL, or ``None`` when no endpoint is configured."""
        if self.RPC_URL is None:
            return None
        return self.RPC_URL.get_secret_value()


# A bad FEESUGGEST_* value raises pydantic's ValidationError at import
settings = Settings()
