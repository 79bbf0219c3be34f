"""Configuration for Quorum Vault."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from .balance import MAX_BALANCE
from .rules import ThresholdRule


class Settings(BaseSettings):
    """Settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="QUORUM_VAULT_",
        env_file=".env",
        extra="ignore",
    )

    # Web interface
    host: str = "0.0.0.0"
    port: int = 10000
    secret_key: str = "demo_secret_key_change_in_production"

    # Wallet defaults
    threshold_rule: ThresholdRule = ThresholdRule.EXCEED
    balance_limit: int = MAX_BALANCE

    log_level: str = "INFO"


# Global settings instance
settings = Settings()
