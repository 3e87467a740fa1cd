"""Application configuration using pydantic-settings.

Data provider selection (Kupo or Blockfrost) is driven entirely by the
environment; see ``vyswap.services.aggregator_service.configure_data_provider``.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=3000, description="API server port")
    cors_origins: str = Field(
        default="*", description="Comma-separated list of allowed CORS origins"
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug mode")

    # ======================
    # Data Providers
    # ======================
    # Kupo wins when set; Blockfrost needs both URL and project id.
    kupo_url: Optional[str] = Field(default=None, description="Kupo indexer URL")
    blockfrost_url: Optional[str] = Field(
        default=None, description="Blockfrost API URL (e.g. https://cardano-mainnet.blockfrost.io/api/v0)"
    )
    blockfrost_project_id: Optional[str] = Field(
        default=None, description="Blockfrost project id"
    )

    # ======================
    # Requests
    # ======================
    request_timeout_ms: int = Field(
        default=30000, ge=1, description="Timeout for provider and DEX API requests"
    )
    request_retries: int = Field(
        default=3, ge=0, description="Connection retries for provider and DEX API requests"
    )

    # ======================
    # DEX Configuration
    # ======================
    vyfi_api_url: str = Field(
        default="https://api.vyfi.io", description="VyFinance public API URL"
    )

    @property
    def has_kupo(self) -> bool:
        """Check if the Kupo indexer is configured."""
        return bool(self.kupo_url)

    @property
    def has_blockfrost(self) -> bool:
        """Check if Blockfrost URL and credential are both configured."""
        return bool(self.blockfrost_url and self.blockfrost_project_id)

    @property
    def allowed_origins(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "providers": {
                "kupo": self.kupo_url or "(not set)",
                "blockfrost": {
                    "url": self.blockfrost_url or "(not set)",
                    "project_id": "***" if self.blockfrost_project_id else "(not set)",
                },
            },
            "requests": {
                "timeout_ms": self.request_timeout_ms,
                "retries": self.request_retries,
            },
            "vyfi_api_url": self.vyfi_api_url,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
