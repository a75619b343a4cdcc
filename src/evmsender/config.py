"""Application configuration using pydantic-settings.

The signing key is read once from the environment (``KEY`` or
``SIGNING_KEY``) and never re-read per request.
"""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(
        default=6007,
        validation_alias=AliasChoices("PORT", "API_PORT", "api_port"),
        description="API server port",
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug mode")

    # ======================
    # Signing
    # ======================
    signing_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("KEY", "SIGNING_KEY", "signing_key"),
        description="Hex-encoded secp256k1 private key of the sending account",
    )

    # ======================
    # Networks
    # ======================
    networks: dict[str, str] = Field(
        default={
            "avalanche": "https://api.avax.network/ext/bc/C/rpc",
            "fuji": "https://api.avax-test.network/ext/bc/C/rpc",
        },
        description="Network alias -> RPC URL. Unknown names are used as URLs",
    )
    rpc_request_timeout: float = Field(
        default=30.0, gt=0, description="Timeout for a single RPC request (seconds)"
    )

    # ======================
    # Transfers
    # ======================
    amount_precision: int = Field(
        default=18, ge=0, description="Decimal places of the native asset's smallest unit"
    )
    reject_excess_precision: bool = Field(
        default=False,
        description="Reject amounts finer than the smallest unit instead of truncating",
    )
    explorer_base_url: str = Field(
        default="https://snowtrace.io/tx/",
        description="Block explorer prefix; the transaction hash is appended as-is",
    )
    confirmation_timeout: float = Field(
        default=120.0, gt=0, description="Maximum seconds to wait for a receipt"
    )
    confirmation_poll_interval: float = Field(
        default=2.0, gt=0, description="Seconds between receipt polls"
    )
    client_error_status: bool = Field(
        default=False,
        description="Answer input-validation failures with 400 instead of 500",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def has_signing_key(self) -> bool:
        """Check if a signing key is configured."""
        return bool(self.signing_key and self.signing_key.strip())

    def get_rpc_url(self, network: str) -> str:
        """Resolve a network alias to its RPC URL.

        Names that are not configured aliases are returned unchanged so a
        request may carry the endpoint URL directly.
        """
        return self.networks.get(network.strip().lower(), network.strip())

    def explorer_url(self, tx_id: str) -> str:
        """Build the explorer link for a transaction hash."""
        return f"{self.explorer_base_url}{tx_id}"

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "signing_key": "***" if self.has_signing_key else "(not set)",
            "networks": {
                name: self._redact_url(url) for name, url in self.networks.items()
            },
            "transfers": {
                "amount_precision": self.amount_precision,
                "reject_excess_precision": self.reject_excess_precision,
                "explorer_base_url": self.explorer_base_url,
                "confirmation_timeout": self.confirmation_timeout,
                "client_error_status": self.client_error_status,
            },
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact credentials embedded in an RPC URL."""
        if "://" in url and "@" in url:
            proto, rest = url.split("://", 1)
            if "@" in rest:
                creds, host = rest.rsplit("@", 1)
                if ":" in creds:
                    user, _ = creds.split(":", 1)
                    return f"{proto}://{user}:***@{host}"
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
