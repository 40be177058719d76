"""
Printer settings using Pydantic.

Settings are loaded from environment variables (prefix ``MSD347_``)
with .env file support. Defaults address the MSD347 ticket printer.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PrinterSettings(BaseSettings):
    """USB addressing and session behaviour."""

    model_config = SettingsConfigDict(
        env_prefix="MSD347_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # USB identification
    vendor_id: int = Field(default=0x0519, ge=0, le=0xFFFF)
    product_id: int = Field(default=0x2013, ge=0, le=0xFFFF)

    # Interface binding
    configuration: int = Field(default=1, ge=0)
    interface: int = Field(default=0, ge=0)
    alt_setting: int = Field(default=0, ge=0)

    # Bulk endpoints (host -> printer, printer -> host)
    out_endpoint: int = Field(default=0x03, ge=0, le=0xFF)
    in_endpoint: int = Field(default=0x81, ge=0, le=0xFF)

    # 0 blocks until the transfer completes
    timeout_ms: int = Field(default=0, ge=0)

    # Raster payloads are streamed in writes of this size
    chunk_size: int = Field(default=64, ge=1)

    # When True, plain commands also take the status exchange guard
    exclusive_io: bool = False

    # Use the in-memory transport instead of USB
    mock: bool = False


@lru_cache
def get_settings() -> PrinterSettings:
    """Get cached settings instance."""
    return PrinterSettings()
