from __future__ import annotations

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from a .env file if present (local dev only)
load_dotenv()

_HUNDRED_MB = 100 * 1024 * 1024


class Settings(BaseSettings):
    """Application configuration loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # API server
    api_server_host: str = Field("0.0.0.0", description="Bind host for the API server.")
    api_server_port: int = Field(9090, description="Bind port for the API server.")
    api_server_body_limit: int = Field(
        _HUNDRED_MB, ge=1, description="Maximum accepted request body size (bytes)."
    )
    log_level: str = Field("INFO", description="Root log level, e.g. DEBUG or INFO.")

    # Texture conversion (fixed at startup, never taken from requests)
    converter_path: str = Field("compressonatorcli", description="Path to the conversion executable.")
    converter_format: str = Field("BC7", description="Output codec passed to the converter.")
    converter_quality: float = Field(0.05, ge=0.0, le=1.0, description="Compression quality (0.0-1.0).")

    # Object storage
    storage_timeout: float = Field(60.0, gt=0, description="Timeout for the outbound PUT (seconds).")

    # Mock storage server
    mock_storage_port: int = Field(9000)
    mock_storage_dir: str = Field("./mock-storage")
    mock_storage_body_limit: int = Field(_HUNDRED_MB, ge=1)


@lru_cache()
def get_settings() -> Settings:  # pragma: no cover
    """Return a cached Settings instance so it is only parsed once."""

    return Settings()
