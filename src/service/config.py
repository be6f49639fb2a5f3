"""Configuration management using Pydantic settings."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "ENTITY-EMULATOR"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8765
    cors_origins: list[str] = ["*"]

    # Simulation engine
    simulation_enabled: bool = True
    scenario: str = "stress-small"
    update_interval_ms: int = 1000      # tick period, also the per-tick delta
    random_seed: Optional[int] = None   # set for reproducible runs
    scenarios_file: str = ""            # optional JSON of extra scenarios


settings = Settings()
