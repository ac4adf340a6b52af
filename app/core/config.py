"""Core application configuration and settings.

Handles environment variables and the header conventions used to resolve
the calling petshop.
"""
from pathlib import Path
from typing import List
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings


# Load environment variables
ROOT = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=ROOT / ".env", override=True)
load_dotenv(override=True)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Settings
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")

    # API Settings
    api_prefix: str = Field(default="", alias="API_PREFIX")
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000"
        ],
        alias="CORS_ORIGINS"
    )

    # Account resolution
    require_username: bool = Field(default=True, alias="REQUIRE_USERNAME")
    cnpj_header: str = Field(default="cnpj", alias="CNPJ_HEADER")
    username_header: str = Field(default="username", alias="USERNAME_HEADER")

    class Config:
        case_sensitive = False
        env_file = ".env"
        populate_by_name = True

    def validate_required_settings(self):
        """Validate that required settings are present."""
        if not self.cnpj_header:
            raise ValueError("CNPJ_HEADER must not be empty.")
        if self.require_username and not self.username_header:
            raise ValueError(
                "USERNAME_HEADER must not be empty when REQUIRE_USERNAME is enabled."
            )
        if not 0 < self.port < 65536:
            raise ValueError(f"PORT out of range: {self.port}")


# Global settings instance
settings = Settings()


# Validate settings on module import (only in non-test environments)
if settings.environment != "test":
    try:
        settings.validate_required_settings()
    except ValueError as e:
        print(f"Configuration Error: {e}")
        # Don't raise in development to allow partial setup
        if settings.environment == "production":
            raise
