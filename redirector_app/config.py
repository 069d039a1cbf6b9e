from pathlib import Path
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    Loading priority (highest to lowest):
    1. Explicit keyword arguments
    2. Environment variables (prefix REDIRECTOR_)
    3. .env file
    4. Default values below
    
    Only the command line layer reads these. The core receives plain
    values (root, domain, code lengths) from whoever built it.
    """
    
    # Locations
    root: Optional[Path] = None  # None means <user config dir>/redirector
    domain: Optional[str] = None
    
    # Logging
    log_level: str = "WARNING"
    
    # Short code generation
    min_code_length: int = Field(default=5, ge=2)
    max_code_length: int = Field(default=8, ge=2)
    max_code_attempts: int = Field(default=100, ge=1)
    
    # Publishing
    push_timeout: float = Field(default=10.0, gt=0)  # seconds, per request
    
    model_config = SettingsConfigDict(
        env_prefix="REDIRECTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_ignore_empty=True,  # REDIRECTOR_ROOT= means unset
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """Return the process-wide settings instance (built once)."""
    return Settings()
