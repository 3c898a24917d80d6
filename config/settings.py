from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Optional
import os
from pathlib import Path


class Settings(BaseSettings):
    """Application settings - reads from environment variables"""

    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""

    # Transport (None = wait forever, no client-side timeout)
    request_timeout: Optional[float] = None

    # Local cache
    cache_backend: str = "file"  # "file" or "memory"
    cache_dir: Path = Path(".hockey_cache")

    # Environment
    env: str = "development"
    debug: bool = False

    @field_validator('supabase_url', mode='before')
    @classmethod
    def strip_trailing_slash(cls, v):
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v

    @field_validator('request_timeout', mode='before')
    @classmethod
    def parse_timeout(cls, v):
        if v in ("", "none", "None", 0, "0"):
            return None
        return v

    @field_validator('cache_backend')
    @classmethod
    def check_cache_backend(cls, v):
        v = v.lower()
        if v not in ("file", "memory"):
            raise ValueError("cache_backend must be 'file' or 'memory'")
        return v

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env" if Path(".env").exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,  # SUPABASE_URL == supabase_url
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


# Create settings instance
settings = Settings()

# Debug: print what we got (remove in production)
if os.getenv("DEBUG", "").lower() == "true":
    print(f"Settings loaded:")
    print(f"  SUPABASE_URL: {'set' if settings.supabase_url else 'MISSING'}")
    print(f"  SUPABASE_KEY: {'set' if settings.supabase_key else 'MISSING'}")
    print(f"  CACHE: {settings.cache_backend} ({settings.cache_dir})")
