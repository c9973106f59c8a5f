"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "careers_user"
    postgres_password: str = "password"
    postgres_db: str = "careers_db"

    # Full SQLAlchemy URL; overrides the postgres_* fields when set
    database_url: Optional[str] = None

    # MongoDB (CV documents)
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "careers_docs"
    mongodb_timeout_ms: int = 5000

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # Matching
    # Reject unknown proficiency levels instead of weighting them as BEGINNER
    matching_strict_levels: bool = False
    # Use each posting skill's stored required flag; otherwise every skill counts as required
    matching_honor_optional_skills: bool = False

    # App
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    @property
    def sqlalchemy_url(self) -> str:
        """Construct the relational database connection URL"""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
