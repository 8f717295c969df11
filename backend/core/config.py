# core/config.py
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

DEV_JWT_SECRET = "manage-money-dev-secret-change-me-before-deploying-anywhere"


class Settings(BaseSettings):
    """Application settings, read from the environment and `.env`."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Tokens ---
    jwt_secret: str = Field(default=DEV_JWT_SECRET, min_length=32)
    jwt_expiration_ms: int = Field(default=86_400_000, ge=1000)
    jwt_algorithm: str = Field(default="HS256", pattern="^HS(256|384|512)$")

    # --- Passwords ---
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # --- Base de datos ---
    database_url: Optional[str] = None
    pg_database: str = Field(default="manage_money", validation_alias="PGDATABASE")
    pg_user: str = Field(default="postgres", validation_alias="PGUSER")
    pg_password: str = Field(default="postgres", validation_alias="PGPASSWORD")
    pg_host: str = Field(default="localhost", validation_alias="PGHOST")
    pg_port: int = Field(default=5432, validation_alias="PGPORT")

    # --- HTTP ---
    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173"
    log_level: str = "INFO"

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def sqlalchemy_url(self):
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+psycopg2",
            username=self.pg_user,
            password=self.pg_password,
            host=self.pg_host,
            port=self.pg_port,
            database=self.pg_database,
        )


@lru_cache()
def get_settings() -> Settings:
    """Cached settings; call get_settings.cache_clear() to reload."""
    return Settings()
