from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


ENV_PATH = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_PATH, env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Delivery Request Registry"
    env: str = "dev"

    # "memory" keeps everything in-process, "mongo" persists through motor
    store_backend: str = Field("memory", pattern="^(memory|mongo)$")

    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "relief"
    requests_collection: str = "delivery_requests"
    audit_collection: str = "audit_logs"

    log_level: str = "INFO"

    cors_origins: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://localhost:5174",
            "http://127.0.0.1:5173",
            "http://127.0.0.1:5174",
        ]
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
