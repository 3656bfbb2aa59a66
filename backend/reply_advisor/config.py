from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="APP_",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000",
    ]

    cors_origin_regex: str | None = None
    trusted_hosts: list[str] = ["*"]
    root_path: str = ""

    # Basic auth. Left optional so a missing value is reported per request
    # instead of preventing startup.
    basic_auth_user: str | None = None
    basic_auth_password: str | None = None
    basic_auth_realm: str = "Secure Area"

    # OpenAI
    openai_api_key: str | None = None
    reply_model: str = "gpt-4o"

    # Reference corpus
    corpus_dir: Path = Path("data/learning")
    corpus_manual_filename: str = "manual.txt"
    corpus_max_chars: int = 150_000
    corpus_chunk_bytes: int = 4_000

    # Screenshots (decoded size)
    max_image_bytes: int = 20 * 1024 * 1024

    # Client roster
    roster_path: Path = Path("data/roster.json")


settings = Settings()
