"""Application configuration."""

from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path("data")
    page_extension: str = ".md"
    tag_marker: str = "#"
    tag_match: Literal["substring", "token"] = "substring"
    client_dir: Path | None = None
    cors_origins: list[str] = ["*"]
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False
    log_level: str = "INFO"
    app_title: str = "TagWiki"

    model_config = SettingsConfigDict(
        env_prefix="TAGWIKI_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @field_validator("tag_marker")
    @classmethod
    def _single_character_marker(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("tag_marker must be a single character")
        return value

    @field_validator("page_extension")
    @classmethod
    def _dotted_extension(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ValueError("page_extension must look like '.md'")
        return value


settings = Settings()
