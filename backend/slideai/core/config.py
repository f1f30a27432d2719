import json
from enum import Enum
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class ModeEnum(str, Enum):
    development = "development"
    production = "production"
    testing = "testing"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file="../.env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── App ───────────────────────────────────────────────────
    MODE: ModeEnum = ModeEnum.production
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "SlideAI"
    LOG_LEVEL: str = "INFO"

    # ── CORS ──────────────────────────────────────────────────
    ALLOWED_ORIGINS: Annotated[list[str], NoDecode] = [
        # Development
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def split_origins(cls, v):
        # "a,b,c" in the environment as well as a JSON list
        if isinstance(v, str):
            if v.lstrip().startswith("["):
                return json.loads(v)
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # ── OpenAI / content agent ────────────────────────────────
    OPENAI_API_KEY: str = ""
    CONTENT_MODEL: str = "openai:gpt-4o"
    CONTENT_RETRIES: int = 3

    # ── Deck rendering ────────────────────────────────────────
    DEFAULT_THEME: str = "light"
    FONT_FAMILY: str = "Noto Sans JP"
    TOC_MIN_SLIDES: int = 5
    TOC_MAX_ENTRIES: int = 10


settings = Settings()
