"""Configuration via environment variables."""

from enum import Enum

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TranscriptSource(str, Enum):
    SEARCH = "search"
    DIRECT = "direct"
    AUTO = "auto"


class Transport(str, Enum):
    REST = "rest"
    STDIO = "stdio"
    STREAMABLE_HTTP = "streamable-http"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="YT_CHAT_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    transcript_source: TranscriptSource = TranscriptSource.SEARCH

    search_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("YT_CHAT_SEARCH_API_KEY", "SEARCH_API_KEY"),
    )
    search_api_url: str = "https://www.searchapi.io/api/v1/search"

    youtube_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("YT_CHAT_YOUTUBE_API_KEY", "YOUTUBE_API_KEY"),
    )
    youtube_api_url: str = "https://www.googleapis.com/youtube/v3"

    openai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("YT_CHAT_OPENAI_API_KEY", "OPENAI_API_KEY"),
    )
    openai_base_url: str | None = None
    openai_model: str = "gpt-4o"

    summary_max_tokens: int = 500
    summary_temperature: float = 0.5
    chat_max_tokens: int = 1000
    chat_temperature: float = 0.7
    # 0 disables the guard
    max_context_chars: int = 400_000

    metadata_cache_max_size: int = 100
    metadata_cache_ttl_seconds: int = 3600
    http_timeout: float = 60.0

    transport: Transport = Transport.REST
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
