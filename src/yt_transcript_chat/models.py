"""Data models for transcripts, metadata and chat turns."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes to camelCase JSON, accepts both spellings on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TranscriptSegment(CamelModel):
    text: str
    start: float = Field(ge=0)
    duration: float = Field(default=0.0, ge=0)


class VideoMetadata(CamelModel):
    video_id: str
    title: str
    channel_name: str
    duration: str = "N/A"
    duration_seconds: int = 0
    thumbnail_url: str | None = None
    language: str = "en"
    available_languages: list[str] = []
    # Set by providers that return placeholders instead of catalog data
    placeholder: bool = Field(default=False, exclude=True)


class TranscriptCreate(CamelModel):
    """Insert payload for a transcript: everything but the store-assigned fields."""

    youtube_url: str
    video_id: str
    title: str
    channel_name: str
    duration: str = "N/A"
    thumbnail_url: str | None = None
    segments: list[TranscriptSegment] = []


class Transcript(TranscriptCreate):
    model_config = ConfigDict(frozen=True)

    id: int
    created_at: datetime


class ChatTurn(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: int
    transcript_id: int
    message: str
    response: str
    created_at: datetime
