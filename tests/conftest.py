"""Shared test fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from yt_transcript_chat.config import Settings
from yt_transcript_chat.llm import LLMClient
from yt_transcript_chat.models import TranscriptCreate, TranscriptSegment, VideoMetadata
from yt_transcript_chat.providers.base import MetadataProvider, TranscriptProvider
from yt_transcript_chat.services import build_services
from yt_transcript_chat.store import InMemoryTranscriptStore


@pytest.fixture
def sample_segments():
    return [
        TranscriptSegment(text="Hello world", start=0.0, duration=2.5),
        TranscriptSegment(text="this is a test", start=2.5, duration=3.0),
        TranscriptSegment(text="of the transcript", start=5.5, duration=2.0),
        TranscriptSegment(text="extraction system", start=7.5, duration=2.5),
        TranscriptSegment(text="goodbye world", start=10.0, duration=2.0),
    ]


@pytest.fixture
def sample_metadata():
    return VideoMetadata(
        video_id="dQw4w9WgXcQ",
        title="Test Video",
        channel_name="Test Channel",
        duration="3:33",
        duration_seconds=213,
        thumbnail_url="https://i.ytimg.com/vi/dQw4w9WgXcQ/maxresdefault.jpg",
        language="en",
        available_languages=["en"],
    )


@pytest.fixture
def sample_create(sample_segments):
    return TranscriptCreate(
        youtube_url="https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        video_id="dQw4w9WgXcQ",
        title="Test Video",
        channel_name="Test Channel",
        duration="3:33",
        thumbnail_url="https://i.ytimg.com/vi/dQw4w9WgXcQ/maxresdefault.jpg",
        segments=sample_segments,
    )


@pytest.fixture
def store():
    return InMemoryTranscriptStore()


@pytest.fixture
def metadata_provider(sample_metadata):
    provider = AsyncMock(spec=MetadataProvider)
    provider.fetch_metadata = AsyncMock(return_value=sample_metadata)
    return provider


@pytest.fixture
def transcript_provider(sample_segments):
    provider = AsyncMock(spec=TranscriptProvider)
    provider.fetch_segments = AsyncMock(return_value=sample_segments)
    provider.title_hint = MagicMock(return_value=None)
    return provider


@pytest.fixture
def llm():
    client = AsyncMock(spec=LLMClient)
    client.complete = AsyncMock(return_value="The video says hello to the world.")
    return client


@pytest.fixture
def settings():
    return Settings(_env_file=None, openai_api_key="test-key")


@pytest.fixture
def services(settings, store, metadata_provider, transcript_provider, llm):
    return build_services(
        settings,
        store=store,
        metadata_provider=metadata_provider,
        transcript_provider=transcript_provider,
        llm=llm,
    )
