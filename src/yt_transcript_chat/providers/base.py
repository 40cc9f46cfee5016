"""Abstract bases for metadata and transcript providers."""

from abc import ABC, abstractmethod

from yt_transcript_chat.models import TranscriptSegment, VideoMetadata


class MetadataProvider(ABC):
    @abstractmethod
    async def fetch_metadata(self, video_id: str) -> VideoMetadata:
        """Fetch title, channel, duration, thumbnail and language for a video."""
        ...

    async def close(self) -> None:
        """Clean up resources."""


class TranscriptProvider(ABC):
    @abstractmethod
    async def fetch_segments(
        self, video_id: str, language: str | None = None
    ) -> list[TranscriptSegment]:
        """Fetch ordered caption segments for a single video."""
        ...

    def title_hint(self, video_id: str) -> str | None:
        """Title seen alongside the last fetched segments, if the source reports one."""
        return None

    async def close(self) -> None:
        """Clean up resources."""
