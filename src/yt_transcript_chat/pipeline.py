"""Transcript extraction: URL -> providers -> canonical stored transcript."""

import asyncio
import logging

from yt_transcript_chat.cache import MetadataCache
from yt_transcript_chat.errors import ValidationError
from yt_transcript_chat.models import Transcript, TranscriptCreate, VideoMetadata
from yt_transcript_chat.normalizer import normalize
from yt_transcript_chat.providers.base import MetadataProvider, TranscriptProvider
from yt_transcript_chat.store import TranscriptStore
from yt_transcript_chat.utils import extract_video_id

logger = logging.getLogger(__name__)


def parse_video_id(url: str) -> str:
    video_id = extract_video_id(url)
    if not video_id:
        raise ValidationError("Invalid YouTube URL")
    return video_id


class TranscriptExtractor:
    def __init__(
        self,
        store: TranscriptStore,
        metadata_provider: MetadataProvider,
        transcript_provider: TranscriptProvider,
        metadata_cache: MetadataCache | None = None,
    ):
        self._store = store
        self._metadata_provider = metadata_provider
        self._transcript_provider = transcript_provider
        self._metadata_cache = metadata_cache

    async def extract(
        self, url: str, language: str | None = None
    ) -> tuple[Transcript, bool]:
        """Return the stored transcript for ``url``, fetching it on first sight.

        The second element tells whether this call created the record.
        """
        video_id = parse_video_id(url)

        existing = await self._store.get_by_video_id(video_id)
        if existing:
            logger.info(f"Transcript for {video_id} already stored as {existing.id}")
            return existing, False

        metadata, segments = await asyncio.gather(
            self._get_metadata(video_id),
            self._transcript_provider.fetch_segments(video_id, language),
        )
        logger.info(f"Fetched {len(segments)} segments for {video_id}")

        title_hint = self._transcript_provider.title_hint(video_id)
        return await self._store.create_if_absent(
            normalize(url, video_id, metadata, segments, title_hint)
        )

    async def ingest(self, data: TranscriptCreate) -> tuple[Transcript, bool]:
        """Store a transcript built elsewhere, keeping one record per video."""
        return await self._store.create_if_absent(data)

    async def lookup_metadata(self, url: str) -> VideoMetadata:
        return await self._get_metadata(parse_video_id(url))

    async def _get_metadata(self, video_id: str) -> VideoMetadata:
        if self._metadata_cache is not None:
            cached = self._metadata_cache.get(video_id)
            if cached:
                return cached

        metadata = await self._metadata_provider.fetch_metadata(video_id)
        if self._metadata_cache is not None:
            self._metadata_cache.set(video_id, metadata)
            stats = self._metadata_cache.stats()
            logger.info(
                f"Metadata cache miss for {video_id} "
                f"(size {stats['size']}/{stats['max_size']}, hit rate {stats['hit_rate']}%)"
            )
        return metadata
