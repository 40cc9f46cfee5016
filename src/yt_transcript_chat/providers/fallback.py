"""Chains a primary transcript provider to a secondary one."""

import logging

from yt_transcript_chat.errors import ConfigurationMissing, NoCaptionsAvailable
from yt_transcript_chat.models import TranscriptSegment
from .base import TranscriptProvider

logger = logging.getLogger(__name__)


class FallbackTranscriptProvider(TranscriptProvider):
    """Tries ``primary`` and falls back to ``secondary`` when it has nothing to offer.

    Only a missing key or a "no captions" answer triggers the fallback;
    quota, credential and transport failures propagate unchanged.
    """

    def __init__(self, primary: TranscriptProvider, secondary: TranscriptProvider):
        self._primary = primary
        self._secondary = secondary

    async def fetch_segments(
        self, video_id: str, language: str | None = None
    ) -> list[TranscriptSegment]:
        try:
            return await self._primary.fetch_segments(video_id, language)
        except (NoCaptionsAvailable, ConfigurationMissing) as e:
            logger.warning(
                f"Primary transcript provider failed for {video_id} ({e.message}), "
                f"falling back to {type(self._secondary).__name__}"
            )
        return await self._secondary.fetch_segments(video_id, language)

    def title_hint(self, video_id: str) -> str | None:
        return self._primary.title_hint(video_id) or self._secondary.title_hint(video_id)

    async def close(self) -> None:
        await self._primary.close()
        await self._secondary.close()
