"""Direct caption provider using youtube-transcript-api."""

import asyncio
import logging
from functools import partial

import requests
from youtube_transcript_api import CouldNotRetrieveTranscript, YouTubeTranscriptApi

from yt_transcript_chat.errors import NoCaptionsAvailable
from yt_transcript_chat.models import TranscriptSegment
from .base import TranscriptProvider

logger = logging.getLogger(__name__)

NO_CAPTIONS_MESSAGE = (
    "Failed to fetch transcript. This video may not have accessible captions."
)


class CaptionsProvider(TranscriptProvider):
    """Pulls the first caption track YouTube lists for a video.

    The language hint is ignored: no negotiation happens here.
    """

    def __init__(self):
        self._api = YouTubeTranscriptApi()

    async def fetch_segments(
        self, video_id: str, language: str | None = None
    ) -> list[TranscriptSegment]:
        loop = asyncio.get_event_loop()
        try:
            fetched = await loop.run_in_executor(None, partial(self._fetch, video_id))
        except (CouldNotRetrieveTranscript, requests.RequestException) as e:
            logger.warning(f"Caption fetch failed for {video_id}: {e}")
            raise NoCaptionsAvailable(NO_CAPTIONS_MESSAGE) from e

        return [
            TranscriptSegment(
                text=s.text.strip(),
                start=s.start,
                duration=s.duration,
            )
            for s in fetched
        ]

    def _fetch(self, video_id: str):
        """Synchronous fetch in executor."""
        for transcript in self._api.list(video_id):
            return transcript.fetch()
        raise NoCaptionsAvailable(NO_CAPTIONS_MESSAGE)
