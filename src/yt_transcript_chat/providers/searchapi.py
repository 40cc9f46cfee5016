"""Transcript provider that queries the SearchAPI youtube_transcripts engine."""

import logging
import re

import httpx
from cachetools import TTLCache
from pydantic import ValidationError as PydanticValidationError

from yt_transcript_chat.errors import ConfigurationMissing, NoCaptionsAvailable, ProviderError
from yt_transcript_chat.models import TranscriptSegment
from .base import TranscriptProvider

logger = logging.getLogger(__name__)

# SearchAPI names its files "<title>_<8 char id>.<ext>"
FILENAME_SUFFIX = re.compile(r"_[a-zA-Z0-9]{8}\.[^.]+$")


def title_from_filename(filename) -> str | None:
    if not isinstance(filename, str):
        return None
    return FILENAME_SUFFIX.sub("", filename, count=1) or None


class SearchApiProvider(TranscriptProvider):
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://www.searchapi.io/api/v1/search",
        timeout: float = 60.0,
    ):
        self._api_key = api_key
        self._url = base_url
        self._client = httpx.AsyncClient(timeout=timeout)
        self._titles: TTLCache = TTLCache(maxsize=256, ttl=3600)

    async def fetch_segments(
        self, video_id: str, language: str | None = None
    ) -> list[TranscriptSegment]:
        if not self._api_key:
            raise ConfigurationMissing("SEARCH_API_KEY not configured")

        params = {
            "engine": "youtube_transcripts",
            "video_id": video_id,
            "api_key": self._api_key,
        }
        if language:
            params["lang"] = language

        try:
            resp = await self._client.get(self._url, params=params)
        except httpx.HTTPError as e:
            raise ProviderError(f"SearchAPI request failed: {e}") from e

        if not resp.is_success:
            try:
                detail = resp.json().get("error") or resp.reason_phrase
            except ValueError:
                detail = resp.reason_phrase
            logger.warning(f"SearchAPI error for {video_id}: {resp.status_code} {detail}")
            raise ProviderError(f"SearchAPI error: {detail}")

        try:
            data = resp.json()
        except ValueError as e:
            logger.warning(f"SearchAPI returned a non-JSON body for {video_id}")
            raise ProviderError("SearchAPI returned an unreadable response") from e
        if not isinstance(data, dict):
            raise ProviderError("SearchAPI returned an unreadable response")

        records = data.get("transcripts") or []
        if not records:
            raise NoCaptionsAvailable("No transcripts available for this video")

        try:
            segments = [
                TranscriptSegment(
                    text=r["text"].strip(),
                    start=r.get("start", 0.0),
                    duration=r.get("duration", 0.0),
                )
                for r in records
            ]
        except (KeyError, AttributeError, TypeError, PydanticValidationError) as e:
            logger.warning(f"Malformed SearchAPI transcript for {video_id}: {e}")
            raise ProviderError("SearchAPI returned a malformed transcript") from e

        title = title_from_filename(data.get("filename"))
        if title:
            self._titles[video_id] = title
        return segments

    def title_hint(self, video_id: str) -> str | None:
        return self._titles.get(video_id)

    async def close(self) -> None:
        await self._client.aclose()
