"""Metadata providers backed by the YouTube Data API, plus a placeholder fallback."""

import logging

import httpx

from yt_transcript_chat.errors import (
    ConfigurationMissing,
    InvalidCredential,
    ProviderError,
    QuotaExceeded,
    VideoNotFound,
)
from yt_transcript_chat.models import VideoMetadata
from yt_transcript_chat.utils import format_duration, parse_iso_duration, thumbnail_url
from .base import MetadataProvider

logger = logging.getLogger(__name__)

THUMBNAIL_RANKING = ("maxres", "high", "medium", "default")

QUOTA_REASONS = {"quotaExceeded", "dailyLimitExceeded", "rateLimitExceeded"}
CREDENTIAL_REASONS = {"keyInvalid", "keyExpired", "forbidden", "accessNotConfigured"}


def best_thumbnail(video_id: str, thumbnails: dict) -> str:
    for size in THUMBNAIL_RANKING:
        url = (thumbnails.get(size) or {}).get("url")
        if url:
            return url
    return thumbnail_url(video_id)


class YouTubeDataProvider(MetadataProvider):
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://www.googleapis.com/youtube/v3",
        timeout: float = 60.0,
    ):
        self._api_key = api_key
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
        )

    async def fetch_metadata(self, video_id: str) -> VideoMetadata:
        if not self._api_key:
            raise ConfigurationMissing("YOUTUBE_API_KEY not configured")

        data = await self._get(
            "/videos",
            {"part": "snippet,contentDetails", "id": video_id},
        )
        items = data.get("items") or []
        if not items:
            raise VideoNotFound(f"Video not found: {video_id}")

        item = items[0]
        snippet = item.get("snippet", {})
        seconds = parse_iso_duration(item.get("contentDetails", {}).get("duration", ""))
        language = (
            snippet.get("defaultAudioLanguage")
            or snippet.get("defaultLanguage")
            or "en"
        )

        return VideoMetadata(
            video_id=video_id,
            title=snippet.get("title") or "Unknown Title",
            channel_name=snippet.get("channelTitle") or "Unknown Channel",
            duration=format_duration(seconds),
            duration_seconds=seconds,
            thumbnail_url=best_thumbnail(video_id, snippet.get("thumbnails") or {}),
            language=language,
            available_languages=await self._caption_languages(video_id),
        )

    async def _caption_languages(self, video_id: str) -> list[str]:
        try:
            data = await self._get("/captions", {"part": "snippet", "videoId": video_id})
        except ProviderError as e:
            logger.warning(f"Caption languages unavailable for {video_id}: {e.message}")
            return []
        languages: list[str] = []
        for item in data.get("items") or []:
            lang = item.get("snippet", {}).get("language")
            if lang and lang not in languages:
                languages.append(lang)
        return languages

    async def _get(self, path: str, params: dict) -> dict:
        try:
            resp = await self._client.get(path, params={**params, "key": self._api_key})
        except httpx.HTTPError as e:
            raise ProviderError(f"YouTube Data API request failed: {e}") from e

        if resp.is_success:
            return resp.json()
        error = self._error_for(resp)
        logger.warning(f"YouTube Data API {path} failed: {error.message}")
        raise error

    @staticmethod
    def _error_for(resp: httpx.Response) -> ProviderError:
        try:
            error = resp.json().get("error", {})
        except ValueError:
            error = {}
        message = error.get("message") or resp.reason_phrase
        reasons = {e.get("reason") for e in error.get("errors", [])}

        if reasons & QUOTA_REASONS:
            return QuotaExceeded(f"YouTube Data API quota exceeded: {message}")
        if reasons & CREDENTIAL_REASONS or resp.status_code == 401:
            return InvalidCredential(f"YouTube Data API rejected the key: {message}")
        if resp.status_code == 404:
            return VideoNotFound(f"Video not found: {message}")
        return ProviderError(f"YouTube Data API error ({resp.status_code}): {message}")

    async def close(self) -> None:
        await self._client.aclose()


class MinimalMetadataProvider(MetadataProvider):
    """Placeholder metadata for deployments without a catalog key. Never fails."""

    async def fetch_metadata(self, video_id: str) -> VideoMetadata:
        return VideoMetadata(
            video_id=video_id,
            title="Unknown Title",
            channel_name="Unknown Channel",
            duration="N/A",
            duration_seconds=0,
            thumbnail_url=thumbnail_url(video_id),
            language="en",
            available_languages=[],
            placeholder=True,
        )
