"""In-memory TTL cache for video metadata lookups."""

from cachetools import TTLCache

from yt_transcript_chat.models import VideoMetadata


class MetadataCache:
    def __init__(self, max_size: int = 100, ttl: int = 3600):
        self._cache: TTLCache = TTLCache(maxsize=max_size, ttl=ttl)
        self._hits = 0
        self._misses = 0

    def get(self, video_id: str) -> VideoMetadata | None:
        result = self._cache.get(video_id)
        if result is not None:
            self._hits += 1
        else:
            self._misses += 1
        return result

    def set(self, video_id: str, metadata: VideoMetadata) -> None:
        self._cache[video_id] = metadata

    def stats(self) -> dict:
        return {
            "size": len(self._cache),
            "max_size": self._cache.maxsize,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / max(self._hits + self._misses, 1) * 100, 1),
        }
