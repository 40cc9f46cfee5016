"""Builds the provider, store and assistant graph from Settings."""

import logging
from dataclasses import dataclass

from yt_transcript_chat.assistant import GroundedAssistant
from yt_transcript_chat.cache import MetadataCache
from yt_transcript_chat.config import Settings, TranscriptSource
from yt_transcript_chat.llm import LLMClient, OpenAIClient
from yt_transcript_chat.pipeline import TranscriptExtractor
from yt_transcript_chat.providers import (
    CaptionsProvider,
    FallbackTranscriptProvider,
    MetadataProvider,
    MinimalMetadataProvider,
    SearchApiProvider,
    TranscriptProvider,
    YouTubeDataProvider,
)
from yt_transcript_chat.store import InMemoryTranscriptStore, TranscriptStore

logger = logging.getLogger(__name__)


@dataclass
class Services:
    store: TranscriptStore
    metadata_provider: MetadataProvider
    transcript_provider: TranscriptProvider
    llm: LLMClient
    metadata_cache: MetadataCache
    extractor: TranscriptExtractor
    assistant: GroundedAssistant

    async def close(self) -> None:
        await self.metadata_provider.close()
        await self.transcript_provider.close()
        await self.llm.close()


def build_transcript_provider(settings: Settings) -> TranscriptProvider:
    if settings.transcript_source == TranscriptSource.DIRECT:
        logger.info("Transcript source: direct captions")
        return CaptionsProvider()

    search = SearchApiProvider(
        api_key=settings.search_api_key,
        base_url=settings.search_api_url,
        timeout=settings.http_timeout,
    )
    if settings.transcript_source == TranscriptSource.AUTO:
        logger.info("Transcript source: SearchAPI with direct caption fallback")
        return FallbackTranscriptProvider(search, CaptionsProvider())

    logger.info("Transcript source: SearchAPI")
    return search


def build_metadata_provider(settings: Settings) -> MetadataProvider:
    if settings.youtube_api_key:
        logger.info("Metadata source: YouTube Data API")
        return YouTubeDataProvider(
            api_key=settings.youtube_api_key,
            base_url=settings.youtube_api_url,
            timeout=settings.http_timeout,
        )
    logger.info("Metadata source: placeholders (no YouTube API key)")
    return MinimalMetadataProvider()


def build_services(
    settings: Settings,
    store: TranscriptStore | None = None,
    metadata_provider: MetadataProvider | None = None,
    transcript_provider: TranscriptProvider | None = None,
    llm: LLMClient | None = None,
) -> Services:
    """Wire everything from ``settings``; any piece may be passed in instead."""
    store = store or InMemoryTranscriptStore()
    metadata_provider = metadata_provider or build_metadata_provider(settings)
    transcript_provider = transcript_provider or build_transcript_provider(settings)
    llm = llm or OpenAIClient(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        base_url=settings.openai_base_url,
        timeout=settings.http_timeout,
    )
    metadata_cache = MetadataCache(
        max_size=settings.metadata_cache_max_size,
        ttl=settings.metadata_cache_ttl_seconds,
    )

    return Services(
        store=store,
        metadata_provider=metadata_provider,
        transcript_provider=transcript_provider,
        llm=llm,
        metadata_cache=metadata_cache,
        extractor=TranscriptExtractor(
            store, metadata_provider, transcript_provider, metadata_cache
        ),
        assistant=GroundedAssistant(
            store,
            llm,
            summary_max_tokens=settings.summary_max_tokens,
            summary_temperature=settings.summary_temperature,
            chat_max_tokens=settings.chat_max_tokens,
            chat_temperature=settings.chat_temperature,
            max_context_chars=settings.max_context_chars,
        ),
    )
