"""Metadata and transcript providers."""

from .base import MetadataProvider, TranscriptProvider
from .captions import CaptionsProvider
from .fallback import FallbackTranscriptProvider
from .searchapi import SearchApiProvider
from .youtube import MinimalMetadataProvider, YouTubeDataProvider

__all__ = [
    "MetadataProvider",
    "TranscriptProvider",
    "CaptionsProvider",
    "FallbackTranscriptProvider",
    "SearchApiProvider",
    "MinimalMetadataProvider",
    "YouTubeDataProvider",
]
