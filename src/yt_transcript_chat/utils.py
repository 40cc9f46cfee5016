"""Utility functions."""

import re

VIDEO_ID_PATTERN = re.compile(
    r"(?:[?&]v=|/embed/|/v/|youtu\.be/)([a-zA-Z0-9_-]{11})"
)

ISO_DURATION_PATTERN = re.compile(
    r"^PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?$"
)


def extract_video_id(url: str) -> str | None:
    """Extract the 11-character YouTube video ID from a URL.

    Recognizes ``?v=``, ``/embed/``, ``/v/`` and ``youtu.be/`` forms.
    Returns None when nothing matches.
    """
    if not url:
        return None
    match = VIDEO_ID_PATTERN.search(url)
    if match:
        return match.group(1)
    return None


def parse_iso_duration(value: str) -> int:
    """Parse a ``PT#H#M#S`` duration into total seconds (0 if unparseable)."""
    match = ISO_DURATION_PATTERN.match(value or "")
    if not match:
        return 0
    hours, minutes, seconds = (int(part or 0) for part in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def format_timestamp(seconds: float) -> str:
    """Format seconds to H:MM:SS or M:SS."""
    h = int(seconds // 3600)
    m = int((seconds % 3600) // 60)
    s = int(seconds % 60)
    if h > 0:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m}:{s:02d}"


def format_duration(seconds: float) -> str:
    """Human duration label; zero or missing durations render as N/A."""
    if not seconds:
        return "N/A"
    return format_timestamp(seconds)


def thumbnail_url(video_id: str) -> str:
    return f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"
