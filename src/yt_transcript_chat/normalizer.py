"""Canonical transcript construction and the text rendering fed to the LLM."""

from yt_transcript_chat.models import TranscriptCreate, TranscriptSegment, VideoMetadata


def normalize(
    url: str,
    video_id: str,
    metadata: VideoMetadata,
    segments: list[TranscriptSegment],
    title_hint: str | None = None,
) -> TranscriptCreate:
    """Merge provider outputs into one transcript payload.

    Segment text is trimmed and segments left empty are dropped; order is
    kept as the provider returned it. ``title_hint`` replaces the title only
    when ``metadata`` is a placeholder.
    """
    title = metadata.title
    if metadata.placeholder and title_hint:
        title = title_hint

    cleaned = []
    for seg in segments:
        text = seg.text.strip()
        if text:
            cleaned.append(seg.model_copy(update={"text": text}))

    return TranscriptCreate(
        youtube_url=url,
        video_id=video_id,
        title=title,
        channel_name=metadata.channel_name,
        duration=metadata.duration,
        thumbnail_url=metadata.thumbnail_url,
        segments=cleaned,
    )


def _format_seconds(value: float) -> str:
    # Integral starts render without a decimal part: 0, 2, 2.5
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def render_context(segments: list[TranscriptSegment]) -> str:
    """One ``[start] text`` line per segment, newline-joined.

    Model inputs depend on this exact format.
    """
    return "\n".join(f"[{_format_seconds(s.start)}] {s.text}" for s in segments)
