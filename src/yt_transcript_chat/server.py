"""YouTube Transcript Chat: MCP tools and the process entry point."""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Annotated

import uvicorn
from mcp.server.fastmcp import Context, FastMCP
from pydantic import Field

from yt_transcript_chat.api import create_app
from yt_transcript_chat.config import Settings, Transport
from yt_transcript_chat.errors import TranscriptChatError, TranscriptNotFound
from yt_transcript_chat.models import Transcript
from yt_transcript_chat.normalizer import render_context
from yt_transcript_chat.services import Services, build_services
from yt_transcript_chat.utils import format_timestamp

# Logging to stderr (MCP convention)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("yt-transcript-chat")

TOOL_ANNOTATIONS = {
    "readOnlyHint": False,
    "destructiveHint": False,
    "openWorldHint": True,
}


@asynccontextmanager
async def app_lifespan(server: FastMCP):
    services = build_services(Settings())
    logger.info("MCP server started")
    try:
        yield services
    finally:
        await services.close()
        logger.info("MCP server stopped")


mcp = FastMCP(
    "YouTube Transcript Chat",
    instructions="Extract YouTube transcripts, summarize them and answer questions grounded in them",
    lifespan=app_lifespan,
)


def _services(ctx: Context) -> Services:
    return ctx.request_context.lifespan_context


async def _load(services: Services, transcript_id: int) -> Transcript:
    transcript = await services.store.get(transcript_id)
    if transcript is None:
        raise TranscriptNotFound()
    return transcript


def _header(transcript: Transcript) -> str:
    return (
        f"## {transcript.title}\n"
        f"**Transcript ID:** {transcript.id} | **Video:** {transcript.video_id} | "
        f"**Channel:** {transcript.channel_name} | **Duration:** {transcript.duration}\n"
    )


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def extract_transcript(
    url: Annotated[str, Field(description="YouTube video URL (watch, youtu.be, embed or /v/ form)")],
    ctx: Context,
) -> str:
    """Fetch and store the transcript of a YouTube video, returning its ID and a preview."""
    try:
        transcript, created = await _services(ctx).extractor.extract(url)
    except TranscriptChatError as e:
        return f"Error: {e.message}"

    status = "Extracted" if created else "Already stored"
    preview = render_context(transcript.segments[:10])
    return (
        f"{_header(transcript)}"
        f"**Status:** {status} | **Segments:** {len(transcript.segments)}\n\n"
        f"{preview}"
    )


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def get_transcript_text(
    transcript_id: Annotated[int, Field(description="ID returned by extract_transcript")],
    ctx: Context,
) -> str:
    """Get the full timestamped transcript text of a stored video."""
    try:
        transcript = await _load(_services(ctx), transcript_id)
    except TranscriptChatError as e:
        return f"Error: {e.message}"

    lines = [f"**[{format_timestamp(s.start)}]** {s.text}" for s in transcript.segments]
    return f"{_header(transcript)}\n" + "\n".join(lines)


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def summarize_transcript(
    transcript_id: Annotated[int, Field(description="ID returned by extract_transcript")],
    ctx: Context,
) -> str:
    """Summarize a stored transcript. Summaries are generated once and then cached."""
    services = _services(ctx)
    try:
        transcript = await _load(services, transcript_id)
        summary = await services.assistant.summarize(transcript)
    except TranscriptChatError as e:
        return f"Error: {e.message}"
    return f"{_header(transcript)}\n### Summary\n{summary}"


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def chat_with_transcript(
    transcript_id: Annotated[int, Field(description="ID returned by extract_transcript")],
    message: Annotated[str, Field(description="Question about the video content")],
    ctx: Context,
) -> str:
    """Ask a question answered only from the video's transcript."""
    services = _services(ctx)
    try:
        transcript = await _load(services, transcript_id)
        turn = await services.assistant.chat(transcript, message)
    except TranscriptChatError as e:
        return f"Error: {e.message}"
    return turn.response


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def get_chat_history(
    transcript_id: Annotated[int, Field(description="ID returned by extract_transcript")],
    ctx: Context,
) -> str:
    """List the questions and answers exchanged about a stored transcript, oldest first."""
    services = _services(ctx)
    try:
        transcript = await _load(services, transcript_id)
    except TranscriptChatError as e:
        return f"Error: {e.message}"

    turns = await services.store.list_chat(transcript.id)
    if not turns:
        return f"No chat history for transcript {transcript.id}."

    parts = [f"**Q:** {t.message}\n**A:** {t.response}" for t in turns]
    return f"{_header(transcript)}\n" + "\n\n---\n\n".join(parts)


@mcp.resource("youtube://help")
def help_resource() -> str:
    """Usage guide for the YouTube Transcript Chat tools."""
    return """# YouTube Transcript Chat - Help Guide

## Available Tools

### extract_transcript
Fetch a video's captions and metadata and store them. Returns the transcript ID.
Extracting the same video again returns the stored record.
- Example: extract_transcript(url="https://youtu.be/VIDEO_ID")

### get_transcript_text
Full transcript with timestamps.
- Example: get_transcript_text(transcript_id=1)

### summarize_transcript
AI summary of the main topics, key points and insights. Cached after the first call.
- Example: summarize_transcript(transcript_id=1)

### chat_with_transcript
Ask questions answered only from the transcript.
- Example: chat_with_transcript(transcript_id=1, message="What is the main argument?")

### get_chat_history
Previous questions and answers for a transcript.
"""


def main():
    settings = Settings()
    logging.getLogger().setLevel(settings.log_level.upper())

    if settings.transport == Transport.REST:
        uvicorn.run(
            create_app(settings=settings),
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
    elif settings.transport == Transport.STREAMABLE_HTTP:
        mcp.run(transport="streamable-http")
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
