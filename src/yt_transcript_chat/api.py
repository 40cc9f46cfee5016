"""FastAPI application exposing extraction, summary and chat endpoints."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import Field

from yt_transcript_chat.config import Settings
from yt_transcript_chat.errors import TranscriptChatError, TranscriptNotFound
from yt_transcript_chat.models import CamelModel, ChatTurn, Transcript, TranscriptCreate, VideoMetadata
from yt_transcript_chat.normalizer import render_context
from yt_transcript_chat.services import Services, build_services

logger = logging.getLogger(__name__)


class ExtractRequest(CamelModel):
    youtube_url: str


class ChatRequest(CamelModel):
    transcript_id: int
    message: str = Field(min_length=1)


class SummaryResponse(CamelModel):
    summary: str


class VideoDataResponse(CamelModel):
    success: bool
    message: str
    data: VideoMetadata | None = None


router = APIRouter(prefix="/api")


def get_services(request: Request) -> Services:
    return request.app.state.services


async def _get_transcript(services: Services, transcript_id: int) -> Transcript:
    transcript = await services.store.get(transcript_id)
    if transcript is None:
        raise TranscriptNotFound()
    return transcript


@router.post("/extract-transcript", response_model=Transcript)
async def extract_transcript(
    body: ExtractRequest, services: Services = Depends(get_services)
):
    """Fetch, normalize and store the transcript of a YouTube video.

    A video that is already stored is returned unchanged.
    """
    transcript, created = await services.extractor.extract(body.youtube_url)
    if created:
        logger.info(f"Extracted transcript {transcript.id} for {transcript.video_id}")
    return transcript


@router.post("/transcripts", response_model=Transcript)
async def save_transcript(
    body: TranscriptCreate, services: Services = Depends(get_services)
):
    """Store a transcript built by an external ingestion job."""
    transcript, _ = await services.extractor.ingest(body)
    return transcript


@router.get("/transcripts/{transcript_id}", response_model=Transcript)
async def get_transcript(transcript_id: int, services: Services = Depends(get_services)):
    return await _get_transcript(services, transcript_id)


@router.get("/transcripts/{transcript_id}/text", response_class=PlainTextResponse)
async def get_transcript_text(transcript_id: int, services: Services = Depends(get_services)):
    """Timestamped plain-text transcript as a download."""
    transcript = await _get_transcript(services, transcript_id)
    filename = f"{transcript.title}-transcript.txt".replace('"', "'")
    return PlainTextResponse(
        render_context(transcript.segments),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/transcripts/{transcript_id}/summary", response_model=SummaryResponse)
async def get_summary(transcript_id: int, services: Services = Depends(get_services)):
    transcript = await _get_transcript(services, transcript_id)
    summary = await services.assistant.summarize(transcript)
    return SummaryResponse(summary=summary)


@router.post("/chat", response_model=ChatTurn)
async def chat(body: ChatRequest, services: Services = Depends(get_services)):
    transcript = await _get_transcript(services, body.transcript_id)
    return await services.assistant.chat(transcript, body.message)


@router.get("/transcripts/{transcript_id}/chat", response_model=list[ChatTurn])
async def get_chat_history(transcript_id: int, services: Services = Depends(get_services)):
    await _get_transcript(services, transcript_id)
    return await services.store.list_chat(transcript_id)


@router.get("/get-youtube-data", response_model=VideoDataResponse)
async def get_youtube_data(
    url: str = Query(..., description="YouTube video URL"),
    services: Services = Depends(get_services),
):
    try:
        metadata = await services.extractor.lookup_metadata(url)
    except TranscriptChatError as e:
        return JSONResponse(
            status_code=e.status_code,
            content={"success": False, "message": e.message, "data": None},
        )
    return VideoDataResponse(
        success=True, message="Video data retrieved successfully", data=metadata
    )


def create_app(services: Services | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the app. Without ``services``, they are wired from ``settings`` at startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = services is None
        app.state.services = services or build_services(settings or Settings())
        logger.info("API started")
        yield
        if owned:
            await app.state.services.close()
        logger.info("API stopped")

    app = FastAPI(
        title="YouTube Transcript Chat",
        description="Extract YouTube transcripts, summarize them and chat about them",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            elapsed = int((time.time() - start) * 1000)
            logger.info(
                f"{request.method} {request.url.path} {response.status_code} in {elapsed}ms"
            )
        return response

    @app.exception_handler(TranscriptChatError)
    async def transcript_chat_error_handler(request: Request, exc: TranscriptChatError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return JSONResponse(status_code=400, content={"message": message})

    app.include_router(router)
    return app
