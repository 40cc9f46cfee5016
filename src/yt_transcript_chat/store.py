"""Transcript storage: transcripts, cached summaries and chat history."""

import itertools
import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from yt_transcript_chat.errors import TranscriptNotFound
from yt_transcript_chat.models import ChatTurn, Transcript, TranscriptCreate

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TranscriptStore(ABC):
    @abstractmethod
    async def create(self, data: TranscriptCreate) -> Transcript:
        """Store a new transcript, assigning its id and creation time."""
        ...

    @abstractmethod
    async def create_if_absent(self, data: TranscriptCreate) -> tuple[Transcript, bool]:
        """Atomically store ``data`` unless its video is already stored.

        Returns the stored transcript and whether it was created by this call.
        """
        ...

    @abstractmethod
    async def get(self, transcript_id: int) -> Transcript | None:
        ...

    @abstractmethod
    async def get_by_video_id(self, video_id: str) -> Transcript | None:
        ...

    @abstractmethod
    async def append_chat(self, transcript_id: int, message: str, response: str) -> ChatTurn:
        """Record a chat turn. Raises TranscriptNotFound for unknown transcripts."""
        ...

    @abstractmethod
    async def list_chat(self, transcript_id: int) -> list[ChatTurn]:
        ...

    @abstractmethod
    async def get_summary(self, transcript_id: int) -> str | None:
        ...

    @abstractmethod
    async def save_summary(self, transcript_id: int, summary: str) -> None:
        ...


class InMemoryTranscriptStore(TranscriptStore):
    def __init__(self):
        self._lock = threading.Lock()
        self._transcripts: dict[int, Transcript] = {}
        self._by_video: dict[str, int] = {}
        self._chats: dict[int, list[ChatTurn]] = {}
        self._summaries: dict[int, str] = {}
        self._transcript_ids = itertools.count(1)
        self._chat_ids = itertools.count(1)

    def _insert(self, data: TranscriptCreate) -> Transcript:
        transcript = Transcript(
            **data.model_dump(),
            id=next(self._transcript_ids),
            created_at=_now(),
        )
        self._transcripts[transcript.id] = transcript
        self._by_video.setdefault(transcript.video_id, transcript.id)
        logger.info(f"Stored transcript {transcript.id} for video {transcript.video_id}")
        return transcript

    async def create(self, data: TranscriptCreate) -> Transcript:
        with self._lock:
            return self._insert(data)

    async def create_if_absent(self, data: TranscriptCreate) -> tuple[Transcript, bool]:
        with self._lock:
            existing_id = self._by_video.get(data.video_id)
            if existing_id is not None:
                return self._transcripts[existing_id], False
            return self._insert(data), True

    async def get(self, transcript_id: int) -> Transcript | None:
        return self._transcripts.get(transcript_id)

    async def get_by_video_id(self, video_id: str) -> Transcript | None:
        transcript_id = self._by_video.get(video_id)
        if transcript_id is None:
            return None
        return self._transcripts[transcript_id]

    async def append_chat(self, transcript_id: int, message: str, response: str) -> ChatTurn:
        with self._lock:
            if transcript_id not in self._transcripts:
                raise TranscriptNotFound()
            turn = ChatTurn(
                id=next(self._chat_ids),
                transcript_id=transcript_id,
                message=message,
                response=response,
                created_at=_now(),
            )
            self._chats.setdefault(transcript_id, []).append(turn)
            return turn

    async def list_chat(self, transcript_id: int) -> list[ChatTurn]:
        return list(self._chats.get(transcript_id, []))

    async def get_summary(self, transcript_id: int) -> str | None:
        return self._summaries.get(transcript_id)

    async def save_summary(self, transcript_id: int, summary: str) -> None:
        with self._lock:
            self._summaries.setdefault(transcript_id, summary)
