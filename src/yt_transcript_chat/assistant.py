"""Summaries and grounded chat answers over a stored transcript."""

import logging

from yt_transcript_chat.errors import (
    AssistantError,
    ChatFailed,
    ConfigurationMissing,
    ContextTooLarge,
    SummarizationFailed,
    ValidationError,
)
from yt_transcript_chat.llm import LLMClient
from yt_transcript_chat.models import ChatTurn, Transcript
from yt_transcript_chat.normalizer import render_context
from yt_transcript_chat.store import TranscriptStore

logger = logging.getLogger(__name__)

SUMMARY_SYSTEM_PROMPT = (
    "You are an AI assistant that provides concise and informative summaries "
    "of video transcripts. Focus on the main topics, key points, and important insights."
)

SUMMARY_USER_PROMPT = (
    'Please provide a comprehensive summary of this video transcript from "{title}":\n\n'
    "{context}"
)

CHAT_SYSTEM_PROMPT = """You are an AI assistant helping a user understand the YouTube video "{title}".
Answer questions using only the content of the transcript below. Each line starts with the time in seconds at which it is spoken.
If the transcript does not contain the information needed to answer, say clearly that the question cannot be answered from this transcript instead of guessing.

Transcript:
{context}"""


class GroundedAssistant:
    def __init__(
        self,
        store: TranscriptStore,
        llm: LLMClient,
        summary_max_tokens: int = 500,
        summary_temperature: float = 0.5,
        chat_max_tokens: int = 1000,
        chat_temperature: float = 0.7,
        max_context_chars: int = 0,
    ):
        self._store = store
        self._llm = llm
        self.summary_max_tokens = summary_max_tokens
        self.summary_temperature = summary_temperature
        self.chat_max_tokens = chat_max_tokens
        self.chat_temperature = chat_temperature
        self.max_context_chars = max_context_chars

    def _context(self, transcript: Transcript) -> str:
        context = render_context(transcript.segments)
        if self.max_context_chars and len(context) > self.max_context_chars:
            raise ContextTooLarge(
                f"Transcript is too long for the language model "
                f"({len(context)} characters, limit {self.max_context_chars})"
            )
        return context

    async def summarize(self, transcript: Transcript) -> str:
        cached = await self._store.get_summary(transcript.id)
        if cached is not None:
            logger.info(f"Summary cache hit for transcript {transcript.id}")
            return cached

        messages = [
            {"role": "system", "content": SUMMARY_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": SUMMARY_USER_PROMPT.format(
                    title=transcript.title, context=self._context(transcript)
                ),
            },
        ]
        summary = await self._complete(
            messages,
            self.summary_max_tokens,
            self.summary_temperature,
            SummarizationFailed("Failed to generate transcript summary. Please try again later."),
        )
        await self._store.save_summary(transcript.id, summary)
        return summary

    async def chat(self, transcript: Transcript, message: str) -> ChatTurn:
        message = (message or "").strip()
        if not message:
            raise ValidationError("Message cannot be empty")

        messages = [
            {
                "role": "system",
                "content": CHAT_SYSTEM_PROMPT.format(
                    title=transcript.title, context=self._context(transcript)
                ),
            },
            {"role": "user", "content": message},
        ]
        answer = await self._complete(
            messages,
            self.chat_max_tokens,
            self.chat_temperature,
            ChatFailed("Failed to generate a response. Please try again later."),
        )
        return await self._store.append_chat(transcript.id, message, answer)

    async def _complete(
        self,
        messages: list[dict],
        max_tokens: int,
        temperature: float,
        failure: AssistantError,
    ) -> str:
        try:
            content = await self._llm.complete(messages, max_tokens, temperature)
        except ConfigurationMissing:
            raise
        except Exception as e:
            logger.exception(f"LLM request failed: {e}")
            raise failure from e
        if not content or not content.strip():
            logger.error("LLM returned empty content")
            raise failure
        return content.strip()
