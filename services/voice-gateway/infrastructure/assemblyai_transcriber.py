"""AssemblyAI streaming implementation of the TranscriptionService interface."""

import itertools
import time
from collections.abc import Iterable, Iterator

from assemblyai.streaming.v3 import (
    StreamingClient,
    StreamingClientOptions,
    StreamingError,
    StreamingEvents,
    StreamingParameters,
    TurnEvent,
)
from gateway_common.logging import setup_logging

from config import AssemblyAIConfig
from exceptions import TranscodeError, TranscriptionError

from .interfaces import TranscriptionService

logger = setup_logging()

STREAMING_HOSTS = {
    "us": "streaming.assemblyai.com",
    "eu": "streaming.eu.assemblyai.com",
}
ENGLISH_MODEL = "universal-streaming-english"
MULTILINGUAL_MODEL = "universal-streaming-multilingual"


def language_code_for(language: str) -> str:
    """Primary subtag of a locale: de-DE -> de."""
    return language.replace("_", "-").split("-", 1)[0].strip().lower()


def speech_model_for(language: str) -> str:
    """Maps a locale such as en-US or de-DE to a streaming speech model."""
    return ENGLISH_MODEL if language_code_for(language) == "en" else MULTILINGUAL_MODEL


def paced(chunks: Iterable[bytes], bytes_per_second: float) -> Iterator[bytes]:
    """Yields chunks no faster than the given byte rate."""
    started = time.monotonic()
    sent = 0
    for chunk in chunks:
        delay = started + sent / bytes_per_second - time.monotonic()
        if delay > 0:
            time.sleep(delay)
        sent += len(chunk)
        yield chunk


class AssemblyAIStreamingTranscriber(TranscriptionService):
    """Runs one streaming session per voice note and returns one transcript."""

    def __init__(self, config: AssemblyAIConfig):
        self._config = config

    def transcribe(self, pcm: Iterable[bytes], source_name: str) -> str:
        """
        Streams canonical PCM to AssemblyAI and joins the completed turns.

        An empty stream returns "" without opening a session. The session is
        terminated on every exit path once connected, which also makes the
        server flush its last turn before the transcript is assembled.
        """
        chunks = iter(pcm)
        first_chunk = next(chunks, b"")
        if not first_chunk:
            logger.info(
                "No decodable audio, skipping recognition",
                extra={"attachment": source_name},
            )
            return ""

        turns: dict[int, str] = {}
        errors: list[StreamingError] = []

        client = StreamingClient(
            StreamingClientOptions(
                api_key=self._config.api_key.get_secret_value(),
                api_host=STREAMING_HOSTS[self._config.region],
            )
        )
        client.on(StreamingEvents.Turn, lambda _client, event: _collect(event, turns))
        client.on(StreamingEvents.Error, lambda _client, error: errors.append(error))

        try:
            client.connect(
                StreamingParameters(
                    sample_rate=self._config.sample_rate,
                    format_turns=True,
                    speech_model=speech_model_for(self._config.language),
                    language_codes=[language_code_for(self._config.language)],
                )
            )
            try:
                client.stream(self._audio(itertools.chain([first_chunk], chunks)))
            finally:
                client.disconnect(terminate=True)
        except TranscodeError:
            raise
        except Exception as e:
            logger.exception(
                "AssemblyAI streaming session failed",
                extra={"attachment": source_name},
            )
            raise TranscriptionError(source_name, e) from e

        if errors:
            logger.error(
                "AssemblyAI reported an error",
                extra={"attachment": source_name, "error": str(errors[0])},
            )
            raise TranscriptionError(source_name, errors[0])

        transcript = " ".join(turns[order] for order in sorted(turns)).strip()
        logger.info(
            "Audio transcription finished",
            extra={
                "attachment": source_name,
                "turn_count": len(turns),
                "speech_detected": bool(transcript),
            },
        )
        return transcript

    def _audio(self, chunks: Iterable[bytes]) -> Iterable[bytes]:
        if self._config.stream_speed <= 0:
            return chunks
        bytes_per_second = self._config.sample_rate * 2 * self._config.stream_speed
        return paced(chunks, bytes_per_second)


def _collect(event: TurnEvent, turns: dict[int, str]) -> None:
    """Keeps the latest text of each completed turn (formatted text arrives last)."""
    if event.end_of_turn and event.transcript:
        turns[event.turn_order] = event.transcript
