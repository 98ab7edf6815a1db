"""Abstract interface for transcription service operations."""

from abc import ABC, abstractmethod
from collections.abc import Iterable


class TranscriptionService(ABC):
    """Abstract base class for speech recognition backends."""

    @abstractmethod
    def transcribe(self, pcm: Iterable[bytes], source_name: str) -> str:
        """
        Transcribes canonical PCM audio into one final transcript.

        Args:
            pcm: Mono 16 kHz s16le audio chunks.
            source_name: Attachment name, used for logging and errors.

        Returns:
            The transcript, or an empty string if no speech was detected.

        Raises:
            TranscriptionError: If the recognition backend reports an error.
        """
        pass
