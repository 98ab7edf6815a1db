"""Abstract interfaces for audio transcoding."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path


class PCMStream(ABC):
    """Canonical PCM (mono, 16 kHz, s16le) produced by a transcode job."""

    @abstractmethod
    def __iter__(self) -> Iterator[bytes]:
        """Yields PCM chunks until the producer's output closes."""

    @abstractmethod
    def close(self) -> None:
        """Releases the producer. Safe to call more than once."""

    @property
    @abstractmethod
    def bytes_read(self) -> int:
        """Number of PCM bytes yielded so far."""

    def __enter__(self) -> "PCMStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class AudioTranscoder(ABC):
    """Abstract base class for audio normalizers."""

    @abstractmethod
    def transcode(self, artifact_path: Path) -> PCMStream:
        """
        Starts converting an audio file into canonical PCM.

        Args:
            artifact_path: The downloaded audio file.

        Returns:
            A PCMStream; use it as a context manager so the job is released.

        Raises:
            TranscodeError: If the conversion cannot be started.
        """
        pass
