"""Abstract interface for attachment retrieval."""

from abc import ABC, abstractmethod
from pathlib import Path

from domain.models import AudioDescriptor


class AttachmentFetcher(ABC):
    """Abstract base class for downloading attachment bytes."""

    @abstractmethod
    def fetch(self, descriptor: AudioDescriptor, work_dir: Path) -> Path:
        """
        Downloads the attachment into the invocation's working directory.

        Args:
            descriptor: The classified audio attachment.
            work_dir: Directory owned by the current invocation.

        Returns:
            Path of the written working artifact.

        Raises:
            AuthError: If the access token cannot be acquired.
            FetchError: If the download or the write fails.
        """
        pass
