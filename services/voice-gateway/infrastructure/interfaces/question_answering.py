"""Abstract interface for the downstream question-answering service."""

from abc import ABC, abstractmethod


class QuestionAnsweringService(ABC):
    """Abstract base class for QA backends."""

    @abstractmethod
    def ask(self, question: str) -> str:
        """
        Asks a question and returns the answer text.

        Raises:
            DownstreamError: If the service call fails.
        """
        pass
