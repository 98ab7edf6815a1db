"""Infrastructure interface exports."""

from .attachment_fetcher import AttachmentFetcher
from .audio_transcoder import AudioTranscoder, PCMStream
from .question_answering import QuestionAnsweringService
from .reply_sender import ReplySender
from .token_provider import TokenProvider
from .transcription_service import TranscriptionService

__all__ = [
    "AttachmentFetcher",
    "AudioTranscoder",
    "PCMStream",
    "QuestionAnsweringService",
    "ReplySender",
    "TokenProvider",
    "TranscriptionService",
]
