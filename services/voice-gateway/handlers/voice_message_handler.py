"""Handler for voice-note attachments."""

import tempfile
from collections.abc import Iterable
from pathlib import Path

from gateway_common.logging import setup_logging

from domain import (
    Attachment,
    AudioDescriptor,
    PipelineStage,
    ReplyBuilder,
    VoiceTurnResult,
    first_audio_attachment,
)
from exceptions import (
    AuthError,
    DownstreamError,
    FetchError,
    TranscodeError,
    TranscriptionError,
)
from infrastructure.interfaces import (
    AttachmentFetcher,
    AudioTranscoder,
    QuestionAnsweringService,
    TranscriptionService,
)

logger = setup_logging()

_FAILED_STAGE = {
    AuthError: PipelineStage.FETCHING,
    FetchError: PipelineStage.FETCHING,
    TranscodeError: PipelineStage.TRANSCODING,
    TranscriptionError: PipelineStage.TRANSCRIBING,
    DownstreamError: PipelineStage.QUERYING,
}


class VoiceMessageHandler:
    """Orchestrates voice note -> transcript -> answer for one message turn."""

    def __init__(
        self,
        fetcher: AttachmentFetcher,
        transcoder: AudioTranscoder,
        transcription_service: TranscriptionService,
        qa_service: QuestionAnsweringService,
        reply_builder: ReplyBuilder,
        work_root: Path | None = None,
    ):
        self._fetcher = fetcher
        self._transcoder = transcoder
        self._transcription_service = transcription_service
        self._qa_service = qa_service
        self._reply_builder = reply_builder
        self._work_root = work_root

    def process(self, attachments: Iterable[Attachment]) -> VoiceTurnResult | None:
        """
        Processes the first audio attachment of a message.

        Args:
            attachments: All attachments of the inbound message.

        Returns:
            VoiceTurnResult with the reply text, or None when the message has
            no audio attachment (nothing is fetched in that case).
        """
        descriptor = first_audio_attachment(attachments)
        if descriptor is None:
            return None

        logger.info(
            "Processing voice note",
            extra={
                "attachment": descriptor.name,
                "source_kind": descriptor.source_kind.value,
                "content_type": descriptor.content_type,
            },
        )

        try:
            with tempfile.TemporaryDirectory(
                prefix="voice_turn_", dir=self._work_root
            ) as work_dir:
                transcript = self._transcribe(descriptor, Path(work_dir))
            if not transcript:
                logger.info("No speech detected", extra={"attachment": descriptor.name})
                return VoiceTurnResult(
                    attachment_name=descriptor.name,
                    stage=PipelineStage.DONE,
                    transcript="",
                    reply_text=self._reply_builder.no_speech_reply(),
                )
            answer = self._qa_service.ask(transcript)
        except tuple(_FAILED_STAGE) as e:
            stage = _FAILED_STAGE[type(e)]
            logger.exception(
                "Voice note processing failed",
                extra={"attachment": descriptor.name, "stage": stage.value},
            )
            return VoiceTurnResult(
                attachment_name=descriptor.name,
                stage=stage,
                reply_text=self._reply_builder.failure_reply(stage, descriptor.name),
            )

        logger.info(
            "Voice note processed",
            extra={"attachment": descriptor.name, "transcript_length": len(transcript)},
        )
        return VoiceTurnResult(
            attachment_name=descriptor.name,
            stage=PipelineStage.DONE,
            transcript=transcript,
            answer=answer,
            reply_text=self._reply_builder.transcript_reply(transcript, answer),
        )

    def _transcribe(self, descriptor: AudioDescriptor, work_dir: Path) -> str:
        """Fetch, transcode and transcribe; the caller owns work_dir cleanup."""
        artifact_path = self._fetcher.fetch(descriptor, work_dir)
        with self._transcoder.transcode(artifact_path) as pcm:
            return self._transcription_service.transcribe(pcm, descriptor.name).strip()
