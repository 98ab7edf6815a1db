"""Domain layer exports."""

from .answer_extractor import extract_answer
from .attachment_classifier import classify, first_audio_attachment
from .models import (
    AccessToken,
    Activity,
    Attachment,
    AttachmentContent,
    AudioDescriptor,
    ChannelAccount,
    ConversationAccount,
    Entity,
    PipelineStage,
    SourceKind,
    VoiceTurnResult,
)
from .reply_builder import ReplyBuilder

__all__ = [
    "AccessToken",
    "Activity",
    "Attachment",
    "AttachmentContent",
    "AudioDescriptor",
    "ChannelAccount",
    "ConversationAccount",
    "Entity",
    "PipelineStage",
    "ReplyBuilder",
    "SourceKind",
    "VoiceTurnResult",
    "classify",
    "extract_answer",
    "first_audio_attachment",
]
