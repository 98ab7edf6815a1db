"""Domain models for the voice gateway."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic.alias_generators import to_camel


class _ActivityModel(BaseModel):
    """Base for Bot Framework schema objects (camelCase on the wire)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class ChannelAccount(_ActivityModel):
    """A user or bot participating in a conversation."""

    id: str = ""
    name: str | None = None


class ConversationAccount(_ActivityModel):
    """The conversation an activity belongs to."""

    id: str = ""
    tenant_id: str | None = None


class Entity(_ActivityModel):
    """Activity entity; only mentions are interpreted."""

    type: str = ""
    text: str | None = None
    mentioned: ChannelAccount | None = None


class AttachmentContent(_ActivityModel):
    """Nested content of a Teams file download info card."""

    download_url: str | None = None
    file_type: str | None = None
    name: str | None = None
    unique_id: str | None = None


class Attachment(_ActivityModel):
    """An attachment on an inbound message."""

    content_type: str | None = None
    content_url: str | None = None
    name: str | None = None
    content: AttachmentContent | None = None

    @field_validator("content", mode="before")
    @classmethod
    def _ignore_non_file_content(cls, value: Any) -> Any:
        # Cards and HTML attachments carry strings or arbitrary objects here.
        return value if isinstance(value, dict) else None


class Activity(_ActivityModel):
    """Inbound Bot Framework activity."""

    type: str
    id: str | None = None
    text: str | None = None
    service_url: str | None = None
    channel_id: str | None = None
    from_: ChannelAccount | None = Field(default=None, alias="from")
    recipient: ChannelAccount | None = None
    conversation: ConversationAccount | None = None
    entities: list[Entity] = []
    attachments: list[Attachment] = []
    members_added: list[ChannelAccount] = []


class SourceKind(str, Enum):
    """Where a recognized audio attachment came from."""

    PLATFORM_FILE_CARD = "platform_file_card"
    DIRECT_AUDIO = "direct_audio"
    FILENAME_FALLBACK = "filename_fallback"


class AudioDescriptor(BaseModel, frozen=True):
    """Normalized description of a retrievable audio attachment."""

    name: str
    file_type: str
    content_type: str = "unknown"
    source_kind: SourceKind
    retrieval_url: str


class AccessToken(BaseModel, frozen=True):
    """Bearer token issued by the identity platform."""

    value: SecretStr
    expires_in: int | None = None


class PipelineStage(str, Enum):
    """Stages of one voice-note pipeline invocation."""

    CLASSIFYING = "classifying"
    FETCHING = "fetching"
    TRANSCODING = "transcoding"
    TRANSCRIBING = "transcribing"
    QUERYING = "querying"
    REPLYING = "replying"
    DONE = "done"


class VoiceTurnResult(BaseModel, frozen=True):
    """Outcome of processing one voice note."""

    attachment_name: str
    stage: PipelineStage
    transcript: str | None = None
    answer: str | None = None
    reply_text: str

    @property
    def failed(self) -> bool:
        return self.stage is not PipelineStage.DONE
