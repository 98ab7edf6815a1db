"""Recognizes audio attachments on inbound messages."""

import os
from collections.abc import Iterable

from .models import Attachment, AudioDescriptor, SourceKind

TEAMS_FILE_CARD_TYPE = "application/vnd.microsoft.teams.file.download.info"
AUDIO_EXTENSIONS = frozenset({".wav", ".mp3", ".m4a", ".ogg", ".webm", ".aac", ".flac"})


def classify(attachment: Attachment) -> AudioDescriptor | None:
    """
    Decides whether an attachment is retrievable audio.

    Rules are evaluated in order and the first match wins: Teams file card
    with an audio file name, direct ``audio/*`` attachment, then any attachment
    whose file name has an audio extension.

    Args:
        attachment: The attachment as received on the activity.

    Returns:
        An AudioDescriptor, or None if the attachment is not audio.
    """
    content_type = (attachment.content_type or "").strip().lower()
    audio_name = _audio_name(attachment)
    download_url = _download_url(attachment)

    if (
        content_type == TEAMS_FILE_CARD_TYPE
        and _has_audio_extension(audio_name)
        and download_url
    ):
        return AudioDescriptor(
            name=audio_name,
            file_type=_file_type(attachment, audio_name),
            content_type=content_type,
            source_kind=SourceKind.PLATFORM_FILE_CARD,
            retrieval_url=download_url,
        )

    if content_type.startswith("audio/") and attachment.content_url:
        subtype = _mime_subtype(content_type)
        name = attachment.name or f"audio.{subtype}"
        return AudioDescriptor(
            name=name,
            file_type=_extension(name) or subtype,
            content_type=content_type,
            source_kind=SourceKind.DIRECT_AUDIO,
            retrieval_url=attachment.content_url,
        )

    if _has_audio_extension(audio_name) and download_url:
        return AudioDescriptor(
            name=audio_name,
            file_type=_file_type(attachment, audio_name),
            content_type=content_type or "unknown",
            source_kind=SourceKind.FILENAME_FALLBACK,
            retrieval_url=download_url,
        )

    return None


def first_audio_attachment(
    attachments: Iterable[Attachment],
) -> AudioDescriptor | None:
    """Returns the descriptor of the first audio attachment, ignoring the rest."""
    for attachment in attachments:
        descriptor = classify(attachment)
        if descriptor is not None:
            return descriptor
    return None


def _audio_name(attachment: Attachment) -> str:
    """First of the attachment name and the nested content name with an audio extension."""
    names = [attachment.name, attachment.content.name if attachment.content else None]
    for name in names:
        if name and _has_audio_extension(name):
            return name
    return ""


def _download_url(attachment: Attachment) -> str | None:
    if attachment.content and attachment.content.download_url:
        return attachment.content.download_url
    return attachment.content_url


def _has_audio_extension(name: str) -> bool:
    return os.path.splitext(name)[1].lower() in AUDIO_EXTENSIONS


def _extension(name: str) -> str:
    return os.path.splitext(name)[1].lstrip(".").lower()


def _file_type(attachment: Attachment, display_name: str) -> str:
    if attachment.content and attachment.content.file_type:
        return attachment.content.file_type.lower()
    return _extension(display_name)


def _mime_subtype(content_type: str) -> str:
    """audio/ogg; codecs=opus -> ogg"""
    return content_type.split("/", 1)[1].split(";", 1)[0].strip() or "wav"
