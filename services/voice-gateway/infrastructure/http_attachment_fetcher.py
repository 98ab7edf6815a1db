"""Authenticated HTTP implementation of the AttachmentFetcher interface."""

import os
import re
import time
from pathlib import Path

import httpx
from gateway_common.logging import setup_logging

from config import DownloadConfig
from domain.models import AudioDescriptor
from exceptions import FetchError

from .interfaces import AttachmentFetcher, TokenProvider

logger = setup_logging()

DEFAULT_ARTIFACT_NAME = "audio.wav"
DEFAULT_EXTENSION = ".wav"
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def artifact_name(display_name: str | None, timestamp_ns: int | None = None) -> str:
    """
    Derives a collision-resistant, filesystem-safe name for a download.

    Args:
        display_name: The attachment's display name, if any.
        timestamp_ns: Prefix value; defaults to the current time in ns.

    Returns:
        ``{timestamp}_{sanitized name}`` with a guaranteed file extension.
    """
    safe = _UNSAFE_CHARS.sub("_", display_name or "").lstrip(".")
    if not safe:
        safe = DEFAULT_ARTIFACT_NAME
    if not os.path.splitext(safe)[1].strip("."):
        safe = safe.rstrip(".") + DEFAULT_EXTENSION
    if timestamp_ns is None:
        timestamp_ns = time.time_ns()
    return f"{timestamp_ns}_{safe}"


class HttpAttachmentFetcher(AttachmentFetcher):
    """Downloads attachments with a bearer token from the file host."""

    def __init__(
        self,
        client: httpx.Client,
        token_provider: TokenProvider,
        config: DownloadConfig,
    ):
        # The client carries max_redirects; see dependencies.
        self._client = client
        self._token_provider = token_provider
        self._config = config

    def fetch(self, descriptor: AudioDescriptor, work_dir: Path) -> Path:
        token = self._token_provider.acquire_token()

        try:
            response = self._client.get(
                descriptor.retrieval_url,
                headers={"Authorization": f"Bearer {token.value.get_secret_value()}"},
                follow_redirects=True,
                timeout=self._config.timeout_seconds,
            )
        except httpx.HTTPError as e:
            logger.exception(
                "Attachment download failed",
                extra={"attachment": descriptor.name, "error": type(e).__name__},
            )
            raise FetchError(descriptor.name, e) from e

        # Some hosts finish auth redirect chains with a 3xx; accept [200, 400).
        if not 200 <= response.status_code < 400:
            logger.error(
                "Attachment download rejected",
                extra={
                    "attachment": descriptor.name,
                    "status_code": response.status_code,
                    "body": response.text[:300],
                },
            )
            raise FetchError(
                descriptor.name,
                Exception(f"File host returned HTTP {response.status_code}"),
            )

        artifact_path = work_dir / artifact_name(descriptor.name)
        try:
            artifact_path.write_bytes(response.content)
        except OSError as e:
            logger.exception(
                "Writing working artifact failed",
                extra={"attachment": descriptor.name, "path": str(artifact_path)},
            )
            raise FetchError(descriptor.name, e) from e

        logger.info(
            "Attachment downloaded",
            extra={
                "attachment": descriptor.name,
                "source_kind": descriptor.source_kind.value,
                "size": len(response.content),
                "redirects": len(response.history),
            },
        )
        return artifact_path
