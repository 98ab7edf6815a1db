"""Infrastructure layer exports."""

from .assemblyai_transcriber import AssemblyAIStreamingTranscriber
from .bot_connector_client import BotConnectorClient
from .entra_token_provider import EntraTokenProvider
from .ffmpeg_transcoder import FfmpegTranscoder
from .flowise_client import FlowiseClient
from .http_attachment_fetcher import HttpAttachmentFetcher

__all__ = [
    "AssemblyAIStreamingTranscriber",
    "BotConnectorClient",
    "EntraTokenProvider",
    "FfmpegTranscoder",
    "FlowiseClient",
    "HttpAttachmentFetcher",
]
