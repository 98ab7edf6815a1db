"""Dependency injection configuration for the voice-gateway service."""

import httpx
from gateway_common import setup_logging

from config import load_config
from domain import ReplyBuilder
from handlers import TurnHandler, VoiceMessageHandler
from infrastructure import (
    AssemblyAIStreamingTranscriber,
    BotConnectorClient,
    EntraTokenProvider,
    FfmpegTranscoder,
    FlowiseClient,
    HttpAttachmentFetcher,
)

logger = setup_logging()

_config = load_config()

# HTTP clients; downloads get their own client to bound redirect chains.
_api_client = httpx.Client()
_download_client = httpx.Client(max_redirects=_config.download.max_redirects)

# Identity platform
_file_host_tokens = EntraTokenProvider(_api_client, _config.file_host_token)
_connector_tokens = EntraTokenProvider(_api_client, _config.connector_token)

# Pipeline stages
_fetcher = HttpAttachmentFetcher(_download_client, _file_host_tokens, _config.download)
_transcoder = FfmpegTranscoder(_config.transcoder)
_transcription_service = AssemblyAIStreamingTranscriber(_config.assemblyai)
_qa_service = FlowiseClient(_api_client, _config.flowise)
_replies = BotConnectorClient(_api_client, _connector_tokens)


def get_voice_handler() -> VoiceMessageHandler:
    """Returns the configured voice message handler."""
    return VoiceMessageHandler(
        fetcher=_fetcher,
        transcoder=_transcoder,
        transcription_service=_transcription_service,
        qa_service=_qa_service,
        reply_builder=ReplyBuilder(),
        work_root=_config.download.work_root,
    )


def get_turn_handler() -> TurnHandler:
    """Returns the configured turn handler."""
    return TurnHandler(_replies, get_voice_handler(), _qa_service)


def get_port() -> int:
    """Returns the HTTP port to listen on."""
    return _config.port
