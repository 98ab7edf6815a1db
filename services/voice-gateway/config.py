"""Application configuration loaded from environment variables."""

import os
import tempfile
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, SecretStr

TOKEN_URL_TEMPLATE = "https://login.microsoftonline.com/{tenant_id}/oauth2/v2.0/token"
GRAPH_SCOPE = "https://graph.microsoft.com/.default"
BOT_FRAMEWORK_SCOPE = "https://api.botframework.com/.default"


class BotConfig(BaseModel, frozen=True):
    """Bot Framework app registration (single tenant)."""

    app_id: str
    app_password: SecretStr
    tenant_id: str


class TokenConfig(BaseModel, frozen=True):
    """Client-credentials exchange for one downstream API scope."""

    tenant_id: str
    client_id: str
    client_secret: SecretStr
    scope: str
    timeout_seconds: float = 20.0

    @property
    def token_url(self) -> str:
        return TOKEN_URL_TEMPLATE.format(tenant_id=self.tenant_id)


class DownloadConfig(BaseModel, frozen=True):
    """Authenticated attachment download settings."""

    timeout_seconds: float = 60.0
    max_redirects: int = 5
    work_root: Path = Path(tempfile.gettempdir())


class TranscoderConfig(BaseModel, frozen=True):
    """ffmpeg transcode settings."""

    ffmpeg_path: str = "ffmpeg"
    deadline_seconds: float = 90.0
    chunk_size: int = 3200  # 100 ms of 16 kHz mono PCM16


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI streaming recognition configuration."""

    api_key: SecretStr
    region: Literal["us", "eu"] = "us"
    language: str = "en-US"
    sample_rate: int = 16000
    # Multiple of real time; 0 disables pacing. At 1.0 notes longer than about
    # 85 s outlast the transcode deadline, so raise it for long recordings.
    stream_speed: float = 1.0


class FlowiseConfig(BaseModel, frozen=True):
    """Flowise prediction endpoint configuration."""

    url: str = ""
    api_key: SecretStr | None = None
    timeout_seconds: float = 60.0


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    bot: BotConfig
    file_host_token: TokenConfig
    connector_token: TokenConfig
    download: DownloadConfig
    transcoder: TranscoderConfig
    assemblyai: AssemblyAIConfig
    flowise: FlowiseConfig
    port: int = 3978


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    bot = BotConfig(
        app_id=os.getenv("MICROSOFT_APP_ID", ""),
        app_password=os.getenv("MICROSOFT_APP_PASSWORD", ""),
        tenant_id=os.getenv("MICROSOFT_APP_TENANT_ID", ""),
    )
    flowise_api_key = os.getenv("FLOWISE_API_KEY")
    return AppConfig(
        bot=bot,
        file_host_token=TokenConfig(
            tenant_id=bot.tenant_id,
            client_id=bot.app_id,
            client_secret=bot.app_password,
            scope=os.getenv("FILE_HOST_SCOPE", GRAPH_SCOPE),
        ),
        connector_token=TokenConfig(
            tenant_id=bot.tenant_id,
            client_id=bot.app_id,
            client_secret=bot.app_password,
            scope=BOT_FRAMEWORK_SCOPE,
        ),
        download=DownloadConfig(
            work_root=Path(os.getenv("AUDIO_WORK_DIR", tempfile.gettempdir())),
        ),
        transcoder=TranscoderConfig(
            ffmpeg_path=os.getenv("FFMPEG_PATH", "ffmpeg"),
            deadline_seconds=float(os.getenv("TRANSCODE_DEADLINE_SECONDS", "90")),
        ),
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
            region=os.getenv("SPEECH_REGION", "us"),
            language=os.getenv("SPEECH_LANGUAGE", "en-US"),
            stream_speed=float(os.getenv("SPEECH_STREAM_SPEED", "1.0")),
        ),
        flowise=FlowiseConfig(
            url=os.getenv("FLOWISE_URL", ""),
            api_key=flowise_api_key or None,
        ),
        port=int(os.getenv("PORT", "3978")),
    )
