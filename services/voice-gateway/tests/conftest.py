"""Shared fixtures for voice-gateway tests."""

from pathlib import Path

import httpx
import pytest
from pydantic import SecretStr

from config import AssemblyAIConfig, DownloadConfig, TokenConfig, TranscoderConfig
from domain.models import AccessToken, Activity
from infrastructure.interfaces import TokenProvider


class StaticTokenProvider(TokenProvider):
    """Returns a fixed token and counts exchanges."""

    def __init__(self, value: str = "test-token"):
        self.value = value
        self.calls = 0

    def acquire_token(self) -> AccessToken:
        self.calls += 1
        return AccessToken(value=self.value, expires_in=3599)


@pytest.fixture
def token_provider() -> StaticTokenProvider:
    return StaticTokenProvider()


@pytest.fixture
def token_config() -> TokenConfig:
    return TokenConfig(
        tenant_id="tenant-123",
        client_id="app-456",
        client_secret=SecretStr("s3cr3t"),
        scope="https://graph.microsoft.com/.default",
    )


@pytest.fixture
def download_config(tmp_path: Path) -> DownloadConfig:
    return DownloadConfig(work_root=tmp_path)


@pytest.fixture
def transcoder_config() -> TranscoderConfig:
    return TranscoderConfig(deadline_seconds=10)


@pytest.fixture
def assemblyai_config() -> AssemblyAIConfig:
    return AssemblyAIConfig(api_key=SecretStr("aai-key"), stream_speed=0)


@pytest.fixture
def mock_http_client():
    """Builds an httpx.Client whose requests are answered by `handler`."""

    clients = []

    def _build(handler, **kwargs) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler), **kwargs)
        clients.append(client)
        return client

    yield _build
    for client in clients:
        client.close()


@pytest.fixture
def make_activity():
    """Builds an inbound Teams activity from wire-format overrides."""

    def _build(**overrides) -> Activity:
        payload = {
            "type": "message",
            "id": "activity-1",
            "channelId": "msteams",
            "serviceUrl": "https://smba.trafficmanager.net/emea/",
            "from": {"id": "user-1", "name": "Dana"},
            "recipient": {"id": "bot-1", "name": "Assistant"},
            "conversation": {"id": "a:conv-1", "tenantId": "tenant-123"},
        }
        payload.update(overrides)
        return Activity.model_validate(payload)

    return _build
