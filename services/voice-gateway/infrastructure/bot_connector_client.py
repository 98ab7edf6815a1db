"""Bot Connector REST implementation of the ReplySender interface."""

from urllib.parse import quote

import httpx
from gateway_common.logging import setup_logging

from domain.models import Activity, ChannelAccount
from exceptions import ReplyDeliveryError

from .interfaces import ReplySender, TokenProvider

logger = setup_logging()


class BotConnectorClient(ReplySender):
    """Posts reply activities to the channel's service URL."""

    def __init__(
        self,
        client: httpx.Client,
        token_provider: TokenProvider,
        timeout_seconds: float = 15.0,
    ):
        self._client = client
        self._token_provider = token_provider
        self._timeout_seconds = timeout_seconds

    def send_text(self, incoming: Activity, text: str) -> None:
        self._post(incoming, {"type": "message", "text": text, "textFormat": "markdown"})

    def send_typing(self, incoming: Activity) -> None:
        self._post(incoming, {"type": "typing"})

    def _post(self, incoming: Activity, body: dict) -> None:
        conversation_id = incoming.conversation.id if incoming.conversation else ""
        if not incoming.service_url or not conversation_id:
            raise ReplyDeliveryError(
                conversation_id, ValueError("Activity has no serviceUrl or conversation")
            )

        url = self._reply_url(incoming.service_url, conversation_id, incoming.id)
        payload = {
            **body,
            "from": _account(incoming.recipient),
            "recipient": _account(incoming.from_),
            "conversation": {"id": conversation_id},
        }
        if incoming.id:
            payload["replyToId"] = incoming.id

        token = self._token_provider.acquire_token()
        try:
            response = self._client.post(
                url,
                json=payload,
                headers={"Authorization": f"Bearer {token.value.get_secret_value()}"},
                timeout=self._timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.exception(
                "Reply delivery failed",
                extra={"conversation_id": conversation_id, "activity_type": body["type"]},
            )
            raise ReplyDeliveryError(conversation_id, e) from e

        logger.info(
            "Reply delivered",
            extra={"conversation_id": conversation_id, "activity_type": body["type"]},
        )

    @staticmethod
    def _reply_url(service_url: str, conversation_id: str, activity_id: str | None) -> str:
        base = f"{service_url.rstrip('/')}/v3/conversations/{quote(conversation_id, safe='')}/activities"
        if activity_id:
            return f"{base}/{quote(activity_id, safe='')}"
        return base


def _account(account: ChannelAccount | None) -> dict:
    if account is None:
        return {}
    return account.model_dump(by_alias=True, exclude_none=True)
