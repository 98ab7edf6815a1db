"""Flowise implementation of the QuestionAnsweringService interface."""

import httpx
from gateway_common.logging import setup_logging

from config import FlowiseConfig
from domain.answer_extractor import extract_answer
from exceptions import DownstreamError

from .interfaces import QuestionAnsweringService

logger = setup_logging()

NOT_CONFIGURED_ANSWER = "[QA service not configured: set FLOWISE_URL]"


class FlowiseClient(QuestionAnsweringService):
    """Asks a Flowise prediction endpoint."""

    def __init__(self, client: httpx.Client, config: FlowiseConfig):
        self._client = client
        self._config = config

    def ask(self, question: str) -> str:
        """
        Posts the question and extracts the answer from the response.

        Args:
            question: Resolved user text (typed or transcribed).

        Returns:
            The answer text, or a labeled marker for empty and unrecognized
            payloads.

        Raises:
            DownstreamError: On transport errors, timeouts or non-2xx status.
        """
        if not self._config.url:
            logger.warning("Flowise URL not configured")
            return NOT_CONFIGURED_ANSWER

        try:
            response = self._client.post(
                self._config.url,
                json={"question": question},
                headers=self._headers(),
                timeout=self._config.timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Flowise returned an error status",
                extra={
                    "status_code": e.response.status_code,
                    "body": e.response.text[:500],
                },
            )
            raise DownstreamError(
                f"Flowise returned HTTP {e.response.status_code}", cause=e
            ) from e
        except httpx.HTTPError as e:
            logger.exception("Flowise request failed")
            raise DownstreamError(f"Flowise request failed: {e}", cause=e) from e

        try:
            payload = response.json()
        except ValueError:
            payload = response.text

        logger.info("Flowise answered", extra={"question_length": len(question)})
        return extract_answer(payload)

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._config.api_key:
            api_key = self._config.api_key.get_secret_value()
            # Deployments differ in which header they read.
            headers["Authorization"] = f"Bearer {api_key}"
            headers["x-api-key"] = api_key
        return headers
