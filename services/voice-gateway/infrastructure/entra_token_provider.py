"""Microsoft Entra ID client-credentials implementation of TokenProvider."""

import httpx
from gateway_common.logging import setup_logging

from config import TokenConfig
from domain.models import AccessToken
from exceptions import AuthError

from .interfaces import TokenProvider

logger = setup_logging()


class EntraTokenProvider(TokenProvider):
    """Acquires app-only tokens for a single API scope."""

    def __init__(self, client: httpx.Client, config: TokenConfig):
        self._client = client
        self._config = config

    def acquire_token(self) -> AccessToken:
        """
        Runs one client-credentials exchange. Tokens are not cached.

        Raises:
            AuthError: On transport errors, the 20 second timeout, a non-200
                status or a response without an access token.
        """
        form = {
            "grant_type": "client_credentials",
            "client_id": self._config.client_id,
            "client_secret": self._config.client_secret.get_secret_value(),
            "scope": self._config.scope,
        }
        try:
            response = self._client.post(
                self._config.token_url,
                data=form,
                timeout=self._config.timeout_seconds,
            )
        except httpx.HTTPError as e:
            logger.exception(
                "Token exchange request failed",
                extra={"scope": self._config.scope, "error": type(e).__name__},
            )
            raise AuthError(self._config.scope, e) from e

        if response.status_code != 200:
            logger.error(
                "Token exchange rejected",
                extra={
                    "scope": self._config.scope,
                    "status_code": response.status_code,
                    "body": response.text[:500],
                },
            )
            raise AuthError(
                self._config.scope,
                Exception(f"Token endpoint returned HTTP {response.status_code}"),
            )

        try:
            payload = response.json()
            access_token = payload["access_token"]
        except (ValueError, KeyError, TypeError) as e:
            logger.exception(
                "Token response missing access_token",
                extra={"scope": self._config.scope},
            )
            raise AuthError(self._config.scope, e) from e

        logger.info("Access token acquired", extra={"scope": self._config.scope})
        return AccessToken(value=access_token, expires_in=payload.get("expires_in"))
