"""Abstract interface for access-token acquisition."""

from abc import ABC, abstractmethod

from domain.models import AccessToken


class TokenProvider(ABC):
    """Abstract base class for bearer-token sources."""

    @abstractmethod
    def acquire_token(self) -> AccessToken:
        """
        Exchanges service credentials for a fresh access token.

        Returns:
            The issued access token.

        Raises:
            AuthError: If the exchange fails or times out.
        """
        pass
