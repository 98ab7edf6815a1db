"""Abstract interface for sending activities back to a conversation."""

from abc import ABC, abstractmethod

from domain.models import Activity


class ReplySender(ABC):
    """Abstract base class for conversation reply channels."""

    @abstractmethod
    def send_text(self, incoming: Activity, text: str) -> None:
        """
        Replies to an inbound activity with a text message.

        Raises:
            ReplyDeliveryError: If the reply cannot be delivered.
        """

    @abstractmethod
    def send_typing(self, incoming: Activity) -> None:
        """
        Shows a typing indicator in the inbound activity's conversation.

        Raises:
            ReplyDeliveryError: If the activity cannot be delivered.
        """
