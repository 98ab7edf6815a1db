"""Handler layer exports."""

from .turn_handler import TurnHandler, remove_recipient_mentions
from .voice_message_handler import VoiceMessageHandler

__all__ = ["TurnHandler", "VoiceMessageHandler", "remove_recipient_mentions"]
