"""Routes inbound Bot Framework activities."""

from gateway_common.logging import setup_logging

from domain import Activity
from domain.reply_builder import (
    EMPTY_MESSAGE_REPLY,
    QA_UNAVAILABLE_REPLY,
    TURN_ERROR_REPLY,
    WELCOME_REPLY,
)
from exceptions import DownstreamError
from infrastructure.interfaces import QuestionAnsweringService, ReplySender

from .voice_message_handler import VoiceMessageHandler

logger = setup_logging()


def remove_recipient_mentions(activity: Activity) -> str:
    """Strips ``<at>..</at>`` mentions of the bot itself from the message text."""
    text = activity.text or ""
    recipient_id = activity.recipient.id if activity.recipient else None
    for entity in activity.entities:
        if entity.type != "mention" or not entity.text or not entity.mentioned:
            continue
        if entity.mentioned.id == recipient_id:
            text = text.replace(entity.text, "")
    return text.strip()


class TurnHandler:
    """Handles one conversation turn: greeting, voice note or text question."""

    def __init__(
        self,
        replies: ReplySender,
        voice_handler: VoiceMessageHandler,
        qa_service: QuestionAnsweringService,
    ):
        self._replies = replies
        self._voice_handler = voice_handler
        self._qa_service = qa_service

    def on_turn(self, activity: Activity) -> None:
        """
        Processes an activity and sends the replies.

        Never raises: unexpected failures are logged and answered with a
        generic apology.
        """
        try:
            if activity.type == "message":
                self._on_message(activity)
            elif activity.type == "conversationUpdate":
                self._on_members_added(activity)
            else:
                logger.info("Ignoring activity", extra={"activity_type": activity.type})
        except Exception:
            logger.exception(
                "Turn failed",
                extra={"activity_type": activity.type, "activity_id": activity.id},
            )
            self._send_turn_error(activity)

    def _on_message(self, activity: Activity) -> None:
        if activity.attachments:
            self._replies.send_typing(activity)
            result = self._voice_handler.process(activity.attachments)
            if result is not None:
                self._replies.send_text(activity, result.reply_text)
                return

        text = remove_recipient_mentions(activity)
        if not text:
            self._replies.send_text(activity, EMPTY_MESSAGE_REPLY)
            return

        if not activity.attachments:
            self._replies.send_typing(activity)
        try:
            answer = self._qa_service.ask(text)
        except DownstreamError:
            logger.exception("Question answering failed", extra={"activity_id": activity.id})
            answer = QA_UNAVAILABLE_REPLY
        self._replies.send_text(activity, answer)

    def _on_members_added(self, activity: Activity) -> None:
        recipient_id = activity.recipient.id if activity.recipient else None
        for member in activity.members_added:
            if member.id != recipient_id:
                self._replies.send_text(activity, WELCOME_REPLY)

    def _send_turn_error(self, activity: Activity) -> None:
        try:
            self._replies.send_text(activity, TURN_ERROR_REPLY)
        except Exception:
            logger.exception(
                "Could not deliver turn error reply",
                extra={"activity_id": activity.id},
            )
