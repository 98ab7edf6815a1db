"""Tests for activity routing."""

from unittest.mock import Mock

import pytest

from domain import PipelineStage, ReplyBuilder, VoiceTurnResult
from domain.reply_builder import (
    EMPTY_MESSAGE_REPLY,
    QA_UNAVAILABLE_REPLY,
    TURN_ERROR_REPLY,
    WELCOME_REPLY,
)
from exceptions import DownstreamError, ReplyDeliveryError
from handlers import TurnHandler, VoiceMessageHandler, remove_recipient_mentions
from infrastructure.interfaces import (
    AttachmentFetcher,
    AudioTranscoder,
    QuestionAnsweringService,
    ReplySender,
    TranscriptionService,
)


@pytest.fixture
def replies():
    return Mock(spec=ReplySender)


@pytest.fixture
def qa_service():
    qa_service = Mock(spec=QuestionAnsweringService)
    qa_service.ask.return_value = "Hello! How can I help?"
    return qa_service


@pytest.fixture
def voice_handler():
    return Mock(spec=VoiceMessageHandler)


MENTION = {
    "type": "mention",
    "text": "<at>Assistant</at>",
    "mentioned": {"id": "bot-1", "name": "Assistant"},
}


class TestRemoveRecipientMentions:
    def test_strips_bot_mention(self, make_activity):
        activity = make_activity(text="<at>Assistant</at> what is the refund policy?", entities=[MENTION])

        assert remove_recipient_mentions(activity) == "what is the refund policy?"

    def test_keeps_other_mentions(self, make_activity):
        other = dict(MENTION, text="<at>Sam</at>", mentioned={"id": "user-2", "name": "Sam"})
        activity = make_activity(text="ask <at>Sam</at>", entities=[other])

        assert remove_recipient_mentions(activity) == "ask <at>Sam</at>"

    def test_no_text(self, make_activity):
        assert remove_recipient_mentions(make_activity(text=None)) == ""


class TestTextMessages:
    def test_plain_text_goes_to_qa_without_fetching(self, make_activity, replies, qa_service):
        fetcher = Mock(spec=AttachmentFetcher)
        voice_handler = VoiceMessageHandler(
            fetcher=fetcher,
            transcoder=Mock(spec=AudioTranscoder),
            transcription_service=Mock(spec=TranscriptionService),
            qa_service=qa_service,
            reply_builder=ReplyBuilder(),
        )
        activity = make_activity(text="hello")

        TurnHandler(replies, voice_handler, qa_service).on_turn(activity)

        qa_service.ask.assert_called_once_with("hello")
        replies.send_typing.assert_called_once_with(activity)
        replies.send_text.assert_called_once_with(activity, "Hello! How can I help?")
        fetcher.fetch.assert_not_called()

    def test_mention_only_message(self, make_activity, replies, qa_service, voice_handler):
        activity = make_activity(text="<at>Assistant</at>", entities=[MENTION])

        TurnHandler(replies, voice_handler, qa_service).on_turn(activity)

        replies.send_text.assert_called_once_with(activity, EMPTY_MESSAGE_REPLY)
        qa_service.ask.assert_not_called()

    def test_non_audio_attachment_falls_back_to_text(
        self, make_activity, replies, qa_service, voice_handler
    ):
        voice_handler.process.return_value = None
        activity = make_activity(
            text="what does this show?",
            attachments=[{"contentType": "image/png", "name": "chart.png"}],
        )

        TurnHandler(replies, voice_handler, qa_service).on_turn(activity)

        qa_service.ask.assert_called_once_with("what does this show?")
        replies.send_typing.assert_called_once()

    def test_qa_failure_answers_politely(self, make_activity, replies, qa_service, voice_handler):
        qa_service.ask.side_effect = DownstreamError("Flowise returned 500")
        activity = make_activity(text="hello")

        TurnHandler(replies, voice_handler, qa_service).on_turn(activity)

        replies.send_text.assert_called_once_with(activity, QA_UNAVAILABLE_REPLY)


class TestVoiceMessages:
    def test_sends_pipeline_reply(self, make_activity, replies, qa_service, voice_handler):
        voice_handler.process.return_value = VoiceTurnResult(
            attachment_name="question.ogg",
            stage=PipelineStage.DONE,
            transcript="what is the refund policy",
            answer="Refunds within 30 days.",
            reply_text="📝 Transcript: what is the refund policy\n\n💬 Answer: Refunds within 30 days.",
        )
        activity = make_activity(
            attachments=[{"contentType": "audio/ogg", "name": "question.ogg", "contentUrl": "https://x/q.ogg"}]
        )

        TurnHandler(replies, voice_handler, qa_service).on_turn(activity)

        replies.send_typing.assert_called_once_with(activity)
        replies.send_text.assert_called_once_with(
            activity,
            "📝 Transcript: what is the refund policy\n\n💬 Answer: Refunds within 30 days.",
        )
        qa_service.ask.assert_not_called()


class TestConversationUpdate:
    def test_welcomes_new_members_only(self, make_activity, replies, qa_service, voice_handler):
        activity = make_activity(
            type="conversationUpdate",
            membersAdded=[{"id": "bot-1"}, {"id": "user-1", "name": "Dana"}],
        )

        TurnHandler(replies, voice_handler, qa_service).on_turn(activity)

        replies.send_text.assert_called_once_with(activity, WELCOME_REPLY)

    def test_ignores_other_activities(self, make_activity, replies, qa_service, voice_handler):
        TurnHandler(replies, voice_handler, qa_service).on_turn(make_activity(type="messageReaction"))

        replies.send_text.assert_not_called()
        replies.send_typing.assert_not_called()


class TestTurnErrors:
    def test_unexpected_error_sends_apology(self, make_activity, replies, qa_service, voice_handler):
        qa_service.ask.side_effect = RuntimeError("boom")
        activity = make_activity(text="hello")

        TurnHandler(replies, voice_handler, qa_service).on_turn(activity)

        replies.send_text.assert_called_once_with(activity, TURN_ERROR_REPLY)

    def test_apology_delivery_failure_is_contained(
        self, make_activity, replies, qa_service, voice_handler
    ):
        replies.send_typing.side_effect = ReplyDeliveryError("a:conv-1")
        replies.send_text.side_effect = ReplyDeliveryError("a:conv-1")

        TurnHandler(replies, voice_handler, qa_service).on_turn(make_activity(text="hello"))

        replies.send_text.assert_called_once()
