"""User-facing reply texts for voice and text turns."""

from .models import PipelineStage

NO_SPEECH_REPLY = "🔇 No speech detected in the voice note. Please try recording again."
WELCOME_REPLY = (
    "Hi! I'm connected to the knowledge assistant. Send me a question, "
    "or a voice note, and I'll ask the RAG agent."
)
EMPTY_MESSAGE_REPLY = "Please send a message."
TURN_ERROR_REPLY = "Oops. Something went wrong."
QA_UNAVAILABLE_REPLY = "Sorry, I couldn't get an answer right now. Please try again later."

_FAILURE_TEMPLATES = {
    PipelineStage.FETCHING: "Sorry, I couldn't download the voice note '{name}'. Please send it again.",
    PipelineStage.TRANSCODING: "Sorry, I couldn't read the audio in '{name}'. Please send it again.",
    PipelineStage.TRANSCRIBING: "Sorry, I couldn't transcribe the voice note '{name}'. Please send it again.",
    PipelineStage.QUERYING: "I transcribed '{name}' but couldn't get an answer right now. Please try again later.",
}
_GENERIC_FAILURE = "Sorry, I couldn't process the voice note '{name}'."


class ReplyBuilder:
    """Builds the chat replies for a voice-note turn."""

    def transcript_reply(self, transcript: str, answer: str) -> str:
        """Transcript first, then the answer."""
        return f"📝 Transcript: {transcript}\n\n💬 Answer: {answer}"

    def no_speech_reply(self) -> str:
        return NO_SPEECH_REPLY

    def failure_reply(self, stage: PipelineStage, attachment_name: str) -> str:
        """
        Builds the apology for a failed stage.

        Only the attachment name is interpolated; error details stay in the logs.
        """
        template = _FAILURE_TEMPLATES.get(stage, _GENERIC_FAILURE)
        return template.format(name=attachment_name)
