"""Custom exceptions for the voice-gateway service."""


class AuthError(Exception):
    """Raised when the client-credentials token exchange fails."""

    def __init__(self, scope: str, cause: Exception | None = None):
        self.scope = scope
        self.cause = cause
        super().__init__(f"Failed to acquire access token for scope '{scope}'")


class FetchError(Exception):
    """Raised when downloading an attachment fails."""

    def __init__(self, file_name: str, cause: Exception | None = None):
        self.file_name = file_name
        self.cause = cause
        super().__init__(f"Failed to download attachment '{file_name}'")


class TranscodeError(Exception):
    """Raised when ffmpeg cannot be launched or its output cannot be read."""

    def __init__(self, file_name: str, cause: Exception | None = None):
        self.file_name = file_name
        self.cause = cause
        super().__init__(f"Failed to transcode audio file '{file_name}'")


class TranscriptionError(Exception):
    """Raised when audio transcription fails."""

    def __init__(self, file_name: str, cause: Exception | None = None):
        self.file_name = file_name
        self.cause = cause
        super().__init__(f"Failed to transcribe audio file '{file_name}'")


class DownstreamError(Exception):
    """Raised when the question-answering service call fails."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class ReplyDeliveryError(Exception):
    """Raised when posting an activity back to the conversation fails."""

    def __init__(self, conversation_id: str, cause: Exception | None = None):
        self.conversation_id = conversation_id
        self.cause = cause
        super().__init__(
            f"Failed to deliver activity to conversation '{conversation_id}'"
        )
