"""Error taxonomy. Each error carries the HTTP status it maps to."""


class TranscriptChatError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TranscriptChatError):
    status_code = 400


class NotFoundError(TranscriptChatError):
    status_code = 404


class TranscriptNotFound(NotFoundError):
    def __init__(self, message: str = "Transcript not found"):
        super().__init__(message)


# -- Provider failures --


class ProviderError(TranscriptChatError):
    status_code = 400


class NoCaptionsAvailable(ProviderError):
    pass


class VideoNotFound(ProviderError):
    pass


class QuotaExceeded(ProviderError):
    status_code = 503


class InvalidCredential(ProviderError):
    status_code = 500


class ConfigurationMissing(ProviderError):
    status_code = 500


# -- Assistant failures --


class AssistantError(TranscriptChatError):
    status_code = 500


class SummarizationFailed(AssistantError):
    pass


class ChatFailed(AssistantError):
    pass


class ContextTooLarge(AssistantError):
    status_code = 413
