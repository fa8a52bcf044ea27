"""
Domain errors for study material generation and chat.

Routers translate these into HTTP responses; services never catch their own
errors except where noted (chat fallback).
"""


class StudyBuddyError(Exception):
    """Base class for every error raised by the study services."""


class EmptyTopic(StudyBuddyError):
    def __init__(self, message: str = "Please enter a topic."):
        super().__init__(message)


class EmptyMessage(StudyBuddyError):
    def __init__(self, message: str = "Please enter a message."):
        super().__init__(message)


class InvalidMaterialKind(StudyBuddyError):
    def __init__(self, kind: object):
        self.kind = kind
        super().__init__(f"Invalid study material type: {kind!r}")


class ServiceFailure(StudyBuddyError):
    """The Gemini call itself failed (network, quota, bad key...)."""


class MalformedResponse(StudyBuddyError):
    """
    Gemini answered, but the text could not be decoded into the requested shape.

    `raw_text` and `cleaned_text` are kept for diagnostics only and must not be
    shown to the end user.
    """

    USER_MESSAGE = "The AI returned an invalid response format. Please try regenerating."

    def __init__(self, raw_text: str, cleaned_text: str, reason: str = ""):
        self.raw_text = raw_text
        self.cleaned_text = cleaned_text
        self.reason = reason
        super().__init__(self.USER_MESSAGE)
