"""
Domain Errors
Every failure the curation workflow can surface to a user.
"""

from enum import Enum


class CurationError(Exception):
    """Base class for curation failures. Carries a user-readable message."""

    default_message = "Something went wrong."

    def __init__(self, detail: str = "", user_message: str = ""):
        super().__init__(detail or user_message or self.default_message)
        self.user_message = user_message or self.default_message


class UnresolvableReason(str, Enum):
    NO_PATTERN = "NoPattern"
    NOT_FOUND = "NotFound"
    LOOKUP_FAILED = "LookupFailed"
    MISSING_CREDENTIAL = "MissingCredential"


_UNRESOLVABLE_MESSAGES = {
    UnresolvableReason.NO_PATTERN: (
        "Could not read a channel from that input. "
        "Use a channel ID (UC...), a channel link or an @handle."
    ),
    UnresolvableReason.NOT_FOUND: "No channel was found for that handle.",
    UnresolvableReason.LOOKUP_FAILED: (
        "Could not reach YouTube to resolve the channel. Please try again."
    ),
    UnresolvableReason.MISSING_CREDENTIAL: (
        "The YouTube API key is not configured, so handles cannot be resolved."
    ),
}


class ChannelUnresolvableError(CurationError):
    """Raised when a channel reference cannot be turned into a canonical ID."""

    def __init__(self, reason: UnresolvableReason, detail: str = ""):
        super().__init__(detail or reason.value, _UNRESOLVABLE_MESSAGES[reason])
        self.reason = reason


class ChangeLimitExceededError(CurationError):
    default_message = (
        "You have already set your channel the maximum number of times. "
        "Further changes are disabled."
    )


class CatalogFetchError(CurationError):
    """Raised when the upload catalog (or channel details) cannot be fetched."""

    default_message = "Could not load videos from YouTube."


class MissingCredentialError(CatalogFetchError):
    default_message = "The YouTube API key is not configured."


class ChannelNotReadyError(CurationError):
    default_message = "Still loading channel info. Please wait a moment."


class EmptySelectionError(CurationError):
    default_message = "Please select at least one video."


class SubmissionError(CurationError):
    """Raised when the sink rejects a submission or cannot be reached."""

    default_message = "Unknown error"

    def __init__(self, detail: str = "", sink_message: str = ""):
        message = sink_message or self.default_message
        super().__init__(detail or message, f"Submission failed: {message}")
        self.sink_message = sink_message


class SubmissionInProgressError(CurationError):
    default_message = "A submission is already in progress."
