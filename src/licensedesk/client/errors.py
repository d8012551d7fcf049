"""
Intake Client Errors

Every failure the client surfaces carries a user-facing ``message``.
"""


class IntakeClientError(Exception):
    """Base exception for intake client errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class FormValidationError(IntakeClientError):
    """A check failed before any network call (missing field, bad file)."""


class InvalidResponseError(IntakeClientError):
    """The proxy answered with HTML or malformed JSON."""


class ApiError(IntakeClientError):
    """The proxy or script endpoint answered with an explicit error payload."""


class RequestFailedError(IntakeClientError):
    """The request did not complete, or a read came back non-2xx."""
