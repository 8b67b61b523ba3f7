"""Domain exceptions raised by the services and mapped to HTTP responses in main.py."""

from enum import Enum


class MatcherError(Exception):
    """Base class for all errors the API knows how to report."""


class InvalidVacancyError(MatcherError):
    pass


class ResumeParsingError(MatcherError):
    def __init__(self, message: str, filename: str | None = None):
        super().__init__(message)
        self.filename = filename


class PromptManagementError(MatcherError):
    pass


class LLMErrorCategory(str, Enum):
    rate_limit = "rate_limit"
    authentication = "authentication"
    permission = "permission"
    not_found = "not_found"
    bad_request = "bad_request"
    server_error = "server_error"
    unavailable = "unavailable"
    unknown = "unknown"


class LLMServiceError(MatcherError):
    """A failed LLM call, classified where it happened.

    Non-transient from the caller's point of view: the match request is
    aborted and the category decides the HTTP status.
    """

    def __init__(self, category: LLMErrorCategory, message: str):
        super().__init__(message)
        self.category = category
        self.message = message
