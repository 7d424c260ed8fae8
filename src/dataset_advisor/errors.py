from __future__ import annotations


class DatasetAdvisorError(Exception):
    """Base class for failures surfaced to the user as a short message.

    None of these are fatal to a session: the user can always re-upload,
    retry, or reset.
    """

    default_message = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ParseError(DatasetAdvisorError):
    """Raised when an upload cannot be profiled (empty, undecodable, unreadable)."""

    default_message = "Failed to parse file. Ensure it is a valid CSV."


class AnalysisError(DatasetAdvisorError):
    """Raised when the remote report could not be produced or was malformed."""

    default_message = "AI analysis failed. Please try again."


class ConfigurationError(AnalysisError):
    """The inference service rejected our configuration (bad key, bad model, ...)."""

    default_message = "The AI service rejected the configured credentials."


class MissingCredentialError(ConfigurationError):
    """No API key is configured at all."""

    default_message = "No API key configured. Set OPENAI_API_KEY and try again."


class ChatError(DatasetAdvisorError):
    """Raised when a follow-up question fails. The prior report stays valid."""

    default_message = "Sorry, I had trouble processing that request."
