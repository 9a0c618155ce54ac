"""Exception hierarchy for the TODO agent."""


class TodoAgentError(Exception):
    """Base exception for all TODO agent errors."""


class ConfigError(TodoAgentError):
    """Raised when the configuration cannot be loaded or is incomplete."""


class SuggestionError(TodoAgentError):
    """Raised when the completion service fails to produce a suggestion."""


class DeliveryError(TodoAgentError):
    """Raised when the email provider rejects or fails to accept a message."""
