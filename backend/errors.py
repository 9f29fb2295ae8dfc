"""Error taxonomy for the conversation pipeline."""


class ConversationError(Exception):
    """Base class for errors raised by the conversation pipeline."""


class ValidationError(ConversationError):
    """Required request input is missing. Raised before any collaborator call."""


class ProviderError(ConversationError):
    """The completion provider failed or returned unusable output."""


class ExtractionError(ConversationError):
    """No JSON object could be recovered from a model reply."""


class PersistenceError(ConversationError):
    """A history store or export sink read/write failed."""
