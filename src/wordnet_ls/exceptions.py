"""Custom exception hierarchy for wordnet-ls."""


class WordnetLsError(Exception):
    """Base exception for all wordnet-ls errors."""


class ConfigurationError(WordnetLsError):
    """Missing or invalid startup configuration (options, dictionary location)."""


class LexiconError(WordnetLsError):
    """The lexical database cannot be opened."""


class ProtocolError(WordnetLsError):
    """Malformed or out-of-sequence protocol traffic."""

    def __init__(self, message: str, code: int = -32600):
        super().__init__(message)
        self.code = code
        self.message = message


class ExitBeforeShutdownError(ProtocolError):
    """Exit notification received before a shutdown request."""
