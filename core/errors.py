"""Exception types for spellbound content generation."""


class SpellboundError(Exception):
    """Base class for spellbound errors."""


class RemoteUnavailableError(SpellboundError):
    """The remote word generator failed, timed out or returned bad data."""


class InsufficientCorpusError(SpellboundError):
    """The offline corpus cannot satisfy a request of the given size."""

    def __init__(self, requested: int, available: int, detail: str = ''):
        self.requested = requested
        self.available = available
        message = f"Requested {requested} entries but only {available} available"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class ContentUnavailableError(SpellboundError):
    """Both remote and offline generation failed for a request."""
