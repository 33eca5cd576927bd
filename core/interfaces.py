"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod

from .models import Difficulty, HomophoneChallenge, WordChallenge


class WordGenerator(ABC):
    """Abstract base class for a remote challenge generator.

    Implementations may raise any exception; callers treat every failure
    the same way.
    """

    @abstractmethod
    async def generate_word_list(self, difficulty: Difficulty, count: int,
                                 category: str | None = None) -> list[WordChallenge]:
        """Generate `count` words for a difficulty, optionally themed."""
        pass

    @abstractmethod
    async def generate_homophones(self, difficulty: Difficulty, count: int) -> list[HomophoneChallenge]:
        """Generate `count` homophone challenges."""
        pass

    @abstractmethod
    async def generate_remedial_word_list(self, missed_words: list[str], count: int) -> list[WordChallenge]:
        """Generate practice words targeting previously missed words."""
        pass

    @abstractmethod
    async def generate_remedial_homophones(self, missed_words: list[str],
                                           count: int) -> list[HomophoneChallenge]:
        """Generate homophone practice targeting previously missed words."""
        pass

    @abstractmethod
    async def generate_daily_word(self, difficulty: Difficulty) -> WordChallenge:
        """Generate the word of the day."""
        pass


class Storage(ABC):
    """Abstract base class for key-value persistence.

    Values are JSON-compatible and always written whole.
    """

    @abstractmethod
    def get(self, key: str):
        """Return the value stored under key, or None."""
        pass

    @abstractmethod
    def set(self, key: str, value) -> None:
        """Replace the value stored under key."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete key. Missing keys are ignored."""
        pass
