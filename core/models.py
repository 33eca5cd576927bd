"""Domain models for spellbound application."""

from dataclasses import dataclass, field
from enum import Enum

from .config import ADVENTURE_PASS_RATIO


class Difficulty(str, Enum):
    """Difficulty tiers, ordered from EASY to EXTREME."""

    EASY = 'EASY'
    MEDIUM = 'MEDIUM'
    HARD = 'HARD'
    EXTREME = 'EXTREME'

    @property
    def rank(self) -> int:
        return list(Difficulty).index(self)

    def __lt__(self, other):
        if isinstance(other, Difficulty):
            return self.rank < other.rank
        return NotImplemented

    def __le__(self, other):
        if isinstance(other, Difficulty):
            return self.rank <= other.rank
        return NotImplemented

    def __gt__(self, other):
        if isinstance(other, Difficulty):
            return self.rank > other.rank
        return NotImplemented

    def __ge__(self, other):
        if isinstance(other, Difficulty):
            return self.rank >= other.rank
        return NotImplemented

    def neighbours(self) -> list['Difficulty']:
        """Adjacent tiers, nearest first (lower before higher on ties)."""
        tiers = list(Difficulty)
        result = []
        if self.rank > 0:
            result.append(tiers[self.rank - 1])
        if self.rank < len(tiers) - 1:
            result.append(tiers[self.rank + 1])
        return result


class GameVariant(str, Enum):
    """The fifteen game modes."""

    CLASSIC = 'CLASSIC'
    SPEED = 'SPEED'
    HOMOPHONE = 'HOMOPHONE'
    MISSING_LETTER = 'MISSING_LETTER'
    SCRAMBLE = 'SCRAMBLE'
    SENTENCE_SPELL = 'SENTENCE_SPELL'
    WHISPER = 'WHISPER'
    ADVENTURE = 'ADVENTURE'
    BOSS = 'BOSS'
    DAILY = 'DAILY'
    MULTIPLAYER = 'MULTIPLAYER'
    WHEEL = 'WHEEL'
    SILENT_LETTER = 'SILENT_LETTER'
    REVERSE = 'REVERSE'
    MEMORY = 'MEMORY'

    @property
    def uses_homophones(self) -> bool:
        return self is GameVariant.HOMOPHONE


GAME_TITLES = {
    GameVariant.CLASSIC: 'Spell by Sound',
    GameVariant.HOMOPHONE: 'Homophone Battle',
    GameVariant.SPEED: 'Speed Speller',
    GameVariant.MISSING_LETTER: 'Missing Letter',
    GameVariant.SCRAMBLE: 'Unscramble',
    GameVariant.SENTENCE_SPELL: 'Sentence to Spelling',
    GameVariant.WHISPER: 'Whisper Mode',
    GameVariant.ADVENTURE: 'Word Journey',
    GameVariant.BOSS: 'Boss Fight',
    GameVariant.DAILY: 'Daily Challenge',
    GameVariant.MULTIPLAYER: '1v1 Battle',
    GameVariant.WHEEL: 'Spin the Wheel',
    GameVariant.SILENT_LETTER: 'Silent Hunters',
    GameVariant.REVERSE: 'Reverse Spelling',
    GameVariant.MEMORY: 'Memory Flash',
}


@dataclass(frozen=True)
class WordChallenge:
    """A single word to spell, with its definition and usage."""

    word: str
    definition: str
    example_sentence: str

    def matches(self, answer: str) -> bool:
        return answer.strip().lower() == self.word.lower()

    def to_dict(self) -> dict:
        return {
            'word': self.word,
            'definition': self.definition,
            'example_sentence': self.example_sentence
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'WordChallenge':
        return cls(
            word=data['word'],
            definition=data.get('definition', ''),
            example_sentence=data.get('example_sentence', data.get('exampleSentence', ''))
        )


@dataclass(frozen=True)
class HomophoneChallenge:
    """A fill-in-the-blank sentence with a fixed set of homophone options."""

    sentence: str
    definition: str
    correct_word: str
    options: tuple = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'options', tuple(self.options))
        lowered = [o.lower() for o in self.options]
        if lowered.count(self.correct_word.lower()) != 1:
            raise ValueError(f"Options must contain '{self.correct_word}' exactly once")
        if len(set(lowered)) != len(lowered):
            raise ValueError(f"Duplicate options for '{self.correct_word}'")

    def matches(self, answer: str) -> bool:
        return answer.strip().lower() == self.correct_word.lower()

    def to_dict(self) -> dict:
        return {
            'sentence': self.sentence,
            'definition': self.definition,
            'correct_word': self.correct_word,
            'options': list(self.options)
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'HomophoneChallenge':
        return cls(
            sentence=data['sentence'],
            definition=data.get('definition', ''),
            correct_word=data.get('correct_word', data.get('correctWord', '')),
            options=tuple(data.get('options', []))
        )


class MasteryRecord:
    """Per-word performance history."""

    def __init__(self, word: str, correct_count: int = 0, incorrect_count: int = 0,
                 last_seen: float = 0.0):
        self.word = word
        self.correct_count = correct_count
        self.incorrect_count = incorrect_count
        self.last_seen = last_seen

    @property
    def attempts(self) -> int:
        return self.correct_count + self.incorrect_count

    @property
    def mastery_score(self) -> float | None:
        """Ratio of correct attempts, or None when the word was never seen."""
        if self.attempts == 0:
            return None
        return self.correct_count / self.attempts

    def with_attempt(self, was_correct: bool, timestamp: float) -> 'MasteryRecord':
        """Return a new record including one more attempt."""
        return MasteryRecord(
            self.word,
            self.correct_count + (1 if was_correct else 0),
            self.incorrect_count + (0 if was_correct else 1),
            timestamp
        )

    def to_dict(self) -> dict:
        return {
            'word': self.word,
            'correct_count': self.correct_count,
            'incorrect_count': self.incorrect_count,
            'last_seen': self.last_seen
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'MasteryRecord':
        return cls(
            data['word'],
            int(data.get('correct_count', 0)),
            int(data.get('incorrect_count', 0)),
            float(data.get('last_seen', 0.0))
        )


class AdventureLevel:
    """One level of an adventure campaign."""

    def __init__(self, id: str, name: str, difficulty: Difficulty, theme: str,
                 is_unlocked: bool = False, is_completed: bool = False):
        self.id = id
        self.name = name
        self.difficulty = difficulty
        self.theme = theme
        self.is_unlocked = is_unlocked
        self.is_completed = is_completed

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'difficulty': self.difficulty.value,
            'theme': self.theme,
            'is_unlocked': self.is_unlocked,
            'is_completed': self.is_completed
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'AdventureLevel':
        return cls(
            data['id'],
            data['name'],
            Difficulty(data['difficulty']),
            data.get('theme', ''),
            data.get('is_unlocked', False),
            data.get('is_completed', False)
        )


class Campaign:
    """Four-level adventure, one level per difficulty in increasing order."""

    LEVEL_NAMES = {
        Difficulty.EASY: 'Beginner {theme}',
        Difficulty.MEDIUM: '{theme} Explorer',
        Difficulty.HARD: 'Master of {theme}',
        Difficulty.EXTREME: 'Legend of {theme}',
    }

    def __init__(self, theme: str, levels: list[AdventureLevel]):
        self.theme = theme
        self.levels = levels

    @classmethod
    def new(cls, theme: str) -> 'Campaign':
        levels = []
        for i, difficulty in enumerate(Difficulty):
            levels.append(AdventureLevel(
                id=f'l{i + 1}',
                name=cls.LEVEL_NAMES[difficulty].format(theme=theme),
                difficulty=difficulty,
                theme=theme,
                is_unlocked=(i == 0)
            ))
        return cls(theme, levels)

    def get_level(self, level_id: str) -> AdventureLevel | None:
        for level in self.levels:
            if level.id == level_id:
                return level
        return None

    def record_result(self, difficulty: Difficulty, correct: int, total: int) -> bool:
        """Complete the level and unlock the next when the pass mark is met.

        Returns True if a new level was unlocked. The final level is never
        marked by this rule, matching the unlock-driven progression.
        """
        if total <= 0 or correct < int(total * ADVENTURE_PASS_RATIO):
            return False
        for i, level in enumerate(self.levels):
            if level.difficulty != difficulty:
                continue
            if i >= len(self.levels) - 1:
                return False
            level.is_completed = True
            newly_unlocked = not self.levels[i + 1].is_unlocked
            self.levels[i + 1].is_unlocked = True
            return newly_unlocked
        return False

    def to_dict(self) -> dict:
        return {
            'theme': self.theme,
            'levels': [level.to_dict() for level in self.levels]
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Campaign':
        return cls(data['theme'], [AdventureLevel.from_dict(l) for l in data.get('levels', [])])


class AppSettings:
    """User preferences, persisted as a single blob."""

    DEFAULTS = {
        'theme': 'system',
        'tts_volume': 1.0,
        'sfx_volume': 0.5,
        'vibration': 'medium',
        'voice_accent': 'US',
        'is_offline_mode': False
    }

    def __init__(self, **values):
        merged = dict(self.DEFAULTS)
        merged.update({k: v for k, v in values.items() if k in self.DEFAULTS})
        self.theme = merged['theme']
        self.tts_volume = merged['tts_volume']
        self.sfx_volume = merged['sfx_volume']
        self.vibration = merged['vibration']
        self.voice_accent = merged['voice_accent']
        self.is_offline_mode = bool(merged['is_offline_mode'])

    def to_dict(self) -> dict:
        return {key: getattr(self, key) for key in self.DEFAULTS}

    @classmethod
    def from_dict(cls, data: dict | None) -> 'AppSettings':
        """Merge saved values over defaults so newly added fields always exist."""
        return cls(**(data or {}))
