"""Game session controller: sequencing, scoring and remedial practice."""

import logging
import random
from enum import Enum

from .campaign import CampaignStore
from .config import WHEEL_VARIANTS
from .errors import ContentUnavailableError
from .mastery import MasteryStore
from .models import Difficulty, GameVariant, HomophoneChallenge
from .orchestrator import ContentOrchestrator, ContentResult
from .utils import mask_word, scramble_word

logger = logging.getLogger(__name__)


class GameState(str, Enum):
    MENU = 'MENU'
    LOADING = 'LOADING'
    PLAYING = 'PLAYING'
    SUMMARY = 'SUMMARY'


def spin_wheel(rng: random.Random = None) -> GameVariant:
    """Pick a random playable variant for the wheel."""
    rng = rng or random
    return GameVariant(rng.choice(WHEEL_VARIANTS))


def decide_round_winner(p1_correct: bool, p1_time: float, p2_correct: bool, p2_time: float) -> str:
    """Multiplayer round: correct beats incorrect, then the faster player wins."""
    if p1_correct and not p2_correct:
        return 'p1'
    if p2_correct and not p1_correct:
        return 'p2'
    if p1_correct and p2_correct:
        return 'p1' if p1_time < p2_time else 'p2'
    return 'draw'


class GameSession:
    """Drives one player's game.

    Content requests are issued one at a time. Each request carries a token;
    a result arriving after the token changed (the player left, or a newer
    request started) is dropped without touching session state.
    """

    def __init__(self, orchestrator: ContentOrchestrator, mastery: MasteryStore,
                 campaigns: CampaignStore = None, rng: random.Random = None):
        self.orchestrator = orchestrator
        self.mastery = mastery
        self.campaigns = campaigns
        self.rng = rng or random.Random()
        self.state = GameState.MENU
        self.variant = GameVariant.CLASSIC
        self.difficulty = Difficulty.EASY
        self.items = []
        self.index = 0
        self.history = []
        self.source = None
        self.offline_notice = False
        self._token = 0

    def _next_token(self) -> int:
        self._token += 1
        return self._token

    def abandon(self) -> None:
        """Leave the game screen; any pending content is discarded on arrival."""
        self._token += 1
        self.state = GameState.MENU

    def _apply(self, result: ContentResult) -> None:
        self.items = list(result.items)
        self.index = 0
        self.history = []
        self.source = result.source
        if result.offline_enabled:
            self.offline_notice = True
        self.state = GameState.PLAYING

    async def start(self, variant: GameVariant, difficulty: Difficulty, theme: str = None) -> bool:
        """Load content and begin playing. Returns False if the game did not start."""
        if variant is GameVariant.WHEEL:
            variant = spin_wheel(self.rng)
            difficulty = Difficulty.MEDIUM
        if variant is GameVariant.ADVENTURE and theme is None and self.campaigns:
            campaign = self.campaigns.load()
            theme = campaign.theme if campaign else None

        token = self._next_token()
        self.variant = variant
        self.difficulty = difficulty
        self.history = []
        self.state = GameState.LOADING
        try:
            result = await self.orchestrator.request_content(variant, difficulty, theme=theme)
        except ContentUnavailableError as e:
            if token == self._token:
                logger.error(f"Could not start {variant.value}: {e}")
                self.state = GameState.MENU
            return False
        if token != self._token:
            logger.info(f"Discarding stale content for {variant.value}")
            return False
        self._apply(result)
        return True

    @property
    def missed_words(self) -> list[str]:
        return [h['word'] for h in self.history if not h['is_correct']]

    async def start_remedial(self) -> bool:
        """Replay the words missed in the last game."""
        missed = self.missed_words
        if not missed:
            return False
        token = self._next_token()
        self.state = GameState.LOADING
        try:
            result = await self.orchestrator.request_remedial(self.variant, self.difficulty, missed)
        except ContentUnavailableError as e:
            if token == self._token:
                logger.error(f"Remedial practice unavailable: {e}")
                self.state = GameState.SUMMARY
            return False
        if token != self._token:
            return False
        self._apply(result)
        return True

    @property
    def current(self):
        if self.state is not GameState.PLAYING or self.index >= len(self.items):
            return None
        return self.items[self.index]

    def target_word(self) -> str | None:
        item = self.current
        if item is None:
            return None
        if isinstance(item, HomophoneChallenge):
            return item.correct_word
        return item.word

    def prompt(self) -> str | None:
        """Text shown for modes that display a transformed word."""
        word = self.target_word()
        if word is None:
            return None
        if self.variant is GameVariant.SCRAMBLE:
            return scramble_word(word, self.rng)
        if self.variant is GameVariant.MISSING_LETTER:
            return mask_word(word, self.rng)
        return None

    def check_answer(self, answer: str) -> bool:
        target = self.target_word()
        if target is None:
            return False
        if self.variant is GameVariant.REVERSE:
            return answer.strip().lower() == target.lower()[::-1]
        return answer.strip().lower() == target.lower()

    def submit_answer(self, answer: str) -> bool:
        """Score an answer and record it in the mastery store."""
        target = self.target_word()
        if target is None:
            raise RuntimeError("No active challenge")
        is_correct = self.check_answer(answer)
        self.mastery.track_progress(target, is_correct)
        self.history.append({'word': target, 'user_spelling': answer, 'is_correct': is_correct})
        return is_correct

    @property
    def score(self) -> tuple[int, int]:
        correct = sum(1 for h in self.history if h['is_correct'])
        return correct, len(self.history)

    def advance(self) -> bool:
        """Move to the next challenge. Returns False when the game is over."""
        if self.state is not GameState.PLAYING:
            return False
        if self.index < len(self.items) - 1:
            self.index += 1
            return True
        self.state = GameState.SUMMARY
        if self.variant is GameVariant.ADVENTURE and self.campaigns:
            correct, total = self.score
            if self.campaigns.complete_level(self.difficulty, correct, total):
                logger.info(f"Adventure level after {self.difficulty.value} unlocked")
        return False
