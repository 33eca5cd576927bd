"""Decides where challenge content comes from: remote generator or local corpus."""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from .config import (
    BOSS_WORD_COUNT, DEFAULT_WORD_COUNT, HOMOPHONE_COUNT,
    REMEDIAL_COUNT, REMOTE_TIMEOUT_SECONDS, SPEED_WORD_COUNT
)
from .errors import ContentUnavailableError, RemoteUnavailableError
from .generator import OfflineGenerator
from .interfaces import WordGenerator
from .models import Difficulty, GameVariant, HomophoneChallenge, WordChallenge
from .settings import SettingsStore
from .utils import normalize_word

logger = logging.getLogger(__name__)


class FetchState(str, Enum):
    TRY_REMOTE = 'TRY_REMOTE'
    TRY_LOCAL = 'TRY_LOCAL'
    SUCCEEDED = 'SUCCEEDED'
    FAILED = 'FAILED'


@dataclass
class ContentResult:
    """Outcome of one content request."""

    items: list
    source: str                    # 'remote' or 'local'
    state: FetchState = FetchState.SUCCEEDED
    offline_enabled: bool = False  # True if this request switched the app offline
    transitions: list = field(default_factory=list)


def word_count_for(variant: GameVariant) -> int:
    if variant is GameVariant.SPEED:
        return SPEED_WORD_COUNT
    if variant is GameVariant.BOSS:
        return BOSS_WORD_COUNT
    if variant is GameVariant.HOMOPHONE:
        return HOMOPHONE_COUNT
    if variant is GameVariant.DAILY:
        return 1
    return DEFAULT_WORD_COUNT


def validate_challenge_set(items, homophones: bool) -> list:
    """Check a remote result: non-empty, right shape, no duplicate answers."""
    if isinstance(items, (WordChallenge, HomophoneChallenge)):
        items = [items]
    if not isinstance(items, list) or not items:
        raise RemoteUnavailableError("Remote generator returned an empty challenge set")
    expected = HomophoneChallenge if homophones else WordChallenge
    seen = set()
    for item in items:
        if not isinstance(item, expected):
            raise RemoteUnavailableError(f"Unexpected challenge type: {type(item).__name__}")
        answer = item.correct_word if homophones else item.word
        text = item.sentence if homophones else item.word
        if not answer.strip() or not text.strip():
            raise RemoteUnavailableError("Remote generator returned a blank challenge")
        key = normalize_word(answer)
        if key in seen:
            raise RemoteUnavailableError(f"Duplicate word in challenge set: {answer}")
        seen.add(key)
    return items


class ContentOrchestrator:
    """Single decision point for remote versus offline content.

    Each request tries the remote generator unless offline mode is on. A
    remote failure switches offline mode on (persistently) and retries
    locally once. Only this class sets the offline flag automatically.
    """

    def __init__(self, remote: WordGenerator | None, generator: OfflineGenerator,
                 settings: SettingsStore, timeout: float = REMOTE_TIMEOUT_SECONDS):
        self.remote = remote
        self.generator = generator
        self.settings = settings
        self.timeout = timeout
        self._offline_listeners: list[Callable[[], None]] = []

    def on_offline_enabled(self, callback: Callable[[], None]) -> None:
        """Register a callback fired when a remote failure enables offline mode."""
        self._offline_listeners.append(callback)

    def _notify_offline_enabled(self) -> None:
        for callback in self._offline_listeners:
            try:
                callback()
            except Exception:
                logger.exception("Offline-mode listener failed")

    async def _call_remote(self, make_call, homophones: bool) -> list:
        if self.remote is None:
            raise RemoteUnavailableError("No remote generator configured")
        result = await asyncio.wait_for(make_call(self.remote), timeout=self.timeout)
        return validate_challenge_set(result, homophones)

    async def _fetch(self, make_remote_call, make_local_call, homophones: bool,
                     is_offline_mode: bool | None) -> ContentResult:
        if is_offline_mode is None:
            is_offline_mode = self.settings.is_offline_mode
        transitions = []
        offline_enabled = False

        if not is_offline_mode:
            transitions.append(FetchState.TRY_REMOTE)
            try:
                items = await self._call_remote(make_remote_call, homophones)
                transitions.append(FetchState.SUCCEEDED)
                return ContentResult(items, 'remote', transitions=transitions)
            except Exception as e:
                logger.warning(f"Remote generation failed, switching to offline mode: "
                               f"{type(e).__name__}: {e}")
                try:
                    self.settings.set_offline_mode(True)
                except Exception as save_error:
                    logger.error(f"Failed to persist offline mode: {save_error}")
                offline_enabled = True
                self._notify_offline_enabled()

        transitions.append(FetchState.TRY_LOCAL)
        try:
            items = make_local_call(self.generator)
        except Exception as e:
            logger.error(f"Offline generation failed: {type(e).__name__}: {e}")
            transitions.append(FetchState.FAILED)
            raise ContentUnavailableError(f"No content available: {e}") from e
        if not items:
            transitions.append(FetchState.FAILED)
            raise ContentUnavailableError("Offline generator returned no content")
        transitions.append(FetchState.SUCCEEDED)
        return ContentResult(items, 'local', offline_enabled=offline_enabled, transitions=transitions)

    async def request_content(self, variant: GameVariant, difficulty: Difficulty,
                              is_offline_mode: bool | None = None,
                              theme: str | None = None) -> ContentResult:
        """Fetch the challenge set for a new game.

        Raises ContentUnavailableError when both sources fail; the caller
        should abandon the game and return to the menu.
        """
        count = word_count_for(variant)

        if variant.uses_homophones:
            return await self._fetch(
                lambda r: r.generate_homophones(difficulty, count),
                lambda g: g.generate_homophones(difficulty, count),
                True, is_offline_mode)

        if variant is GameVariant.DAILY:
            return await self._fetch(
                lambda r: r.generate_daily_word(difficulty),
                lambda g: [g.generate_daily_word(difficulty)],
                False, is_offline_mode)

        if variant is GameVariant.BOSS:
            remote_call = lambda r: r.generate_word_list(difficulty, count, 'BOSS')
            local_call = lambda g: g.generate_word_list(Difficulty.EXTREME, count, 'boss')
        elif variant is GameVariant.SILENT_LETTER:
            remote_call = lambda r: r.generate_word_list(difficulty, count, 'SILENT_LETTER')
            local_call = lambda g: g.generate_word_list(difficulty, count, 'silent-letter')
        else:
            category = theme if variant is GameVariant.ADVENTURE else None
            remote_call = lambda r: r.generate_word_list(difficulty, count, category)
            local_call = lambda g: g.generate_word_list(difficulty, count)
        return await self._fetch(remote_call, local_call, False, is_offline_mode)

    async def request_remedial(self, variant: GameVariant, difficulty: Difficulty,
                               missed_words: list[str],
                               is_offline_mode: bool | None = None) -> ContentResult:
        """Fetch a practice set targeting words missed in the last game."""
        if variant.uses_homophones:
            return await self._fetch(
                lambda r: r.generate_remedial_homophones(missed_words, REMEDIAL_COUNT),
                lambda g: g.generate_remedial_homophones(missed_words, REMEDIAL_COUNT, difficulty),
                True, is_offline_mode)
        return await self._fetch(
            lambda r: r.generate_remedial_word_list(missed_words, REMEDIAL_COUNT),
            lambda g: g.generate_remedial_word_list(missed_words, REMEDIAL_COUNT, difficulty),
            False, is_offline_mode)
