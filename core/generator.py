"""Offline challenge generation from the bundled corpus."""

import datetime
import logging
import random

from .config import HOMOPHONE_OPTION_COUNT, MIN_SELECTION_WEIGHT
from .corpus import OfflineCorpus, default_corpus
from .errors import InsufficientCorpusError
from .mastery import MasteryStore
from .models import Difficulty, HomophoneChallenge, WordChallenge
from .utils import normalize_word, stable_index

logger = logging.getLogger(__name__)


class OfflineGenerator:
    """Builds challenge sets locally, favouring words the player gets wrong.

    Produces the same shapes as the remote generator. Selection is weighted
    sampling without replacement, so mastered words are less likely but
    never excluded.
    """

    def __init__(self, mastery: MasteryStore = None, corpus: OfflineCorpus = None,
                 rng: random.Random = None):
        self.mastery = mastery
        self.corpus = corpus or default_corpus
        self.rng = rng or random.Random()
        self.last_difficulty = Difficulty.EASY

    def selection_weight(self, word: str) -> float:
        """1 - mastery score; unseen words get the maximum weight of 1.0."""
        if self.mastery is None:
            return 1.0
        score = self.mastery.get_mastery_score(word)
        if score is None:
            return 1.0
        return max(1.0 - score, MIN_SELECTION_WEIGHT)

    def _weighted_sample(self, items: list, count: int, word_of) -> list:
        # Efraimidis-Spirakis: key = u ** (1 / w), keep the largest keys
        keyed = []
        for item in items:
            weight = self.selection_weight(word_of(item))
            keyed.append((self.rng.random() ** (1.0 / weight), item))
        keyed.sort(key=lambda pair: pair[0], reverse=True)
        return [item for _, item in keyed[:count]]

    def _word_pool(self, tiers: list[Difficulty], category: str | None, exclude: set) -> list[WordChallenge]:
        pool = []
        seen = set(exclude)
        for tier in tiers:
            for entry in self.corpus.get_word_entries(tier, category):
                if entry.word not in seen:
                    seen.add(entry.word)
                    pool.append(entry)
        return pool

    def _widening_word_pools(self, difficulty: Difficulty, category: str | None):
        """Candidate pools from narrowest to broadest."""
        tiers = [difficulty]
        widened = [difficulty] + difficulty.neighbours()
        yield tiers, category
        if category is not None:
            yield widened, category
            yield tiers, None
        yield widened, None

    def _select_words(self, difficulty: Difficulty, count: int, category: str | None = None,
                      exclude: set = None) -> list[WordChallenge]:
        exclude = exclude or set()
        largest = 0
        for tiers, cat in self._widening_word_pools(difficulty, category):
            pool = self._word_pool(tiers, cat, exclude)
            largest = max(largest, len(pool))
            if len(pool) >= count:
                if tiers != [difficulty] or cat != category:
                    logger.info(f"Widened word pool to {[t.value for t in tiers]} category={cat}")
                return self._weighted_sample(pool, count, lambda e: e.word)
        raise InsufficientCorpusError(count, largest, f"difficulty={difficulty.value} category={category}")

    def generate_word_list(self, difficulty: Difficulty, count: int,
                           category: str | None = None) -> list[WordChallenge]:
        if count < 1:
            raise ValueError("count must be at least 1")
        self.last_difficulty = difficulty
        return self._select_words(difficulty, count, category)

    def generate_remedial_word_list(self, missed_words: list[str], count: int,
                                    difficulty: Difficulty = None) -> list[WordChallenge]:
        """Missed words found in the corpus first, then adaptive filler."""
        if count < 1:
            raise ValueError("count must be at least 1")
        matches = []
        seen = set()
        for word in missed_words:
            found = self.corpus.find_word_entry(word)
            if found and found[1].word not in seen:
                seen.add(found[1].word)
                matches.append(found[1])
        if len(matches) >= count:
            return matches[:count]
        tier = difficulty or self.last_difficulty
        filler = self._select_words(tier, count - len(matches), exclude=seen)
        return matches + filler

    def _build_homophone(self, entry: dict) -> HomophoneChallenge:
        options = [entry['correct_word']]
        for distractor in entry.get('distractors', []):
            if len(options) >= HOMOPHONE_OPTION_COUNT:
                break
            if distractor.lower() not in [o.lower() for o in options]:
                options.append(distractor)
        self.rng.shuffle(options)
        return HomophoneChallenge(
            sentence=entry['sentence'],
            definition=entry['definition'],
            correct_word=entry['correct_word'],
            options=tuple(options)
        )

    def _select_homophones(self, difficulty: Difficulty, count: int, exclude: set = None) -> list[dict]:
        exclude = exclude or set()
        largest = 0
        for tiers in ([difficulty], [difficulty] + difficulty.neighbours()):
            pool = []
            seen = set(exclude)
            for tier in tiers:
                for entry in self.corpus.get_homophone_entries(tier):
                    word = normalize_word(entry['correct_word'])
                    if word not in seen:
                        seen.add(word)
                        pool.append(entry)
            largest = max(largest, len(pool))
            if len(pool) >= count:
                return self._weighted_sample(pool, count, lambda e: e['correct_word'])
        raise InsufficientCorpusError(count, largest, f"homophones difficulty={difficulty.value}")

    def generate_homophones(self, difficulty: Difficulty, count: int) -> list[HomophoneChallenge]:
        if count < 1:
            raise ValueError("count must be at least 1")
        self.last_difficulty = difficulty
        return [self._build_homophone(e) for e in self._select_homophones(difficulty, count)]

    def generate_remedial_homophones(self, missed_words: list[str], count: int,
                                     difficulty: Difficulty = None) -> list[HomophoneChallenge]:
        if count < 1:
            raise ValueError("count must be at least 1")
        entries = []
        seen = set()
        for word in missed_words:
            found = self.corpus.find_homophone_entry(word)
            if found:
                key = normalize_word(found[1]['correct_word'])
                if key not in seen:
                    seen.add(key)
                    entries.append(found[1])
        entries = entries[:count]
        if len(entries) < count:
            tier = difficulty or self.last_difficulty
            entries += self._select_homophones(tier, count - len(entries), exclude=seen)
        return [self._build_homophone(e) for e in entries]

    def generate_daily_word(self, difficulty: Difficulty, day: datetime.date = None) -> WordChallenge:
        """Same word for everyone on a given day: a hash of the date picks it."""
        day = day or datetime.date.today()
        pool = sorted(self.corpus.get_word_entries(difficulty), key=lambda e: e.word)
        if not pool:
            raise InsufficientCorpusError(1, 0, f"daily word difficulty={difficulty.value}")
        self.last_difficulty = difficulty
        return pool[stable_index(f"{day.isoformat()}:{difficulty.value}", len(pool))]
