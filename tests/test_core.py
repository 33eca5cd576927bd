"""Unit tests for spellbound core module."""

import copy
import datetime
import random
import sys
import unittest
from unittest.mock import AsyncMock, MagicMock

# Mock google.generativeai before importing
sys.modules['google'] = MagicMock()
sys.modules['google.generativeai'] = MagicMock()

from core.config import BOSS_WORD_COUNT, HOMOPHONE_COUNT, SPEED_WORD_COUNT
from core.corpus import CATEGORY_WORDS, WORD_CORPUS, OfflineCorpus
from core.errors import InsufficientCorpusError, RemoteUnavailableError
from core.generator import OfflineGenerator
from core.interfaces import Storage
from core.mastery import MasteryStore
from core.models import (
    AppSettings, Campaign, Difficulty, GameVariant, HomophoneChallenge, MasteryRecord, WordChallenge
)
from core.settings import SettingsStore
from core.campaign import CampaignStore
from core.utils import mask_word, normalize_word, scramble_word, stable_index


# ============================================================================
# Mock Implementations
# ============================================================================

class MockStorage(Storage):
    """In-memory storage for testing."""

    def __init__(self):
        self.data = {}
        self.set_calls = []

    def get(self, key: str):
        return copy.deepcopy(self.data.get(key))

    def set(self, key: str, value) -> None:
        self.set_calls.append(key)
        self.data[key] = copy.deepcopy(value)

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class FailingStorage(MockStorage):
    """Storage whose writes always fail."""

    def set(self, key: str, value) -> None:
        raise OSError("disk full")


class FlakyStorage(MockStorage):
    """Storage that fails the next `failures` writes to one key."""

    def __init__(self, key: str, failures: int = 1):
        super().__init__()
        self.key = key
        self.failures = failures

    def set(self, key: str, value) -> None:
        if key == self.key and self.failures > 0:
            self.failures -= 1
            raise OSError("disk full")
        super().set(key, value)


class CountingStorage(MockStorage):
    """Storage that counts reads."""

    def __init__(self):
        super().__init__()
        self.get_calls = 0

    def get(self, key: str):
        self.get_calls += 1
        return super().get(key)


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        self.now += 1
        return self.now


def two_word_corpus() -> OfflineCorpus:
    return OfflineCorpus(
        words={Difficulty.EASY: {
            'alpha': ('First letter.', 'Alpha comes first.'),
            'bravo': ('Well done.', 'Bravo to the winner.'),
        }},
        homophones={},
        categories={}
    )


# ============================================================================
# Test Cases
# ============================================================================

class TestModels(unittest.TestCase):
    """Tests for domain models."""

    def test_difficulty_ordering(self):
        self.assertLess(Difficulty.EASY, Difficulty.MEDIUM)
        self.assertLess(Difficulty.HARD, Difficulty.EXTREME)
        self.assertEqual(sorted([Difficulty.EXTREME, Difficulty.EASY, Difficulty.HARD]),
                         [Difficulty.EASY, Difficulty.HARD, Difficulty.EXTREME])

    def test_difficulty_neighbours(self):
        self.assertEqual(Difficulty.EASY.neighbours(), [Difficulty.MEDIUM])
        self.assertEqual(Difficulty.HARD.neighbours(), [Difficulty.MEDIUM, Difficulty.EXTREME])

    def test_only_homophone_variant_uses_homophones(self):
        self.assertTrue(GameVariant.HOMOPHONE.uses_homophones)
        self.assertEqual([v for v in GameVariant if v.uses_homophones], [GameVariant.HOMOPHONE])

    def test_word_challenge_matches_case_insensitively(self):
        challenge = WordChallenge('Knight', 'A soldier.', 'The knight rode.')
        self.assertTrue(challenge.matches('  kNIGHT '))
        self.assertFalse(challenge.matches('night'))

    def test_homophone_requires_correct_word_once(self):
        with self.assertRaises(ValueError):
            HomophoneChallenge('___', 'def', 'their', ('there', "they're"))
        with self.assertRaises(ValueError):
            HomophoneChallenge('___', 'def', 'their', ('their', 'there', 'there'))

    def test_homophone_from_dict_accepts_camel_case(self):
        h = HomophoneChallenge.from_dict({
            'sentence': 'I ___ it.', 'definition': 'd',
            'correctWord': 'know', 'options': ['no', 'know']
        })
        self.assertEqual(h.correct_word, 'know')
        self.assertEqual(h.options, ('no', 'know'))

    def test_mastery_record_unseen_score_is_none(self):
        self.assertIsNone(MasteryRecord('cat').mastery_score)

    def test_mastery_record_with_attempt_returns_new_record(self):
        record = MasteryRecord('cat')
        updated = record.with_attempt(True, 5.0)
        self.assertEqual(record.correct_count, 0)
        self.assertEqual(updated.correct_count, 1)
        self.assertEqual(updated.last_seen, 5.0)

    def test_campaign_new_has_four_ascending_levels(self):
        campaign = Campaign.new('Space')
        self.assertEqual([l.difficulty for l in campaign.levels], list(Difficulty))
        self.assertEqual(campaign.levels[0].name, 'Beginner Space')
        self.assertEqual(campaign.levels[3].name, 'Legend of Space')
        self.assertEqual([l.is_unlocked for l in campaign.levels], [True, False, False, False])

    def test_campaign_unlocks_next_level_on_pass(self):
        campaign = Campaign.new('Space')
        self.assertTrue(campaign.record_result(Difficulty.EASY, 4, 5))
        self.assertTrue(campaign.levels[0].is_completed)
        self.assertTrue(campaign.levels[1].is_unlocked)

    def test_campaign_failing_score_keeps_flags(self):
        campaign = Campaign.new('Space')
        campaign.record_result(Difficulty.EASY, 5, 5)
        self.assertFalse(campaign.record_result(Difficulty.EASY, 1, 5))
        self.assertTrue(campaign.levels[0].is_completed)
        self.assertTrue(campaign.levels[1].is_unlocked)

    def test_app_settings_merge_over_defaults(self):
        settings = AppSettings.from_dict({'sfx_volume': 0.2, 'unknown': 1})
        self.assertEqual(settings.sfx_volume, 0.2)
        self.assertFalse(settings.is_offline_mode)
        self.assertEqual(settings.voice_accent, 'US')


class TestUtils(unittest.TestCase):

    def test_normalize_word(self):
        self.assertEqual(normalize_word('  Cat '), 'cat')

    def test_stable_index_is_repeatable(self):
        self.assertEqual(stable_index('2024-01-01:EASY', 18), stable_index('2024-01-01:EASY', 18))

    def test_scramble_never_returns_original(self):
        rng = random.Random(3)
        for word in ['cat', 'apple', 'ab', 'knight']:
            for _ in range(20):
                self.assertNotEqual(scramble_word(word, rng), word.upper())

    def test_mask_hides_at_least_one_letter(self):
        masked = mask_word('cat', random.Random(1))
        self.assertEqual(len(masked), 3)
        self.assertIn('_', masked)


class TestMasteryStore(unittest.TestCase):
    """Tests for per-word mastery tracking."""

    def setUp(self):
        self.storage = MockStorage()
        self.clock = FakeClock()
        self.store = MasteryStore(self.storage, clock=self.clock)

    def test_repeated_calls_accumulate(self):
        for _ in range(3):
            self.store.track_progress('cat', True)
        for _ in range(2):
            self.store.track_progress('cat', False)
        record = self.store.get_record('cat')
        self.assertEqual(record.correct_count, 3)
        self.assertEqual(record.incorrect_count, 2)
        self.assertAlmostEqual(self.store.get_mastery_score('cat'), 0.6)

    def test_word_is_normalized(self):
        self.store.track_progress('  CAT ', True)
        self.store.track_progress('cat', False)
        self.assertAlmostEqual(self.store.get_mastery_score('Cat'), 0.5)

    def test_unseen_word_has_no_score(self):
        self.assertIsNone(self.store.get_mastery_score('dog'))

    def test_each_update_writes_whole_record(self):
        self.store.track_progress('cat', True)
        self.assertEqual(self.storage.data['mastery:cat'],
                         {'word': 'cat', 'correct_count': 1, 'incorrect_count': 0, 'last_seen': 1001.0})

    def test_weak_words_order(self):
        self.store.track_progress('a', False)
        self.store.track_progress('b', False)
        self.store.track_progress('c', True)
        self.store.track_progress('d', False)
        self.store.track_progress('d', True)
        self.assertEqual(self.store.get_weak_words(3), ['b', 'a', 'd'])
        self.assertEqual(self.store.get_weak_words(10), ['b', 'a', 'd', 'c'])

    def test_track_progress_never_raises(self):
        store = MasteryStore(FailingStorage())
        store.track_progress('cat', True)
        self.assertIsNone(store.get_mastery_score('cat'))

    def test_failed_index_write_is_retried(self):
        storage = FlakyStorage('mastery_index')
        store = MasteryStore(storage)
        store.track_progress('cat', False)
        store.track_progress('cat', False)
        self.assertEqual(storage.data['mastery_index'], ['cat'])
        reopened = MasteryStore(storage)
        self.assertEqual(reopened.get_weak_words(10), ['cat'])
        self.assertEqual(reopened.get_record('cat').incorrect_count, 1)

    def test_records_are_read_once(self):
        storage = CountingStorage()
        MasteryStore(storage).track_progress('cat', True)
        store = MasteryStore(storage)
        storage.get_calls = 0
        self.assertAlmostEqual(store.get_mastery_score('cat'), 1.0)
        self.assertEqual(storage.get_calls, 2)
        store.track_progress('cat', False)
        store.get_weak_words(5)
        self.assertIsNone(store.get_mastery_score('dog'))
        self.assertEqual(storage.get_calls, 2)
        self.assertEqual(storage.data['mastery:cat']['incorrect_count'], 1)


class TestOfflineCorpus(unittest.TestCase):
    """Tests for the bundled dictionary."""

    def setUp(self):
        self.corpus = OfflineCorpus()

    def test_every_bucket_satisfies_largest_request(self):
        for difficulty in Difficulty:
            words = [e.word for e in self.corpus.get_word_entries(difficulty)]
            self.assertGreaterEqual(len(set(words)), SPEED_WORD_COUNT)

    def test_words_are_unique_across_buckets(self):
        all_words = [w for bucket in WORD_CORPUS.values() for w in bucket]
        self.assertEqual(len(all_words), len(set(all_words)))

    def test_category_words_exist_in_corpus(self):
        for category, words in CATEGORY_WORDS.items():
            for word in words:
                self.assertIsNotNone(self.corpus.find_word_entry(word), f"{category}: {word}")

    def test_silent_letter_bucket_per_difficulty(self):
        for difficulty in Difficulty:
            self.assertGreaterEqual(len(self.corpus.get_word_entries(difficulty, 'silent-letter')), 5)

    def test_boss_category(self):
        self.assertGreaterEqual(len(self.corpus.get_word_entries(Difficulty.EXTREME, 'boss')),
                                BOSS_WORD_COUNT)

    def test_homophone_buckets(self):
        for difficulty in Difficulty:
            self.assertGreaterEqual(len(self.corpus.get_homophone_entries(difficulty)), HOMOPHONE_COUNT)

    def test_find_word_entry_case_insensitive(self):
        difficulty, entry = self.corpus.find_word_entry(' KNIGHT ')
        self.assertEqual(difficulty, Difficulty.MEDIUM)
        self.assertEqual(entry.word, 'knight')


class TestOfflineGenerator(unittest.TestCase):
    """Tests for adaptive offline generation."""

    def setUp(self):
        self.storage = MockStorage()
        self.mastery = MasteryStore(self.storage)
        self.generator = OfflineGenerator(self.mastery, rng=random.Random(42))

    def test_no_duplicate_words(self):
        for difficulty in Difficulty:
            pool_size = len(self.generator.corpus.get_word_entries(difficulty))
            for count in range(1, pool_size + 1):
                words = [w.word for w in self.generator.generate_word_list(difficulty, count)]
                self.assertEqual(len(words), count)
                self.assertEqual(len(set(words)), count)

    def test_words_come_from_requested_bucket(self):
        bucket = set(WORD_CORPUS[Difficulty.HARD])
        for challenge in self.generator.generate_word_list(Difficulty.HARD, 10):
            self.assertIn(challenge.word, bucket)

    def test_category_filter(self):
        words = self.generator.generate_word_list(Difficulty.MEDIUM, 5, 'silent-letter')
        for challenge in words:
            self.assertIn(challenge.word, CATEGORY_WORDS['silent-letter'])

    def test_drops_category_when_too_small(self):
        words = self.generator.generate_word_list(Difficulty.EASY, 5, 'boss')
        bucket = set(WORD_CORPUS[Difficulty.EASY])
        self.assertEqual(len(words), 5)
        for challenge in words:
            self.assertIn(challenge.word, bucket)

    def test_widens_to_adjacent_difficulty(self):
        words = [w.word for w in self.generator.generate_word_list(Difficulty.EASY, 20)]
        self.assertEqual(len(set(words)), 20)
        allowed = set(WORD_CORPUS[Difficulty.EASY]) | set(WORD_CORPUS[Difficulty.MEDIUM])
        self.assertTrue(set(words) <= allowed)

    def test_insufficient_corpus(self):
        with self.assertRaises(InsufficientCorpusError):
            self.generator.generate_word_list(Difficulty.EASY, 500)

    def test_empty_corpus(self):
        generator = OfflineGenerator(corpus=OfflineCorpus({}, {}, {}))
        with self.assertRaises(InsufficientCorpusError):
            generator.generate_word_list(Difficulty.EASY, 1)

    def test_selection_does_not_read_storage(self):
        storage = CountingStorage()
        mastery = MasteryStore(storage)
        mastery.track_progress('apple', True)
        generator = OfflineGenerator(mastery, rng=random.Random(3))
        storage.get_calls = 0
        generator.generate_word_list(Difficulty.EASY, 15)
        generator.generate_word_list(Difficulty.EASY, 15)
        self.assertEqual(storage.get_calls, 0)

    def test_mastery_bias(self):
        mastery = MasteryStore(MockStorage())
        for _ in range(9):
            mastery.track_progress('alpha', True)
        mastery.track_progress('alpha', False)
        mastery.track_progress('bravo', True)
        for _ in range(9):
            mastery.track_progress('bravo', False)
        generator = OfflineGenerator(mastery, corpus=two_word_corpus(), rng=random.Random(7))
        picks = [generator.generate_word_list(Difficulty.EASY, 1)[0].word for _ in range(1000)]
        self.assertGreater(picks.count('bravo'), picks.count('alpha'))

    def test_mastered_words_are_never_excluded(self):
        mastery = MasteryStore(MockStorage())
        for _ in range(5):
            mastery.track_progress('alpha', True)
        generator = OfflineGenerator(mastery, corpus=two_word_corpus(), rng=random.Random(11))
        picks = [generator.generate_word_list(Difficulty.EASY, 1)[0].word for _ in range(1000)]
        self.assertGreater(picks.count('alpha'), 0)
        self.assertGreater(picks.count('bravo'), picks.count('alpha'))

    def test_remedial_prefers_missed_words(self):
        words = self.generator.generate_remedial_word_list(['KNEE', 'notaword', 'knee', 'Lamb'], 5,
                                                           Difficulty.EASY)
        names = [w.word for w in words]
        self.assertEqual(names[:2], ['knee', 'lamb'])
        self.assertEqual(len(names), 5)
        self.assertEqual(len(set(names)), 5)
        self.assertTrue(set(names) <= set(WORD_CORPUS[Difficulty.EASY]))

    def test_remedial_truncates_to_count(self):
        missed = ['apple', 'house', 'water', 'happy', 'friend', 'school']
        words = self.generator.generate_remedial_word_list(missed, 5)
        self.assertEqual([w.word for w in words], missed[:5])

    def test_remedial_uses_last_game_difficulty(self):
        self.generator.generate_word_list(Difficulty.EXTREME, 3)
        words = self.generator.generate_remedial_word_list(['zzz'], 5)
        for challenge in words:
            self.assertIn(challenge.word, WORD_CORPUS[Difficulty.EXTREME])

    def test_homophone_option_integrity(self):
        for difficulty in Difficulty:
            for challenge in self.generator.generate_homophones(difficulty, HOMOPHONE_COUNT):
                lowered = [o.lower() for o in challenge.options]
                self.assertEqual(lowered.count(challenge.correct_word.lower()), 1)
                self.assertEqual(len(lowered), len(set(lowered)))
                self.assertIn('___', challenge.sentence)

    def test_homophone_no_duplicates(self):
        challenges = self.generator.generate_homophones(Difficulty.MEDIUM, HOMOPHONE_COUNT)
        correct = [c.correct_word for c in challenges]
        self.assertEqual(len(correct), len(set(correct)))

    def test_remedial_homophones(self):
        challenges = self.generator.generate_remedial_homophones(['Their'], 5, Difficulty.EASY)
        self.assertEqual(challenges[0].correct_word, 'their')
        self.assertEqual(len({c.correct_word for c in challenges}), 5)

    def test_daily_word_deterministic(self):
        day = datetime.date(2024, 3, 15)
        first = self.generator.generate_daily_word(Difficulty.HARD, day)
        other = OfflineGenerator(rng=random.Random(999)).generate_daily_word(Difficulty.HARD, day)
        self.assertEqual(first, other)
        self.assertEqual(first, self.generator.generate_daily_word(Difficulty.HARD, day))

    def test_daily_word_changes_across_days(self):
        start = datetime.date(2024, 1, 1)
        words = {
            self.generator.generate_daily_word(Difficulty.EASY, start + datetime.timedelta(days=i)).word
            for i in range(30)
        }
        self.assertGreater(len(words), 1)


class TestSettingsStore(unittest.TestCase):

    def test_defaults_when_nothing_saved(self):
        store = SettingsStore(MockStorage())
        self.assertFalse(store.is_offline_mode)

    def test_offline_mode_persists(self):
        storage = MockStorage()
        SettingsStore(storage).set_offline_mode(True)
        self.assertTrue(SettingsStore(storage).is_offline_mode)

    def test_update_keeps_other_fields(self):
        storage = MockStorage()
        store = SettingsStore(storage)
        store.update(sfx_volume=0.1)
        store.set_offline_mode(True)
        settings = store.load()
        self.assertEqual(settings.sfx_volume, 0.1)
        self.assertTrue(settings.is_offline_mode)


class TestCampaignStore(unittest.TestCase):

    def setUp(self):
        self.store = CampaignStore(MockStorage())

    def test_no_campaign_initially(self):
        self.assertIsNone(self.store.load())

    def test_start_defaults_theme(self):
        self.assertEqual(self.store.start('  ').theme, 'Classic')

    def test_complete_level_persists(self):
        self.store.start('Ocean')
        self.assertTrue(self.store.complete_level(Difficulty.EASY, 5, 5))
        self.assertIsNotNone(self.store.select_level('l2'))
        self.assertIsNone(self.store.select_level('l3'))

    def test_reset(self):
        self.store.start('Ocean')
        self.store.reset()
        self.assertIsNone(self.store.load())


class TestGeminiProvider(unittest.TestCase):
    """Tests for parsing remote responses (model calls are mocked)."""

    def setUp(self):
        from server.gemini_provider import GeminiProvider
        self.provider = GeminiProvider('test-api-key')

    def test_parse_fenced_word_list(self):
        raw = '```json\n[{"word": "cat", "definition": "A pet.", "example_sentence": "The cat sat."}]\n```'
        words = self.provider._to_words(raw)
        self.assertEqual(words, [WordChallenge('cat', 'A pet.', 'The cat sat.')])

    def test_malformed_response(self):
        with self.assertRaises(RemoteUnavailableError):
            self.provider._to_words('Sorry, I cannot help with that.')

    def test_bad_homophone_options(self):
        raw = '[{"sentence": "___", "definition": "d", "correct_word": "their", "options": ["there"]}]'
        with self.assertRaises(RemoteUnavailableError):
            self.provider._to_homophones(raw)

    def test_generate_word_list(self):
        response = MagicMock()
        response.text = '[{"word": "moon", "definition": "d", "example_sentence": "s"}]'
        self.provider.model.generate_content_async = AsyncMock(return_value=response)
        import asyncio
        words = asyncio.run(self.provider.generate_word_list(Difficulty.EASY, 1, 'Space'))
        self.assertEqual(words[0].word, 'moon')
        prompt = self.provider.model.generate_content_async.call_args[0][0]
        self.assertIn('Space', prompt)


if __name__ == '__main__':
    unittest.main()
