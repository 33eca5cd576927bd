"""Utility functions for spellbound application."""

import hashlib
import random

from .config import MISSING_LETTER_RATIO


def normalize_word(word: str) -> str:
    """Canonical form used for mastery keys and comparisons."""
    return word.strip().lower()


def stable_index(key: str, size: int) -> int:
    """Map a string to [0, size) identically on every run and machine."""
    digest = hashlib.sha256(key.encode('utf-8')).hexdigest()
    return int(digest, 16) % size


def scramble_word(word: str, rng: random.Random = None) -> str:
    """Shuffle the letters of a word, never returning the original order."""
    rng = rng or random
    original = word.upper()
    if len(set(original)) < 2:
        return original
    letters = list(original)
    while ''.join(letters) == original:
        rng.shuffle(letters)
    return ''.join(letters)


def mask_word(word: str, rng: random.Random = None) -> str:
    """Replace a share of letters with underscores (at least one)."""
    rng = rng or random
    count = max(1, int(len(word) * MISSING_LETTER_RATIO))
    hidden = set(rng.sample(range(len(word)), min(count, len(word))))
    return ''.join('_' if i in hidden else c for i, c in enumerate(word))
