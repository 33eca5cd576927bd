"""Gemini AI word generator implementation."""

import json
import logging
import time
import google.generativeai as genai

from core.config import DEFAULT_MODEL_NAME
from core.errors import RemoteUnavailableError
from core.interfaces import WordGenerator
from core.models import Difficulty, HomophoneChallenge, WordChallenge

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DIFFICULTY_GUIDE = {
    Difficulty.EASY: 'short, common words a young child would know (3-6 letters)',
    Difficulty.MEDIUM: 'everyday words with one tricky spelling pattern (6-9 letters)',
    Difficulty.HARD: 'commonly misspelled words (double letters, silent letters, unusual vowels)',
    Difficulty.EXTREME: 'rare, long or foreign-origin words that challenge adult spellers',
}

CATEGORY_GUIDE = {
    'BOSS': 'Pick the hardest words you can for this level: a final boss round.',
    'SILENT_LETTER': 'Every word must contain at least one silent letter (e.g. knight, psychology, gnaw).',
}

WORD_FORMAT = """
            Respond with ONLY a JSON array, no markdown, in this exact format:
            [{"word": "...", "definition": "...", "example_sentence": "..."}]
            The example sentence must use the word. Every word must be different.
"""

HOMOPHONE_FORMAT = """
            Respond with ONLY a JSON array, no markdown, in this exact format:
            [{"sentence": "... ___ ...", "definition": "...", "correct_word": "...",
              "options": ["...", "...", "..."]}]
            "options" must contain correct_word exactly once plus its homophones.
            Use ___ in the sentence where the word belongs.
"""


class GeminiProvider(WordGenerator):
    """Gemini-backed word generator."""

    def __init__(self, api_key: str, model_name: str = DEFAULT_MODEL_NAME):
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(model_name)
        self.model_name = model_name

    async def _execute(self, prompt: str) -> tuple[str, int]:
        start_time = time.time()
        response = await self.model.generate_content_async(prompt)
        ms = int((time.time() - start_time) * 1000)
        return (response.text, ms)

    def _parse_json(self, raw: str):
        cleaned = raw.strip().replace('```json', '').replace('```', '')
        start = min([i for i in (cleaned.find('['), cleaned.find('{')) if i >= 0], default=-1)
        if start < 0:
            logger.error(f"No JSON found in response:\n{raw}")
            raise RemoteUnavailableError("Malformed response from Gemini")
        try:
            data, _ = json.JSONDecoder().raw_decode(cleaned[start:])
            return data
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse response: {e}")
            logger.error(f"Raw response:\n{raw}")
            raise RemoteUnavailableError("Malformed response from Gemini") from e

    def _to_words(self, raw: str) -> list[WordChallenge]:
        data = self._parse_json(raw)
        if isinstance(data, dict):
            data = [data]
        try:
            return [WordChallenge.from_dict(item) for item in data]
        except (KeyError, TypeError, AttributeError) as e:
            logger.error(f"Unexpected word list shape: {e}")
            raise RemoteUnavailableError("Unexpected word list shape") from e

    def _to_homophones(self, raw: str) -> list[HomophoneChallenge]:
        data = self._parse_json(raw)
        try:
            return [HomophoneChallenge.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Unexpected homophone shape: {e}")
            raise RemoteUnavailableError("Unexpected homophone shape") from e

    async def generate_word_list(self, difficulty: Difficulty, count: int,
                                 category: str | None = None) -> list[WordChallenge]:
        if category in CATEGORY_GUIDE:
            topic = CATEGORY_GUIDE[category]
        elif category:
            topic = f'All words should relate to the theme "{category}".'
        else:
            topic = 'Use a varied mix of topics.'
        prompt = f"""
            Create a spelling test of {count} English words.

            Level: {difficulty.value} - {DIFFICULTY_GUIDE[difficulty]}
            {topic}
            {WORD_FORMAT}
        """
        text, ms = await self._execute(prompt)
        logger.info(f"Generated {count} {difficulty.value} words in {ms}ms")
        return self._to_words(text)

    async def generate_homophones(self, difficulty: Difficulty, count: int) -> list[HomophoneChallenge]:
        prompt = f"""
            Create {count} homophone spelling challenges at {difficulty.value} level
            ({DIFFICULTY_GUIDE[difficulty]}).
            {HOMOPHONE_FORMAT}
        """
        text, ms = await self._execute(prompt)
        logger.info(f"Generated {count} homophones in {ms}ms")
        return self._to_homophones(text)

    async def generate_remedial_word_list(self, missed_words: list[str], count: int) -> list[WordChallenge]:
        prompt = f"""
            A student misspelled these words: {', '.join(missed_words)}.
            Create a practice spelling test of {count} words. Include the missed words
            themselves and fill the rest with words sharing the same spelling patterns.
            {WORD_FORMAT}
        """
        text, ms = await self._execute(prompt)
        logger.info(f"Generated remedial word list in {ms}ms")
        return self._to_words(text)

    async def generate_remedial_homophones(self, missed_words: list[str],
                                           count: int) -> list[HomophoneChallenge]:
        prompt = f"""
            A student confused these homophones: {', '.join(missed_words)}.
            Create {count} new homophone challenges practising the same word groups.
            {HOMOPHONE_FORMAT}
        """
        text, ms = await self._execute(prompt)
        logger.info(f"Generated remedial homophones in {ms}ms")
        return self._to_homophones(text)

    async def generate_daily_word(self, difficulty: Difficulty) -> WordChallenge:
        today = time.strftime('%Y-%m-%d')
        prompt = f"""
            Today is {today}. Choose one interesting "word of the day" for a spelling
            challenge at {difficulty.value} level ({DIFFICULTY_GUIDE[difficulty]}).
            {WORD_FORMAT}
            Return an array containing exactly one object.
        """
        text, ms = await self._execute(prompt)
        words = self._to_words(text)
        if not words:
            raise RemoteUnavailableError("No daily word returned")
        return words[0]
