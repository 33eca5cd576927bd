"""Console UI for spellbound application."""

import re

import requests

from core.models import WordChallenge, HomophoneChallenge
from core.utils import mask_word, scramble_word
from cli.api_client import SpellboundAPIClient


def blank_out(sentence: str, word: str) -> str:
    """Replace every occurrence of word in sentence with underscores, ignoring case."""
    return re.sub(re.escape(word), '_' * len(word), sentence, flags=re.IGNORECASE)


class ConsoleUI:
    """Plays text-only spelling games against the spellbound server."""

    def __init__(self, client: SpellboundAPIClient, variant: str = 'CLASSIC', difficulty: str = 'MEDIUM'):
        self.client = client
        self.variant = variant
        self.difficulty = difficulty

    def print_challenge(self, item, number: int, total: int):
        """Print one challenge in the style of the current variant."""
        print('\n' + '-' * 40)
        print(f'Word {number}/{total}')
        if isinstance(item, HomophoneChallenge):
            print(f'  {item.sentence}')
            print(f'  ({item.definition})')
            print(f'  Options: {" / ".join(item.options)}')
            return
        if self.variant == 'SCRAMBLE':
            print(f'  Unscramble: {scramble_word(item.word)}')
        elif self.variant == 'MISSING_LETTER':
            print(f'  Fill in: {mask_word(item.word)}')
        elif self.variant == 'SENTENCE_SPELL':
            print(f'  {blank_out(item.example_sentence, item.word)}')
        elif self.variant == 'REVERSE':
            print('  Spell the word backwards!')
        print(f'  Definition: {item.definition}')

    def print_summary(self, history: list[dict]):
        correct = sum(1 for h in history if h['is_correct'])
        print('\n' + '=' * 40)
        print(f'Score: {correct}/{len(history)}')
        for h in history:
            mark = 'ok' if h['is_correct'] else 'x '
            print(f"  [{mark}] {h['word']} (you typed: {h['user_spelling']})")
        weak = self.client.get_weak_words(5)
        if weak:
            print(f'Words to work on: {", ".join(weak)}')
        print('=' * 40)

    def load(self, data: dict) -> list:
        if data['offline_enabled']:
            print('AI unavailable. Switched to offline mode.')
        if data['kind'] == 'homophones':
            return [HomophoneChallenge.from_dict(i) for i in data['items']]
        return [WordChallenge.from_dict(i) for i in data['items']]

    def play(self, items: list) -> list[dict] | None:
        """Play one round. Returns the answer history, or None if the player quit."""
        history = []
        for i, item in enumerate(items):
            self.print_challenge(item, i + 1, len(items))
            answer = input('==> ').strip()
            if answer.lower() == 'exit':
                return None
            if isinstance(item, HomophoneChallenge):
                target = item.correct_word
                is_correct = item.matches(answer)
            else:
                target = item.word
                expected = target[::-1] if self.variant == 'REVERSE' else target
                is_correct = answer.lower() == expected.lower()
            self.client.track_progress(target, is_correct)
            history.append({'word': target, 'user_spelling': answer, 'is_correct': is_correct})
            print('Correct!' if is_correct else f'Incorrect. The word was: {target}')
        return history

    def run(self):
        """Run the main application loop."""
        try:
            health = self.client.health_check()
            mode = 'offline' if health['offline_mode'] else 'online'
            print(f"Connected to spellbound server ({mode})")
        except requests.RequestException:
            print(f"Error: Cannot connect to server at {self.client.base_url}")
            print("Make sure the server is running: python run_server.py")
            return

        print(f'\nStarting {self.variant} at {self.difficulty} difficulty. Type "exit" to quit.')
        try:
            data = self.client.get_content(self.variant, self.difficulty)
        except requests.HTTPError as e:
            print(f"No content available, returning to menu: {e}")
            return

        while True:
            history = self.play(self.load(data))
            if history is None:
                print('Goodbye!')
                return
            self.print_summary(history)
            missed = [h['word'] for h in history if not h['is_correct']]
            if not missed or input('Practice missed words? [y/N] ').strip().lower() != 'y':
                return
            try:
                data = self.client.get_remedial(self.variant, self.difficulty, missed)
            except requests.HTTPError as e:
                print(f"Remedial practice unavailable: {e}")
                return
