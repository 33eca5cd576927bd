"""REST API client for spellbound server."""

import requests


class SpellboundAPIClient:
    """Client for communicating with the spellbound REST API."""

    def __init__(self, base_url: str = "http://localhost:8000", timeout: float = 30):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        response = self.session.get(f"{self.base_url}{endpoint}", params=params or {},
                                    timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict) -> dict:
        """Make a POST request."""
        response = self.session.post(f"{self.base_url}{endpoint}", json=data, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        return self._get("/")

    def get_variants(self) -> list[dict]:
        return self._get("/api/variants")['variants']

    def get_content(self, variant: str, difficulty: str, theme: str = None) -> dict:
        """Get a challenge set. Raises requests.HTTPError (503) if none is available."""
        return self._post("/api/content", {
            'variant': variant,
            'difficulty': difficulty,
            'theme': theme
        })

    def get_remedial(self, variant: str, difficulty: str, missed_words: list[str]) -> dict:
        return self._post("/api/remedial", {
            'variant': variant,
            'difficulty': difficulty,
            'missed_words': missed_words
        })

    def track_progress(self, word: str, was_correct: bool) -> dict:
        return self._post("/api/progress", {'word': word, 'was_correct': was_correct})

    def get_weak_words(self, limit: int = 10) -> list[str]:
        return self._get("/api/mastery/weak", {'limit': limit})['words']

    def set_offline_mode(self, value: bool) -> dict:
        response = self.session.put(f"{self.base_url}/api/settings",
                                    json={'is_offline_mode': value}, timeout=self.timeout)
        response.raise_for_status()
        return response.json()
