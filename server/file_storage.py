"""File-based storage implementation."""

import json
import logging
import os
import tempfile
from urllib.parse import quote, unquote

from core.interfaces import Storage

logger = logging.getLogger(__name__)


class FileStorage(Storage):
    """One JSON file per key under a state directory.

    Writes go to a temporary file that is then renamed over the old one, so a
    crash leaves either the previous value or the new one.
    """

    def __init__(self, state_dir: str = None, config_file: str = None):
        self.config_file = config_file or os.path.expanduser('~/.config/spellbound/config.json')
        self.state_dir = state_dir or os.environ.get(
            'SPELLBOUND_STATE_DIR',
            os.path.expanduser('~/.local/share/spellbound')
        )
        os.makedirs(self.state_dir, exist_ok=True)

    def _path(self, key: str) -> str:
        return os.path.join(self.state_dir, quote(key, safe='') + '.json')

    def load_config(self) -> dict:
        if not os.path.exists(self.config_file):
            raise FileNotFoundError(
                f"Config file not found at {self.config_file}\n"
                f'Please create it with: {{"gemini_api_key": "YOUR_API_KEY_HERE"}}'
            )
        with open(self.config_file, 'r') as f:
            return json.load(f)

    def get(self, key: str):
        path = self._path(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, 'r') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read {path}: {e}")
            return None

    def set(self, key: str, value) -> None:
        fd, tmp_path = tempfile.mkstemp(dir=self.state_dir, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w') as f:
                json.dump(value, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._path(key))
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def remove(self, key: str) -> None:
        path = self._path(key)
        if os.path.exists(path):
            os.remove(path)

    def keys(self) -> list[str]:
        """List all stored keys."""
        return [
            unquote(name[:-5]) for name in os.listdir(self.state_dir)
            if name.endswith('.json')
        ]
