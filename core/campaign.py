"""Adventure campaign persistence."""

import logging

from .config import CAMPAIGN_KEY, DEFAULT_THEME
from .interfaces import Storage
from .models import AdventureLevel, Campaign, Difficulty

logger = logging.getLogger(__name__)


class CampaignStore:
    """Keeps the single active campaign in storage until the user resets it."""

    def __init__(self, storage: Storage):
        self.storage = storage

    def load(self) -> Campaign | None:
        data = self.storage.get(CAMPAIGN_KEY)
        if not data or not data.get('levels'):
            return None
        return Campaign.from_dict(data)

    def start(self, theme: str | None = None) -> Campaign:
        theme = (theme or '').strip() or DEFAULT_THEME
        campaign = Campaign.new(theme)
        self.storage.set(CAMPAIGN_KEY, campaign.to_dict())
        logger.info(f"Started campaign '{theme}'")
        return campaign

    def select_level(self, level_id: str) -> AdventureLevel | None:
        """Return the level if it exists and is unlocked."""
        campaign = self.load()
        if campaign is None:
            return None
        level = campaign.get_level(level_id)
        if level is None or not level.is_unlocked:
            return None
        return level

    def complete_level(self, difficulty: Difficulty, correct: int, total: int) -> bool:
        """Apply a finished adventure game. Returns True if a level unlocked."""
        campaign = self.load()
        if campaign is None:
            return False
        unlocked = campaign.record_result(difficulty, correct, total)
        self.storage.set(CAMPAIGN_KEY, campaign.to_dict())
        return unlocked

    def reset(self) -> None:
        self.storage.remove(CAMPAIGN_KEY)
