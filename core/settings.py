"""Persisted application settings."""

import logging

from .config import SETTINGS_KEY
from .interfaces import Storage
from .models import AppSettings

logger = logging.getLogger(__name__)


class SettingsStore:
    """Loads and saves the settings blob as a single value."""

    def __init__(self, storage: Storage):
        self.storage = storage

    def load(self) -> AppSettings:
        return AppSettings.from_dict(self.storage.get(SETTINGS_KEY))

    def save(self, settings: AppSettings) -> None:
        self.storage.set(SETTINGS_KEY, settings.to_dict())

    def update(self, **changes) -> AppSettings:
        data = self.load().to_dict()
        data.update(changes)
        settings = AppSettings.from_dict(data)
        self.save(settings)
        return settings

    @property
    def is_offline_mode(self) -> bool:
        return self.load().is_offline_mode

    def set_offline_mode(self, value: bool) -> None:
        logger.info(f"Offline mode set to {value}")
        self.update(is_offline_mode=value)
