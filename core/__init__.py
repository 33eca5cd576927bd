from .models import (
    Difficulty, GameVariant, WordChallenge, HomophoneChallenge,
    MasteryRecord, AdventureLevel, Campaign, AppSettings
)
from .interfaces import WordGenerator, Storage
from .errors import (
    SpellboundError, RemoteUnavailableError, InsufficientCorpusError, ContentUnavailableError
)
from .corpus import OfflineCorpus
from .mastery import MasteryStore
from .generator import OfflineGenerator
from .settings import SettingsStore
from .campaign import CampaignStore
from .orchestrator import ContentOrchestrator, ContentResult, FetchState
from .session import GameSession, GameState

__all__ = [
    'Difficulty', 'GameVariant', 'WordChallenge', 'HomophoneChallenge',
    'MasteryRecord', 'AdventureLevel', 'Campaign', 'AppSettings',
    'WordGenerator', 'Storage',
    'SpellboundError', 'RemoteUnavailableError', 'InsufficientCorpusError', 'ContentUnavailableError',
    'OfflineCorpus', 'MasteryStore', 'OfflineGenerator',
    'SettingsStore', 'CampaignStore',
    'ContentOrchestrator', 'ContentResult', 'FetchState',
    'GameSession', 'GameState'
]
