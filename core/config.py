"""Configuration constants for spellbound application."""

# Remote generation
REMOTE_TIMEOUT_SECONDS = 10   # Remote calls slower than this count as failures
DEFAULT_MODEL_NAME = 'gemini-2.0-flash'

# Challenge set sizes
DEFAULT_WORD_COUNT = 5
SPEED_WORD_COUNT = 15
BOSS_WORD_COUNT = 10
HOMOPHONE_COUNT = 5
REMEDIAL_COUNT = 5
HOMOPHONE_OPTION_COUNT = 3    # correct word + distractors shown to the player

# Adaptive selection
MIN_SELECTION_WEIGHT = 0.05   # Fully mastered words keep this weight

# Adventure campaigns
ADVENTURE_PASS_RATIO = 0.8    # Fraction of correct answers needed to unlock the next level
DEFAULT_THEME = 'Classic'

# Game variants the wheel can land on
WHEEL_VARIANTS = [
    'CLASSIC', 'SPEED', 'HOMOPHONE', 'SCRAMBLE',
    'MISSING_LETTER', 'REVERSE', 'WHISPER', 'SILENT_LETTER'
]

# Missing letter mode
MISSING_LETTER_RATIO = 0.4    # Share of letters hidden, minimum 1

# Persistence keys
SETTINGS_KEY = 'spellbound_settings'
CAMPAIGN_KEY = 'spellbound_campaign'
MASTERY_PREFIX = 'mastery:'
MASTERY_INDEX_KEY = 'mastery_index'
