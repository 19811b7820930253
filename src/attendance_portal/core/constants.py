"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_WORK_START = "09:00"
DEFAULT_STATS_WINDOW_DAYS = 7
DEFAULT_TOKEN_HOURS = 5
MIN_PASSWORD_LENGTH = 6
HOURS_PRECISION = 2

AUTH_HEADER = "x-auth-token"
BOT_KEY_HEADER = "x-bot-key"
