"""
Domain constants - collection names, cache keys and other static data.
Centralized here so repositories and services agree on them.
"""

# === Remote collections (PostgREST tables) ===
TEAMS_TABLE = "teams"
PLAYERS_TABLE = "players"
EVENTS_TABLE = "events"
EVENT_REGISTRATIONS_TABLE = "event_registrations"

# Natural sort key per collection
TEAMS_ORDER = "name"
PLAYERS_ORDER = "name"
EVENTS_ORDER = "date"

# === Local cache keys ===
LOCAL_TEAMS_KEY = "local_teams"
LOCAL_PLAYERS_KEY = "local_players"
LOCAL_EVENTS_KEY = "local_events"
LOCAL_CHAT_MESSAGES_KEY = "local_chat_messages"
UNREAD_HELP_COUNT_KEY = "unread_help_count"

AUTH_TOKEN_KEY = "supabase.auth.token"
AUTH_REFRESH_KEY = "supabase.auth.refresh"
AUTH_USER_KEY = "supabase.auth.user"
SESSION_KEYS = (AUTH_TOKEN_KEY, AUTH_REFRESH_KEY, AUTH_USER_KEY)

# === Auth ===
EMAIL_NOT_CONFIRMED = "Email not confirmed"
UNEXPECTED_ERROR = "An unexpected error occurred"
NOT_AUTHENTICATED = "Not authenticated"

# Order matters: first field present in the error body wins
AUTH_ERROR_FIELDS = ("error", "error_description", "msg", "message")

# Anything made only of hex digits and dashes is treated as an id, not a name
ID_PATTERN = r"^[0-9a-f-]+$"

# Event kinds and states used by the seed data
EVENT_TYPES = ["match", "training", "tournament"]
EVENT_STATUSES = ["upcoming", "ongoing", "completed", "cancelled"]

PLAYER_POSITIONS = ["Forward", "Midfielder", "Defender", "Goalkeeper"]
