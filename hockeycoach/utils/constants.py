"""
Constants for the Hockey Coach substitution schedule application.

This module contains configuration constants used throughout the application.
"""

# Match structure defaults (stored match records may omit these)
DEFAULT_QUARTER_COUNT = 4
DEFAULT_SUBS_PER_QUARTER = 2
DEFAULT_QUARTER_SECONDS = 15 * 60
DEFAULT_MATCH_SECONDS = DEFAULT_QUARTER_COUNT * DEFAULT_QUARTER_SECONDS

# Playback defaults
DEFAULT_LOOKAHEAD_SECONDS = 60
UPCOMING_WINDOW_SECONDS = 60  # events inside this window are shown as "Nu"
PLAYBACK_SKIP_SECONDS = 60
PLAYBACK_TICK_SECONDS = 1

# Keys stored next to the slot entries inside a substitution_schedule record
SCHEDULE_METADATA_KEYS = (
    "quarters",
    "formation_key",
    "subs_per_quarter",
    "substitutions_per_quarter",
)

# Largest quarter and slot index a schedule key may carry
MAX_SCHEDULE_QUARTER = 99
MAX_SCHEDULE_SLOT = 99

# Hosted backend configuration (read from the environment at client creation)
BACKEND_URL_ENV = "HOCKEYCOACH_BACKEND_URL"
BACKEND_KEY_ENV = "HOCKEYCOACH_BACKEND_KEY"
BACKEND_TIMEOUT_ENV = "HOCKEYCOACH_BACKEND_TIMEOUT"
DEFAULT_BACKEND_TIMEOUT_SECONDS = 10.0
MATCH_RECORD_FIELDS = ("id", "lineup", "reserve_players", "substitution_schedule")

# Web server defaults
DEFAULT_WEB_HOST = "127.0.0.1"
DEFAULT_WEB_PORT = 7122

# Position labels shown in the grid (stored tokens are free text)
POSITION_DISPLAY_NAMES = {
    "striker": "Aanvaller",
    "sweeper": "Libero",
    "lastline": "Laatste Lijn",
    "leftback": "Linksback",
    "rightback": "Rechtsback",
    "leftmidfield": "Linksmidden",
    "rightmidfield": "Rechtsmidden",
    "centermidfield": "Middenmidden",
    "leftforward": "Linksvoorwaarts",
    "rightforward": "Rechtsvoorwaarts",
    "goalkeeper": "Keeper",
    "gk": "Keeper",
    "keeper": "Keeper",
    "defender": "Verdediger",
    "def": "Verdediger",
    "verdediger": "Verdediger",
    "midfielder": "Middenvelder",
    "mid": "Middenvelder",
    "middenvelder": "Middenvelder",
    "forward": "Aanvaller",
    "fwd": "Aanvaller",
    "aanvaller": "Aanvaller",
}

POSITION_GROUP_COLORS = {
    "goalkeeper": "#EF4444",
    "defender": "#3B82F6",
    "midfielder": "#8B5CF6",
    "forward": "#F59E0B",
}
DEFAULT_POSITION_COLOR = "#6B7280"

# Substrings identifying a line, checked in order against the lowercased token
POSITION_GROUPS = (
    ("goalkeeper", ("keeper", "gk")),
    ("defender", ("back", "sweeper", "lastline", "def", "verdediger")),
    ("midfielder", ("midfield", "mid", "middenvelder")),
    ("forward", ("forward", "striker", "fwd", "aanvaller")),
)
