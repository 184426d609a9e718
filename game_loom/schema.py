from __future__ import annotations

# -----------------------------------------------------------------------------
# Canonical attribute vocabulary
# -----------------------------------------------------------------------------

TITLE_KEY = "title"
PLATFORM_KEY = "platform"
RELEASE_DATE_KEY = "release_date"

# Raw header substrings per canonical key, in evaluation (priority) order.
#
# Matching is case-insensitive substring containment, so a single entry covers
# spellings like "game name", "game_name", "Game-Name", ...
DEFAULT_ALIAS_TABLES: tuple[tuple[str, tuple[str, ...]], ...] = (
    (TITLE_KEY, ("game", "name", "title")),
    ("hours_played", ("hours",)),
    ("last_played", ("last played", "last-played", "last_played")),
    (RELEASE_DATE_KEY, ("release",)),
    ("captions", ("captions", "subtitles")),
    (
        "multiplayer",
        ("multiplayer", "multi-player", "multi player", "coop", "co-op", "co op"),
    ),
    ("singleplayer", ("singleplayer", "single player", "single-player", "solo player")),
    (
        "languages",
        (
            "english",
            "spanish",
            "french",
            "czech",
            "chinese",
            "danish",
            "dutch",
            "finnish",
            "german",
            "greek",
            "hungarian",
            "indonesian",
            "italian",
            "japanese",
            "korean",
            "norwegian",
            "polish",
            "portuguese",
            "romanian",
            "russian",
            "thai",
            "turkish",
            "ukrainian",
            "vietnamese",
            "bulgarian",
            "swedish",
        ),
    ),
)

# A raw header containing this substring never feeds the title ("game id", "title_id").
TITLE_EXCLUDED_SUBSTRING = "id"

# Cell values (case-insensitive) that contribute nothing to a canonical key.
DEFAULT_EMPTY_MARKERS: frozenset[str] = frozenset({"", "null", "n/a"})

# Cell values (case-insensitive) meaning "the column name itself is the datum"
# (e.g. a `german` column holding `x`).
DEFAULT_TRUTHY_MARKERS: frozenset[str] = frozenset({"x", "true"})

# Popular streaming/utility apps bundled with consoles; never catalogued as games.
DEFAULT_NON_GAME_TITLES: tuple[str, ...] = (
    "Netflix",
    "YouTube",
    "Spotify",
    "Hulu",
    "Disney+",
    "Amazon Prime Video",
    "Twitch",
    "Crunchyroll",
    "HBO Max",
    "Apple TV",
    "Peacock",
    "Paramount+",
    "Plex",
    "Funimation",
    "TikTok",
    "NFL Sunday Ticket",
    "YouTube Kids",
    "Redbox",
    "ESPN",
    "Showtime Anytime",
    "iHeartRadio",
    "Vudu",
    "VRV",
    "Tubi",
    "Vevo",
    "CBS All Access",
    "MLB.TV",
    "NBA App",
    "Spotify Kids",
    "Showmax",
    "Rakuten TV",
    "BBC iPlayer",
    "Al Jazeera",
    "DAZN",
    "Sky Go",
    "Red Bull TV",
    "MTV Play",
    "Deezer",
    "EPIX Now",
    "Starz",
    "FOX NOW",
    "Sling TV",
    "FunimationNow",
    "Acorn TV",
    "MUBI",
    "CuriosityStream",
    "BritBox",
    "FuboTV",
    "Shudder",
    "Hoopla",
)

# Keys a manual entry must provide (non-blank).
MANUAL_REQUIRED_KEYS: tuple[str, ...] = (TITLE_KEY, PLATFORM_KEY, RELEASE_DATE_KEY)
