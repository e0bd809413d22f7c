"""
Engine-wide constants for the match stats tracker.

This module contains the magic numbers used by the scoring and aggregation code
so the weights live in one place.
"""

class PowerLevelConstants:
    """Weights and saturation points for the power level composite."""

    MAX_POWER_LEVEL = 99  # 100 is reserved, never awarded

    # Win rate: 30pts, full confidence at 20 matches
    WIN_RATE_POINTS = 30
    WIN_RATE_CONFIDENCE_MATCHES = 20

    # Volume: 15pts, log scale saturating at 500 matches
    VOLUME_POINTS = 15
    VOLUME_SATURATION_MATCHES = 500

    # Event success: 20pts total
    EVENT_WIN_POINTS = 10
    EVENT_WIN_SATURATION = 10
    TOP8_POINTS = 6
    TOP8_SATURATION = 8
    EVENTS_PLAYED_POINTS = 4
    EVENTS_PLAYED_SATURATION = 20

    # Streaks: 10pts total
    LONGEST_STREAK_POINTS = 7
    LONGEST_STREAK_SATURATION = 15
    LIVE_STREAK_POINTS = 3
    LIVE_STREAK_SATURATION = 10

    # Hero mastery: 10pts total
    UNIQUE_HEROES_POINTS = 5
    UNIQUE_HEROES_SATURATION = 8
    TOP_HERO_POINTS = 5
    TOP_HERO_SATURATION = 100

    # Rated: 10pts, needs 5 rated matches
    RATED_POINTS = 10
    RATED_MIN_MATCHES = 5

    # Earnings: 5pts, log scale saturating at 10000
    EARNINGS_POINTS = 5
    EARNINGS_SATURATION = 10000

class TierConstants:
    """Power tier thresholds and display colors."""

    GRANDMASTER_MIN = 80
    DIAMOND_MIN = 65
    GOLD_MIN = 50
    SILVER_MIN = 35

    GRANDMASTER_COLOR = 0xd946ef  # Fuchsia
    DIAMOND_COLOR = 0x38bdf8      # Sky blue
    GOLD_COLOR = 0xfacc15         # Yellow
    SILVER_COLOR = 0x9ca3af       # Gray
    BRONZE_COLOR = 0xd97706       # Amber

class H2HConstants:
    """Constants for head-to-head aggregation."""

    COLLECTION = "h2h"
    KEY_SEPARATOR = "_"

class FingerprintConstants:
    """Constants for match fingerprints."""

    VERSION = "v1"
    SEPARATOR = "|"
    UNKNOWN_HERO = "unknown"

    # Two independent 32-bit hashes for ~64-bit collision resistance
    FNV_SEED = 0x811c9dc5
    FNV_PRIME = 0x01000193
    MURMUR_SEED = 0x050c5d1f
    MURMUR_PRIME = 0x5bd1e995

class CollectionNames:
    """Document store collection names."""

    LEADERBOARD = "leaderboard"
    GEM_IDS = "gemIds"
    H2H = H2HConstants.COLLECTION

    @staticmethod
    def user_matches(user_id: str) -> str:
        return f"users/{user_id}/matches"
