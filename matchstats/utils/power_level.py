"""
Power level scoring for leaderboard entries.

The power level is an additive composite of independently capped sub-scores:

- Win rate (30): scaled by a confidence weight until 20 matches are played
- Volume (15): log saturation at 500 matches
- Event success (20): event wins 10, top 8s 6, events played 4
- Streaks (10): longest win streak 7, live win streak 3
- Hero mastery (10): unique heroes 5, depth on the most played hero 5
- Rated (10): rated win rate, only with 5+ rated matches
- Earnings (5): log saturation at 10000

The rounded sum is clipped to 99.
"""

import math
from dataclasses import dataclass

from matchstats.constants import PowerLevelConstants as P, TierConstants
from matchstats.data_models.leaderboard import LeaderboardEntry
from matchstats.database.models import StreakType


@dataclass(frozen=True)
class PowerTier:
    """Named bracket for a power level."""
    label: str
    color: int


GRANDMASTER = PowerTier("Grandmaster", TierConstants.GRANDMASTER_COLOR)
DIAMOND = PowerTier("Diamond", TierConstants.DIAMOND_COLOR)
GOLD = PowerTier("Gold", TierConstants.GOLD_COLOR)
SILVER = PowerTier("Silver", TierConstants.SILVER_COLOR)
BRONZE = PowerTier("Bronze", TierConstants.BRONZE_COLOR)


def _saturate(value: float, full_at: float) -> float:
    """Linear ramp from 0 to 1, reaching 1 at `full_at`."""
    return min(max(value, 0) / full_at, 1)


def _log_saturate(value: float, full_at: float) -> float:
    """Logarithmic ramp from 0 to 1, reaching 1 at `full_at`."""
    if value <= 0:
        return 0.0
    return min(math.log(value + 1) / math.log(full_at + 1), 1)


def _percent(value: float) -> float:
    """Percentage as a 0-1 fraction, clipped to the valid range."""
    return min(max(value or 0, 0), 100) / 100


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_power_level(entry: LeaderboardEntry) -> int:
    """Compute the 0-99 power level for a leaderboard entry."""
    score = 0.0
    total_matches = (entry.total_matches or 0) + (entry.total_byes or 0)

    confidence = _saturate(total_matches, P.WIN_RATE_CONFIDENCE_MATCHES)
    score += _percent(entry.win_rate) * P.WIN_RATE_POINTS * confidence

    score += _log_saturate(total_matches, P.VOLUME_SATURATION_MATCHES) * P.VOLUME_POINTS

    score += _saturate(entry.event_wins or 0, P.EVENT_WIN_SATURATION) * P.EVENT_WIN_POINTS
    score += _saturate(entry.total_top8s or 0, P.TOP8_SATURATION) * P.TOP8_POINTS
    score += _saturate(entry.events_played or 0, P.EVENTS_PLAYED_SATURATION) * P.EVENTS_PLAYED_POINTS

    score += _saturate(entry.longest_win_streak or 0, P.LONGEST_STREAK_SATURATION) * P.LONGEST_STREAK_POINTS
    if entry.current_streak_type == StreakType.WIN.value:
        score += _saturate(entry.current_streak_count or 0, P.LIVE_STREAK_SATURATION) * P.LIVE_STREAK_POINTS

    score += _saturate(entry.unique_heroes or 0, P.UNIQUE_HEROES_SATURATION) * P.UNIQUE_HEROES_POINTS
    score += _saturate(entry.top_hero_matches or 0, P.TOP_HERO_SATURATION) * P.TOP_HERO_POINTS

    if (entry.rated_matches or 0) >= P.RATED_MIN_MATCHES:
        score += _percent(entry.rated_win_rate) * P.RATED_POINTS

    score += _log_saturate(entry.earnings or 0, P.EARNINGS_SATURATION) * P.EARNINGS_POINTS

    return max(0, min(_round_half_up(score), P.MAX_POWER_LEVEL))


def get_power_tier(level: int) -> PowerTier:
    """Map a power level onto its tier."""
    if level >= TierConstants.GRANDMASTER_MIN:
        return GRANDMASTER
    if level >= TierConstants.DIAMOND_MIN:
        return DIAMOND
    if level >= TierConstants.GOLD_MIN:
        return GOLD
    if level >= TierConstants.SILVER_MIN:
        return SILVER
    return BRONZE
