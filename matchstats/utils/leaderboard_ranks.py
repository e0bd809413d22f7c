"""
Leaderboard rank lookups for profile badges.

A user earns a badge on every leaderboard tab where they place in the top 3.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from matchstats.data_models.leaderboard import LeaderboardEntry, LeaderboardRank
from matchstats.database.models import StreakType

BADGE_RANKS = 3


@dataclass(frozen=True)
class RankTab:
    id: str
    label: str
    include: Callable[[LeaderboardEntry], bool]
    sort_key: Callable[[LeaderboardEntry], Tuple]  # Sorted descending


RANK_TABS: List[RankTab] = [
    RankTab("winrate", "Win Rate",
            lambda e: e.total_matches >= 10,
            lambda e: (e.win_rate, e.total_matches)),
    RankTab("volume", "Most Matches",
            lambda e: True,
            lambda e: (e.total_matches,)),
    RankTab("streaks", "Streaks",
            lambda e: e.longest_win_streak > 0,
            lambda e: (e.longest_win_streak, e.total_matches)),
    RankTab("draws", "Draws",
            lambda e: e.total_draws > 0,
            lambda e: (e.total_draws, e.total_matches)),
    RankTab("events", "Events",
            lambda e: e.events_played > 0,
            lambda e: (e.event_wins, e.events_played)),
    RankTab("rated", "Rated",
            lambda e: e.rated_matches >= 5,
            lambda e: (e.rated_win_rate, e.rated_matches)),
    RankTab("heroes", "Hero Variety",
            lambda e: e.unique_heroes > 0,
            lambda e: (e.unique_heroes, e.total_matches)),
    RankTab("dedication", "Hero Loyalty",
            lambda e: e.top_hero_matches > 0,
            lambda e: (e.top_hero_matches, e.total_matches)),
    RankTab("hotstreak", "Hot Streak",
            lambda e: e.current_streak_type == StreakType.WIN.value and e.current_streak_count >= 2,
            lambda e: (e.current_streak_count, e.win_rate)),
]


def compute_user_ranks(entries: Iterable[LeaderboardEntry], user_id: str) -> List[LeaderboardRank]:
    """Return the tabs on which `user_id` places in the top 3."""
    entries = list(entries)
    ranks = []
    for tab in RANK_TABS:
        ordered = sorted((e for e in entries if tab.include(e)), key=tab.sort_key, reverse=True)
        for position, entry in enumerate(ordered[:BADGE_RANKS], start=1):
            if entry.user_id == user_id:
                ranks.append(LeaderboardRank(tab=tab.id, tab_label=tab.label, rank=position))
                break
    return ranks


def get_best_rank(ranks: List[LeaderboardRank]) -> Optional[int]:
    """Best (lowest) placement across tabs, or None without any badge."""
    if not ranks:
        return None
    return min(rank.rank for rank in ranks)
