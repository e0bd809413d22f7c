"""
Leaderboard data models.

Provides immutable data transfer objects for the per-user leaderboard rollup
and the presentation records derived from it.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from matchstats.data_models.serialization import from_document, to_document


@dataclass(frozen=True)
class LeaderboardEntry:
    """Per-user stats rollup as stored in the leaderboard collection."""
    user_id: str
    username: str = ''
    display_name: str = ''
    is_public: bool = False
    hide_from_spotlight: bool = False

    # Match totals
    total_matches: int = 0
    total_wins: int = 0
    total_losses: int = 0
    total_draws: int = 0
    total_byes: int = 0
    win_rate: float = 0.0
    weekly_matches: int = 0

    # Streaks
    longest_win_streak: int = 0
    current_streak_type: Optional[str] = None  # "win", "loss" or None
    current_streak_count: int = 0

    # Events
    events_played: int = 0
    event_wins: int = 0
    total_top8s: int = 0
    earnings: float = 0

    # Heroes
    unique_heroes: int = 0
    top_hero: Optional[str] = None
    top_hero_matches: int = 0

    # Rated play
    rated_matches: int = 0
    rated_win_rate: float = 0.0

    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LeaderboardEntry':
        return from_document(cls, data, user_id=str(data.get('userId', '')))

    def to_dict(self) -> Dict[str, Any]:
        return to_document(self)

    @property
    def has_handle(self) -> bool:
        return bool(self.username and self.username.strip())


@dataclass(frozen=True)
class FeaturedProfile:
    """Spotlighted profile with the reason it was picked."""
    entry: LeaderboardEntry
    reason: str
    stat: str


@dataclass(frozen=True)
class LeaderboardRank:
    """Top-3 placement on one leaderboard tab."""
    tab: str
    tab_label: str
    rank: int  # 1, 2 or 3
