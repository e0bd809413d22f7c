"""
Featured profile selection for the home page spotlight.

Six candidate pools each nominate their top 3 public profiles. Pools are
visited in a random order and each contributes one random pick that no earlier
pool already chose, until 4 profiles are featured. The output intentionally
varies between calls.
"""

import random
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from matchstats.config import Config
from matchstats.data_models.leaderboard import FeaturedProfile, LeaderboardEntry
from matchstats.database.models import StreakType


@dataclass(frozen=True)
class CandidatePool:
    reason: str
    include: Callable[[LeaderboardEntry], bool]
    sort_key: Callable[[LeaderboardEntry], object]  # Sorted descending
    stat: Callable[[LeaderboardEntry], str]


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO timestamp, treating naive values as UTC. Returns None if unparseable."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _is_hot(entry: LeaderboardEntry) -> bool:
    return entry.current_streak_type == StreakType.WIN.value and entry.current_streak_count >= 3


CANDIDATE_POOLS: List[CandidatePool] = [
    CandidatePool(
        reason="Weekly Grinder",
        include=lambda e: e.weekly_matches > 0,
        sort_key=lambda e: e.weekly_matches,
        stat=lambda e: f"{e.weekly_matches} matches this week",
    ),
    CandidatePool(
        reason="Hot Streak",
        include=_is_hot,
        sort_key=lambda e: e.current_streak_count,
        stat=lambda e: f"{e.current_streak_count}W streak",
    ),
    CandidatePool(
        reason="Win Rate King",
        include=lambda e: e.total_matches >= 100,
        sort_key=lambda e: e.win_rate,
        stat=lambda e: f"{e.win_rate:.1f}% win rate",
    ),
    CandidatePool(
        reason="Event Warrior",
        include=lambda e: e.events_played > 0,
        sort_key=lambda e: e.events_played,
        stat=lambda e: f"{e.events_played} events played",
    ),
    CandidatePool(
        reason="Most Active",
        include=lambda e: True,
        sort_key=lambda e: e.total_matches,
        stat=lambda e: f"{e.total_matches:,} matches",
    ),
    CandidatePool(
        reason="Rising Star",
        include=lambda e: e.total_matches >= 20 and parse_timestamp(e.created_at) is not None,
        sort_key=lambda e: parse_timestamp(e.created_at),
        stat=lambda e: f"{e.total_matches} matches",
    ),
]


def is_spotlight_eligible(entry: LeaderboardEntry) -> bool:
    """Only public profiles with a handle that did not opt out can be featured."""
    return entry.is_public and entry.has_handle and not entry.hide_from_spotlight


def _top_candidates(pool: CandidatePool, entries: List[LeaderboardEntry], size: int) -> List[LeaderboardEntry]:
    matching = [e for e in entries if pool.include(e)]
    return sorted(matching, key=pool.sort_key, reverse=True)[:size]


def select_featured_profiles(
    entries: Iterable[LeaderboardEntry],
    rng: Optional[random.Random] = None,
    limit: int = Config.FEATURED_PROFILE_COUNT,
    pool_size: int = Config.FEATURED_POOL_SIZE,
) -> List[FeaturedProfile]:
    """
    Pick up to `limit` distinct profiles to spotlight.

    Args:
        entries: Full leaderboard snapshot
        rng: Random source, module-level random when omitted
        limit: Maximum number of profiles returned
        pool_size: Number of top candidates each pool nominates

    Returns:
        Featured profiles with no repeated user
    """
    rng = rng or random
    eligible = [e for e in entries if is_spotlight_eligible(e)]
    if not eligible:
        return []

    pools = list(CANDIDATE_POOLS)
    rng.shuffle(pools)

    selected: List[FeaturedProfile] = []
    used_ids = set()
    for pool in pools:
        if len(selected) >= limit:
            break
        available = [c for c in _top_candidates(pool, eligible, pool_size) if c.user_id not in used_ids]
        if not available:
            continue

        pick = rng.choice(available)
        used_ids.add(pick.user_id)
        selected.append(FeaturedProfile(entry=pick, reason=pool.reason, stat=pool.stat(pick)))

    return selected
