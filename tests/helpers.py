from typing import Optional

from matchstats.data_models.leaderboard import LeaderboardEntry
from matchstats.data_models.match import MatchRecord
from matchstats.database.models import MatchResult


def make_match(
    result: MatchResult = MatchResult.WIN,
    opponent_gem_id: Optional[str] = None,
    date: str = '2024-01-01',
    hero_played: str = 'Bravo',
    opponent_hero: str = 'Alpha',
    notes: Optional[str] = 'Regional | Round 1',
    **kwargs
) -> MatchRecord:
    """Build a match from the importing player's point of view."""
    return MatchRecord(
        date=date,
        hero_played=hero_played,
        opponent_hero=opponent_hero,
        result=result,
        opponent_gem_id=opponent_gem_id,
        notes=notes,
        **kwargs
    )


def make_record(wins: int, losses: int, draws: int, opponent_gem_id: str, **kwargs):
    """Build a match list with the given results against one opponent."""
    results = [MatchResult.WIN] * wins + [MatchResult.LOSS] * losses + [MatchResult.DRAW] * draws
    return [
        make_match(result, opponent_gem_id=opponent_gem_id, notes=f'Regional | Round {i + 1}', **kwargs)
        for i, result in enumerate(results)
    ]


def make_entry(user_id: str, **kwargs) -> LeaderboardEntry:
    """Build a public leaderboard entry with a handle."""
    defaults = {
        'username': user_id,
        'display_name': user_id.title(),
        'is_public': True,
    }
    defaults.update(kwargs)
    return LeaderboardEntry(user_id=user_id, **defaults)
