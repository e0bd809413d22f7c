"""
Match data models for imported match history.

A match is owned by the user who imported it and is read-only to the stats engine.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from matchstats.database.models import MatchResult
from matchstats.data_models.serialization import from_document, to_document
from matchstats.utils.stats_exceptions import InvalidRecordError


@dataclass(frozen=True)
class MatchRecord:
    """Single match from one participant's point of view."""
    date: str                              # YYYY-MM-DD
    hero_played: str
    opponent_hero: str
    result: MatchResult
    opponent_gem_id: Optional[str] = None  # External id of the opponent, if known
    notes: Optional[str] = None            # "EventName | Round N"
    id: Optional[str] = None
    opponent_name: Optional[str] = None
    format: Optional[str] = None
    rated: bool = False
    event_type: Optional[str] = None
    venue: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MatchRecord':
        """Build a match from its stored camelCase document."""
        if not data.get('date'):
            raise InvalidRecordError('match', "missing 'date'")
        try:
            result = MatchResult(str(data.get('result', '')).lower())
        except ValueError:
            raise InvalidRecordError('match', f"unknown result {data.get('result')!r}")
        return from_document(
            cls,
            data,
            result=result,
            hero_played=data.get('heroPlayed') or '',
            opponent_hero=data.get('opponentHero') or '',
        )

    def to_dict(self) -> Dict[str, Any]:
        return to_document(self)
