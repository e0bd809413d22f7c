"""
Head-to-head data models.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from matchstats.constants import H2HConstants
from matchstats.data_models.serialization import from_document, to_document
from matchstats.utils.stats_exceptions import InvalidRecordError


def h2h_key(user_a: str, user_b: str) -> str:
    """Storage key for an unordered pair of accounts."""
    return H2HConstants.KEY_SEPARATOR.join(sorted([user_a, user_b]))


@dataclass(frozen=True)
class H2HRecord:
    """Win/loss/draw tally between two accounts, with p1 < p2."""
    p1: str
    p2: str
    p1_wins: int
    p2_wins: int
    draws: int
    total: int
    updated_at: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'H2HRecord':
        missing = [key for key in ('p1', 'p2') if not data.get(key)]
        if missing:
            raise InvalidRecordError('h2h', f"missing {', '.join(missing)}")
        return from_document(
            cls,
            data,
            p1_wins=int(data.get('p1Wins', 0)),
            p2_wins=int(data.get('p2Wins', 0)),
            draws=int(data.get('draws', 0)),
            total=int(data.get('total', 0)),
            updated_at=data.get('updatedAt', ''),
        )

    def to_dict(self) -> Dict[str, Any]:
        return to_document(self)

    @property
    def key(self) -> str:
        return h2h_key(self.p1, self.p2)

    def record_for(self, user_id: str) -> Tuple[int, int, int]:
        """Return (wins, losses, draws) from one participant's point of view."""
        if user_id == self.p1:
            return self.p1_wins, self.p2_wins, self.draws
        if user_id == self.p2:
            return self.p2_wins, self.p1_wins, self.draws
        raise ValueError(f"User {user_id} is not part of H2H record {self.key}")
