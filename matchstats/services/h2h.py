"""
Head-to-Head Aggregation Service

Precomputes win/loss/draw records between two registered accounts so the
comparison views can read them with a single document lookup.

Key Features:
- One canonical document per unordered pair, keyed by the sorted account ids
- Full-document overwrite on every run, so recomputation is idempotent
- Concurrent resolution of opponent external ids to account ids
- Atomic batch commit capped per run; excess pairs wait for the next trigger
"""

import asyncio
from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from matchstats.config import Config
from matchstats.constants import CollectionNames
from matchstats.data_models.h2h import H2HRecord, h2h_key
from matchstats.data_models.match import MatchRecord
from matchstats.database.models import MatchResult
from matchstats.services.document_store import DocumentStore
from matchstats.utils.logger import setup_logger
from matchstats.utils.stats_exceptions import StatsException

logger = setup_logger(__name__)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class H2HService:
    """Service for computing and reading head-to-head records."""

    def __init__(self, store: DocumentStore, batch_limit: Optional[int] = None):
        self.store = store
        self.batch_limit = batch_limit if batch_limit is not None else Config.H2H_BATCH_LIMIT
        if self.batch_limit <= 0:
            raise ValueError("batch_limit must be a positive integer")

    async def get_h2h(self, user_a: str, user_b: str) -> Optional[H2HRecord]:
        """Read the precomputed record for a pair, in either argument order."""
        key = h2h_key(user_a, user_b)
        try:
            document = await self.store.get(CollectionNames.H2H, key)
            if document is None:
                return None
            return H2HRecord.from_dict(document)
        except StatsException as e:
            logger.warning(f"H2H lookup for {key} failed: {e}")
            return None

    async def compute_h2h_for_user(self, user_id: str, matches: Iterable[MatchRecord]) -> int:
        """
        Recompute and save H2H records for a user against every registered opponent.

        Call this after match import/sync. Only opponents whose external id maps
        to an account get a record; everyone else is skipped silently.

        Args:
            user_id: Account that owns `matches`
            matches: The user's complete match list

        Returns:
            Number of H2H documents written
        """
        by_gem_id = self._group_by_opponent(matches)
        if not by_gem_id:
            return 0

        gem_ids = list(by_gem_id.keys())
        opponent_ids = await asyncio.gather(*(self._resolve_opponent(gem_id) for gem_id in gem_ids))

        batch = self.store.batch()
        now = _utc_timestamp()
        truncated = False

        for gem_id, opponent_id in zip(gem_ids, opponent_ids):
            if not opponent_id:
                continue
            if opponent_id == user_id:
                logger.debug(f"Skipping self-pairing for user {user_id} via external id {gem_id}")
                continue

            record = self._build_record(user_id, opponent_id, by_gem_id[gem_id], now)
            if record is None:
                continue

            if len(batch) >= self.batch_limit:
                truncated = True
                break
            batch.stage(CollectionNames.H2H, record.key, record.to_dict())

        if len(batch) == 0:
            return 0

        if truncated:
            logger.info(
                f"H2H batch limit {self.batch_limit} reached for user {user_id}; "
                f"remaining pairs will update on the next sync"
            )

        await batch.commit()
        logger.info(f"Saved {len(batch)} H2H records for user {user_id}")
        return len(batch)

    @staticmethod
    def _group_by_opponent(matches: Iterable[MatchRecord]) -> Dict[str, List[MatchRecord]]:
        by_gem_id: Dict[str, List[MatchRecord]] = defaultdict(list)
        for match in matches:
            if match.opponent_gem_id:
                by_gem_id[match.opponent_gem_id].append(match)
        return by_gem_id

    async def _resolve_opponent(self, gem_id: str) -> Optional[str]:
        """Resolve an external id, treating store failures as unresolved."""
        try:
            return await self.store.resolve(gem_id)
        except StatsException as e:
            logger.warning(f"Could not resolve external id {gem_id}: {e}")
            return None

    @staticmethod
    def _build_record(
        user_id: str,
        opponent_id: str,
        matches: List[MatchRecord],
        updated_at: str
    ) -> Optional[H2HRecord]:
        """Tally one opponent group and map it onto the canonical pair order."""
        wins = sum(1 for m in matches if m.result == MatchResult.WIN)
        losses = sum(1 for m in matches if m.result == MatchResult.LOSS)
        draws = sum(1 for m in matches if m.result == MatchResult.DRAW)

        total = wins + losses + draws
        if total == 0:
            return None

        p1, p2 = sorted([user_id, opponent_id])
        is_p1 = user_id == p1
        return H2HRecord(
            p1=p1,
            p2=p2,
            p1_wins=wins if is_p1 else losses,
            p2_wins=losses if is_p1 else wins,
            draws=draws,
            total=total,
            updated_at=updated_at
        )
