"""
Leaderboard service for the stats tracker.

Reads the per-user leaderboard snapshot with a short TTL cache and derives the
presentation data built on it: featured profiles, rank badges and power levels.
"""

import asyncio
import time
import logging
from typing import List, Optional

from matchstats.config import Config
from matchstats.constants import CollectionNames
from matchstats.data_models.leaderboard import FeaturedProfile, LeaderboardEntry, LeaderboardRank
from matchstats.services.document_store import DocumentStore
from matchstats.utils.featured_profiles import select_featured_profiles
from matchstats.utils.leaderboard_ranks import compute_user_ranks
from matchstats.utils.power_level import compute_power_level

logger = logging.getLogger(__name__)


class LeaderboardService:
    """Service for leaderboard snapshot reads with caching."""

    def __init__(self, store: DocumentStore, cache_ttl: Optional[int] = None):
        self.store = store
        self._cache_ttl = cache_ttl if cache_ttl is not None else Config.LEADERBOARD_CACHE_TTL
        self._cached_entries: Optional[List[LeaderboardEntry]] = None
        self._cache_timestamp = 0.0
        self._cache_lock = asyncio.Lock()

    def _is_cache_valid(self) -> bool:
        if self._cached_entries is None:
            return False
        return time.monotonic() - self._cache_timestamp < self._cache_ttl

    async def get_entries(self) -> List[LeaderboardEntry]:
        """Get all public leaderboard entries, served from cache while fresh."""
        async with self._cache_lock:
            if self._is_cache_valid():
                return list(self._cached_entries)

            documents = await self.store.execute_with_retry(
                lambda: self.store.list_documents(CollectionNames.LEADERBOARD)
            )
            entries = [LeaderboardEntry.from_dict(doc) for doc in documents]
            self._cached_entries = [e for e in entries if e.is_public]
            self._cache_timestamp = time.monotonic()
            logger.debug(f"Loaded {len(self._cached_entries)} public leaderboard entries")
            return list(self._cached_entries)

    async def get_entry(self, user_id: str) -> Optional[LeaderboardEntry]:
        """Get a single user's entry regardless of visibility."""
        document = await self.store.get(CollectionNames.LEADERBOARD, user_id)
        return LeaderboardEntry.from_dict(document) if document else None

    async def put_entry(self, entry: LeaderboardEntry):
        """Replace a user's entry and drop the cached snapshot."""
        await self.store.put(CollectionNames.LEADERBOARD, entry.user_id, entry.to_dict())
        await self.clear_cache()

    async def clear_cache(self):
        """Clears the cached leaderboard snapshot."""
        async with self._cache_lock:
            self._cached_entries = None
            self._cache_timestamp = 0.0
        logger.debug("Leaderboard cache cleared.")

    async def get_featured_profiles(self) -> List[FeaturedProfile]:
        return select_featured_profiles(await self.get_entries())

    async def get_user_ranks(self, user_id: str) -> List[LeaderboardRank]:
        return compute_user_ranks(await self.get_entries(), user_id)

    async def get_power_level(self, user_id: str) -> Optional[int]:
        entry = await self.get_entry(user_id)
        if entry is None:
            return None
        return compute_power_level(entry)
