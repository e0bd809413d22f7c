"""
Match Import & Sync Service

Persists a user's imported matches and keeps their head-to-head records in
step. Aggregation runs as a background task after the import commits, so a
failed or slow recompute never fails the import itself.
"""

import asyncio
import time
import uuid
from dataclasses import replace
from typing import Callable, Iterable, List, Optional

from matchstats.config import Config
from matchstats.constants import CollectionNames
from matchstats.data_models.match import MatchRecord
from matchstats.services.document_store import DocumentStore
from matchstats.services.h2h import H2HService
from matchstats.utils.logger import setup_logger

logger = setup_logger(__name__)


class MatchSyncService:
    """Service for match storage and post-import aggregation."""

    def __init__(
        self,
        store: DocumentStore,
        h2h_service: H2HService,
        on_recompute_complete: Optional[Callable[[str, float, bool], None]] = None
    ):
        self.store = store
        self.h2h_service = h2h_service
        self.write_batch_limit = Config.IMPORT_BATCH_SIZE
        # Optional monitoring callback: (user_id, duration, success)
        self.on_recompute_complete = on_recompute_complete
        # Background task tracking for proper lifecycle management
        self._background_tasks: set = set()

    async def list_matches(self, user_id: str) -> List[MatchRecord]:
        """Get a user's matches ordered by date, oldest first."""
        documents = await self.store.list_documents(CollectionNames.user_matches(user_id))
        matches = [MatchRecord.from_dict(doc) for doc in documents]
        return sorted(matches, key=lambda m: m.date)

    async def import_matches(self, user_id: str, matches: Iterable[MatchRecord]) -> int:
        """
        Store imported matches and schedule an H2H recompute.

        Matches without an id are assigned one. Writes are committed in
        batches no larger than the atomic batch limit.

        Returns:
            Number of matches stored
        """
        collection = CollectionNames.user_matches(user_id)
        stored = [m if m.id else replace(m, id=uuid.uuid4().hex) for m in matches]
        if not stored:
            return 0

        for start in range(0, len(stored), self.write_batch_limit):
            batch = self.store.batch()
            for match in stored[start:start + self.write_batch_limit]:
                batch.stage(collection, match.id, match.to_dict())
            await batch.commit()

        logger.info(f"Imported {len(stored)} matches for user {user_id}")
        self.schedule_h2h_recompute(user_id)
        return len(stored)

    async def recompute_h2h(self, user_id: str) -> int:
        """Recompute a user's H2H records from their full stored match list."""
        matches = await self.list_matches(user_id)
        return await self.h2h_service.compute_h2h_for_user(user_id, matches)

    def schedule_h2h_recompute(self, user_id: str) -> asyncio.Task:
        """Run an H2H recompute in the background."""
        task = asyncio.create_task(self._recompute_h2h_background(user_id))
        self._background_tasks.add(task)
        # Remove task from set when it completes to prevent memory leaks
        task.add_done_callback(self._background_tasks.discard)
        logger.debug(f"Scheduled background H2H recompute for user {user_id}")
        return task

    async def _recompute_h2h_background(self, user_id: str):
        """Background recompute; failures are logged, never raised."""
        start_time = time.monotonic()
        success = False
        try:
            written = await self.recompute_h2h(user_id)
            logger.info(f"Completed background H2H recompute for user {user_id} ({written} records)")
            success = True
        except Exception as e:
            # Aggregation is best-effort; the next import re-triggers it
            logger.error(f"Background H2H recompute failed for user {user_id}: {e}", exc_info=True)

        if self.on_recompute_complete:
            try:
                self.on_recompute_complete(user_id, time.monotonic() - start_time, success)
            except Exception as e:
                logger.warning(f"Monitoring callback on_recompute_complete failed: {e}")

    async def wait_for_background_tasks(self):
        """Wait for scheduled recomputes to finish."""
        if self._background_tasks:
            await asyncio.gather(*list(self._background_tasks), return_exceptions=True)

    async def cleanup(self):
        """Cancel background tasks for graceful shutdown."""
        if self._background_tasks:
            logger.info(f"Cancelling {len(self._background_tasks)} background tasks...")
            for task in self._background_tasks:
                if not task.done():
                    task.cancel()

            await asyncio.gather(*list(self._background_tasks), return_exceptions=True)
            self._background_tasks.clear()
            logger.info("All background tasks cleaned up.")
