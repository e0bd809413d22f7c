"""
Document store service backed by SQLAlchemy async sessions.

Stores schemaless JSON documents under (collection, key). Writes are full
overwrites, never merges, and a WriteBatch commits all of its staged documents
in one transaction.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from matchstats.constants import CollectionNames
from matchstats.database.models import Document
from matchstats.services.base import BaseService
from matchstats.utils.stats_exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


class WriteBatch:
    """Collects document overwrites and applies them atomically on commit."""

    def __init__(self, store: 'DocumentStore'):
        self._store = store
        self._writes: Dict[Tuple[str, str], Dict[str, Any]] = {}
        self._committed = False

    def stage(self, collection: str, key: str, data: Dict[str, Any]):
        """Stage a full overwrite. Restaging the same key replaces the earlier write."""
        if self._committed:
            raise RuntimeError("Cannot stage writes on a committed batch")
        self._writes[(collection, key)] = dict(data)

    def __len__(self) -> int:
        return len(self._writes)

    async def commit(self):
        """Apply all staged writes in one transaction. An empty batch is a no-op."""
        if self._committed:
            raise RuntimeError("Batch already committed")
        self._committed = True
        if not self._writes:
            return
        await self._store._write_many(list(self._writes.items()))


class DocumentStore(BaseService):
    """Collection/key document persistence with atomic batch writes."""

    def __init__(self, session_factory):
        super().__init__(session_factory)

    async def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        """Read one document, or None when it does not exist."""
        try:
            async with self.get_session() as session:
                document = await session.get(Document, (collection, key))
                return dict(document.data) if document else None
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"read {collection}/{key}", str(e)) from e

    async def put(self, collection: str, key: str, data: Dict[str, Any]):
        """Replace a document wholesale."""
        await self._write_many([((collection, key), dict(data))])

    async def delete(self, collection: str, key: str):
        try:
            async with self.get_session() as session:
                await session.execute(
                    delete(Document).where(
                        Document.collection == collection,
                        Document.key == key
                    )
                )
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"delete {collection}/{key}", str(e)) from e

    async def list_documents(self, collection: str) -> List[Dict[str, Any]]:
        """Read every document in a collection, ordered by key."""
        try:
            async with self.get_session() as session:
                result = await session.execute(
                    select(Document)
                    .where(Document.collection == collection)
                    .order_by(Document.key)
                )
                return [dict(document.data) for document in result.scalars().all()]
        except SQLAlchemyError as e:
            raise StoreUnavailableError(f"list {collection}", str(e)) from e

    def batch(self) -> WriteBatch:
        return WriteBatch(self)

    async def resolve(self, external_id: str) -> Optional[str]:
        """Map an external player id to an internal account id."""
        mapping = await self.get(CollectionNames.GEM_IDS, external_id)
        if not mapping:
            return None
        return mapping.get('userId') or None

    async def register_external_id(self, external_id: str, user_id: str):
        await self.put(CollectionNames.GEM_IDS, external_id, {'userId': user_id})

    async def _write_many(self, writes: List[Tuple[Tuple[str, str], Dict[str, Any]]]):
        """Overwrite several documents in a single transaction."""
        try:
            async with self.get_session() as session:
                for (collection, key), data in writes:
                    await session.merge(Document(collection=collection, key=key, data=data))
        except SQLAlchemyError as e:
            logger.error(f"Failed to write {len(writes)} documents: {e}")
            raise StoreUnavailableError(f"write of {len(writes)} documents", str(e)) from e
        logger.debug(f"Wrote {len(writes)} documents")
