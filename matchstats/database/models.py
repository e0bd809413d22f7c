from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func
from enum import Enum

Base = declarative_base()

class MatchResult(Enum):
    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"
    BYE = "bye"

class StreakType(Enum):
    WIN = "win"
    LOSS = "loss"

class Document(Base):
    """
    Schemaless document keyed by (collection, key).

    Every write replaces the whole `data` payload; there is no field-level merge.
    """
    __tablename__ = 'documents'

    collection = Column(String(200), primary_key=True)
    key = Column(String(200), primary_key=True)
    data = Column(JSON, nullable=False)

    # Metadata
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Document(collection='{self.collection}', key='{self.key}')>"
