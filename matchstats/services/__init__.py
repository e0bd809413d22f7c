"""
Services package for the match stats engine.
"""

from .base import BaseService
from .document_store import DocumentStore, WriteBatch
from .h2h import H2HService
from .leaderboard import LeaderboardService
from .match_sync import MatchSyncService

__all__ = [
    'BaseService', 'DocumentStore', 'WriteBatch',
    'H2HService', 'LeaderboardService', 'MatchSyncService'
]
