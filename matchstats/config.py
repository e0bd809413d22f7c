import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Stats engine configuration settings"""
    
    # Database settings
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///matchstats.db')
    
    # Logging settings
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    LOG_DIR = os.getenv('LOG_DIR', 'logs')
    
    # H2H aggregation settings
    H2H_BATCH_LIMIT = int(os.getenv('H2H_BATCH_LIMIT', 400))  # Atomic batch ceiling is 500 writes
    MAX_BATCH_WRITES = 500
    
    # Match import settings
    IMPORT_BATCH_SIZE = int(os.getenv('IMPORT_BATCH_SIZE', 500))  # Matches per import transaction
    
    # Leaderboard settings
    LEADERBOARD_CACHE_TTL = int(os.getenv('LEADERBOARD_CACHE_TTL', 60))  # seconds
    FEATURED_PROFILE_COUNT = 4
    FEATURED_POOL_SIZE = 3
    
    @classmethod
    def get_async_database_url(cls) -> str:
        """Get the database URL with an async driver"""
        database_url = cls.DATABASE_URL
        if database_url.startswith('sqlite:///'):
            database_url = database_url.replace('sqlite:///', 'sqlite+aiosqlite:///')
        return database_url
    
    @classmethod
    def validate(cls):
        """Validate that configuration values are usable"""
        if cls.H2H_BATCH_LIMIT <= 0:
            raise ValueError("H2H_BATCH_LIMIT must be a positive integer")
        if cls.H2H_BATCH_LIMIT > cls.MAX_BATCH_WRITES:
            raise ValueError(f"H2H_BATCH_LIMIT cannot exceed {cls.MAX_BATCH_WRITES}")
        if not 0 < cls.IMPORT_BATCH_SIZE <= cls.MAX_BATCH_WRITES:
            raise ValueError(f"IMPORT_BATCH_SIZE must be between 1 and {cls.MAX_BATCH_WRITES}")
        if cls.LEADERBOARD_CACHE_TTL < 0:
            raise ValueError("LEADERBOARD_CACHE_TTL cannot be negative")
