"""
Custom exceptions for the stats engine with user-friendly error messages.
"""

class StatsException(Exception):
    """Base exception for stats-related errors."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message

class StoreUnavailableError(StatsException):
    """Raised when a document store read or write fails at the I/O layer."""
    def __init__(self, operation: str, details: str = None):
        super().__init__(
            f"Store error during {operation}: {details}",
            "Stats could not be saved right now. They will refresh on your next import."
        )
        self.operation = operation

class InvalidRecordError(StatsException):
    """Raised when a stored document cannot be read as the expected record."""
    def __init__(self, kind: str, reason: str):
        super().__init__(
            f"Invalid {kind} record: {reason}",
            f"Could not read {kind} data."
        )
        self.kind = kind
