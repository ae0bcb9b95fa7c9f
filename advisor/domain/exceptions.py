"""
Advisor exception hierarchy.

All advisor-specific exceptions inherit from AdvisorError.
"""

from typing import Any, Dict, Optional


class AdvisorError(Exception):
    """Base exception for all advisor errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class MissingContextError(AdvisorError):
    """Raised when an operation needs a MemoryManager and none was supplied"""

    pass


# Session registry errors
class SessionError(AdvisorError):
    """Base exception for session registry errors"""

    pass


class SessionNotFoundError(SessionError):
    """Raised when a session id is not active"""

    pass


class SessionExistsError(SessionError):
    """Raised when creating a session whose id is already active"""

    pass
