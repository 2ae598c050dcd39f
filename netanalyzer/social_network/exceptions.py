"""
Exceptions raised by the social network core
"""
from typing import Optional, Dict, Any


class SocialNetworkError(Exception):
    """Base exception for the social network core"""

    def __init__(self, message: str, status_code: int = 500, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class UnknownUserError(SocialNetworkError, KeyError):
    """Lookup of a user identifier that is not registered in the graph"""

    def __init__(self, user_id: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"User not found: {user_id}", status_code=404, details=details or {})
        self.user_id = user_id
        self.details["user_id"] = user_id


class MalformedInputError(SocialNetworkError, ValueError):
    """Serialized network data that cannot be parsed"""

    def __init__(self, message: str, source: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=400, details=details or {})
        self.source = source
        if source:
            self.details["source"] = source


class InvalidSearchAlgorithmError(SocialNetworkError, ValueError):
    """Unknown pattern matching algorithm name"""

    def __init__(self, algorithm: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Unknown search algorithm: {algorithm}", status_code=400, details=details or {})
        self.algorithm = algorithm
        self.details["algorithm"] = algorithm
