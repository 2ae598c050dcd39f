"""
Custom exceptions for the netanalyzer API
"""
from typing import Optional, Dict, Any


class NetAnalyzerException(Exception):
    """Base exception for netanalyzer API"""

    def __init__(self, message: str, status_code: int = 500, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(NetAnalyzerException):
    """Validation error"""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=400, details=details or {})
        if field:
            self.details["field"] = field


class NotFoundError(NetAnalyzerException):
    """Resource not found error"""

    def __init__(self, resource: str, resource_id: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        message = f"{resource} not found"
        if resource_id:
            message += f": {resource_id}"
        super().__init__(message, status_code=404, details=details or {})


class FileProcessingError(NetAnalyzerException):
    """Network file could not be written"""

    def __init__(self, filename: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"File processing error ({filename}): {message}", status_code=500, details=details or {})
        self.filename = filename
