from typing import Any, Dict, Optional
from fastapi import status

class BaseAppException(Exception):
    """Base exception for application"""
    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Return error response envelope"""
        return {"error": self.message}

class InvalidRequestException(BaseAppException):
    """Raised when client input is missing or malformed"""
    def __init__(self, message: str = "Invalid request", details: Optional[Any] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        payload = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload

class UpstreamNotFoundException(BaseAppException):
    """Raised when OMDb reports no data for the request"""
    def __init__(self, message: str = "No movies found", upstream_message: Optional[str] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND)
        self.upstream_message = upstream_message

    def to_dict(self) -> Dict[str, Any]:
        payload = {"error": self.message}
        if self.upstream_message is not None:
            payload["message"] = self.upstream_message
        return payload

class UpstreamErrorException(BaseAppException):
    """Raised on network, parse or unexpected OMDb failures"""
    def __init__(self, message: str = "Upstream request failed", details: Optional[str] = None):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        payload = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload

class RouteNotFoundException(BaseAppException):
    """Raised when no handler matches the request"""
    def __init__(self, message: str = "Route not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)
