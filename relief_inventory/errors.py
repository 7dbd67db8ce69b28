# relief_inventory/errors.py

from typing import Optional, Dict, Any


class ReliefInventoryError(Exception):
    """
    Base exception for the outer layers (feeds, configuration).

    The allocation core never raises these: it fails open to safe
    defaults. Repositories raise them so the API can report a failed
    fetch instead of rendering an empty dashboard silently.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "RI_000"
        self.details = details or {}

    def __str__(self) -> str:
        base = f"[{self.code}] {self.message}"
        if self.details:
            base += f" | Details: {self.details}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class FeedConfigurationError(ReliefInventoryError):
    """Feed backend is unknown or its credentials are missing."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="FEED_001", details=details)


class FeedFetchError(ReliefInventoryError):
    """Feed source could not be read."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="FEED_002", details=details)
