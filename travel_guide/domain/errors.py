"""Typed domain errors for the travel guide.

All errors inherit from TravelGuideError and can optionally wrap a
root cause exception for debugging.

A query that matches no catalog entry is not an error: it is a
designed terminal state of the resolver and never raises.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TravelGuideError(Exception):
    """Base error for the travel guide domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InvalidQueryError(TravelGuideError):
    """The query text is missing or blank.

    Raised before retrieval; callers should treat it as a client error.

    Attributes:
        query: The rejected query, if any
    """

    query: Optional[str] = None


@dataclass
class ServiceUnavailableError(TravelGuideError):
    """The external text-generation service failed or timed out.

    Attributes:
        provider: Base URL or name of the failing service
        is_timeout: Whether the failure was the bounded wait expiring
        status_code: HTTP status returned by the service, if any
    """

    provider: str = ""
    is_timeout: bool = False
    status_code: Optional[int] = None


@dataclass
class CatalogError(TravelGuideError):
    """Catalog loading or data integrity error.

    Attributes:
        file_path: Path to the catalog file if relevant
        place_name: Name of the offending record, if known
    """

    file_path: Optional[str] = None
    place_name: Optional[str] = None


@dataclass
class ConfigurationError(TravelGuideError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
