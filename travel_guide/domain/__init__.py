"""Domain layer - Core business models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    CatalogError,
    ConfigurationError,
    InvalidQueryError,
    ServiceUnavailableError,
    TravelGuideError,
)
from .models import (
    Address,
    Amenity,
    Catalog,
    Intent,
    OpeningHours,
    PlaceRecord,
    ResolutionResult,
    ResolutionStatus,
    Synthesis,
    SynthesisRequest,
)

__all__ = [
    # Models
    "Address",
    "Amenity",
    "OpeningHours",
    "PlaceRecord",
    "Catalog",
    "Intent",
    "ResolutionStatus",
    "ResolutionResult",
    "Synthesis",
    "SynthesisRequest",
    # Errors
    "TravelGuideError",
    "InvalidQueryError",
    "ServiceUnavailableError",
    "CatalogError",
    "ConfigurationError",
]
