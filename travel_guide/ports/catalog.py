"""Catalog port - Abstraction for loading the place catalog.

The repository loads the catalog once and hands out the same
read-only instance for the life of the process.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Catalog, PlaceRecord


class CatalogRepositoryPort(Protocol):
    """Port for loading place records.

    Implementation: adapters/catalog/json_repository.py
    """

    def load(self) -> Catalog:
        """Load the catalog.

        Returns:
            The validated, immutable catalog.
        """
        ...

    def get_place(self, name: str) -> Optional[PlaceRecord]:
        """Get a place by its exact name.

        Args:
            name: The place name (case-insensitive).

        Returns:
            The matching record, or None if not found.
        """
        ...

    def list_places(self) -> Sequence[PlaceRecord]:
        """List all places in catalog order."""
        ...
