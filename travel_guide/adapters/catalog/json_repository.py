"""JSON catalog repository adapter.

Loads the place catalog from a JSON file, validates every record and
keeps the resulting immutable catalog for the life of the process.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import time
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ...config import CatalogConfig, get_config
from ...domain.errors import CatalogError
from ...domain.models import Address, Amenity, Catalog, OpeningHours, PlaceRecord


def _parse_time(value: str) -> time:
    # "6:00" is accepted alongside "06:00"
    hours, _, minutes = value.strip().partition(":")
    return time(int(hours), int(minutes or 0))


def _parse_hours(raw: Any) -> tuple[OpeningHours, ...]:
    if not raw:
        return ()
    return tuple(
        OpeningHours(
            days=str(item["days"]),
            opens=_parse_time(str(item["open"])),
            closes=_parse_time(str(item["close"])),
        )
        for item in raw
    )


def _parse_amenities(raw: Any) -> tuple[Amenity, ...]:
    # Either {"parking": true, ...} or a plain list of available amenities
    if not raw:
        return ()
    if isinstance(raw, Mapping):
        return tuple(Amenity(key=str(k), available=bool(v)) for k, v in raw.items())
    return tuple(
        Amenity(key=str(item).strip().lower().replace(" ", "_")) for item in raw
    )


def _parse_address(raw: Any) -> Address:
    if isinstance(raw, str):
        return Address(street=raw)
    raw = raw or {}
    return Address(
        street=raw.get("street", "") or raw.get("address", ""),
        city=raw.get("city", ""),
        state=raw.get("state", ""),
        country=raw.get("country", ""),
        postal_code=raw.get("postal_code"),
    )


def parse_place(raw: Mapping[str, Any]) -> PlaceRecord:
    """Build a PlaceRecord from its JSON representation.

    Raises:
        KeyError: If a required field is missing.
        ValueError: If a field is invalid (bad hours, empty name, ...).
    """
    name = str(raw["name"]).strip()
    place_id = str(raw.get("id") or name.lower().replace(" ", "-"))
    categories = raw.get("category") or []
    if isinstance(categories, str):
        categories = [categories]

    return PlaceRecord(
        place_id=place_id,
        name=name,
        categories=tuple(str(c) for c in categories),
        description=str(raw.get("info", "")),
        address=_parse_address(raw.get("location")),
        hours=_parse_hours(raw.get("hours")),
        amenities=_parse_amenities(raw.get("amenities")),
        map_link=raw.get("map_link") or None,
    )


@dataclass
class JsonCatalogRepository:
    """Catalog repository that loads from a JSON file.

    This adapter implements CatalogRepositoryPort. The file holds an
    object with a ``places`` list; list order is catalog order.

    Attributes:
        config: Catalog configuration (data directory, file name)
    """

    config: CatalogConfig = field(default_factory=lambda: get_config().catalog)
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _catalog: Optional[Catalog] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load(self) -> Catalog:
        """Load the catalog from the JSON file.

        Returns:
            The validated catalog.

        Raises:
            CatalogError: If the file cannot be read or a record is invalid.
        """
        if self._catalog is not None:
            return self._catalog

        path = self.config.places_path
        self._logger.debug("Loading catalog", extra={"places_path": str(path)})

        try:
            with path.open(encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(
                f"Failed to read catalog: {e}",
                file_path=str(path),
                cause=e,
            )

        raw_places: List[Dict[str, Any]] = (
            document.get("places", []) if isinstance(document, dict) else document
        )

        places: List[PlaceRecord] = []
        for raw in raw_places:
            try:
                places.append(parse_place(raw))
            except (KeyError, TypeError, ValueError) as e:
                raise CatalogError(
                    f"Invalid catalog record: {e}",
                    file_path=str(path),
                    place_name=raw.get("name") if isinstance(raw, dict) else None,
                    cause=e,
                )

        try:
            catalog = Catalog(places=tuple(places))
        except ValueError as e:
            raise CatalogError(str(e), file_path=str(path), cause=e)

        self._catalog = catalog
        self._logger.info("Catalog loaded", extra={"places": len(catalog)})
        return catalog

    def get_place(self, name: str) -> Optional[PlaceRecord]:
        """Get a place by its exact name.

        Args:
            name: The place name (case-insensitive).

        Returns:
            The record, or None if not found.
        """
        return self.load().get(name)

    def list_places(self) -> Sequence[PlaceRecord]:
        """List all places in catalog order."""
        return list(self.load())

    def clear_cache(self) -> None:
        """Forget the loaded catalog so the next load() reads the file again."""
        self._catalog = None
        self._logger.debug("Catalog cache cleared")
