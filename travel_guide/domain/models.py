"""Immutable domain models for the travel guide.

All models are frozen dataclasses with slots. The catalog is built once
at startup from these records and is never mutated afterwards, so the
same instances can be shared by concurrent resolutions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from enum import Enum, auto
from typing import Any, Dict, FrozenSet, Iterator, List, Optional

WEEKDAYS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# Labels that cover the whole week
_ALL_WEEK_LABELS = {"daily", "everyday", "all days"}

AMENITY_LABELS: Dict[str, str] = {
    "light_and_sound_show": "Light & Sound Show",
    "wheelchair_accessible": "Wheelchair Accessible",
}


class Intent(Enum):
    """Which facet of a place the user is asking about."""

    HOURS = auto()
    LOCATION = auto()
    AMENITIES = auto()
    GENERAL = auto()


class ResolutionStatus(Enum):
    """Terminal state of a single resolution call.

    Attributes
    ----------
    MATCHED
        A catalog entry was found and an answer was synthesized.
    UNMATCHED
        Nothing in the catalog matches; the fixed refusal is returned.
    FAILED
        The external model could not be reached; the fixed apology is returned.
    """

    MATCHED = auto()
    UNMATCHED = auto()
    FAILED = auto()


def parse_days(label: str) -> FrozenSet[str]:
    """Expand a days label such as ``"Mon-Fri, Sun"`` into weekday names.

    Ranges may wrap around the end of the week (``"Fri-Mon"``).

    Raises:
        ValueError: If the label contains an unknown day.
    """
    normalized = label.strip()
    if normalized.lower() in _ALL_WEEK_LABELS:
        return frozenset(WEEKDAYS)

    index = {day.lower(): i for i, day in enumerate(WEEKDAYS)}
    days: set[str] = set()

    for part in normalized.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            start_raw, end_raw = (p.strip().lower()[:3] for p in part.split("-", 1))
            if start_raw not in index or end_raw not in index:
                raise ValueError(f"Unknown day range {part!r} in {label!r}")
            start, end = index[start_raw], index[end_raw]
            span = (end - start) % len(WEEKDAYS)
            for offset in range(span + 1):
                days.add(WEEKDAYS[(start + offset) % len(WEEKDAYS)])
        else:
            key = part.lower()[:3]
            if key not in index:
                raise ValueError(f"Unknown day {part!r} in {label!r}")
            days.add(WEEKDAYS[index[key]])

    if not days:
        raise ValueError(f"Days label is empty: {label!r}")
    return frozenset(days)


@dataclass(frozen=True, slots=True)
class OpeningHours:
    """One opening interval of a place.

    Attributes:
        days: Days label as shown to users (e.g., 'Mon-Sun', 'Sat-Thu')
        opens: Opening time
        closes: Closing time, strictly after ``opens``
    """

    days: str
    opens: time
    closes: time

    def __post_init__(self) -> None:
        """Validate the interval."""
        if not self.opens < self.closes:
            raise ValueError(
                f"Opening time must be before closing time, got "
                f"{self.opens:%H:%M} - {self.closes:%H:%M} for {self.days!r}"
            )
        parse_days(self.days)

    @property
    def weekdays(self) -> FrozenSet[str]:
        """Weekday names covered by this interval."""
        return parse_days(self.days)

    def overlaps(self, other: OpeningHours) -> bool:
        """Check whether two intervals share a day and a moment in time."""
        if not self.weekdays & other.weekdays:
            return False
        return self.opens < other.closes and other.opens < self.closes

    def format(self) -> str:
        return f"{self.days}: {self.opens:%H:%M} - {self.closes:%H:%M}"


@dataclass(frozen=True, slots=True)
class Address:
    """Structured postal address of a place."""

    street: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    postal_code: Optional[str] = None

    @property
    def formatted(self) -> str:
        """Non-empty parts joined into a single line."""
        parts = [self.street, self.city, self.state]
        if self.postal_code:
            parts.append(self.postal_code)
        parts.append(self.country)
        return ", ".join(p for p in parts if p)

    @property
    def is_empty(self) -> bool:
        return not self.formatted


@dataclass(frozen=True, slots=True)
class Amenity:
    """A boolean amenity flag (e.g., 'parking', 'family_friendly')."""

    key: str
    available: bool = True

    @property
    def label(self) -> str:
        """Human-readable name of the amenity."""
        return AMENITY_LABELS.get(self.key, self.key.replace("_", " ").title())


@dataclass(frozen=True, slots=True)
class PlaceRecord:
    """A catalog entry describing one tourist destination.

    Attributes:
        place_id: Stable identifier (e.g., 'taj-mahal')
        name: Display name, unique within the catalog
        categories: Category tags (e.g., 'Mughal Architecture')
        description: Free-text blurb
        address: Structured address
        hours: Opening intervals in catalog order; empty means unknown
        amenities: Amenity flags
        map_link: Optional external map URI
    """

    place_id: str
    name: str
    categories: tuple[str, ...] = field(default_factory=tuple)
    description: str = ""
    address: Address = field(default_factory=Address)
    hours: tuple[OpeningHours, ...] = field(default_factory=tuple)
    amenities: tuple[Amenity, ...] = field(default_factory=tuple)
    map_link: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate name and hour intervals."""
        if not self.name or not self.name.strip():
            raise ValueError(f"Place name must not be empty (id={self.place_id!r})")
        for i, first in enumerate(self.hours):
            for second in self.hours[i + 1 :]:
                if first.overlaps(second):
                    raise ValueError(
                        f"Overlapping hours for {self.name!r}: "
                        f"{first.format()} and {second.format()}"
                    )

    @property
    def has_hours(self) -> bool:
        return len(self.hours) > 0

    @property
    def available_amenities(self) -> tuple[str, ...]:
        """Labels of the amenities flagged as available."""
        return tuple(a.label for a in self.amenities if a.available)

    @property
    def hours_text(self) -> Optional[str]:
        """All intervals on one line, or None when hours are unknown."""
        if not self.hours:
            return None
        return ", ".join(h.format() for h in self.hours)

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-serializable view, used for prompts and API payloads."""
        return {
            "id": self.place_id,
            "name": self.name,
            "category": list(self.categories),
            "description": self.description,
            "address": self.address.formatted,
            "hours": [
                {
                    "days": h.days,
                    "open": f"{h.opens:%H:%M}",
                    "close": f"{h.closes:%H:%M}",
                }
                for h in self.hours
            ],
            "amenities": list(self.available_amenities),
            "map_link": self.map_link,
        }


@dataclass(frozen=True, slots=True)
class Catalog:
    """Read-only, ordered collection of place records.

    Iteration order is the catalog order used to break retrieval ties.
    """

    places: tuple[PlaceRecord, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Ensure names are unique (case-insensitive)."""
        seen: set[str] = set()
        for place in self.places:
            key = place.name.strip().lower()
            if key in seen:
                raise ValueError(f"Duplicate place name in catalog: {place.name!r}")
            seen.add(key)

    def __iter__(self) -> Iterator[PlaceRecord]:
        return iter(self.places)

    def __len__(self) -> int:
        return len(self.places)

    def get(self, name: str) -> Optional[PlaceRecord]:
        """Find a record by exact (case-insensitive) name."""
        key = name.strip().lower()
        for place in self.places:
            if place.name.lower() == key:
                return place
        return None

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.places)

    def to_list(self) -> List[Dict[str, Any]]:
        return [p.to_dict() for p in self.places]


@dataclass(frozen=True, slots=True)
class SynthesisRequest:
    """Everything a synthesis strategy may use to answer one query.

    Attributes:
        query: The user's original question
        place: Record the retriever matched for the query
        intent: Facet of the place the user asked about
        catalog: The full catalog (the only permissible source of facts)
    """

    query: str
    place: PlaceRecord
    intent: Intent
    catalog: Catalog


@dataclass(frozen=True, slots=True)
class Synthesis:
    """Output of a synthesis strategy.

    Attributes:
        text: Answer prose
        place: Record to attach to the answer, if any
        refused: True when the strategy declined to answer from the catalog
    """

    text: str
    place: Optional[PlaceRecord] = None
    refused: bool = False


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Result of resolving one query.

    Attributes:
        answer: Text shown to the user
        place: The single record attached to the answer, if any
        status: Terminal state of the resolution
        intent: Classified intent, when the query matched a record
    """

    answer: str
    place: Optional[PlaceRecord] = None
    status: ResolutionStatus = ResolutionStatus.MATCHED
    intent: Optional[Intent] = None

    @property
    def has_place(self) -> bool:
        return self.place is not None
