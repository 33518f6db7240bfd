"""Substring-based place retriever.

Matches a query against each record's name, category tags, blurb and
address, case-insensitively, and returns the first record in catalog
order that satisfies any check. There is no ranking: ties go to the
earlier record. The one exception is a query equal to a record's name,
which always returns that record, so a short name such as "Fort" cannot
shadow a later "Red Fort".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ...domain.models import Catalog, PlaceRecord


def _matches(query: str, place: PlaceRecord) -> bool:
    """Check one record against an already lower-cased, stripped query."""
    name = place.name.lower()
    if query in name or name in query:
        return True

    for tag in place.categories:
        tag = tag.lower()
        if tag and (tag in query or query in tag):
            return True

    if query in place.description.lower():
        return True

    return query in place.address.formatted.lower()


@dataclass
class SubstringPlaceRetriever:
    """Rule-based retriever using case-insensitive substring containment.

    This adapter implements PlaceRetrieverPort.
    """

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def retrieve(self, query: str, catalog: Catalog) -> Optional[PlaceRecord]:
        """Find the record the query is about.

        Args:
            query: The user's question.
            catalog: The catalog to search.

        Returns:
            The record whose name equals the query, otherwise the first
            matching record in catalog order, or None.
        """
        normalized = query.strip().lower()
        if not normalized:
            return None

        match = next(
            (p for p in catalog if p.name.strip().lower() == normalized), None
        )
        if match is None:
            match = next((p for p in catalog if _matches(normalized, p)), None)

        self._logger.debug(
            "Place retrieval",
            extra={
                "query_length": len(query),
                "place": match.name if match else None,
            },
        )
        return match

    def mentioned_places(self, text: str, catalog: Catalog) -> Sequence[PlaceRecord]:
        """List the records whose name appears in the text.

        Args:
            text: Free text to scan.
            catalog: The catalog to scan against.

        Returns:
            Matching records in catalog order.
        """
        lowered = text.lower()
        found: List[PlaceRecord] = [p for p in catalog if p.name.lower() in lowered]
        return found
