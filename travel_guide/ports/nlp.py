"""NLP ports - Abstractions for place retrieval and intent classification.

These protocols define the contracts for the text-matching steps of a
resolution, so the rule-based implementations can be swapped without
changing the resolver.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Catalog, Intent, PlaceRecord


class PlaceRetrieverPort(Protocol):
    """Port for finding the catalog entry a text is about.

    Implementation: adapters/nlp/substring_retriever.py
    """

    def retrieve(self, query: str, catalog: Catalog) -> Optional[PlaceRecord]:
        """Find the single record the query refers to.

        Args:
            query: The user's question.
            catalog: The catalog to search.

        Returns:
            The record named exactly by the query, otherwise the first
            matching record in catalog order, or None.
        """
        ...

    def mentioned_places(self, text: str, catalog: Catalog) -> Sequence[PlaceRecord]:
        """List every record whose name appears in the text.

        Args:
            text: Free text to scan (e.g., a model reply).
            catalog: The catalog to scan against.

        Returns:
            Matching records in catalog order.
        """
        ...


class IntentClassifierPort(Protocol):
    """Port for intent classification.

    Intent classification decides which facet of a place (hours,
    location, amenities or a general overview) the user wants.
    """

    def classify(self, query: str) -> Intent:
        """Classify the intent of a query.

        Args:
            query: The input question to classify.

        Returns:
            Intent enum value (HOURS, LOCATION, AMENITIES, GENERAL).
        """
        ...
