"""Keyword-based intent classification adapter.

Each rule is a keyword set tied to an intent. Rules are tested in
order and the first one with a keyword present in the query wins, so a
question such as "where is it open?" resolves to HOURS, not LOCATION.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Tuple

from ...domain.models import Intent

IntentRule = Tuple[Intent, FrozenSet[str]]

DEFAULT_RULES: Tuple[IntentRule, ...] = (
    (Intent.HOURS, frozenset({"timing", "hours", "open"})),
    (Intent.LOCATION, frozenset({"address", "location", "where"})),
    (Intent.AMENITIES, frozenset({"amenities", "facilities"})),
)


@dataclass
class KeywordIntentClassifier:
    """Rule-based intent classifier.

    This adapter implements IntentClassifierPort.

    Attributes:
        rules: Ordered (intent, keywords) pairs; GENERAL when none match
    """

    rules: Tuple[IntentRule, ...] = DEFAULT_RULES
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def classify(self, query: str) -> Intent:
        """Classify the intent of a query.

        Args:
            query: The input question to classify.

        Returns:
            Intent enum value (HOURS, LOCATION, AMENITIES, GENERAL).
        """
        lowered = query.lower()
        result = Intent.GENERAL

        for intent, keywords in self.rules:
            if any(keyword in lowered for keyword in keywords):
                result = intent
                break

        self._logger.debug(
            "Intent classified",
            extra={"query_length": len(query), "intent": result.name},
        )

        return result
