"""Query resolver service - Main orchestrator.

Wires retrieval, intent classification and answer synthesis together
and owns the refusal and failure paths. Every call ends in one of three
states: MATCHED, UNMATCHED or FAILED.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..domain.errors import InvalidQueryError, ServiceUnavailableError
from ..domain.messages import NO_MATCH_REPLY, SERVICE_APOLOGY
from ..domain.models import (
    Catalog,
    ResolutionResult,
    ResolutionStatus,
    SynthesisRequest,
)
from ..ports.catalog import CatalogRepositoryPort
from ..ports.nlp import IntentClassifierPort, PlaceRetrieverPort
from ..ports.synthesis import AnswerSynthesizerPort


@dataclass
class QueryResolverService:
    """Main service for answering questions about catalog places.

    This service orchestrates the full flow:
    1. Input validation
    2. Place retrieval
    3. Intent classification
    4. Answer synthesis (template or external model)

    It holds no per-request state; concurrent calls share only the
    read-only catalog.

    Attributes:
        catalog_repository: Provides the catalog, loaded once
        retriever: Finds the place a query is about
        intent_classifier: Decides which facet of the place is wanted
        synthesizer: Writes the answer
    """

    catalog_repository: CatalogRepositoryPort
    retriever: PlaceRetrieverPort
    intent_classifier: IntentClassifierPort
    synthesizer: AnswerSynthesizerPort

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def catalog(self) -> Catalog:
        return self.catalog_repository.load()

    async def resolve(self, query: Optional[str]) -> ResolutionResult:
        """Answer a question about the catalog.

        Args:
            query: The user's question.

        Returns:
            ResolutionResult with the answer and at most one attached place.

        Raises:
            InvalidQueryError: If the query is missing or blank.
        """
        if query is None or not query.strip():
            raise InvalidQueryError("Message is required", query=query)

        self._logger.info(
            "Starting query resolution",
            extra={"query_length": len(query)},
        )

        catalog = self.catalog
        place = self.retriever.retrieve(query, catalog)

        if place is None:
            self._logger.info("No catalog entry matches query")
            return ResolutionResult(
                answer=NO_MATCH_REPLY,
                place=None,
                status=ResolutionStatus.UNMATCHED,
            )

        intent = self.intent_classifier.classify(query)
        self._logger.info(
            "Query matched",
            extra={"place": place.name, "intent": intent.name},
        )

        request = SynthesisRequest(
            query=query, place=place, intent=intent, catalog=catalog
        )

        try:
            synthesis = await self.synthesizer.synthesize(request)
        except ServiceUnavailableError as e:
            self._logger.warning(
                "Answer synthesis unavailable",
                extra={
                    "synthesizer": type(self.synthesizer).__name__,
                    "provider": e.provider,
                    "is_timeout": e.is_timeout,
                    "error": str(e),
                },
            )
            return ResolutionResult(
                answer=SERVICE_APOLOGY,
                place=None,
                status=ResolutionStatus.FAILED,
                intent=intent,
            )

        if synthesis.refused:
            return ResolutionResult(
                answer=NO_MATCH_REPLY,
                place=None,
                status=ResolutionStatus.UNMATCHED,
                intent=intent,
            )

        # Only the retrieved record may ever be attached
        attached = synthesis.place if synthesis.place == place else None

        return ResolutionResult(
            answer=synthesis.text,
            place=attached,
            status=ResolutionStatus.MATCHED,
            intent=intent,
        )

    async def resolve_safe(
        self, query: Optional[str]
    ) -> tuple[Optional[ResolutionResult], Optional[str]]:
        """Resolve a query, returning an error message instead of raising.

        Args:
            query: The user's question.

        Returns:
            Tuple of (ResolutionResult or None, error message or None).
        """
        try:
            return await self.resolve(query), None
        except InvalidQueryError as e:
            return None, e.message
