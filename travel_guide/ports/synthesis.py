"""Synthesis port - Abstraction for turning a matched place into an answer.

Two interchangeable strategies implement this port:
- adapters/synthesis/template.py (deterministic templates)
- adapters/synthesis/openai_adapter.py (external chat model, grounded on the catalog)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import Synthesis, SynthesisRequest


class AnswerSynthesizerPort(Protocol):
    """Port for answer synthesis.

    Implementations must only state facts present in the catalog.
    Strategies that depend on an external service raise
    ServiceUnavailableError when it fails; the resolver converts that
    into the fixed apology.
    """

    async def synthesize(self, request: SynthesisRequest) -> Synthesis:
        """Produce the answer for a matched place.

        Args:
            request: Query, matched place, intent and catalog.

        Returns:
            Synthesis with the answer text and the record to attach.

        Raises:
            ServiceUnavailableError: If an external dependency fails.
        """
        ...
