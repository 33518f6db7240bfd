"""Deterministic template synthesizer.

Renders an answer from a single record and intent. Output depends only
on (record, intent): no randomness, no I/O.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ...domain.messages import BASIC_AMENITIES, HOURS_UNAVAILABLE
from ...domain.models import Intent, PlaceRecord, Synthesis, SynthesisRequest


def render_hours(place: PlaceRecord) -> str:
    if not place.hours:
        body = HOURS_UNAVAILABLE
    else:
        body = "\n".join(h.format() for h in place.hours)
    return f"⏰ **{place.name}** is open:\n{body}"


def render_location(place: PlaceRecord) -> str:
    return f"📍 **{place.name}** is located at:\n{place.address.formatted}"


def render_amenities(place: PlaceRecord) -> str:
    labels = place.available_amenities
    body = ", ".join(labels) if labels else BASIC_AMENITIES
    return f"🏢 **{place.name}** amenities:\n{body}"


def render_general(place: PlaceRecord) -> str:
    parts = [f"ℹ️ **{place.name}**"]
    if place.description:
        parts.append(place.description)
    if not place.address.is_empty:
        parts.append(f"📍 {place.address.formatted}")
    return "\n\n".join(parts)


@dataclass
class TemplateAnswerSynthesizer:
    """Template-based synthesis strategy.

    This adapter implements AnswerSynthesizerPort. It always attaches
    the record it was given.
    """

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def render(self, place: PlaceRecord, intent: Intent) -> str:
        """Render the answer text for a record and intent.

        Args:
            place: The matched record.
            intent: The facet the user asked about.

        Returns:
            Formatted answer text.
        """
        if intent == Intent.HOURS:
            return render_hours(place)
        if intent == Intent.LOCATION and not place.address.is_empty:
            return render_location(place)
        if intent == Intent.AMENITIES:
            return render_amenities(place)
        return render_general(place)

    async def synthesize(self, request: SynthesisRequest) -> Synthesis:
        """Produce the templated answer for a matched place."""
        text = self.render(request.place, request.intent)
        self._logger.debug(
            "Template answer rendered",
            extra={"place": request.place.name, "intent": request.intent.name},
        )
        return Synthesis(text=text, place=request.place)
