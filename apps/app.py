# -*- coding: utf-8 -*-
"""Gradio chat window for the India travel guide."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional, Tuple

import gradio as gr

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from travel_guide.container import get_container
from travel_guide.domain.messages import WELCOME_MESSAGE
from travel_guide.domain.models import PlaceRecord
from travel_guide.logging_setup import setup_logging
from travel_guide.services import QueryResolverService

EXAMPLES: List[str] = [
    "What are the timings of Taj Mahal?",
    "Where is Hawa Mahal?",
    "Red Fort amenities",
    "Tell me about Gateway of India",
]


def format_place_card(place: Optional[PlaceRecord]) -> str:
    if place is None:
        return ""

    if place.hours:
        first = place.hours[0]
        hours = f"{first.opens:%H:%M} - {first.closes:%H:%M}"
    else:
        hours = "Hours vary"

    amenities = " · ".join(place.available_amenities) or "None listed"
    card = (
        f"### 📍 {place.name}\n\n"
        f"🕒 {hours}  \n"
        f"ℹ️ {amenities}\n"
    )
    if place.map_link:
        card += f"\n[🗺️ View on Map]({place.map_link})\n"
    return card


def _render_history(history: List[Tuple[str, str]]) -> str:
    lines = [f"🤖 {WELCOME_MESSAGE}"]
    for question, answer in history:
        lines.append(f"🧑 **{question}**")
        lines.append(f"🤖 {answer}")
    return "\n\n---\n\n".join(lines)


def build_app(resolver: QueryResolverService) -> gr.Blocks:
    async def ask(
        question: str, history: List[Tuple[str, str]]
    ) -> Tuple[str, str, List[Tuple[str, str]], str]:
        result, error = await resolver.resolve_safe(question)
        if result is None:
            return _render_history(history), f"⚠️ {error}", history, question

        history = history + [(question.strip(), result.answer)]
        return _render_history(history), format_place_card(result.place), history, ""

    with gr.Blocks(title="India Travel Guide") as app:
        gr.Markdown(
            "# 🇮🇳 Incredible India Travel Guide\n"
            "Ask about timings, locations, amenities, or general information "
            "about Indian tourist spots!"
        )

        history_state = gr.State([])

        with gr.Row():
            conversation = gr.Markdown(_render_history([]))
            place_card = gr.Markdown("")

        with gr.Row():
            question_box = gr.Textbox(
                placeholder="Ask about places in India...",
                label="💬 Question",
                scale=4,
            )
            btn = gr.Button("📨 Send", scale=1)

        gr.Examples(EXAMPLES, inputs=question_box)

        outputs = [conversation, place_card, history_state, question_box]
        btn.click(ask, inputs=[question_box, history_state], outputs=outputs)
        question_box.submit(ask, inputs=[question_box, history_state], outputs=outputs)

    return app


if __name__ == "__main__":
    setup_logging()
    build_app(get_container().resolve(QueryResolverService)).launch()
