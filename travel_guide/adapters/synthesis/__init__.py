"""Synthesis adapters - Implementations of AnswerSynthesizerPort.

Available implementations:
- TemplateAnswerSynthesizer: Deterministic templates per intent
- OpenAIChatSynthesizer: External chat model grounded on the full catalog
"""

from .openai_adapter import OpenAIChatSynthesizer
from .template import TemplateAnswerSynthesizer

__all__ = ["TemplateAnswerSynthesizer", "OpenAIChatSynthesizer"]
