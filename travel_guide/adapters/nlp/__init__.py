"""NLP adapters - Implementations of NLP-related ports.

Available implementations:
- SubstringPlaceRetriever: Case-insensitive substring matching over the catalog
- KeywordIntentClassifier: Ordered keyword rules for intent classification
"""

from .intent_adapter import DEFAULT_RULES, KeywordIntentClassifier
from .substring_retriever import SubstringPlaceRetriever

__all__ = [
    "SubstringPlaceRetriever",
    "KeywordIntentClassifier",
    "DEFAULT_RULES",
]
