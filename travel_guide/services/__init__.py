"""Services layer - Application orchestration.

Available services:
- QueryResolverService: Answers questions about catalog places
"""

from .resolver import QueryResolverService

__all__ = ["QueryResolverService"]
