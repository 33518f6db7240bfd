"""Catalog adapters - Implementations of CatalogRepositoryPort.

Available implementations:
- JsonCatalogRepository: Loads places from a JSON file
"""

from .json_repository import JsonCatalogRepository, parse_place

__all__ = ["JsonCatalogRepository", "parse_place"]
