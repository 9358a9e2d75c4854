"""Catalog Service - Product lookup by category keyword.

The catalog is an external collaborator. This module defines its interface
and a JSON-file implementation used for local runs.

Interface Contract:
- search_by_keywords(keywords) -> list[Product]
- All methods raise CatalogServiceError on failure
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path

from giftidea.models import Product


class CatalogServiceError(Exception):
    """Raised when catalog lookup fails."""
    pass


class BaseCatalogService(ABC):
    """Abstract base class for product catalogs."""

    @abstractmethod
    def search_by_keywords(self, keywords: list[str]) -> list[Product]:
        """Find products for the given category keywords.

        Args:
            keywords: Category keywords, in priority order

        Returns:
            list[Product]: Matching products, in the catalog's order

        Raises:
            CatalogServiceError: If the lookup fails
        """
        pass


class JsonCatalogService(BaseCatalogService):
    """Catalog backed by a JSON file holding a list of product objects."""

    def __init__(self, path: Path, *, per_keyword: int | None = None):
        self.path = Path(path)
        self.per_keyword = per_keyword
        self._products: list[Product] | None = None

    @property
    def products(self) -> list[Product]:
        """Lazy load products from disk."""
        if self._products is None:
            self._products = self._load()
        return self._products

    def search_by_keywords(self, keywords: list[str]) -> list[Product]:
        """Return, keyword by keyword, the products filed under that keyword."""
        results: list[Product] = []
        for keyword in keywords:
            matches = [p for p in self.products if p.keyword == keyword]
            if self.per_keyword is not None:
                matches = matches[:self.per_keyword]
            # fresh copies so reasons never leak between requests
            results.extend(Product.from_dict(p.to_dict()) for p in matches)
        return results

    def _load(self) -> list[Product]:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogServiceError(f"Failed to load catalog {self.path}: {e}") from e

        if not isinstance(data, list):
            raise CatalogServiceError(f"Catalog {self.path} must contain a JSON list")
        return [Product.from_dict(item) for item in data]
