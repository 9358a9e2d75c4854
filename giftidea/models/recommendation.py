"""Recommendation data models.

Pure data structures for parsed model replies and recommendation results.
"""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from typing import Any

# Status messages returned to callers instead of internal error detail
NO_MESSAGES = "no messages from target"
NO_MATCHING_RULE = "no matching recommendation rule"
MODEL_RESPONSE_ERROR = "model response error"
MODEL_REQUEST_ERROR = "model request error"


@dataclass
class Product:
    """A catalog item, optionally annotated with the reason it was picked."""
    product_id: str
    title: str
    price: int = 0
    image_url: str = ""
    product_url: str = ""
    keyword: str = ""
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "product_id": self.product_id,
            "title": self.title,
            "price": self.price,
            "image_url": self.image_url,
            "product_url": self.product_url,
            "keyword": self.keyword,
            "reason": self.reason,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        """Create from dictionary."""
        return cls(
            product_id=str(data.get("product_id", "")),
            title=data.get("title", ""),
            price=int(data.get("price", 0) or 0),
            image_url=data.get("image_url", ""),
            product_url=data.get("product_url", ""),
            keyword=data.get("keyword", ""),
            reason=data.get("reason"),
        )


@dataclass
class ParsedRecommendation:
    """Categories and reasons recovered from a model reply.

    The two lists are paired by position and may differ in length.
    """
    categories: list[str] = dataclass_field(default_factory=list)
    reasons: list[str] = dataclass_field(default_factory=list)

    def pairs(self) -> list[tuple[str, str | None]]:
        """Pair every category with the reason at the same position, if any."""
        return [
            (category, self.reasons[i] if i < len(self.reasons) else None)
            for i, category in enumerate(self.categories)
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "categories": self.categories,
            "reasons": self.reasons,
        }


@dataclass
class ParseResult:
    """Tagged result of parsing a model reply."""
    recommendation: ParsedRecommendation | None = None
    error: str = ""
    detail: str = ""  # internal, for logs only

    @property
    def ok(self) -> bool:
        return self.recommendation is not None

    @classmethod
    def success(cls, recommendation: ParsedRecommendation) -> "ParseResult":
        return cls(recommendation=recommendation)

    @classmethod
    def failure(cls, detail: str) -> "ParseResult":
        return cls(error=MODEL_RESPONSE_ERROR, detail=detail)


@dataclass
class RecommendationResult:
    """Result of a gift recommendation request."""
    products: list[Product] = dataclass_field(default_factory=list)
    categories: list[str] = dataclass_field(default_factory=list)
    reasons: list[str] = dataclass_field(default_factory=list)
    chunk_count: int = 0
    message: str = ""  # empty on success, otherwise one of the status messages

    @property
    def ok(self) -> bool:
        return not self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "products": [p.to_dict() for p in self.products],
            "categories": self.categories,
            "reasons": self.reasons,
            "chunk_count": self.chunk_count,
            "message": self.message,
        }
