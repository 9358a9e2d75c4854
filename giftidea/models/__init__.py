"""Data models - Pure data structures with no business logic."""

from .chat import Chunk, ExportFormat, combine_chunks, count_tokens
from .persona import PersonaDescriptor, Relation, Sex
from .recommendation import (
    MODEL_REQUEST_ERROR,
    MODEL_RESPONSE_ERROR,
    NO_MATCHING_RULE,
    NO_MESSAGES,
    ParsedRecommendation,
    ParseResult,
    Product,
    RecommendationResult,
)

__all__ = [
    "Chunk",
    "ExportFormat",
    "combine_chunks",
    "count_tokens",
    "PersonaDescriptor",
    "Relation",
    "Sex",
    "Product",
    "ParsedRecommendation",
    "ParseResult",
    "RecommendationResult",
    "NO_MESSAGES",
    "NO_MATCHING_RULE",
    "MODEL_RESPONSE_ERROR",
    "MODEL_REQUEST_ERROR",
]
