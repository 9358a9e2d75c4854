"""GiftIdea - gift recommendations from chat exports."""

from .models import PersonaDescriptor, Product, RecommendationResult
from .services import GiftRecommendationService, JsonCatalogService, create_llm_service

__all__ = [
    "PersonaDescriptor",
    "Product",
    "RecommendationResult",
    "GiftRecommendationService",
    "JsonCatalogService",
    "create_llm_service",
]
