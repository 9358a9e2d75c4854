"""Service layer - Business logic modules.

Each service module has a clear interface and can be developed/tested independently.
"""

from .catalog_service import BaseCatalogService, CatalogServiceError, JsonCatalogService
from .chat_parser import detect_format, iter_export_lines, normalize_line, strip_line
from .chunk_service import ChunkAssembler, mirror_file
from .llm_service import BaseLLMService, LLMServiceError, create_llm_service
from .prompt_service import PromptBuilder, PromptRule, PromptTemplate
from .recommendation_service import GiftRecommendationService, attach_reasons
from .response_parser import ResponseParser

__all__ = [
    "BaseCatalogService",
    "CatalogServiceError",
    "JsonCatalogService",
    "detect_format",
    "iter_export_lines",
    "normalize_line",
    "strip_line",
    "ChunkAssembler",
    "mirror_file",
    "BaseLLMService",
    "LLMServiceError",
    "create_llm_service",
    "PromptBuilder",
    "PromptRule",
    "PromptTemplate",
    "GiftRecommendationService",
    "attach_reasons",
    "ResponseParser",
]
