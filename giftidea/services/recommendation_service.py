"""Recommendation Service - Gift recommendations from a chat export.

This module handles:
- Preprocessing a chat export into token-bounded chunks
- Building the persona prompt and calling the model
- Parsing the reply and attaching reasons to catalog results

Interface Contract:
- attach_reasons(parsed, search) -> list[Product]
- GiftRecommendationService.recommend(export, target_name, persona) -> RecommendationResult
- Request, parse and rule-matching failures degrade to a RecommendationResult
  with a status message; catalog errors propagate unchanged
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

from config import CHUNK_MODE
from giftidea.models import (
    MODEL_REQUEST_ERROR,
    MODEL_RESPONSE_ERROR,
    NO_MATCHING_RULE,
    NO_MESSAGES,
    Chunk,
    ParsedRecommendation,
    PersonaDescriptor,
    RecommendationResult,
    combine_chunks,
)
from giftidea.services.catalog_service import BaseCatalogService
from giftidea.services.chat_parser import ExportSource, detect_format
from giftidea.services.chunk_service import ChunkAssembler
from giftidea.services.llm_service import BaseLLMService, LLMServiceError, create_llm_service
from giftidea.services.prompt_service import PromptBuilder
from giftidea.services.response_parser import ResponseParser

logger = logging.getLogger(__name__)

CHUNK_MODES = ("combined", "per_chunk")


def attach_reasons(parsed: ParsedRecommendation, search: Callable[[list[str]], list[Any]]) -> list[Any]:
    """Look up catalog items for the categories and attach reasons by position.

    Items past the shorter of the two lists keep their default reason.

    Args:
        parsed: Categories and reasons from the model reply
        search: Catalog lookup taking the full category list

    Returns:
        list: The catalog results, with reasons attached in place
    """
    results = search(parsed.categories)
    for i in range(min(len(results), len(parsed.reasons))):
        results[i].reason = parsed.reasons[i]
    return results


def merge_recommendations(parsed_list: Sequence[ParsedRecommendation]) -> ParsedRecommendation:
    """Merge per-chunk recommendations, keeping first-seen category order.

    Reasons stay positionally aligned: the merged reason list stops at the
    first category that had no reason.
    """
    categories: list[str] = []
    reasons: list[str] = []
    aligned = True
    for parsed in parsed_list:
        for category, reason in parsed.pairs():
            if category in categories:
                continue
            categories.append(category)
            if aligned and reason is not None:
                reasons.append(reason)
            else:
                aligned = False
    return ParsedRecommendation(categories=categories, reasons=reasons)


class GiftRecommendationService:
    """Runs the full chat export to gift recommendation pipeline."""

    def __init__(
        self,
        catalog: BaseCatalogService,
        llm_service: BaseLLMService | None = None,
        *,
        chunk_mode: str = CHUNK_MODE,
        chunker: ChunkAssembler | None = None,
        prompt_builder: PromptBuilder | None = None,
        log: logging.Logger | None = None,
    ):
        """Initialize with collaborators.

        Args:
            catalog: Product catalog used to resolve categories
            llm_service: LLM service for recommendations. If None, one is
                created from configuration on first use.
            chunk_mode: "combined" (one prompt for the whole export) or
                "per_chunk" (one model call per chunk)
            chunker: Chunk assembler. If None, uses the configured budget.
            prompt_builder: Prompt builder. If None, uses the default rules.
            log: Logger. If None, uses the module logger.
        """
        if chunk_mode not in CHUNK_MODES:
            raise ValueError(f"chunk_mode must be one of {CHUNK_MODES}, got {chunk_mode!r}")
        self.catalog = catalog
        self._llm = llm_service
        self.chunk_mode = chunk_mode
        self.logger = log or logger
        self.chunker = chunker or ChunkAssembler(log=self.logger)
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.parser = ResponseParser(log=self.logger)

    @property
    def llm(self) -> BaseLLMService:
        """Lazy load LLM service."""
        if self._llm is None:
            self._llm = create_llm_service()
        return self._llm

    def preprocess(self, export: ExportSource, target_name: str) -> list[Chunk]:
        """Detect the export format and chunk the target's normalized lines."""
        export_format = detect_format(export, log=self.logger)
        return self.chunker.assemble_export(export, target_name, export_format)

    def build_prompts(self, chunks: list[Chunk], persona: PersonaDescriptor) -> list[str] | None:
        """Render the prompts for the configured chunk mode, or None if no rule matches."""
        if self.chunk_mode == "combined":
            texts = [combine_chunks(chunks)]
        else:
            texts = [chunk.text for chunk in chunks]

        prompts = []
        for text in texts:
            prompt = self.prompt_builder.build(text, persona)
            if prompt is None:
                return None
            prompts.append(prompt)
        return prompts

    def recommend(
        self,
        export: ExportSource,
        target_name: str,
        persona: PersonaDescriptor,
    ) -> RecommendationResult:
        """Recommend gifts for target_name based on their chat messages.

        Args:
            export: The chat export (bytes, text, or file path)
            target_name: Participant whose messages are analysed
            persona: Relation, sex and theme selecting the prompt

        Returns:
            RecommendationResult: Products with reasons, or an empty result
            carrying a status message

        Raises:
            ValueError: If target_name is empty
            CatalogServiceError: If the catalog lookup fails
        """
        if not target_name:
            raise ValueError("target_name is required")

        chunks = self.preprocess(export, target_name)
        if not chunks:
            self.logger.warning("[recommend] no messages found for target")
            return RecommendationResult(message=NO_MESSAGES)

        prompts = self.build_prompts(chunks, persona)
        if prompts is None:
            self.logger.info("[recommend] no rule for persona=%s", persona.to_dict())
            return RecommendationResult(chunk_count=len(chunks), message=NO_MATCHING_RULE)

        parsed_list: list[ParsedRecommendation] = []
        request_failures = 0
        for index, prompt in enumerate(prompts):
            try:
                reply = self.llm.call(prompt)
            except LLMServiceError as e:
                self.logger.warning("[recommend] model request failed chunk=%d: %s", index, e)
                request_failures += 1
                continue

            result = self.parser.parse(reply)
            if not result.ok:
                self.logger.warning("[recommend] unusable reply chunk=%d: %s", index, result.detail)
                continue
            parsed_list.append(result.recommendation)

        if not parsed_list:
            message = MODEL_REQUEST_ERROR if request_failures == len(prompts) else MODEL_RESPONSE_ERROR
            return RecommendationResult(chunk_count=len(chunks), message=message)

        parsed = parsed_list[0] if len(parsed_list) == 1 else merge_recommendations(parsed_list)
        products = attach_reasons(parsed, self.catalog.search_by_keywords)

        self.logger.info(
            "[recommend] persona=%s categories=%s products=%d",
            persona.to_dict(),
            parsed.categories,
            len(products),
        )
        return RecommendationResult(
            products=products,
            categories=parsed.categories,
            reasons=parsed.reasons,
            chunk_count=len(chunks),
        )
