from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from config import CHUNK_MODE, LLM_PROVIDER
from .models import NO_MATCHING_RULE, NO_MESSAGES, PersonaDescriptor
from .services import GiftRecommendationService, JsonCatalogService, create_llm_service


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Recommend gifts for a chat participant from a KakaoTalk chat export."
    )
    parser.add_argument("--chat", type=Path, required=True, help="Path to the exported chat (.txt)")
    parser.add_argument("--target", required=True, help="Name of the participant to analyse")
    parser.add_argument(
        "--relation",
        default="other",
        help="Relationship to the recipient: couple, parent, friend or other (default: other)",
    )
    parser.add_argument("--sex", default="unspecified", help="Recipient sex: male, female or unspecified")
    parser.add_argument("--theme", default="", help="Occasion, e.g. birthday, valentine, housewarming")
    parser.add_argument("--catalog", type=Path, help="Path to a JSON product catalog")
    parser.add_argument(
        "--provider",
        default=LLM_PROVIDER,
        choices=["openai", "gemini"],
        help=f"LLM provider (default: {LLM_PROVIDER})",
    )
    parser.add_argument("--model", help="Model name (default: the provider's configured model)")
    parser.add_argument(
        "--chunk-mode",
        default=CHUNK_MODE,
        choices=["combined", "per_chunk"],
        help=f"One prompt for the whole chat, or one per chunk (default: {CHUNK_MODE})",
    )
    parser.add_argument(
        "--show-prompt",
        action="store_true",
        help="Print the rendered prompt(s) and exit without calling the model",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if not args.show_prompt and args.catalog is None:
        raise SystemExit("--catalog is required unless --show-prompt is used")

    persona = PersonaDescriptor.create(args.relation, args.sex, args.theme)

    if args.show_prompt:
        service = GiftRecommendationService(catalog=None, llm_service=None, chunk_mode=args.chunk_mode)
        chunks = service.preprocess(args.chat, args.target)
        if not chunks:
            raise SystemExit(NO_MESSAGES)
        prompts = service.build_prompts(chunks, persona)
        if prompts is None:
            raise SystemExit(NO_MATCHING_RULE)
        print("\n\n".join(prompts))
        return

    service = GiftRecommendationService(
        catalog=JsonCatalogService(args.catalog),
        llm_service=create_llm_service(args.provider, args.model),
        chunk_mode=args.chunk_mode,
    )
    result = service.recommend(args.chat, args.target, persona)
    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
