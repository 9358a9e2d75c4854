"""Response Parser - Recovers categories and reasons from a model reply.

The model is asked to answer in this shape:

    1. [category1,category2,category3]
    2.
       - category1: [reason1]
       - category2: [reason2]
       - category3: [reason3]

The markers "1.", "[...]", "- " and ": [" are the whole contract with the
model; replies are otherwise free text.

Interface Contract:
- ResponseParser.parse(reply) -> ParseResult (never raises)
- Reasons are paired with categories by position only
"""

from __future__ import annotations

import logging
import re

from giftidea.models import ParsedRecommendation, ParseResult

logger = logging.getLogger(__name__)

CATEGORY_MARKER = "1."
REASON_PREFIX = "- "
REASON_MARKER = ": ["

_BRACKETED = re.compile(r"\[([^\]]*)\]")


class ResponseParseError(Exception):
    """Raised internally when a reply does not follow the expected shape."""
    pass


class ResponseParser:
    """Parses model replies into a ParsedRecommendation."""

    def __init__(self, *, log: logging.Logger | None = None):
        self.logger = log or logger

    def parse(self, reply: str | None) -> ParseResult:
        """Parse a raw model reply.

        Args:
            reply: The model's raw text reply (may be None)

        Returns:
            ParseResult: Success with categories and reasons, or a failure
            carrying the fixed model response error message
        """
        try:
            recommendation = ParsedRecommendation(
                categories=self._parse_categories(reply),
                reasons=self._parse_reasons(reply),
            )
        except ResponseParseError as e:
            self.logger.warning("[parse] malformed reply: %s", e)
            return ParseResult.failure(str(e))
        except Exception as e:
            self.logger.error("[parse] unexpected error", exc_info=True)
            return ParseResult.failure(f"unexpected error: {e}")

        if len(recommendation.categories) != len(recommendation.reasons):
            self.logger.warning(
                "[parse] categories=%d reasons=%d, pairing by position",
                len(recommendation.categories),
                len(recommendation.reasons),
            )
        return ParseResult.success(recommendation)

    def _parse_categories(self, reply: str | None) -> list[str]:
        if not reply:
            raise ResponseParseError("empty reply")

        start = reply.find(CATEGORY_MARKER)
        if start == -1:
            raise ResponseParseError(f"missing {CATEGORY_MARKER!r} marker")

        category_line = reply[start + len(CATEGORY_MARKER):].split("\n", 1)[0]
        match = _BRACKETED.search(category_line)
        if match is None:
            raise ResponseParseError("category line has no bracketed list")

        categories = [c.strip() for c in match.group(1).split(",")]
        if not any(categories):
            raise ResponseParseError("empty category list")
        return categories

    def _parse_reasons(self, reply: str) -> list[str]:
        reasons: list[str] = []
        for line in reply.split("\n"):
            line = line.strip()
            if not line.startswith(REASON_PREFIX):
                continue
            start = line.find(REASON_MARKER)
            if start == -1:
                continue
            start += len(REASON_MARKER)
            if start > len(line) - 1:
                raise ResponseParseError(f"truncated reason line: {line!r}")
            # the final character is the closing bracket
            reasons.append(line[start:len(line) - 1].strip())
        return reasons
