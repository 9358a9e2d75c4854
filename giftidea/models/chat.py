"""Chat export data models.

Pure data structures describing a chat export after preprocessing.
"""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from typing import Any


class ExportFormat(Enum):
    """Known line layouts of a chat export."""
    FORMAT_A = "format_a"  # "<name> 님과 카카오톡 대화" header, "[name] [time] text" lines
    FORMAT_B = "format_b"  # "<name> : text" lines
    UNKNOWN = "unknown"


def count_tokens(text: str) -> int:
    """Count whitespace-delimited tokens (an approximation, not a model tokenizer)."""
    return len(text.split())


@dataclass
class Chunk:
    """A token-bounded group of consecutive normalized lines."""
    lines: list[str] = dataclass_field(default_factory=list)
    token_count: int = 0

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "lines": self.lines,
            "token_count": self.token_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Chunk":
        """Create from dictionary."""
        lines = data.get("lines", [])
        return cls(
            lines=lines,
            token_count=data.get("token_count", sum(count_tokens(line) for line in lines)),
        )


def combine_chunks(chunks: list[Chunk]) -> str:
    """Join every chunk's text into one newline-separated string."""
    return "\n".join(chunk.text for chunk in chunks)
