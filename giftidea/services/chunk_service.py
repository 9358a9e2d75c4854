"""Chunk Service - Token-bounded grouping of normalized chat lines.

This module handles:
- Streaming an export through the line normalizer
- Grouping accepted lines into chunks under a token budget
- Mirroring accepted lines to a request-scoped temporary file

Interface Contract:
- assemble(lines) -> list[Chunk]
- assemble_export(source, target_name, export_format) -> list[Chunk]
- Undecodable lines are skipped and an unopenable source reads as empty;
  neither is raised
"""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from typing import Iterable, Iterator, TextIO

from config import MAX_TOKENS, MIRROR_FILE_PREFIX
from giftidea.models import Chunk, ExportFormat, count_tokens
from giftidea.services.chat_parser import ExportSource, iter_export_lines, normalize_line

logger = logging.getLogger(__name__)


@contextmanager
def mirror_file(prefix: str = MIRROR_FILE_PREFIX) -> Iterator[TextIO]:
    """Open a temporary UTF-8 text file that is removed on exit, even on error."""
    fd, tmp_path = tempfile.mkstemp(prefix=prefix, suffix=".txt")
    os.close(fd)
    try:
        with open(tmp_path, "w", encoding="utf-8") as handle:
            yield handle
    finally:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)


class ChunkAssembler:
    """Groups normalized lines into chunks of at most max_tokens tokens.

    A single line is never split: a line larger than the budget becomes a
    chunk of its own.
    """

    def __init__(
        self,
        max_tokens: int = MAX_TOKENS,
        *,
        mirror_prefix: str = MIRROR_FILE_PREFIX,
        log: logging.Logger | None = None,
    ):
        if max_tokens <= 0:
            raise ValueError("max_tokens must be positive")
        self.max_tokens = max_tokens
        self.mirror_prefix = mirror_prefix
        self.logger = log or logger

    def assemble(self, lines: Iterable[str], *, mirror: TextIO | None = None) -> list[Chunk]:
        """Group lines into chunks, preserving their order.

        Args:
            lines: Normalized lines (already filtered)
            mirror: Optional text file every line is also written to

        Returns:
            list[Chunk]: Chunks partitioning the input lines
        """
        chunks: list[Chunk] = []
        current = Chunk()

        for line in lines:
            line_tokens = count_tokens(line)
            if current.lines and current.token_count + line_tokens > self.max_tokens:
                chunks.append(current)
                current = Chunk()

            current.lines.append(line)
            current.token_count += line_tokens
            if mirror is not None:
                mirror.write(line + "\n")

        if current.lines:
            chunks.append(current)
        return chunks

    def assemble_export(
        self,
        source: ExportSource,
        target_name: str,
        export_format: ExportFormat,
    ) -> list[Chunk]:
        """Normalize an export's lines for target_name and chunk them.

        Lines read before a read failure are kept; the unreadable remainder is
        treated as empty input.
        """
        accepted = (
            normalized
            for normalized in (
                normalize_line(raw, export_format, target_name)
                for raw in self._read_lines(source)
            )
            if normalized is not None
        )

        with mirror_file(self.mirror_prefix) as mirror:
            chunks = self.assemble(accepted, mirror=mirror)

        self.logger.info(
            "[chunk] format=%s chunks=%d tokens=%s",
            export_format.value,
            len(chunks),
            [c.token_count for c in chunks],
        )
        return chunks

    def _read_lines(self, source: ExportSource) -> Iterator[str]:
        try:
            yield from iter_export_lines(source, log=self.logger)
        except OSError:
            self.logger.error("[chunk] failed to read export", exc_info=True)
