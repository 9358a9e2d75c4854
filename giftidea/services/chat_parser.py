"""Chat Parser - Export format detection and line normalization.

This module handles:
- Reading a chat export given as bytes, text or a file path, line by line
- Detecting the export's line layout from its first line
- Filtering lines by target participant and stripping format metadata

Interface Contract:
- iter_export_lines(source) -> Iterator[str] (undecodable lines are skipped)
- detect_format(source) -> ExportFormat (never raises; UNKNOWN on I/O failure)
- strip_line(line, export_format, target_name) -> str (pure, idempotent)
- normalize_line(line, export_format, target_name) -> str | None (None = drop)

The detection heuristic is binary: an export whose first line lacks the
FORMAT_A header is assumed to be FORMAT_B. Other layouts are not recognized.
"""

from __future__ import annotations

import io
import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterator, Union

from giftidea.models import ExportFormat

logger = logging.getLogger(__name__)

ExportSource = Union[bytes, str, Path]

# First line of a KakaoTalk PC export: "<name> 님과 카카오톡 대화"
FORMAT_A_MARKER = "님과 카카오톡 대화"

# "[name] [time] " header pairs of FORMAT_A lines
_FORMAT_A_HEADER = re.compile(r"\[.*?\] \[.*?\] ")

# Laughter markers and periods
_FILLER = re.compile(r"[ㅎㅋ.]+")


def iter_export_lines(
    source: ExportSource,
    *,
    strict: bool = False,
    log: logging.Logger | None = None,
) -> Iterator[str]:
    """Yield the lines of a chat export without their line terminators.

    Bytes are decoded as UTF-8 one line at a time, so a bad byte only costs
    the line it is on.

    Args:
        source: Raw export bytes, the export text itself, or a path to the file
        strict: Raise on an undecodable line instead of skipping it
        log: Logger for skipped lines. If None, uses the module logger.

    Raises:
        OSError: If the file cannot be opened or read
        UnicodeDecodeError: If strict and a line is not valid UTF-8
    """
    log = log or logger
    if isinstance(source, str):
        for line in io.StringIO(source):
            yield line.rstrip("\r\n")
        return

    stream = open(source, "rb") if isinstance(source, Path) else io.BytesIO(source)
    with stream:
        for number, raw in enumerate(stream, start=1):
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError:
                if strict:
                    raise
                log.warning("[export] skipping undecodable line=%d", number)
                continue
            yield line.rstrip("\r\n")


def detect_format(source: ExportSource, *, log: logging.Logger | None = None) -> ExportFormat:
    """Classify an export by reading only its first line."""
    log = log or logger
    try:
        with closing(iter_export_lines(source, strict=True, log=log)) as lines:
            first_line = next(lines, "")
    except (OSError, UnicodeDecodeError):
        log.error("[format] failed to read export header", exc_info=True)
        return ExportFormat.UNKNOWN

    if FORMAT_A_MARKER in first_line:
        return ExportFormat.FORMAT_A
    return ExportFormat.FORMAT_B


def _strip_once(line: str, export_format: ExportFormat, target_name: str) -> str:
    if export_format is ExportFormat.FORMAT_A:
        line = _FORMAT_A_HEADER.sub("", line)
        return _FILLER.sub("", line).strip()
    if export_format is ExportFormat.FORMAT_B:
        line = re.sub("^" + re.escape(target_name) + " : ", "", line.lstrip())
        return _FILLER.sub("", line).strip()
    return line.strip()


def strip_line(line: str, export_format: ExportFormat, target_name: str) -> str:
    """Remove format metadata and filler from a single line.

    Removing filler can expose a new header or prefix, so stripping repeats
    until the line stops changing.
    """
    stripped = _strip_once(line, export_format, target_name)
    while stripped != line:
        line = stripped
        stripped = _strip_once(line, export_format, target_name)
    return stripped


def normalize_line(line: str, export_format: ExportFormat, target_name: str) -> str | None:
    """Filter and strip a raw line.

    Args:
        line: One raw line of the export, without its line terminator
        export_format: The detected export format
        target_name: Participant whose lines are kept (case-sensitive substring)

    Returns:
        str | None: The normalized text, or None if the line should be dropped
    """
    if target_name not in line or not line.strip():
        return None
    normalized = strip_line(line, export_format, target_name)
    return normalized or None
