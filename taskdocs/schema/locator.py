"""Locate task message definitions and their documentation comments."""

from __future__ import annotations

import re
from itertools import chain
from typing import Dict, List, Optional, Sequence

from ..logging import get_logger
from ..models import LocatedEntry

ENTRY_PATTERN = re.compile(r"^\s*message\s+(\w+Task)\s*\{")
LINE_COMMENT = "///"
BLOCK_OPEN = "/*"
BLOCK_CLOSE = "*/"

_LINE_BREAK = re.compile(r"\r?\n")
_BLOCK_LINE_PREFIX = re.compile(r"^[ \t]*\*[ \t]?", re.MULTILINE)

logger = get_logger("schema.locator")


def split_lines(text: str) -> List[str]:
    """Split schema text on ``\\n`` or ``\\r\\n`` uniformly."""
    return _LINE_BREAK.split(text)


def clean_block_comment(text: str) -> str:
    """Strip ``*`` gutters from a block comment interior and trim it."""
    cleaned = _BLOCK_LINE_PREFIX.sub("", text)
    cleaned = cleaned.replace("\r\n", "\n")
    return cleaned.strip()


def locate_entries(lines: Sequence[str]) -> Dict[str, LocatedEntry]:
    """Map each task message name to its documentation and opening line index.

    A name declared more than once keeps the documentation and line of its
    last declaration.
    """
    entries: Dict[str, LocatedEntry] = {}
    for index, line in enumerate(lines):
        match = ENTRY_PATTERN.match(line)
        if not match:
            continue
        name = match.group(1)
        if name in entries:
            logger.warning(
                "%s declared again on line %d; replacing declaration from line %d",
                name,
                index + 1,
                entries[name].line + 1,
            )
        entries[name] = LocatedEntry(
            name=name,
            documentation=find_documentation(lines, index),
            line=index,
        )
    return entries


def find_documentation(lines: Sequence[str], index: int) -> Optional[str]:
    """Return the cleaned comment documenting the definition on ``lines[index]``."""
    block = _block_comment_above(lines, index)
    if block is not None:
        cleaned = clean_block_comment(block)
        if cleaned:
            return cleaned
    collected = _line_comments_above(lines, index)
    if collected:
        return collected
    return None


def _block_comment_above(lines: Sequence[str], index: int) -> Optional[str]:
    cursor = index - 1
    while cursor >= 0 and not lines[cursor].strip():
        cursor -= 1
    if cursor < 0:
        return None

    closing = lines[cursor].rstrip()
    if not closing.endswith(BLOCK_CLOSE):
        return None
    closing = closing[: -len(BLOCK_CLOSE)]

    # Block comments do not nest: the span ends at the previous comment's
    # close, and the opener is the first /* after it.
    span: List[str] = []
    texts = chain([closing], (lines[position] for position in range(cursor - 1, -1, -1)))
    for text in texts:
        previous_close = text.rfind(BLOCK_CLOSE)
        if previous_close != -1:
            span.append(text[previous_close + len(BLOCK_CLOSE) :])
            break
        span.append(text)
    span.reverse()

    region = "\n".join(span)
    opener = region.find(BLOCK_OPEN)
    if opener == -1:
        return None
    return region[opener + len(BLOCK_OPEN) :]


def _line_comments_above(lines: Sequence[str], index: int) -> str:
    collected: List[str] = []
    cursor = index - 1
    while cursor >= 0:
        stripped = lines[cursor].strip()
        if not stripped.startswith(LINE_COMMENT):
            break
        collected.append(_strip_line_marker(stripped))
        cursor -= 1
    collected.reverse()
    return "\n".join(collected).strip()


def _strip_line_marker(stripped: str) -> str:
    text = stripped[len(LINE_COMMENT) :]
    if text.startswith(" "):
        text = text[1:]
    return text.rstrip()


__all__ = [
    "ENTRY_PATTERN",
    "clean_block_comment",
    "find_documentation",
    "locate_entries",
    "split_lines",
]
