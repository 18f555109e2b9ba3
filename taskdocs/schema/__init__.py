"""Comment-aware extraction of task messages from protobuf schema text."""

from __future__ import annotations

from typing import Dict

from ..models import Entry
from .fields import BraceTracker, ScanState, extract_fields
from .locator import clean_block_comment, find_documentation, locate_entries, split_lines


def parse_schema(text: str) -> Dict[str, Entry]:
    """Return every task message in ``text`` keyed by name.

    Defined for any string; text without task messages yields an empty mapping.
    """
    lines = split_lines(text)
    entries: Dict[str, Entry] = {}
    for name, located in locate_entries(lines).items():
        entries[name] = Entry(
            name=name,
            documentation=located.documentation,
            fields=tuple(extract_fields(lines, located.line)),
            line=located.line,
        )
    return entries


__all__ = [
    "BraceTracker",
    "ScanState",
    "clean_block_comment",
    "extract_fields",
    "find_documentation",
    "locate_entries",
    "parse_schema",
    "split_lines",
]
