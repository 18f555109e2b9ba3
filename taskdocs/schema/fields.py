"""Extract the top-level fields declared inside a task message body."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..models import Field
from .locator import LINE_COMMENT

FIELD_PATTERN = re.compile(
    r"^\s*(?:(optional|repeated|required)\s+)?([\w.]+(?:<[^>]*>)?)\s+(\w+)\s*=\s*(\d+)"
)
NESTED_PATTERN = re.compile(r"^\s*(?:message|enum|oneof)\s+\w+\s*\{")
_TRAILING_COMMENT = re.compile(r"//+\s*(.*)$")


class ScanState(enum.Enum):
    """Where the scanner stands relative to the entry being extracted."""

    SEEKING = "seeking"
    BODY = "body"
    NESTED = "nested"


@dataclass
class BraceTracker:
    """Counts structural braces for one entry.

    Every ``{`` and ``}`` is treated as structural, including braces that
    appear inside string literals or comments.
    """

    depth: int = 0
    nested_depth: int = 0
    entered: bool = False

    def feed(self, line: str) -> None:
        for char in line:
            if char == "{":
                self.depth += 1
                if not self.entered:
                    self.entered = True
                else:
                    self.nested_depth += 1
            elif char == "}":
                self.depth -= 1
                if self.nested_depth > 0:
                    self.nested_depth -= 1

    @property
    def state(self) -> ScanState:
        if not self.entered:
            return ScanState.SEEKING
        if self.nested_depth > 0:
            return ScanState.NESTED
        return ScanState.BODY

    @property
    def closed(self) -> bool:
        return self.entered and self.depth <= 0


def extract_fields(lines: Sequence[str], start: int) -> List[Field]:
    """Return the fields declared directly inside the entry opening at ``start``.

    Fields inside nested ``message``/``enum``/``oneof`` blocks are skipped. An
    entry that is never closed is read until the end of ``lines``.
    """
    tracker = BraceTracker()
    fields: List[Field] = []

    for index in range(start, len(lines)):
        line = lines[index]
        tracker.feed(line)

        if tracker.state is ScanState.BODY:
            candidate = _declaration_text(line, is_opening=index == start)
            if candidate is not None:
                previous = lines[index - 1] if index > start else None
                field = _match_field(candidate, previous)
                if field is not None:
                    fields.append(field)

        if tracker.closed:
            break

    return fields


def _declaration_text(line: str, *, is_opening: bool) -> Optional[str]:
    if is_opening:
        # the entry's own header; only text after its brace can declare a field
        _, brace, rest = line.partition("{")
        return rest if brace else None
    if NESTED_PATTERN.match(line):
        return None
    return line


def _match_field(text: str, previous: Optional[str]) -> Optional[Field]:
    match = FIELD_PATTERN.match(text)
    if not match:
        return None
    _, type_name, name, _ = match.groups()
    return Field(name=name, type=type_name, description=_describe(text, previous))


def _describe(text: str, previous: Optional[str]) -> str:
    if previous is not None:
        stripped = previous.strip()
        if stripped.startswith(LINE_COMMENT):
            return stripped[len(LINE_COMMENT) :].strip()
    trailing = _TRAILING_COMMENT.search(text)
    if trailing:
        return trailing.group(1).strip()
    return ""


__all__ = ["BraceTracker", "FIELD_PATTERN", "ScanState", "extract_fields"]
