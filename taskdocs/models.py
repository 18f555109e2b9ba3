"""Core data models shared across taskdocs components."""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Field:
    """A top-level attribute declared inside a task message."""

    name: str
    type: str
    description: str = ""


@dataclass(frozen=True)
class LocatedEntry:
    """A task message opening line found by the locator."""

    name: str
    documentation: Optional[str]
    line: int


@dataclass(frozen=True)
class Entry:
    """A located task message with its documentation and fields."""

    name: str
    documentation: Optional[str]
    fields: Tuple[Field, ...] = ()
    line: int = 0
