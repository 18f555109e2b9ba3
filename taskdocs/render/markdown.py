"""Markdown assembly for the task type reference."""

from __future__ import annotations

from typing import Iterable, List

from ..categories import CategoryIndex
from ..config import DocumentConfig
from ..models import Entry, Field
from ..postproc.toc import TableOfContentsBuilder


class MarkdownRenderer:
    """Renders categorized task entries into a single Markdown document."""

    def __init__(self, categories: CategoryIndex, settings: DocumentConfig | None = None) -> None:
        self.categories = categories
        self.settings = settings or DocumentConfig()

    def render(self, entries: Iterable[Entry]) -> str:
        parts: List[str] = [self._header()]
        if self.settings.toc:
            parts.append(TableOfContentsBuilder.PLACEHOLDER)

        for category, members in self.categories.group(entries).items():
            parts.append(f"## {category}")
            for entry in members:
                parts.append(self._render_entry(entry))

        footer = self._next_steps()
        if footer:
            parts.append(footer)
        return "\n\n".join(parts) + "\n"

    def _header(self) -> str:
        settings = self.settings
        lines = [f"# {settings.title}", ""]
        if settings.source_link:
            source = f"[{settings.source_name}]({settings.source_link})"
        else:
            source = f"`{settings.source_name}`"
        lines.append(f"> This documentation is automatically generated from the {source} source file.")
        if settings.intro:
            lines.extend(["", settings.intro.strip()])
        return "\n".join(lines)

    def _render_entry(self, entry: Entry) -> str:
        blocks = [f"### {entry.name}"]
        blocks.append(entry.documentation if entry.documentation else self.settings.pending_text)
        if self.settings.show_fields and entry.fields:
            blocks.append(self._field_table(entry.fields))
        blocks.append("---")
        return "\n\n".join(blocks)

    def _field_table(self, fields: Iterable[Field]) -> str:
        rows = ["| Field | Type | Description |", "| --- | --- | --- |"]
        for field in fields:
            rows.append(
                f"| `{field.name}` | `{_cell(field.type)}` | {_cell(field.description)} |"
            )
        return "\n".join(rows)

    def _next_steps(self) -> str:
        steps = self.settings.next_steps
        if not steps:
            return ""
        lines = ["## Next Steps", ""]
        for step in steps:
            item = f"- [{step.title}]({step.link})"
            if step.summary:
                item += f" - {step.summary}"
            lines.append(item)
        return "\n".join(lines)


def _cell(text: str) -> str:
    return " ".join(text.split()).replace("|", "\\|")


__all__ = ["MarkdownRenderer"]
