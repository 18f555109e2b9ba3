"""Whitespace and block-spacing normalization for generated Markdown."""

from __future__ import annotations

from typing import List


class MarkdownLinter:
    """Keeps headings, tables, and rules separated from surrounding text."""

    def lint(self, markdown: str) -> str:
        normalized = markdown.replace("\r\n", "\n").replace("\r", "\n")
        cleaned: List[str] = []
        in_code = False

        for line in normalized.split("\n"):
            stripped = line.rstrip()
            if stripped.startswith("```"):
                in_code = not in_code
                cleaned.append(stripped)
                continue
            if in_code:
                cleaned.append(stripped)
                continue

            if not stripped:
                if cleaned and cleaned[-1] != "":
                    cleaned.append("")
                continue

            previous = cleaned[-1] if cleaned else ""
            if previous and self._needs_gap(stripped, previous):
                cleaned.append("")
            cleaned.append(stripped)

            # text directly under a rule or heading reads as part of it
            if self._is_heading(stripped) or self._is_rule(stripped):
                cleaned.append("")

        while cleaned and cleaned[0] == "":
            cleaned.pop(0)
        while cleaned and cleaned[-1] == "":
            cleaned.pop()

        return "\n".join(cleaned) + "\n"

    def _needs_gap(self, line: str, previous: str) -> bool:
        if self._is_heading(line) or self._is_rule(line):
            return True
        if self._is_table_row(line) and not self._is_table_row(previous):
            return True
        if self._is_table_row(previous) and not self._is_table_row(line):
            return True
        return False

    @staticmethod
    def _is_heading(line: str) -> bool:
        return line.startswith("#")

    @staticmethod
    def _is_rule(line: str) -> bool:
        return line == "---"

    @staticmethod
    def _is_table_row(line: str) -> bool:
        return line.startswith("|")
