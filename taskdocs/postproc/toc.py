"""Category and task index for the generated reference."""

from __future__ import annotations

import re
from typing import Dict, List, Tuple


class TableOfContentsBuilder:
    """Replaces the toc placeholder with links to category and task headings."""

    PLACEHOLDER = "<!-- taskdocs:toc -->"
    BEGIN = "<!-- taskdocs:begin:toc -->"
    END = "<!-- taskdocs:end:toc -->"

    def __init__(self, *, max_level: int = 3) -> None:
        self.max_level = max_level

    def build(self, markdown: str) -> str:
        if self.BEGIN in markdown and self.END in markdown:
            pre, rest = markdown.split(self.BEGIN, 1)
            _, post = rest.split(self.END, 1)
            markdown = f"{pre}{self.PLACEHOLDER}{post}"
        if self.PLACEHOLDER not in markdown:
            return markdown
        block = self._build_block(markdown)
        return markdown.replace(self.PLACEHOLDER, block, 1)

    def _build_block(self, markdown: str) -> str:
        headings = self._collect_headings(markdown)
        if not headings:
            return ""
        output: List[str] = [self.BEGIN, "## Contents", ""]
        for level, title, anchor in headings:
            indent = "  " * (level - 2)
            output.append(f"{indent}- [{title}](#{anchor})")
        output.append(self.END)
        return "\n".join(output)

    def _collect_headings(self, markdown: str) -> List[Tuple[int, str, str]]:
        headings: List[Tuple[int, str, str]] = []
        seen: Dict[str, int] = {}
        in_code = False
        for line in markdown.splitlines():
            stripped = line.strip()
            if stripped.startswith("```"):
                in_code = not in_code
                continue
            if in_code:
                continue
            match = re.match(r"^(#{2,6})\s+(.*)$", stripped)
            if not match:
                continue
            level = len(match.group(1))
            if level > self.max_level:
                continue
            title = match.group(2).strip()
            anchor = self._slugify(title)
            # GitHub suffixes repeated anchors with -1, -2, ...
            count = seen.get(anchor, 0)
            seen[anchor] = count + 1
            if count:
                anchor = f"{anchor}-{count}"
            headings.append((level, title, anchor))
        return headings

    @staticmethod
    def _slugify(title: str) -> str:
        slug = title.lower()
        slug = re.sub(r"[^a-z0-9\s_-]", "", slug)
        slug = re.sub(r"\s", "-", slug)
        return slug
