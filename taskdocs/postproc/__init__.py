"""Post-processing passes applied to rendered Markdown."""

from .lint import MarkdownLinter
from .toc import TableOfContentsBuilder

__all__ = ["MarkdownLinter", "TableOfContentsBuilder"]
