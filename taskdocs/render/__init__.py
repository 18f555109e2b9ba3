"""Document renderers for parsed task entries."""

from .markdown import MarkdownRenderer

__all__ = ["MarkdownRenderer"]
