"""Pipeline orchestration for generating the task type reference."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional

from .categories import CategoryIndex
from .config import TaskDocsConfig, load_config
from .logging import get_logger
from .models import Entry
from .postproc.lint import MarkdownLinter
from .postproc.toc import TableOfContentsBuilder
from .render.markdown import MarkdownRenderer
from .schema import parse_schema
from .source import SchemaSource, SchemaText

SourceFactory = Callable[[TaskDocsConfig], SchemaSource]


@dataclass
class GenerationOutcome:
    """Result of a documentation generation run."""

    path: Path
    entries: Dict[str, Entry]
    markdown: str
    changed: bool
    dry_run: bool


@dataclass
class Inspection:
    """Parsed entries with the category buckets from the same configuration."""

    entries: Dict[str, Entry]
    categories: CategoryIndex


class Orchestrator:
    """Coordinates fetch, parse, render, and write for a project root."""

    def __init__(
        self,
        source_factory: SourceFactory | None = None,
        linter: MarkdownLinter | None = None,
        toc_builder: TableOfContentsBuilder | None = None,
    ) -> None:
        self.source_factory = source_factory or _default_source
        self.linter = linter or MarkdownLinter()
        self.toc_builder = toc_builder or TableOfContentsBuilder()
        self.logger = get_logger("orchestrator")

    def run(
        self,
        path: str | Path = ".",
        *,
        source: Optional[Path] = None,
        url: Optional[str] = None,
        output: Optional[Path] = None,
        toc: Optional[bool] = None,
        dry_run: bool = False,
    ) -> GenerationOutcome:
        """Generate the reference document and write it unless ``dry_run`` is set."""
        config = self._load(path, source=source, url=url)
        if output is not None:
            config.output = output
        if toc is not None:
            config.document.toc = toc

        entries = self._parse(self._fetch(config))

        self.logger.info("Generating markdown...")
        renderer = MarkdownRenderer(CategoryIndex(config.categories), config.document)
        markdown = renderer.render(entries.values())
        if config.document.toc:
            markdown = self.toc_builder.build(markdown)
        markdown = self.linter.lint(markdown)

        target = config.resolve(config.output)
        existing = target.read_text(encoding="utf-8") if target.exists() else None
        changed = existing != markdown

        if dry_run:
            self.logger.info("Dry run; %s left untouched", target)
        elif not changed:
            self.logger.info("%s already up to date", target)
        else:
            self.logger.info("Writing to %s...", target)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(markdown, encoding="utf-8")

        return GenerationOutcome(
            path=target,
            entries=entries,
            markdown=markdown,
            changed=changed,
            dry_run=dry_run,
        )

    def inspect(
        self,
        path: str | Path = ".",
        *,
        source: Optional[Path] = None,
        url: Optional[str] = None,
    ) -> Inspection:
        """Fetch and parse the schema without rendering anything."""
        config = self._load(path, source=source, url=url)
        entries = self._parse(self._fetch(config))
        return Inspection(entries=entries, categories=CategoryIndex(config.categories))

    def _load(
        self,
        path: str | Path,
        *,
        source: Optional[Path] = None,
        url: Optional[str] = None,
    ) -> TaskDocsConfig:
        config = load_config(Path(path))
        if source is not None:
            config.source.path = source.expanduser().resolve()
        if url is not None:
            config.source.url = url
        return config

    def _fetch(self, config: TaskDocsConfig) -> SchemaText:
        self.logger.info("Fetching proto file...")
        return self.source_factory(config).fetch()

    def _parse(self, schema: SchemaText) -> Dict[str, Entry]:
        self.logger.info("Parsing task documentation...")
        entries = parse_schema(schema.text)
        self.logger.info("Found %d task types", len(entries))
        undocumented = sorted(name for name, entry in entries.items() if not entry.documentation)
        if undocumented:
            self.logger.debug("Undocumented tasks: %s", ", ".join(undocumented))
        return entries


def _default_source(config: TaskDocsConfig) -> SchemaSource:
    return SchemaSource(
        local_path=config.source.path,
        url=config.source.url,
        timeout=config.source.timeout,
    )


__all__ = ["GenerationOutcome", "Inspection", "Orchestrator"]
