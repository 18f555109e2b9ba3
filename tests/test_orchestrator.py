"""Tests for taskdocs.orchestrator."""

from __future__ import annotations

from pathlib import Path

import pytest

from taskdocs.config import TaskDocsConfig
from taskdocs.orchestrator import GenerationOutcome, Orchestrator
from taskdocs.source import SchemaText, SourceUnavailableError
from tests._fixtures.schema_workspace import SchemaWorkspace


class StaticSource:
    """Source double that serves fixed schema text."""

    def __init__(self, text: str) -> None:
        self.text = text

    def fetch(self) -> SchemaText:
        return SchemaText(text=self.text, origin="memory")


class FailingSource:
    def fetch(self) -> SchemaText:
        raise SourceUnavailableError("Failed to fetch schema: HTTP 503")


def test_run_writes_reference_from_local_schema(workspace: SchemaWorkspace) -> None:
    workspace.write_schema()

    outcome = Orchestrator().run(workspace.root)

    assert isinstance(outcome, GenerationOutcome)
    assert outcome.changed is True
    assert outcome.path == workspace.root.resolve() / "custom-feeds" / "task-types.md"
    written = workspace.read("custom-feeds/task-types.md")
    assert written == outcome.markdown
    assert list(outcome.entries) == ["HttpTask", "JsonParseTask", "ValueTask", "MysteryTask"]
    assert "## Data Fetching\n\n### HttpTask\n\nFetch data from an HTTP endpoint." in written
    assert "## Other\n\n### MysteryTask\n\n*Documentation pending.*" in written
    assert "| `url` | `string` | The URL to request. |" in written
    assert "NotATaskMessage" not in written
    assert written.rstrip().endswith("Learn about variable overrides and more")


def test_run_is_idempotent(workspace: SchemaWorkspace) -> None:
    workspace.write_schema()
    orchestrator = Orchestrator()

    first = orchestrator.run(workspace.root)
    second = orchestrator.run(workspace.root)

    assert first.changed is True
    assert second.changed is False
    assert first.markdown == second.markdown
    assert first.entries == second.entries


def test_run_dry_run_does_not_write(workspace: SchemaWorkspace) -> None:
    workspace.write_schema()

    outcome = Orchestrator().run(workspace.root, dry_run=True)

    assert outcome.dry_run is True
    assert outcome.changed is True
    assert not outcome.path.exists()
    assert "### JsonParseTask" in outcome.markdown


def test_run_honours_config_and_overrides(workspace: SchemaWorkspace) -> None:
    workspace.write_schema(relative="schemas/jobs.proto")
    workspace.write_config(
        """
        source:
          path: schemas/jobs.proto
          url: null
        output: docs/tasks.md
        document:
          title: Job Tasks
          next_steps: []
        categories:
          Fetching: [HttpTask]
        """
    )

    outcome = Orchestrator().run(workspace.root, output=Path("out/reference.md"), toc=True)

    written = workspace.read("out/reference.md")
    assert written.startswith("# Job Tasks\n")
    assert "<!-- taskdocs:begin:toc -->" in written
    assert "- [Fetching](#fetching)" in written
    assert "  - [HttpTask](#httptask)" in written
    assert "## Next Steps" not in written
    assert outcome.path.name == "reference.md"


def test_run_uses_source_override(workspace: SchemaWorkspace, tmp_path: Path) -> None:
    override = tmp_path / "other.proto"
    override.write_text("/// Only task.\nmessage SoloTask {\n  string a = 1;\n}\n", encoding="utf-8")

    inspection = Orchestrator().inspect(workspace.root, source=override, url="")

    assert list(inspection.entries) == ["SoloTask"]
    assert inspection.entries["SoloTask"].documentation == "Only task."
    assert inspection.categories.categorize("SoloTask") == "Other"


def test_run_with_injected_source_factory(workspace: SchemaWorkspace) -> None:
    seen: list[TaskDocsConfig] = []

    def factory(config: TaskDocsConfig) -> StaticSource:
        seen.append(config)
        return StaticSource("message RemoteTask {\n}\n")

    outcome = Orchestrator(source_factory=factory).run(workspace.root, url="https://example.com/s.proto")

    assert seen[0].source.url == "https://example.com/s.proto"
    assert list(outcome.entries) == ["RemoteTask"]


def test_run_surfaces_source_failure_before_writing(workspace: SchemaWorkspace) -> None:
    orchestrator = Orchestrator(source_factory=lambda config: FailingSource())

    with pytest.raises(SourceUnavailableError):
        orchestrator.run(workspace.root)

    assert not (workspace.root / "custom-feeds").exists()


def test_run_with_empty_schema_renders_only_frame(workspace: SchemaWorkspace) -> None:
    orchestrator = Orchestrator(source_factory=lambda config: StaticSource(""))

    outcome = orchestrator.run(workspace.root, dry_run=True)

    assert outcome.entries == {}
    assert "###" not in outcome.markdown
    assert outcome.markdown.startswith("# Task Types\n")


def test_inspect_reads_configuration_once(workspace: SchemaWorkspace, monkeypatch) -> None:
    import taskdocs.orchestrator as orchestrator_module

    workspace.write_schema()
    workspace.write_config("categories:\n  Fetching: [HttpTask]\n")
    calls: list[Path] = []
    real_load = orchestrator_module.load_config

    def counting_load(path: Path) -> TaskDocsConfig:
        calls.append(path)
        return real_load(path)

    monkeypatch.setattr(orchestrator_module, "load_config", counting_load)

    inspection = Orchestrator().inspect(workspace.root)

    assert len(calls) == 1
    assert inspection.categories.categorize("HttpTask") == "Fetching"
    assert inspection.categories.categorize("JsonParseTask") == "Other"
