"""Configuration loading for taskdocs (.taskdocs.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .categories import DEFAULT_CATEGORIES

CONFIG_FILENAME = ".taskdocs.yml"

DEFAULT_SCHEMA_PATH = Path("protos") / "job_schemas.proto"
DEFAULT_SCHEMA_URL = (
    "https://raw.githubusercontent.com/switchboard-xyz/sbv3/main/protos/job_schemas.proto"
)
DEFAULT_SOURCE_LINK = "https://github.com/switchboard-xyz/sbv3/blob/main/protos/job_schemas.proto"
DEFAULT_OUTPUT_PATH = Path("custom-feeds") / "task-types.md"

DEFAULT_INTRO = (
    "An **OracleJob** is a collection of tasks that are chained together to arrive at a "
    "single numerical value. Tasks execute sequentially, with each task's output feeding "
    "into the next.\n\n"
    "Some tasks do not consume the running input (such as HttpTask and WebsocketTask), "
    "effectively resetting the running result. Others transform the current value through "
    "mathematical operations or parsing."
)


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class NextStep:
    """A follow-up link rendered at the end of the document."""

    title: str
    link: str
    summary: Optional[str] = None


DEFAULT_NEXT_STEPS: List[NextStep] = [
    NextStep(
        "Build with TypeScript",
        "build-and-deploy-feed/build-with-typescript.md",
        "Create feeds programmatically",
    ),
    NextStep(
        "Build with UI",
        "build-and-deploy-feed/build-with-ui.md",
        "Use the visual feed builder",
    ),
    NextStep(
        "Advanced Feed Configuration",
        "advanced-feed-configuration/README.md",
        "Learn about variable overrides and more",
    ),
]


@dataclass
class SourceConfig:
    """Where the schema text is read from."""

    path: Optional[Path] = None
    url: Optional[str] = DEFAULT_SCHEMA_URL
    timeout: float = 30.0


@dataclass
class DocumentConfig:
    """Presentation settings for the generated Markdown."""

    title: str = "Task Types"
    source_name: str = "job_schemas.proto"
    source_link: Optional[str] = DEFAULT_SOURCE_LINK
    intro: str = DEFAULT_INTRO
    toc: bool = False
    show_fields: bool = True
    pending_text: str = "*Documentation pending.*"
    next_steps: List[NextStep] = field(default_factory=lambda: list(DEFAULT_NEXT_STEPS))


@dataclass
class TaskDocsConfig:
    """Represents the settings defined in .taskdocs.yml."""

    root: Path
    source: SourceConfig = field(default_factory=SourceConfig)
    output: Path = DEFAULT_OUTPUT_PATH
    document: DocumentConfig = field(default_factory=DocumentConfig)
    categories: Dict[str, List[str]] = field(
        default_factory=lambda: {name: list(tasks) for name, tasks in DEFAULT_CATEGORIES.items()}
    )

    def resolve(self, path: Path) -> Path:
        """Resolve ``path`` against the project root unless it is absolute."""
        path = path.expanduser()
        return path if path.is_absolute() else (self.root / path)


def load_config(config_path: Path) -> TaskDocsConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return TaskDocsConfig(root=root, source=SourceConfig(path=root / DEFAULT_SCHEMA_PATH))

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    source_data = _as_dict(data.get("source"))
    source_path = _as_str(source_data.get("path"))
    source = SourceConfig(
        path=root / (source_path or DEFAULT_SCHEMA_PATH),
        url=_as_str(source_data.get("url")) if "url" in source_data else DEFAULT_SCHEMA_URL,
        timeout=_as_float(source_data.get("timeout")) or 30.0,
    )

    output_str = _as_str(data.get("output"))
    output = Path(output_str) if output_str else DEFAULT_OUTPUT_PATH

    document = _load_document(_as_dict(data.get("document")))

    categories: Dict[str, List[str]]
    if "categories" in data:
        raw_categories = data.get("categories")
        if not isinstance(raw_categories, dict):
            raise ConfigError("categories must map category names to task lists")
        categories = {str(name): _as_str_list(tasks) for name, tasks in raw_categories.items()}
    else:
        categories = {name: list(tasks) for name, tasks in DEFAULT_CATEGORIES.items()}

    return TaskDocsConfig(
        root=root,
        source=source,
        output=output,
        document=document,
        categories=categories,
    )


def _load_document(document_data: Dict[str, Any]) -> DocumentConfig:
    document = DocumentConfig()
    if not document_data:
        return document

    document.title = _as_str(document_data.get("title")) or document.title
    document.source_name = _as_str(document_data.get("source_name")) or document.source_name
    if "source_link" in document_data:
        document.source_link = _as_str(document_data.get("source_link"))
    intro = _as_str(document_data.get("intro"))
    if intro is not None:
        document.intro = intro.strip()
    toc = _as_bool(document_data.get("toc"))
    if toc is not None:
        document.toc = toc
    show_fields = _as_bool(document_data.get("show_fields"))
    if show_fields is not None:
        document.show_fields = show_fields
    document.pending_text = _as_str(document_data.get("pending_text")) or document.pending_text
    if "next_steps" in document_data:
        document.next_steps = _as_next_steps(document_data.get("next_steps"))
    return document


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_next_steps(value: Any) -> List[NextStep]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError("document.next_steps must be a list")
    steps: List[NextStep] = []
    for item in value:
        item_data = _as_dict(item)
        title = _as_str(item_data.get("title"))
        link = _as_str(item_data.get("link"))
        if not title or not link:
            raise ConfigError("each next step requires a title and a link")
        steps.append(NextStep(title=title, link=link, summary=_as_str(item_data.get("summary"))))
    return steps


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
