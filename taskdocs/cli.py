"""CLI entrypoints for taskdocs commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .logging import configure_logging
from .orchestrator import Orchestrator
from .source import SourceUnavailableError


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )


def _add_source_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project root containing .taskdocs.yml (defaults to current directory).",
    )
    parser.add_argument(
        "--source",
        type=Path,
        help="Local schema file to read instead of the configured one.",
    )
    parser.add_argument(
        "--url",
        help="URL to fetch the schema from when no local file exists.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskdocs",
        description="Generate task type reference documentation from a protobuf job schema.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Render the task reference Markdown file.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_source_options(generate_parser)
    generate_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Markdown file to write, relative to the project root.",
    )
    generate_parser.add_argument(
        "--toc",
        action="store_true",
        default=None,
        help="Insert a table of contents after the introduction.",
    )
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated Markdown instead of writing it.",
    )

    list_parser = subparsers.add_parser(
        "list",
        help="List task messages found in the schema.",
    )
    _add_verbose_option(list_parser, suppress_default=True)
    _add_source_options(list_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for taskdocs commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    orchestrator = Orchestrator()

    try:
        if args.command == "generate":
            outcome = orchestrator.run(
                args.path,
                source=args.source,
                url=args.url,
                output=args.output,
                toc=args.toc,
                dry_run=bool(args.dry_run),
            )
            if outcome.dry_run:
                print(outcome.markdown, end="")
            elif outcome.changed:
                print(f"{len(outcome.entries)} task types written to {_relativize(outcome.path)}")
            else:
                print(f"{_relativize(outcome.path)} already up to date")
        elif args.command == "list":
            inspection = orchestrator.inspect(args.path, source=args.source, url=args.url)
            categories = inspection.categories
            for name, entry in inspection.entries.items():
                marker = "" if entry.documentation else " (undocumented)"
                print(
                    f"{name}\t{categories.categorize(name)}\t"
                    f"{len(entry.fields)} fields{marker}"
                )
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except SourceUnavailableError as exc:
        parser.exit(1, f"{exc}\n")
    except ConfigError as exc:
        parser.exit(1, f"Invalid configuration: {exc}\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
