"""CLI entrypoints for resourcegen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import load_config
from .errors import (
    ConfigError,
    DocumentParseError,
    MigrationNotConfirmedError,
    NamespaceNotFoundError,
)
from .generator import ResourceManagerGenerator
from .logging import configure_logging
from .migration import MigrationManager


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    # subcommands suppress defaults so a flag given before the command survives
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write a DEBUG-level transcript of the run to this file.",
    )


def _add_module_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "module",
        nargs="?",
        default=".",
        help="Path to the module root (defaults to current directory).",
    )
    parser.add_argument(
        "--project-root",
        default=None,
        help="Project root used to resolve project(':name') dependencies "
        "(defaults to the module's parent directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resourcegen",
        description="Generate a typed ResourceManager accessor and migrate call sites to it.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate ResourceManager.kt for a module.",
    )
    _add_logging_options(generate_parser, suppress_default=True)
    _add_module_options(generate_parser)
    generate_parser.add_argument(
        "--output",
        default=None,
        help="Output file (defaults to build/generated/resourcegen/main/ResourceManager.kt).",
    )
    generate_parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Always regenerate, ignoring and clearing the cached result.",
    )
    generate_parser.add_argument(
        "--lenient",
        action="store_true",
        help="Skip malformed resource documents instead of failing.",
    )

    migrate_parser = subparsers.add_parser(
        "migrate",
        help="Rewrite getString(R.string.x)-style calls to ResourceManager accessors.",
    )
    _add_logging_options(migrate_parser, suppress_default=True)
    _add_module_options(migrate_parser)
    migrate_parser.add_argument(
        "--confirm",
        action="store_true",
        help="Confirm that source files may be modified in place.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for resourcegen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file).expanduser() if args.log_file else None
    try:
        configure_logging(verbose=bool(args.verbose), log_file=log_file)
    except OSError as exc:
        parser.exit(1, f"Cannot open log file {log_file}: {exc}\n")

    module_dir = Path(args.module).expanduser().resolve()
    try:
        config = load_config(module_dir)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")
    if args.project_root:
        config.project_root = Path(args.project_root).expanduser().resolve()

    if args.command == "generate":
        if args.no_cache:
            config.generation.cache = False
        if args.lenient:
            config.generation.strict = False
        output = Path(args.output).expanduser() if args.output else None
        try:
            result = ResourceManagerGenerator().generate(module_dir, output, config=config)
        except (NamespaceNotFoundError, DocumentParseError) as exc:
            parser.exit(1, f"{exc}\n")
        except OSError as exc:
            parser.exit(1, f"resourcegen generate failed: {exc}\nRun with --verbose for more details.\n")
        rel_path = _relativize(result.path)
        if result.from_cache:
            print(f"ResourceManager up to date at {rel_path} (cached)")
        else:
            print(f"ResourceManager generated at {rel_path}")
        for skipped in result.skipped_documents:
            print(f"Skipped malformed document: {_relativize(skipped.path)}")
    elif args.command == "migrate":
        if not args.confirm:
            parser.exit(
                1,
                "Migration rewrites source files in place. Commit or back up your work, "
                "then re-run with --confirm.\n",
            )
        manager = MigrationManager(config.effective_project_root, module_dir, config=config)
        try:
            result = manager.migrate(confirmed=True)
        except (FileNotFoundError, MigrationNotConfirmedError) as exc:
            parser.exit(1, f"{exc}\n")
        except OSError as exc:
            parser.exit(1, f"resourcegen migrate failed: {exc}\nRun with --verbose for more details.\n")
        print(
            f"Modified {len(result.files)} file(s) with a total of "
            f"{result.total_changes} change(s)."
        )
        print(f"Report: {result.report_uri}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(Path(path).resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
