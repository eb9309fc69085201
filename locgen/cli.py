"""CLI entrypoints for locgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .generator import MergeConflictError
from .logging import configure_logging
from .orchestrator import Orchestrator
from .sources import SourceError
from .watch import Watcher


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_generation_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project root or .locgen.yml path (defaults to current directory).",
    )
    parser.add_argument(
        "-s",
        "--source",
        dest="sources",
        action="append",
        default=None,
        help=(
            "Locale source: a directory of JSON/YAML files, a .py file or a "
            "module[:attr] exporting catalogs. Repeat for several clients."
        ),
    )
    parser.add_argument(
        "-o",
        "--out",
        default=None,
        help="Output path for generated types (default: src/locales.d.ts).",
    )
    parser.add_argument("--namespace", default=None, help="Global namespace to declare.")
    parser.add_argument("--interface", default=None, help="Interface name inside the namespace.")
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail when locale entries disagree on whether a key is a group or a message.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="locgen",
        description="Generate TypeScript declarations for localization catalogs.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate the declaration file once.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_generation_options(generate_parser)
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the diff against the existing file without writing it.",
    )

    watch_parser = subparsers.add_parser(
        "watch",
        help="Generate, then regenerate whenever locale files change.",
    )
    _add_verbose_option(watch_parser, suppress_default=True)
    _add_generation_options(watch_parser)
    watch_parser.add_argument(
        "--listen-path",
        default=None,
        help="Directory to watch for changes (default: src/i18n).",
    )
    watch_parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Seconds between polls of the listen path.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve declaration generation over HTTP (requires the service extra).",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for locgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=getattr(args, "log_file", None))

    if args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
        return

    orchestrator = Orchestrator()
    try:
        config = orchestrator.resolve_config(
            args.path,
            sources=args.sources,
            out=args.out,
            listen_path=getattr(args, "listen_path", None),
            namespace=args.namespace,
            interface=args.interface,
            strict=args.strict,
        )
    except ConfigError as exc:
        parser.exit(1, f"locgen: {exc}\n")

    if args.command == "generate":
        try:
            outcome = orchestrator.run_generate(config, dry_run=bool(args.dry_run))
        except (SourceError, MergeConflictError, ValueError) as exc:
            parser.exit(1, f"locgen generate failed: {exc}\n")
        except OSError as exc:
            parser.exit(1, f"locgen generate failed to write output: {exc}\nRun with --verbose for more details.\n")
        if outcome.dry_run:
            print(outcome.diff or "(no changes)")
        elif outcome.changed:
            print(f"Types written to {_relativize(outcome.path)}")
        else:
            print(f"{_relativize(outcome.path)} already up to date")
    elif args.command == "watch":
        watcher = Watcher(orchestrator, config, interval=args.interval)
        try:
            watcher.run()
        except KeyboardInterrupt:
            print("Stopping file watcher")
        except (SourceError, MergeConflictError, ValueError, OSError) as exc:
            parser.exit(1, f"locgen watch failed: {exc}\n")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
