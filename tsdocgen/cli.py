"""CLI entrypoint for tsdocgen."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .logging import configure_logging
from .orchestrator import InputError, Orchestrator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tsdocgen",
        description="Insert TypeDoc method tables into component README files.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project root containing the packages directory (defaults to current directory).",
    )
    parser.add_argument(
        "--input",
        dest="input_path",
        default=None,
        help="Reflection JSON produced by TypeDoc (defaults to jsDoc.json in the project root).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview README changes without writing them.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also append log records (including debug output) to this file.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for tsdocgen."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    orchestrator = Orchestrator()
    try:
        result = orchestrator.run(
            args.path,
            input_path=args.input_path,
            dry_run=bool(args.dry_run),
        )
    except (ConfigError, InputError) as exc:
        parser.exit(1, f"tsdocgen failed: {exc}\n")

    for outcome in result.outcomes:
        if not outcome.ok:
            continue
        if outcome.dry_run:
            print(f"{_relativize(outcome.path)} (dry-run):")
            print(outcome.diff or "(no diff)")
        elif outcome.changed:
            print(f"README updated at {_relativize(outcome.path)}")

    if result.failures:
        parser.exit(
            1,
            f"{len(result.failures)} README(s) could not be updated. "
            "Run with --verbose for more details.\n",
        )


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
