"""CLI entrypoint for generating the review kit."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reviewkit",
        description="Write a pre-review audit of a web application repository to review-kit/REVIEW_KIT.json.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the repository root (defaults to current directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for reviewkit."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if not Path(args.path).exists():
        parser.exit(1, f"reviewkit: {args.path} does not exist\n")

    orchestrator = Orchestrator()
    try:
        output_path = orchestrator.run(args.path)
    except ConfigError as exc:
        parser.exit(1, f"reviewkit: invalid configuration: {exc}\n")
    except OSError as exc:
        parser.exit(1, f"reviewkit: could not write review kit: {exc}\n")
    print(f"Wrote {_relativize(output_path)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
