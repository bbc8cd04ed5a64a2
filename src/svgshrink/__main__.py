from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from ._exceptions import ShrinkError
from ._optimizer import Optimizer
from ._report import SEPARATOR, format_result, write_report
from ._tree import TreeProcessor
from .config import load_config
from .types import ProcessResult


def _print_result(result: ProcessResult) -> None:
    for line in format_result(result):
        print(line)


def _print_directory_error(message: str) -> None:
    print(f"✗ {message}")


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="svgshrink", description="Optimize every SVG file in a directory tree in place")
    p.add_argument("root", nargs="?", default=None, help="Directory to scan recursively")
    p.add_argument(
        "--config",
        default=None,
        help="Path to svgshrink.toml (default: ./svgshrink.toml or SVGSHRINK_CONFIG)",
    )
    p.add_argument("--report", default=None, help="Also write a Markdown report to this path")
    args = p.parse_args(argv)

    if args.root is None:
        print("Error: no directory given", file=sys.stderr)
        p.print_usage(sys.stderr)
        return 1

    try:
        cfg = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(level=getattr(logging, cfg.log_level.upper(), logging.INFO))

    root = Path(args.root)
    if not root.exists():
        print(f"Error: path does not exist: {root}", file=sys.stderr)
        return 1
    if not root.is_dir():
        print(f"Error: path is not a directory: {root}", file=sys.stderr)
        return 1

    print("SVG batch optimizer")
    print(SEPARATOR)
    print(f"Processing directory: {root}")
    print(SEPARATOR)

    processor = TreeProcessor(
        Optimizer(),
        extension=cfg.extension,
        on_result=_print_result,
        on_error=_print_directory_error,
    )
    try:
        summary = processor.run(root)
    except (ShrinkError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(SEPARATOR)
    print(summary.to_summary())
    if args.report:
        try:
            write_report(Path(args.report), summary)
        except OSError as e:
            print(f"Error: could not write report to {args.report}: {e}", file=sys.stderr)
            return 1
        print(f"Report written to: {args.report}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
