from __future__ import annotations

import io
import os
from collections import defaultdict
from pathlib import Path

from .types import ProcessResult, RunSummary


SEPARATOR = "-" * 40

_UNITS = ["Bytes", "KB", "MB", "GB"]


def format_bytes(n: int) -> str:
    if n == 0:
        return "0 Bytes"
    sign = "-" if n < 0 else ""
    n = abs(n)
    i = 0
    while i < len(_UNITS) - 1 and n >= 1024 ** (i + 1):
        i += 1
    value = f"{n / 1024**i:.2f}".rstrip("0").rstrip(".")
    return f"{sign}{value} {_UNITS[i]}"


def format_result(result: ProcessResult) -> list[str]:
    if result.status == "success":
        return [
            f"✓ {result.path}",
            f"  Size: {format_bytes(result.original_size)} → {format_bytes(result.optimized_size or 0)}",
            f"  Saved: {format_bytes(result.savings)} ({result.percent:.2f}% reduction)",
            SEPARATOR,
        ]
    if result.status == "skipped":
        return [f"- {result.path} ({result.reason})"]
    return [f"✗ {result.path}: {result.error} error: {result.reason}"]


def make_report(summary: RunSummary) -> str:
    per_dir_files: dict[Path, int] = defaultdict(int)
    per_dir_before: dict[Path, int] = defaultdict(int)
    per_dir_after: dict[Path, int] = defaultdict(int)

    for r in summary.results:
        if r.status != "success":
            continue
        d = r.path.parent
        per_dir_files[d] += 1
        per_dir_before[d] += r.original_size
        per_dir_after[d] += r.optimized_size or 0

    lines: list[str] = []
    lines.append("# SVG Optimization Report\n")
    lines.append(f"Root: {summary.root}\n")
    lines.append("## Summary\n")
    lines.append(f"- Optimized: {summary.succeeded}")
    lines.append(f"- Skipped: {summary.skipped}")
    lines.append(f"- Failed: {summary.failed}")
    lines.append(f"- Size: {format_bytes(summary.bytes_before)} → {format_bytes(summary.bytes_after)}")
    lines.append(f"- Saved: {format_bytes(summary.savings)} ({summary.percent:.2f}%)\n")
    lines.append("## By Directory\n")
    for d in sorted(per_dir_files, key=str):
        saved = per_dir_before[d] - per_dir_after[d]
        lines.append(f"### {d}")
        lines.append(f"- Files: {per_dir_files[d]}")
        lines.append(f"- Saved: {format_bytes(saved)}\n")

    failures = [r for r in summary.results if r.status == "failed"]
    if failures or summary.directory_errors:
        lines.append("## Errors\n")
        for r in failures:
            lines.append(f"- {r.path}: {r.error} error: {r.reason}")
        for msg in summary.directory_errors:
            lines.append(f"- {msg}")

    return "\n".join(lines) + "\n"


def write_report(dest_path: Path, summary: RunSummary) -> None:
    dest_path.parent.mkdir(parents=True, exist_ok=True)
    tmp = dest_path.with_suffix(dest_path.suffix + ".tmp")
    try:
        with io.open(tmp, "w", encoding="utf-8", newline="") as f:
            f.write(make_report(summary))
        os.replace(tmp, dest_path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
