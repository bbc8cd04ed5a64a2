from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Literal, Optional


Status = Literal["success", "skipped", "failed"]
ErrorKind = Literal["read", "transform", "write"]


def _percent(savings: int, original: int) -> float:
    if original == 0:
        return 0.0
    return round(savings / original * 100, 2)


@dataclass(frozen=True)
class ProcessResult:
    path: Path
    original_size: int
    status: Status
    optimized_size: Optional[int] = None
    error: Optional[ErrorKind] = None
    reason: Optional[str] = None

    @property
    def savings(self) -> int:
        if self.optimized_size is None:
            return 0
        return self.original_size - self.optimized_size

    @property
    def percent(self) -> float:
        # Negative when the optimizer grew the file; never clamped.
        return _percent(self.savings, self.original_size)


@dataclass(frozen=True)
class RunSummary:
    root: Path
    results: tuple[ProcessResult, ...]
    directory_errors: tuple[str, ...]
    succeeded: int
    skipped: int
    failed: int
    bytes_before: int
    bytes_after: int

    @classmethod
    def from_results(
        cls,
        root: Path,
        results: Iterable[ProcessResult],
        directory_errors: Iterable[str] = (),
    ) -> "RunSummary":
        results = tuple(results)
        ok = [r for r in results if r.status == "success"]
        return cls(
            root=root,
            results=results,
            directory_errors=tuple(directory_errors),
            succeeded=len(ok),
            skipped=sum(1 for r in results if r.status == "skipped"),
            failed=sum(1 for r in results if r.status == "failed"),
            bytes_before=sum(r.original_size for r in ok),
            bytes_after=sum(r.optimized_size or 0 for r in ok),
        )

    @property
    def savings(self) -> int:
        return self.bytes_before - self.bytes_after

    @property
    def percent(self) -> float:
        return _percent(self.savings, self.bytes_before)

    def to_summary(self) -> str:
        return (
            f"Optimized: {self.succeeded}, Skipped: {self.skipped}, Failed: {self.failed}, "
            f"Bytes: {self.bytes_before} -> {self.bytes_after} ({self.percent:.2f}%)"
        )
