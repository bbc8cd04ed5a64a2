from __future__ import annotations

import logging
import os
import shutil
import stat
import tempfile
from pathlib import Path
from typing import Callable, Optional

from ._exceptions import (
    ListError,
    PathNotFound,
    ReadError,
    ShrinkError,
    TransformError,
    WriteError,
)
from .types import ErrorKind, ProcessResult, RunSummary


logger = logging.getLogger(__name__)

Transform = Callable[[bytes], bytes]
ResultCallback = Callable[[ProcessResult], None]
ErrorCallback = Callable[[str], None]


def _normalize_extension(extension: str) -> str:
    ext = extension.strip().lower()
    if not ext.lstrip("."):
        raise ValueError(f"Invalid target extension: {extension!r}")
    return ext if ext.startswith(".") else "." + ext


class TreeProcessor:
    """Walks a directory tree and rewrites every matching file in place.

    Symbolic links to files are followed: the link target is rewritten and the
    link itself is left in place. Each target is processed at most once per
    walk, however many links point at it. Symbolic links to directories are
    not descended into. Files are replaced atomically: a failed read, transform
    or write leaves the original bytes on disk.
    """

    def __init__(
        self,
        transform: Transform,
        *,
        extension: str = ".svg",
        on_result: Optional[ResultCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ):
        self.transform = transform
        self.extension = _normalize_extension(extension)
        self.on_result = on_result
        self.on_error = on_error

    def run(self, root: str | Path) -> RunSummary:
        root_path = Path(root)
        if not root_path.exists():
            raise PathNotFound(root_path)
        if not root_path.is_dir():
            raise NotADirectoryError(f"Root path is not a directory: {root_path}")

        if root_path.is_symlink():
            root_path = root_path.resolve()
        errors: list[str] = []
        results = self.walk(root_path, errors)
        return RunSummary.from_results(root_path, results, errors)

    def walk(self, path: str | Path, errors: Optional[list[str]] = None) -> list[ProcessResult]:
        path = Path(path)
        if not os.path.lexists(path):
            raise PathNotFound(path)
        return self._visit(path, errors if errors is not None else [], set())

    def _visit(self, path: Path, errors: list[str], seen: set[Path]) -> list[ProcessResult]:
        try:
            mode = path.lstat().st_mode
        except OSError as e:
            # Entry vanished between listing and stat.
            logger.warning("Skipping %s: %s", path, e)
            return []

        if stat.S_ISDIR(mode):
            try:
                names = self._list(path)
            except ListError as e:
                self._directory_error(e, errors)
                return []
            results: list[ProcessResult] = []
            for name in names:
                results.extend(self._visit(path / name, errors, seen))
            return results

        if path.suffix.lower() != self.extension:
            return []

        if stat.S_ISLNK(mode):
            try:
                mode = path.stat().st_mode
            except OSError:
                # Broken link.
                return []

        if not stat.S_ISREG(mode):
            return []

        target = path.resolve()
        if target in seen:
            return []
        seen.add(target)
        return [self.process_file(path)]

    def _directory_error(self, exc: ListError, errors: list[str]) -> None:
        logger.error("Error processing directory %s", exc)
        errors.append(str(exc))
        if self.on_error is not None:
            self.on_error(str(exc))

    def process_file(self, path: str | Path) -> ProcessResult:
        path = Path(path)
        result = self._process(path)
        if result.status == "failed":
            logger.error("Error processing file %s: %s error: %s", path, result.error, result.reason)
        elif result.status == "success":
            logger.debug("Optimized %s (%d -> %d bytes)", path, result.original_size, result.optimized_size)
        if self.on_result is not None:
            self.on_result(result)
        return result

    def _process(self, path: Path) -> ProcessResult:
        try:
            content = self._read(path)
        except ReadError as e:
            return _failed(path, 0, "read", e)

        original_size = len(content)
        if original_size == 0:
            return ProcessResult(path=path, original_size=0, status="skipped", reason="empty file")

        try:
            optimized = self.transform(content)
        except TransformError as e:
            return _failed(path, original_size, "transform", e)
        except Exception as e:
            return _failed(path, original_size, "transform", TransformError(path, str(e) or type(e).__name__))

        try:
            self._write(path.resolve() if path.is_symlink() else path, optimized)
        except WriteError as e:
            return _failed(path, original_size, "write", e)

        return ProcessResult(
            path=path,
            original_size=original_size,
            optimized_size=len(optimized),
            status="success",
        )

    @staticmethod
    def _list(path: Path) -> list[str]:
        try:
            return sorted(os.listdir(path))
        except OSError as e:
            raise ListError(path, e.strerror or str(e)) from e

    @staticmethod
    def _read(path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise ReadError(path, e.strerror or str(e)) from e

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        tmp: Optional[Path] = None
        try:
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            tmp = Path(tmp_name)
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            shutil.copymode(path, tmp)
            os.replace(tmp, path)
        except OSError as e:
            if tmp is not None:
                tmp.unlink(missing_ok=True)
            raise WriteError(path, e.strerror or str(e)) from e


def _failed(path: Path, original_size: int, kind: ErrorKind, exc: ShrinkError) -> ProcessResult:
    return ProcessResult(
        path=path,
        original_size=original_size,
        status="failed",
        error=kind,
        reason=exc.message,
    )
