from __future__ import annotations

from pathlib import Path


class ShrinkError(Exception):
    """Base class for errors raised while shrinking a tree."""

    def __init__(self, path: Path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


class PathNotFound(ShrinkError):
    def __init__(self, path: Path):
        super().__init__(path, "path does not exist")


class ListError(ShrinkError):
    pass


class ReadError(ShrinkError):
    pass


class TransformError(ShrinkError):
    pass


class WriteError(ShrinkError):
    pass
