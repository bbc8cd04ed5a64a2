from ._exceptions import (
    ListError,
    PathNotFound,
    ReadError,
    ShrinkError,
    TransformError,
    WriteError,
)
from ._optimizer import DEFAULT_OPTIONS, Optimizer, OptimizerOptions, optimize
from ._tree import TreeProcessor
from .types import ProcessResult, RunSummary

__version__ = "0.1.0"

__all__ = [
    "TreeProcessor",
    "ProcessResult",
    "RunSummary",
    "Optimizer",
    "OptimizerOptions",
    "DEFAULT_OPTIONS",
    "optimize",
    "ShrinkError",
    "PathNotFound",
    "ListError",
    "ReadError",
    "TransformError",
    "WriteError",
]
