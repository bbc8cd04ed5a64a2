from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import SimpleNamespace
from typing import Optional

from scour import scour

from ._exceptions import TransformError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptimizerOptions:
    """Fixed optimizer settings, built once at startup and shared by every file."""

    multipass: bool = True
    preserve_viewbox: bool = True
    preserve_title: bool = True
    preserve_desc: bool = True
    strip_dimensions: bool = True
    sort_attributes: bool = True
    strip_comments: bool = True
    remove_metadata: bool = True
    minify_ids: bool = True
    compact_output: bool = True
    max_passes: int = 10

    def to_scour(self) -> SimpleNamespace:
        # scour never drops viewBox and always serializes attributes in its own
        # canonical order, so preserve_viewbox and sort_attributes need no switch.
        overrides = SimpleNamespace(
            remove_titles=not self.preserve_title,
            remove_descriptions=not self.preserve_desc,
            enable_viewboxing=self.strip_dimensions,
            strip_comments=self.strip_comments,
            remove_metadata=self.remove_metadata,
            strip_ids=self.minify_ids,
            shorten_ids=self.minify_ids,
            strip_xml_prolog=self.compact_output,
            indent_type="none" if self.compact_output else "space",
            newlines=not self.compact_output,
            quiet=True,
        )
        return scour.sanitizeOptions(overrides)


DEFAULT_OPTIONS = OptimizerOptions()


def _scour_once(content: bytes, scour_options: SimpleNamespace) -> bytes:
    return scour.scourString(content, scour_options).encode("utf-8")


def optimize(
    content: bytes,
    options: OptimizerOptions = DEFAULT_OPTIONS,
    *,
    path: Optional[Path] = None,
) -> bytes:
    """Return the optimized form of an SVG document.

    With ``multipass`` the optimizer is re-applied to its own output until it
    stops changing or ``max_passes`` is reached. Any failure inside scour is
    re-raised as :class:`TransformError`.
    """
    label = path if path is not None else Path("<memory>")
    scour_options = options.to_scour()
    passes = options.max_passes if options.multipass else 1

    try:
        current = _scour_once(content, scour_options)
        for n in range(1, passes):
            nxt = _scour_once(current, scour_options)
            if nxt == current:
                logger.debug("%s: stable after %d passes", label, n)
                break
            current = nxt
    except Exception as e:
        raise TransformError(label, str(e) or type(e).__name__) from e
    return current


class Optimizer:
    """Callable bound to one options set, suitable as a tree transformer."""

    def __init__(self, options: OptimizerOptions = DEFAULT_OPTIONS):
        self.options = options

    def __call__(self, content: bytes) -> bytes:
        return optimize(content, self.options)
