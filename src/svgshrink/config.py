from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import os

try:  # Python 3.11+
    import tomllib as tomli  # type: ignore
except ImportError:  # pragma: no cover
    import tomli  # type: ignore


@dataclass(frozen=True)
class ShrinkConfig:
    extension: str = ".svg"
    log_level: str = "info"


def load_config(config_path: Optional[str] = None) -> ShrinkConfig:
    # Explicit argument, then env, then an optional file in CWD
    cfg_path = (
        config_path
        or os.getenv("SVGSHRINK_CONFIG")
        or os.path.join(os.getcwd(), "svgshrink.toml")
    )

    data: dict = {}
    if os.path.isfile(cfg_path):
        with open(cfg_path, "rb") as f:
            data = tomli.load(f) or {}

    extension = str(data.get("extension") or ".svg")
    log_level = str(data.get("log_level") or "info")

    # Environment overrides
    extension = os.getenv("SVGSHRINK_EXTENSION", extension).strip()
    log_level = os.getenv("SVGSHRINK_LOG_LEVEL", log_level).strip()

    if not extension.lstrip("."):
        raise ValueError("extension must name a file suffix, e.g. '.svg'")

    return ShrinkConfig(
        extension=extension if extension.startswith(".") else "." + extension,
        log_level=log_level.lower(),
    )
