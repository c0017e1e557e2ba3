# === FILE: roastmap/config.py ===
"""
Run configuration for Roastmap: fixed client constants, the per-run
:class:`RunConfig` schema and a YAML/JSON loader.
Pydantic describes the schema and validates the data.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Final, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field

LOG_CHANNEL: Final[str] = "Roastmap"
USER_AGENT: Final[str] = "Roastmap/1.0.0/bot"
MAX_FOLLOW_REDIRECTS: Final[int] = 3
REQUEST_RETRY_ATTEMPTS: Final[int] = 10
# milliseconds
REQUEST_RETRY_DELAY: Final[int] = 10000


class RunConfig(BaseModel):
    """Options for one warmup run. Immutable for the duration of the run."""
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    concurrency: int = Field(3, ge=1, alias="parallel", description="Requests per chunk.")
    sweeps: int = Field(1, ge=1, alias="times", description="Full passes over the URL list.")
    delay_ms: int = Field(3000, ge=0, alias="delay", description="Pause before every request (ms).")

    def with_overrides(self, **values: Any) -> RunConfig:
        """Return a validated copy; ``None`` values keep the current setting."""
        data = self.model_dump()
        data.update({k: v for k, v in values.items() if v is not None})
        return RunConfig.model_validate(data)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> RunConfig:
    """
    Read YAML or JSON and return a validated RunConfig.
    ``None`` yields the defaults; a missing file raises FileNotFoundError.
    """
    if path is None:
        return RunConfig()

    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return RunConfig.model_validate(data)
