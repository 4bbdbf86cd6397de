# Copyright 2025 Edward Clewer
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Structured JSON logging with a per-run, per-window context."""

from __future__ import annotations

import json
import logging
import math
import subprocess
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

CONTEXT_FIELDS = ("run_id", "window")

_CONTEXT: ContextVar[Dict[str, Any]] = ContextVar(
    "step_aggregator_logging_context",
    default=dict.fromkeys(CONTEXT_FIELDS),
)


def _to_jsonable(obj: Any) -> Any:
    """Convert log payload values into types ``json.dumps`` accepts without loss of meaning."""
    if is_dataclass(obj) and not isinstance(obj, type):
        return _to_jsonable(asdict(obj))
    if isinstance(obj, Mapping):
        return {str(k): _to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_jsonable(v) for v in obj]
    if isinstance(obj, (set, frozenset)):
        return sorted(_to_jsonable(v) for v in obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Path):
        return str(obj)
    # NaN and infinities are not valid JSON
    if isinstance(obj, float) and not math.isfinite(obj):
        return None
    return obj


class StructuredFormatter(logging.Formatter):
    """Render each record as one JSON object carrying the active run context."""

    # Attributes every LogRecord carries; anything else arrived through `extra`.
    STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
        "message",
        "asctime",
    }

    def format(self, record: logging.LogRecord) -> str:
        context = _CONTEXT.get()
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            payload[field] = getattr(record, field, context.get(field))

        extra = {
            key: _to_jsonable(value)
            for key, value in vars(record).items()
            if key not in self.STANDARD_ATTRS and key not in CONTEXT_FIELDS
        }
        if extra:
            payload["extra"] = extra
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    # unknown names come back as the string "Level <name>"
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    *,
    run_id: str,
    log_dir: Optional[Path] = None,
    level: int | str = logging.INFO,
) -> None:
    """Route root logging through ``StructuredFormatter``.

    Existing root handlers are closed and replaced, so calling this twice does
    not duplicate output. With ``log_dir`` set, records are also written to
    ``<log_dir>/<run_id>.log``.
    """
    root = logging.getLogger()
    root.setLevel(_resolve_level(level))

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / f"{run_id}.log", encoding="utf-8"))

    formatter = StructuredFormatter()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(root.level)
        root.addHandler(handler)

    set_run_context(run_id=run_id)


def generate_run_id() -> str:
    """UTC timestamp plus eight random hex characters."""
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"{stamp}-{uuid.uuid4().hex[:8]}"


def set_run_context(**updates: Any) -> Token:
    """Merge ``updates`` into the logging context and return the reset token."""
    return _CONTEXT.set({**_CONTEXT.get(), **updates})


@contextmanager
def run_context(**updates: Any):
    """Apply ``updates`` to the logging context for the duration of the block."""
    token = set_run_context(**updates)
    try:
        yield
    finally:
        _CONTEXT.reset(token)


def get_git_hash() -> Optional[str]:
    """Commit hash of the working tree, or None outside a git checkout."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            check=False,
            capture_output=True,
            text=True,
        )
    except (OSError, ValueError):
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def log_run_metadata(
    logger: logging.Logger,
    *,
    aggregation_config: Any,
    config_path: Path,
    series_path: Path,
    git_hash: Optional[str],
) -> None:
    """Log the resolved config, the raw YAML and the input paths of a run."""
    try:
        config_yaml: Optional[str] = Path(config_path).read_text(encoding="utf-8")
    except OSError:
        config_yaml = None

    logger.info(
        "run metadata snapshot",
        extra={
            "git_hash": git_hash,
            "aggregation_config": _to_jsonable(aggregation_config),
            "config_path": str(config_path),
            "series_path": str(series_path),
            "config_yaml": config_yaml,
        },
    )
