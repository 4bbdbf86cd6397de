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

import logging
import math
import os
from datetime import date, datetime
from pathlib import Path

import pandas as pd

from step_aggregator.exceptions import ConfigError

logger = logging.getLogger(__name__)

def resolve_input_file(path: Path, label: str) -> Path:
    """Return the absolute path of an existing, readable file."""
    p = Path(path).expanduser().resolve(strict=False)
    if not p.exists():
        raise ConfigError(f"required {label} file does not exist: {p}")
    if not p.is_file():
        raise ConfigError(f"expected {label} to be a file, but got a directory: {p}")
    if not os.access(p, os.R_OK):
        raise ConfigError(f"{label} file '{p}' is not readable")
    return p


def ensure_output_dir(path: Path) -> Path:
    """Create ``path`` when missing and return it resolved."""
    p = Path(path).expanduser().resolve(strict=False)
    if p.exists() and not p.is_dir():
        raise ConfigError(f"expected output location to be a directory, but got a file: {p}")
    if not p.exists():
        try:
            p.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigError(f"failed to create output directory '{p}': {e}") from e
        logger.info("created missing output directory", extra={"path": p})
    return p


# Accepts epoch seconds or anything pandas.Timestamp understands; naive times are UTC
def parse_epoch_seconds(value, name):
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, (datetime, date)):
        raw = value
    else:
        raw = str(value).strip()
        try:
            return int(raw)
        except ValueError:
            pass
    try:
        ts = pd.Timestamp(raw)
    except (ValueError, TypeError):
        raise ConfigError(f"'{name}' must be epoch seconds or an ISO-8601 timestamp, got '{value}'")
    if ts is pd.NaT:
        raise ConfigError(f"'{name}' must not be empty")
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    seconds = (ts - pd.Timestamp(0, tz="UTC")) / pd.Timedelta(seconds=1)
    if seconds != math.floor(seconds):
        raise ConfigError(f"'{name}' must fall on a whole second, got '{value}'")
    return int(seconds)

def validate_percentile(value, name="percentile"):
    try:
        x = float(value)
    except Exception:
        raise ConfigError(f"'{name}' must be numeric")
    if not math.isfinite(x) or not 0.0 <= x <= 100.0:
        raise ConfigError(f"'{name}' must lie within [0, 100]")
    return x
