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

"""Load fixed-step series from CSV or parquet files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import numpy as np
import pandas as pd
import pyarrow.parquet as pq

from step_aggregator.aggregation.series import StepSeries
from step_aggregator.exceptions import SeriesDataError, SeriesError

__all__ = ["UNKNOWN_MARKERS", "load_series", "read_series_frame"]

logger = logging.getLogger(__name__)

# Tokens treated as a missing sample in text inputs.
UNKNOWN_MARKERS: Sequence[str] = ("", "NaN", "nan", "U", "UNKN", "unknown")


def read_series_frame(path: Path) -> pd.DataFrame:
    """Read the raw table behind a series file."""
    path = Path(path)
    if not path.exists():
        raise SeriesDataError(f"missing series file: {path}")

    suffix = path.suffix.lower()
    try:
        if suffix == ".parquet":
            return pq.read_table(path).to_pandas()
        if suffix in (".csv", ".txt"):
            return pd.read_csv(path, na_values=list(UNKNOWN_MARKERS), keep_default_na=True)
    except (OSError, ValueError, pd.errors.ParserError) as exc:
        raise SeriesDataError(f"failed to read series file {path}: {exc}") from exc
    raise SeriesDataError(f"unsupported series file type '{suffix}': {path}")


def _timestamp_index(column: pd.Series) -> pd.Index:
    if pd.api.types.is_numeric_dtype(column):
        return pd.Index(column.to_numpy())
    try:
        return pd.DatetimeIndex(pd.to_datetime(column, utc=True))
    except (ValueError, TypeError) as exc:
        raise SeriesDataError(f"unparseable timestamps: {exc}") from exc


def load_series(
    path: Path,
    *,
    timestamp_column: str = "timestamp",
    value_column: str = "value",
) -> StepSeries:
    """Load a two-column series and validate it for aggregation.

    Unlike the engine itself, the loader also rejects files whose step is not
    constant, since a file is the last point where that can be checked cheaply.
    """
    frame = read_series_frame(path)

    missing = [c for c in (timestamp_column, value_column) if c not in frame.columns]
    if missing:
        raise SeriesDataError(f"series file {path} lacks columns {missing}")

    try:
        values = pd.to_numeric(frame[value_column], errors="raise")
    except (ValueError, TypeError) as exc:
        raise SeriesDataError(f"non-numeric sample in {path}: {exc}") from exc

    series = pd.Series(values.to_numpy(dtype=float), index=_timestamp_index(frame[timestamp_column]))
    try:
        step_series = StepSeries.from_pandas(series)
    except SeriesError as exc:
        raise SeriesDataError(f"invalid series in {path}: {exc}") from exc

    gaps = np.diff(step_series.timestamps)
    irregular = np.flatnonzero(gaps != step_series.step)
    if irregular.size:
        first_bad = int(irregular[0]) + 1
        raise SeriesDataError(
            f"irregular step in {path}: expected {step_series.step}s, "
            f"found {int(gaps[irregular[0]])}s before row {first_bad}"
        )

    logger.info(
        "loaded series",
        extra={
            "path": str(path),
            "samples": len(step_series),
            "step": step_series.step,
            "missing": int(np.isnan(step_series.values).sum()),
        },
    )
    return step_series
