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

"""Validated, read-only fixed-step sample series."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd

from step_aggregator.exceptions import SeriesError

__all__ = ["StepSeries"]


@dataclass(frozen=True)
class StepSeries:
    """Timestamps (integer seconds) paired with float samples.

    Sample ``i`` holds for the interval ``(timestamps[i] - step, timestamps[i]]``.
    Only the first pair of timestamps is used to derive ``step``; the series is
    assumed to be regular after that.
    """

    timestamps: np.ndarray
    values: np.ndarray
    step: int

    @classmethod
    def from_arrays(cls, timestamps: Sequence[int], values: Sequence[float]) -> "StepSeries":
        """Validate raw sequences and return an immutable series.

        Raises:
            SeriesError: lengths differ, fewer than two samples, non-integral
                timestamps, or a non-positive step.
        """
        raw_ts = np.asarray(timestamps)
        try:
            vals = np.array(values, dtype=float)
        except (TypeError, ValueError) as exc:
            raise SeriesError(f"values must be numeric or None: {exc}") from exc

        if raw_ts.ndim != 1 or vals.ndim != 1:
            raise SeriesError("timestamps and values must be one-dimensional")
        if raw_ts.size != vals.size:
            raise SeriesError(
                f"incompatible timestamps/values arrays (lengths {raw_ts.size} and {vals.size})"
            )
        if raw_ts.size < 2:
            raise SeriesError("at least two timestamps must be supplied")

        if raw_ts.dtype.kind in "iu":
            ts = raw_ts.astype(np.int64)
        else:
            try:
                as_float = raw_ts.astype(float)
            except (TypeError, ValueError) as exc:
                raise SeriesError(f"timestamps must be numeric: {exc}") from exc
            if not np.all(np.isfinite(as_float)):
                raise SeriesError("timestamps must be finite")
            if not np.all(as_float == np.floor(as_float)):
                raise SeriesError("timestamps must be whole seconds")
            ts = as_float.astype(np.int64)

        step = int(ts[1] - ts[0])
        if step <= 0:
            raise SeriesError(f"step must be positive, got {step}")

        # astype/np.array above always copy, so freezing never touches caller data
        ts.setflags(write=False)
        vals.setflags(write=False)
        return cls(timestamps=ts, values=vals, step=step)

    @classmethod
    def from_pandas(cls, series: pd.Series) -> "StepSeries":
        """Build a series from a pandas Series indexed by epoch seconds or datetimes."""
        index = series.index
        if isinstance(index, pd.DatetimeIndex):
            if index.tz is None:
                index = index.tz_localize("UTC")
            seconds = (index - pd.Timestamp(0, tz="UTC")) // pd.Timedelta(seconds=1)
            timestamps = np.asarray(seconds, dtype=np.int64)
        else:
            timestamps = index.to_numpy()
        values = pd.to_numeric(series, errors="coerce").to_numpy(dtype=float)
        return cls.from_arrays(timestamps, values)

    def __len__(self) -> int:
        return int(self.timestamps.size)

    @property
    def start(self) -> int:
        """Left edge of the first sample's validity interval."""
        return int(self.timestamps[0]) - self.step

    @property
    def end(self) -> int:
        return int(self.timestamps[-1])
