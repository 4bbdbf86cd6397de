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

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from step_aggregator.aggregation.aggregates import AggregateKind, Aggregates
from step_aggregator.aggregation.series import StepSeries

logger = logging.getLogger(__name__)

PERCENTILE_95 = 95.0


class BaseAggregator(ABC):
    """Windowed aggregation over a validated fixed-step series.

    Instances hold no mutable state after construction, so a single instance
    may be queried concurrently for any number of windows.
    """

    def __init__(self, timestamps: Sequence[int], values: Sequence[float]) -> None:
        self._init_series(StepSeries.from_arrays(timestamps, values))

    @classmethod
    def from_series(cls, series: StepSeries) -> "BaseAggregator":
        """Wrap an already validated series without re-checking it."""
        obj = cls.__new__(cls)
        obj._init_series(series)
        return obj

    def _init_series(self, series: StepSeries) -> None:
        self.series = series
        logger.debug(
            "aggregator initialised",
            extra={
                "implementation": type(self).__name__,
                "samples": len(series),
                "step": series.step,
                "span": [series.start, series.end],
            },
        )

    @property
    def step(self) -> int:
        return self.series.step

    @property
    def timestamps(self) -> np.ndarray:
        return self.series.timestamps

    @property
    def values(self) -> np.ndarray:
        return self.series.values

    @property
    def start(self) -> int:
        return self.series.start

    @property
    def end(self) -> int:
        return self.series.end

    def __len__(self) -> int:
        return len(self.series)

    @abstractmethod
    def compute_aggregates(self, t_start: int, t_end: int) -> Aggregates:
        """Return MIN/MAX/FIRST/LAST/AVERAGE/TOTAL for samples overlapping ``[t_start, t_end]``."""

    @abstractmethod
    def _sorted_present_values(self, t_start: int, t_end: int) -> Sequence[float]:
        """Ascending non-missing values of samples with positive overlap."""

    def percentile(self, t_start: int, t_end: int, percentile: float = PERCENTILE_95) -> float:
        """Highest value left once the top ``100 - percentile`` percent (by count) is discarded.

        The discard count is rounded up and ties are not collapsed. Fewer than
        two qualifying samples, or nothing left after the discard, yields NaN.
        """
        p = float(percentile)
        if not 0.0 <= p <= 100.0:
            raise ValueError(f"percentile must lie within [0, 100], got {percentile}")

        ordered = self._sorted_present_values(t_start, t_end)
        count = len(ordered)
        if count < 2:
            return math.nan
        keep = count - math.ceil(count * ((100.0 - p) / 100.0))
        if keep <= 0:
            return math.nan
        return float(ordered[keep - 1])

    def percentile_95(self, t_start: int, t_end: int) -> float:
        """95th percentile as used for burst-tolerant bandwidth billing."""
        return self.percentile(t_start, t_end, PERCENTILE_95)

    def aggregate(self, kind: AggregateKind | str, t_start: int, t_end: int) -> float:
        kind = AggregateKind.parse(kind)
        return self.compute_aggregates(t_start, t_end).get(kind)
