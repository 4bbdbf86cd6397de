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

"""Vectorised aggregation engine.

Each query computes the overlap of every sample's validity interval
``(t - step, t]`` with the window in one numpy pass. Missing samples are
masked out explicitly before any reduction, so NaN ordering rules never
influence min/max/sort results. The weighted total is accumulated in sample
order, the same as the sequential engine.
"""

from __future__ import annotations

import numpy as np

from step_aggregator.aggregation.aggregates import Aggregates
from step_aggregator.aggregation.base import BaseAggregator

__all__ = ["Aggregator"]


class Aggregator(BaseAggregator):
    """numpy implementation used by the reporting layer."""

    def _overlap_seconds(self, t_start: int, t_end: int) -> np.ndarray:
        ts = self.series.timestamps
        left = np.maximum(ts - self.series.step, int(t_start))
        right = np.minimum(ts, int(t_end))
        return right - left

    def compute_aggregates(self, t_start: int, t_end: int) -> Aggregates:
        delta = self._overlap_seconds(t_start, t_end)
        overlapping = delta > 0
        if not overlapping.any():
            return Aggregates()

        values = self.series.values[overlapping]
        weights = delta[overlapping]
        # first/last do not distinguish missing samples
        first = float(values[0])
        last = float(values[-1])

        present = ~np.isnan(values)
        if not present.any():
            return Aggregates(first=first, last=last)

        present_values = values[present]
        present_weights = weights[present]
        # left-to-right accumulation; infinities and overflow propagate as inf/nan
        with np.errstate(over="ignore", invalid="ignore"):
            total = float(np.cumsum(present_weights * present_values)[-1])
        total_seconds = int(present_weights.sum())

        return Aggregates(
            min=float(present_values.min()),
            max=float(present_values.max()),
            first=first,
            last=last,
            average=total / total_seconds,
            total=total,
        )

    def _sorted_present_values(self, t_start: int, t_end: int) -> np.ndarray:
        values = self.series.values
        qualifying = (self._overlap_seconds(t_start, t_end) > 0) & ~np.isnan(values)
        return np.sort(values[qualifying])
