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

from typing import List

from step_aggregator.aggregation.aggregates import Aggregates
from step_aggregator.aggregation.base import BaseAggregator
from step_aggregator.aggregation.nan_ops import MISSING, is_missing, nan_max, nan_min


class PyAggregator(BaseAggregator):
    """Reference sequential implementation retained for validation."""

    def compute_aggregates(self, t_start: int, t_end: int) -> Aggregates:
        step = self.series.step
        t_start, t_end = int(t_start), int(t_end)

        agg_min = agg_max = first = last = total = MISSING
        total_seconds = 0
        first_found = False

        for ts, value in zip(self.series.timestamps.tolist(), self.series.values.tolist()):
            left = max(ts - step, t_start)
            right = min(ts, t_end)
            delta = right - left
            if delta <= 0:
                continue

            agg_min = nan_min(agg_min, value)
            agg_max = nan_max(agg_max, value)
            if not first_found:
                first = value
                first_found = True
            last = value
            if not is_missing(value):
                # a NaN total after inf + -inf stays NaN; only the first contribution initialises it
                total = delta * value if total_seconds == 0 else total + delta * value
                total_seconds += delta

        average = total / total_seconds if total_seconds > 0 else MISSING
        return Aggregates(
            min=agg_min,
            max=agg_max,
            first=first,
            last=last,
            average=average,
            total=total,
        )

    def _sorted_present_values(self, t_start: int, t_end: int) -> List[float]:
        step = self.series.step
        t_start, t_end = int(t_start), int(t_end)
        selected = []
        for ts, value in zip(self.series.timestamps.tolist(), self.series.values.tolist()):
            left = max(ts - step, t_start)
            right = min(ts, t_end)
            if right > left and not is_missing(value):
                selected.append(value)
        selected.sort()
        return selected
