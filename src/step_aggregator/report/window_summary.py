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
from typing import Iterable, List

import pandas as pd

from step_aggregator.aggregation.aggregates import AggregateKind
from step_aggregator.aggregation.base import PERCENTILE_95, BaseAggregator
from step_aggregator.config_parsers.config_dataclass import WindowConfig
from step_aggregator.logging_utils import run_context

__all__ = ["SUMMARY_COLUMNS", "summarize_windows"]

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS: List[str] = (
    ["window", "start", "end"]
    + [kind.value for kind in AggregateKind]
    + ["percentile"]
)


def summarize_windows(
    aggregator: BaseAggregator,
    windows: Iterable[WindowConfig],
    *,
    percentile: float = PERCENTILE_95,
) -> pd.DataFrame:
    """Aggregate every window independently and return one row per window.

    Undefined results stay NaN in the frame.
    """
    rows = []
    for window in windows:
        with run_context(window=window.name):
            aggregates = aggregator.compute_aggregates(window.start, window.end)
            pct = aggregator.percentile(window.start, window.end, percentile)
            row = {"window": window.name, "start": window.start, "end": window.end}
            row.update(aggregates.as_dict())
            row["percentile"] = pct
            rows.append(row)
            logger.debug("window aggregated", extra={"aggregates": aggregates.dump()})

    frame = pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
    frame.attrs["percentile"] = float(percentile)
    return frame
