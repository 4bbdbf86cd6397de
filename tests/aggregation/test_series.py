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

"""Tests for validated series construction."""

from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest

from step_aggregator.aggregation.series import StepSeries
from step_aggregator.exceptions import SeriesError, StepAggregatorError


def test_from_arrays_derives_step_and_bounds():
    series = StepSeries.from_arrays([300, 600, 900], [1.0, 2.0, 3.0])

    assert series.step == 300
    assert len(series) == 3
    assert series.start == 0
    assert series.end == 900
    assert series.timestamps.dtype == np.int64


@pytest.mark.parametrize(
    ("timestamps", "values", "message"),
    [
        ([10, 20, 30], [1.0, 2.0], "lengths"),
        ([10], [1.0], "at least two"),
        ([], [], "at least two"),
        ([10.5, 20.5], [1.0, 2.0], "whole seconds"),
        ([10.0, float("inf")], [1.0, 2.0], "finite"),
        ([20, 10], [1.0, 2.0], "step must be positive"),
        ([10, 10], [1.0, 2.0], "step must be positive"),
        ([10, 20], ["a", 2.0], "numeric"),
    ],
)
def test_from_arrays_rejects_precondition_violations(timestamps, values, message):
    with pytest.raises(SeriesError) as excinfo:
        StepSeries.from_arrays(timestamps, values)

    assert message in str(excinfo.value)


def test_series_error_is_a_value_error():
    with pytest.raises(ValueError):
        StepSeries.from_arrays([10], [1.0])
    assert issubclass(SeriesError, StepAggregatorError)


def test_none_values_become_missing():
    series = StepSeries.from_arrays([10, 20], [None, 4.0])

    assert math.isnan(series.values[0])
    assert series.values[1] == 4.0


def test_integral_float_timestamps_are_accepted():
    series = StepSeries.from_arrays([10.0, 20.0, 30.0], [1.0, 2.0, 3.0])

    assert series.timestamps.tolist() == [10, 20, 30]
    assert series.step == 10


def test_stored_arrays_are_read_only():
    series = StepSeries.from_arrays([10, 20], [1.0, 2.0])

    with pytest.raises(ValueError):
        series.values[0] = 5.0
    with pytest.raises(ValueError):
        series.timestamps[0] = 5


def test_from_pandas_with_utc_datetime_index():
    index = pd.date_range("2024-01-01", periods=3, freq="5min", tz="UTC")
    series = StepSeries.from_pandas(pd.Series([1.0, None, 3.0], index=index))

    assert series.step == 300
    assert series.timestamps.tolist() == [1704067200, 1704067500, 1704067800]
    assert math.isnan(series.values[1])


def test_from_pandas_naive_index_is_treated_as_utc():
    index = pd.date_range("2024-01-01", periods=2, freq="1h")
    series = StepSeries.from_pandas(pd.Series([1.0, 2.0], index=index))

    assert series.timestamps.tolist() == [1704067200, 1704070800]


def test_from_pandas_with_integer_index():
    series = StepSeries.from_pandas(pd.Series([5.0, 6.0, 7.0], index=[60, 120, 180]))

    assert series.step == 60
    assert series.values.tolist() == [5.0, 6.0, 7.0]
