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

"""Tests for the Aggregates value object and missing-aware helpers."""

from __future__ import annotations

import dataclasses
import math

import pytest

from step_aggregator.aggregation.aggregates import AggregateKind, Aggregates
from step_aggregator.aggregation.nan_ops import MISSING, is_missing, nan_max, nan_min


def test_defaults_are_missing():
    agg = Aggregates()

    assert all(math.isnan(v) for v in agg.as_dict().values())
    assert not agg.is_defined("min")


def test_get_accepts_enum_and_names():
    agg = Aggregates(min=1.0, max=3.0, first=2.0, last=1.0, average=2.0, total=60.0)

    assert agg.get(AggregateKind.TOTAL) == 60.0
    assert agg.get("Average") == 2.0
    assert agg.get(" max ") == 3.0
    assert agg.is_defined(AggregateKind.FIRST)
    with pytest.raises(ValueError) as excinfo:
        agg.get("95percentile")
    assert "AVERAGE" in str(excinfo.value)


def test_as_dict_uses_lowercase_kind_names():
    agg = Aggregates(min=1.0, max=3.0, first=2.0, last=1.0, average=2.0, total=60.0)

    assert agg.as_dict() == {
        "min": 1.0,
        "max": 3.0,
        "first": 2.0,
        "last": 1.0,
        "average": 2.0,
        "total": 60.0,
    }


def test_dump_renders_missing_as_nan():
    agg = Aggregates(min=1.0, max=3.0, first=2.0, last=1.0, average=2.0, total=60.0)

    assert agg.dump() == "MIN=1, MAX=3, FIRST=2, LAST=1, AVERAGE=2, TOTAL=60"
    assert Aggregates(first=math.nan, last=0.25).dump() == (
        "MIN=NaN, MAX=NaN, FIRST=NaN, LAST=0.25, AVERAGE=NaN, TOTAL=NaN"
    )


def test_aggregates_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        Aggregates().min = 1.0  # type: ignore[misc]


def test_missing_never_wins_min_or_max():
    assert nan_min(MISSING, 4.0) == 4.0
    assert nan_min(4.0, MISSING) == 4.0
    assert nan_min(4.0, -1.0) == -1.0
    assert nan_max(MISSING, -4.0) == -4.0
    assert nan_max(-4.0, MISSING) == -4.0
    assert nan_max(2.0, 5.0) == 5.0
    assert is_missing(nan_min(MISSING, MISSING))
    assert is_missing(nan_max(MISSING, MISSING))
