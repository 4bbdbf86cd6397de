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

"""Tests for loading series files into validated StepSeries objects."""

from __future__ import annotations

import math
from pathlib import Path

import pandas as pd
import pytest

from step_aggregator.data.series_loader import load_series
from step_aggregator.exceptions import SeriesDataError


def _write_csv(tmp_path: Path, text: str, name: str = "series.csv") -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_load_csv_with_unknown_markers(tmp_path: Path):
    path = _write_csv(
        tmp_path,
        "timestamp,value\n10,2\n20,U\n30,3\n40,\n50,UNKN\n",
    )

    series = load_series(path)

    assert series.step == 10
    assert series.timestamps.tolist() == [10, 20, 30, 40, 50]
    assert series.values[0] == 2.0
    assert series.values[2] == 3.0
    assert all(math.isnan(series.values[i]) for i in (1, 3, 4))


def test_load_csv_with_iso_timestamps_and_custom_columns(tmp_path: Path):
    path = _write_csv(
        tmp_path,
        "time,bytes_in\n2024-01-01T00:05:00Z,100\n2024-01-01T00:10:00Z,250\n",
    )

    series = load_series(path, timestamp_column="time", value_column="bytes_in")

    assert series.timestamps.tolist() == [1704067500, 1704067800]
    assert series.step == 300
    assert series.values.tolist() == [100.0, 250.0]


def test_load_parquet(tmp_path: Path):
    path = tmp_path / "series.parquet"
    frame = pd.DataFrame(
        {
            "timestamp": pd.date_range("2024-01-01 00:01", periods=3, freq="1min", tz="UTC"),
            "value": [1.5, None, 4.0],
        }
    )
    frame.to_parquet(path, index=False)

    series = load_series(path)

    assert series.step == 60
    assert series.timestamps[0] == 1704067260
    assert math.isnan(series.values[1])


def test_irregular_step_is_rejected(tmp_path: Path):
    path = _write_csv(tmp_path, "timestamp,value\n10,1\n20,2\n35,3\n")

    with pytest.raises(SeriesDataError) as excinfo:
        load_series(path)

    assert "irregular step" in str(excinfo.value)


@pytest.mark.parametrize(
    ("text", "fragment"),
    [
        ("time,value\n10,1\n20,2\n", "lacks columns"),
        ("timestamp,value\n10,1\n20,abc\n", "non-numeric"),
        ("timestamp,value\n10,1\n", "invalid series"),
        ("timestamp,value\n20,1\n10,2\n", "invalid series"),
        ("timestamp,value\nnot-a-time,1\n10,2\n", "unparseable timestamps"),
    ],
)
def test_malformed_csv_raises_series_data_error(tmp_path: Path, text, fragment):
    path = _write_csv(tmp_path, text)

    with pytest.raises(SeriesDataError) as excinfo:
        load_series(path)

    assert fragment in str(excinfo.value)


def test_missing_and_unsupported_files(tmp_path: Path):
    with pytest.raises(SeriesDataError):
        load_series(tmp_path / "absent.csv")

    other = tmp_path / "series.json"
    other.write_text("{}", encoding="utf-8")
    with pytest.raises(SeriesDataError) as excinfo:
        load_series(other)
    assert "unsupported" in str(excinfo.value)
