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

"""Shared pytest fixtures and utilities for the aggregation test suite."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def scenario_series() -> tuple[list[int], list[float]]:
    """Four 10s samples with one missing value: (10,2) (20,NaN) (30,3) (40,1)."""

    return [10, 20, 30, 40], [2.0, math.nan, 3.0, 1.0]


@pytest.fixture
def write_yaml(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper that writes YAML text into the temporary directory."""

    def _write(text: str, name: str = "aggregation.yaml") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def restore_root_logging():
    """Undo handler/level changes made by configure_logging during a test."""

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def assert_same_float(actual: float, expected: float, *, rel: float = 1e-9, abs: float = 1e-9) -> None:
    """Compare floats treating NaN as equal to NaN."""

    if math.isnan(expected):
        assert math.isnan(actual), f"expected NaN, got {actual}"
    else:
        assert actual == pytest.approx(expected, rel=rel, abs=abs)


@pytest.fixture
def same_float() -> Callable[..., None]:
    return assert_same_float
