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

"""Missing-aware scalar helpers.

A missing sample is represented by NaN. These helpers never rely on the
ordering rules of NaN comparisons: a missing operand is skipped explicitly,
so it can never win a min/max. Only when both operands are missing is the
result missing.
"""

from __future__ import annotations

import math

MISSING = math.nan

__all__ = ["MISSING", "is_missing", "nan_min", "nan_max"]


def is_missing(value: float) -> bool:
    return math.isnan(value)


def nan_min(current: float, value: float) -> float:
    if is_missing(current):
        return value
    if is_missing(value):
        return current
    return value if value < current else current


def nan_max(current: float, value: float) -> float:
    if is_missing(current):
        return value
    if is_missing(value):
        return current
    return value if value > current else current
