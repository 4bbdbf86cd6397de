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

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from step_aggregator.aggregation.nan_ops import MISSING, is_missing

__all__ = ["AggregateKind", "Aggregates"]


class AggregateKind(str, Enum):
    """Summary statistics produced for every aggregation window."""

    MIN = "min"
    MAX = "max"
    FIRST = "first"
    LAST = "last"
    AVERAGE = "average"
    TOTAL = "total"

    @classmethod
    def parse(cls, kind: "AggregateKind | str") -> "AggregateKind":
        """Resolve an enum member from a member or a case-insensitive name."""
        if isinstance(kind, cls):
            return kind
        if isinstance(kind, str):
            try:
                return cls(kind.strip().lower())
            except ValueError:
                pass
        known = ", ".join(member.name for member in cls)
        raise ValueError(f"unknown aggregate kind {kind!r}; expected one of [{known}]")


@dataclass(frozen=True)
class Aggregates:
    """Aggregated values over one query window.

    Every field is independently NaN when undefined. ``first`` and ``last``
    may also be NaN because a missing sample was the first or last one to
    overlap the window.
    """

    min: float = MISSING
    max: float = MISSING
    first: float = MISSING
    last: float = MISSING
    average: float = MISSING
    total: float = MISSING

    def get(self, kind: AggregateKind | str) -> float:
        return getattr(self, AggregateKind.parse(kind).value)

    def is_defined(self, kind: AggregateKind | str) -> bool:
        return not is_missing(self.get(kind))

    def as_dict(self) -> Dict[str, float]:
        return {kind.value: self.get(kind) for kind in AggregateKind}

    def dump(self) -> str:
        """Return a single-line human readable rendering of all fields."""
        return ", ".join(
            f"{kind.name}={_format_value(self.get(kind))}" for kind in AggregateKind
        )


def _format_value(value: float) -> str:
    if is_missing(value):
        return "NaN"
    return f"{value:.6g}"
